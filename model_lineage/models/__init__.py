"""
Data models for model lineage.

This package contains the core data structures: parsed model records, graph
nodes and column information, configuration, and the materialized graph
output.
"""

from model_lineage.models.config import ErrorMode, LineageConfig
from model_lineage.models.graph_output import (
    ColumnDetail,
    EdgeDescriptor,
    GraphOutput,
    NodeDescriptor,
)
from model_lineage.models.node import ColumnInfo, LineageNode, NodeKind, UsedBy
from model_lineage.models.record import ColumnMeta, ModelRecord, SourceKind, SourceRef

__all__ = [
    "ColumnDetail",
    "ColumnInfo",
    "ColumnMeta",
    "EdgeDescriptor",
    "ErrorMode",
    "GraphOutput",
    "LineageConfig",
    "LineageNode",
    "ModelRecord",
    "NodeDescriptor",
    "NodeKind",
    "SourceKind",
    "SourceRef",
    "UsedBy",
]
