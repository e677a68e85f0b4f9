"""
Model Lineage v1.0

Builds a model/source lineage graph, with a column-level provenance index,
from model description records (one JSON document per transformation unit).

Example:
    >>> from model_lineage import LineageGraphBuilder, load_records
    >>> output = LineageGraphBuilder().build(load_records("models/"))
    >>> detail = output.column_detail("raw.orders")
    >>> [entry.model for entry in detail.columns["amount"].used_by]
    ['orders_fct']
"""

from model_lineage.version import __version__, __version_info__

__author__ = "Model Lineage Contributors"

from model_lineage.exceptions import LineageError, RecordLoadError, UnknownNodeError
from model_lineage.graph.lineage_builder import (
    LineageBuild,
    LineageGraphBuilder,
    build_lineage_graph,
)
from model_lineage.graph.materializer import materialize
from model_lineage.loader.json_loader import load_records
from model_lineage.models.config import ErrorMode, LineageConfig
from model_lineage.models.graph_output import (
    ColumnDetail,
    EdgeDescriptor,
    GraphOutput,
    NodeDescriptor,
)
from model_lineage.models.node import ColumnInfo, LineageNode, NodeKind, UsedBy
from model_lineage.models.record import ColumnMeta, ModelRecord, SourceKind, SourceRef
from model_lineage.registry.node_registry import NodeRegistry
from model_lineage.resolver.canonical import canonicalize, split_qualified_reference
from model_lineage.resolver.identifier import resolve_model_id
from model_lineage.utils.warnings import LineageWarning, WarningCollector

__all__ = [
    # Version info
    "__version__",
    "__version_info__",
    # Builder
    "LineageGraphBuilder",
    "LineageBuild",
    "build_lineage_graph",
    "materialize",
    # Configuration
    "LineageConfig",
    "ErrorMode",
    # Input
    "ModelRecord",
    "ColumnMeta",
    "SourceRef",
    "SourceKind",
    "load_records",
    # Graph
    "NodeRegistry",
    "LineageNode",
    "NodeKind",
    "ColumnInfo",
    "UsedBy",
    # Output
    "GraphOutput",
    "NodeDescriptor",
    "EdgeDescriptor",
    "ColumnDetail",
    # Resolution
    "resolve_model_id",
    "canonicalize",
    "split_qualified_reference",
    # Diagnostics
    "LineageWarning",
    "WarningCollector",
    # Exceptions
    "LineageError",
    "RecordLoadError",
    "UnknownNodeError",
]
