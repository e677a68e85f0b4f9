"""
Lineage graph construction.

This package contains the two-pass graph builder and the materializer that
turns a built graph into its output form.
"""

from model_lineage.graph.lineage_builder import (
    LineageBuild,
    LineageGraphBuilder,
    build_lineage_graph,
)
from model_lineage.graph.materializer import materialize

__all__ = [
    "LineageBuild",
    "LineageGraphBuilder",
    "build_lineage_graph",
    "materialize",
]
