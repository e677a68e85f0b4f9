"""
Graph materialization.

Converts a NodeRegistry into a GraphOutput. Column data is copied, so the
output stays valid if the registry is changed later and the registry is
never changed by materializing it.
"""

import copy
from typing import Iterable, List, Optional, Sequence, Tuple

from model_lineage.exceptions import UnknownNodeError
from model_lineage.models.graph_output import (
    ColumnDetail,
    EdgeDescriptor,
    GraphOutput,
    NodeDescriptor,
)
from model_lineage.registry.node_registry import NodeRegistry
from model_lineage.utils.warnings import LineageWarning


def materialize(
    registry: NodeRegistry,
    edges: Sequence[Tuple[str, str]],
    warnings: Optional[Iterable[LineageWarning]] = None,
) -> GraphOutput:
    """Emit the ordered node and edge lists of a registry.

    Args:
        registry: Registry holding the nodes.
        edges: ``(upstream, downstream)`` pairs, in output order. Repeated
            pairs are emitted once.
        warnings: Diagnostics to attach to the output.

    Returns:
        GraphOutput with nodes in registration order.

    Raises:
        UnknownNodeError: If an edge endpoint is not a registered node.
    """
    output = GraphOutput(warnings=list(warnings or []))

    for node in registry.nodes():
        output.nodes.append(
            NodeDescriptor(
                id=node.id,
                kind=node.kind,
                label=node.label,
                has_columns=node.has_columns,
                materialization=node.materialization,
            )
        )
        output.details[node.id] = ColumnDetail(
            columns=copy.deepcopy(node.columns),
            record=node.source_record,
        )

    seen: set[Tuple[str, str]] = set()
    emitted: List[EdgeDescriptor] = []
    for upstream, downstream in edges:
        if (upstream, downstream) in seen:
            continue
        for endpoint in (upstream, downstream):
            if endpoint not in registry:
                raise UnknownNodeError(endpoint, registry.node_ids())
        seen.add((upstream, downstream))
        emitted.append(EdgeDescriptor(source=upstream, target=downstream))
    output.edges = emitted

    return output
