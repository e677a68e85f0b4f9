"""
Graph output model.

This module defines GraphOutput, the order-deterministic structure handed to
a rendering layer: node and edge descriptors plus a per-node column detail
lookup.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from model_lineage.models.node import ColumnInfo, NodeKind
from model_lineage.models.record import ModelRecord

if TYPE_CHECKING:
    from model_lineage.utils.warnings import LineageWarning


@dataclass(frozen=True)
class NodeDescriptor:
    """Rendering view of a node.

    Attributes:
        id: Node id.
        kind: MODEL or SOURCE.
        label: Display label (same as the id).
        has_columns: Whether the node carries any column metadata.
        materialization: The model's target type, if the record declares one.
    """

    id: str
    kind: NodeKind
    label: str
    has_columns: bool
    materialization: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "has_columns": self.has_columns,
            "materialization": self.materialization,
        }


@dataclass(frozen=True)
class EdgeDescriptor:
    """A dependency edge, from the upstream node to the consuming model."""

    source: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target}


@dataclass
class ColumnDetail:
    """Column detail of one node, as shown in a detail view.

    Attributes:
        columns: Column name -> ColumnInfo.
        record: The model record, for model nodes built from a record.
    """

    columns: Dict[str, ColumnInfo]
    record: Optional[ModelRecord] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": {name: col.to_dict() for name, col in self.columns.items()},
            "record": self.record.raw if self.record is not None else None,
        }


@dataclass
class GraphOutput:
    """Materialized lineage graph.

    Attributes:
        nodes: Node descriptors in registration order.
        edges: Edge descriptors in insertion order, without duplicates.
        details: Node id -> ColumnDetail.
        warnings: Diagnostics collected while building.

    Example:
        >>> output = LineageGraphBuilder().build(records)
        >>> [node.id for node in output.nodes]
        ['orders_fct', 'raw.orders']
        >>> output.column_detail("raw.orders").columns["amount"].used_by
        [UsedBy(model='orders_fct', column='order_total')]
    """

    nodes: List[NodeDescriptor] = field(default_factory=list)
    edges: List[EdgeDescriptor] = field(default_factory=list)
    details: Dict[str, ColumnDetail] = field(default_factory=dict)
    warnings: List[LineageWarning] = field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[NodeDescriptor]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def column_detail(self, node_id: str) -> Optional[ColumnDetail]:
        """Column detail for a node, or None if the node is unknown.

        A rendering layer should suppress its detail view when this returns
        None or a detail with no columns.
        """
        return self.details.get(node_id)

    def get_nodes_by_kind(self, kind: NodeKind) -> List[NodeDescriptor]:
        return [node for node in self.nodes if node.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (for serialization)."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "details": {
                node_id: detail.to_dict() for node_id, detail in self.details.items()
            },
            "warnings": [warning.to_dict() for warning in self.warnings],
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_cytoscape(self) -> List[Dict[str, Any]]:
        """Export as a Cytoscape.js element list (nodes first, then edges)."""
        elements: List[Dict[str, Any]] = []
        for node in self.nodes:
            data: Dict[str, Any] = {
                "id": node.id,
                "label": node.label,
                "kind": node.kind.value,
                "has_columns": node.has_columns,
            }
            if node.materialization:
                data["materialization"] = node.materialization
            elements.append({"data": data})
        for edge in self.edges:
            elements.append(
                {
                    "data": {
                        "id": f"{edge.source}->{edge.target}",
                        "source": edge.source,
                        "target": edge.target,
                    }
                }
            )
        return elements
