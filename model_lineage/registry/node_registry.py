"""
Node registry for lineage graphs.

This module defines the NodeRegistry class, which owns every node and edge
of one graph build. Nodes live in a networkx DiGraph keyed by id; callers
get the id back as a handle and go through the registry to reach node data.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from model_lineage.exceptions import UnknownNodeError
from model_lineage.models.node import LineageNode, NodeKind


class NodeRegistry:
    """Registry of lineage nodes and dependency edges.

    Responsibilities:
    1. Insert-or-fetch nodes by id (first registration fixes the kind)
    2. Record dependency edges between registered nodes, without duplicates
    3. Answer upstream/downstream queries

    Node iteration follows registration order and edge iteration follows
    insertion order, so two builds over the same input are identical.

    Usage:
        registry = NodeRegistry()
        node_id = registry.ensure_node("raw.orders", NodeKind.SOURCE)
        registry.add_edge(node_id, registry.ensure_node("orders_fct", NodeKind.MODEL))
    """

    def __init__(self) -> None:
        """Initialize an empty NodeRegistry."""
        self.graph = nx.DiGraph()
        self._edge_order: List[Tuple[str, str]] = []

    def ensure_node(self, node_id: str, kind: NodeKind) -> str:
        """Register a node if it is not registered yet.

        Args:
            node_id: Node id.
            kind: Kind used if the node is new. Ignored for existing nodes.

        Returns:
            The node id, usable as a handle for later lookups.
        """
        if node_id not in self.graph:
            self.graph.add_node(node_id, node=LineageNode(id=node_id, kind=kind))
        return node_id

    def get_node(self, node_id: str) -> Optional[LineageNode]:
        """Get a node by id, or None if it is not registered."""
        if node_id not in self.graph:
            return None
        return self.graph.nodes[node_id]["node"]

    def has_node(self, node_id: str) -> bool:
        return node_id in self.graph

    def add_edge(self, upstream: str, downstream: str) -> bool:
        """Add a dependency edge between two registered nodes.

        Args:
            upstream: Id of the node that is read.
            downstream: Id of the consuming model.

        Returns:
            True if the edge is new, False if it was already present.

        Raises:
            UnknownNodeError: If either endpoint is not registered.
        """
        for node_id in (upstream, downstream):
            if node_id not in self.graph:
                raise UnknownNodeError(node_id, self.node_ids())
        if self.graph.has_edge(upstream, downstream):
            return False
        self.graph.add_edge(upstream, downstream)
        self._edge_order.append((upstream, downstream))
        return True

    def nodes(self) -> Iterator[LineageNode]:
        """Iterate nodes in registration order."""
        for _, data in self.graph.nodes(data=True):
            yield data["node"]

    def node_ids(self) -> List[str]:
        return list(self.graph.nodes)

    def edges(self) -> List[Tuple[str, str]]:
        """Edges in insertion order."""
        return list(self._edge_order)

    def upstream(self, node_id: str) -> List[str]:
        """All nodes the given node depends on, directly or transitively.

        Raises:
            UnknownNodeError: If the node is not registered.
        """
        if node_id not in self.graph:
            raise UnknownNodeError(node_id, self.node_ids())
        ancestors = nx.ancestors(self.graph, node_id)
        return [n for n in self.graph.nodes if n in ancestors]

    def downstream(self, node_id: str) -> List[str]:
        """All nodes that depend on the given node, directly or transitively.

        Raises:
            UnknownNodeError: If the node is not registered.
        """
        if node_id not in self.graph:
            raise UnknownNodeError(node_id, self.node_ids())
        descendants = nx.descendants(self.graph, node_id)
        return [n for n in self.graph.nodes if n in descendants]

    def get_statistics(self) -> Dict[str, Any]:
        """Get graph statistics.

        Returns:
            Node and edge counts, and whether the graph is acyclic.
        """
        kinds = [data["node"].kind for _, data in self.graph.nodes(data=True)]
        return {
            "total_nodes": self.graph.number_of_nodes(),
            "model_nodes": kinds.count(NodeKind.MODEL),
            "source_nodes": kinds.count(NodeKind.SOURCE),
            "total_edges": self.graph.number_of_edges(),
            "is_acyclic": nx.is_directed_acyclic_graph(self.graph),
        }

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.graph
