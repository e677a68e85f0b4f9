"""
Tests for the node registry.
"""

import pytest

from model_lineage import NodeKind, NodeRegistry, UnknownNodeError


@pytest.fixture
def chain_registry():
    """raw.orders -> stg_orders -> orders_fct, plus an unrelated node."""
    registry = NodeRegistry()
    for node_id, kind in [
        ("raw.orders", NodeKind.SOURCE),
        ("stg_orders", NodeKind.MODEL),
        ("orders_fct", NodeKind.MODEL),
        ("raw.other", NodeKind.SOURCE),
    ]:
        registry.ensure_node(node_id, kind)
    registry.add_edge("raw.orders", "stg_orders")
    registry.add_edge("stg_orders", "orders_fct")
    return registry


class TestNodeRegistry:
    """Tests for NodeRegistry."""

    def test_ensure_node_returns_handle(self):
        """Test that ensure_node returns the id."""
        registry = NodeRegistry()

        assert registry.ensure_node("m", NodeKind.MODEL) == "m"
        assert registry.get_node("m").kind == NodeKind.MODEL

    def test_ensure_node_is_idempotent(self):
        """Test that the first registration fixes the kind."""
        registry = NodeRegistry()
        registry.ensure_node("x", NodeKind.SOURCE)
        registry.ensure_node("x", NodeKind.MODEL)

        assert len(registry) == 1
        assert registry.get_node("x").kind == NodeKind.SOURCE

    def test_get_unknown_node(self):
        """Test that unknown ids return None."""
        assert NodeRegistry().get_node("missing") is None
        assert "missing" not in NodeRegistry()

    def test_registration_order(self):
        """Test that nodes iterate in registration order."""
        registry = NodeRegistry()
        for node_id in ["c", "a", "b", "a"]:
            registry.ensure_node(node_id, NodeKind.MODEL)

        assert [node.id for node in registry.nodes()] == ["c", "a", "b"]

    def test_add_edge_deduplicates(self, chain_registry):
        """Test that a repeated edge is not added twice."""
        assert chain_registry.add_edge("raw.orders", "stg_orders") is False
        assert chain_registry.edges() == [
            ("raw.orders", "stg_orders"),
            ("stg_orders", "orders_fct"),
        ]

    def test_add_edge_requires_nodes(self):
        """Test that edges cannot reference unknown nodes."""
        registry = NodeRegistry()
        registry.ensure_node("m", NodeKind.MODEL)

        with pytest.raises(UnknownNodeError, match="missing"):
            registry.add_edge("missing", "m")

    def test_upstream(self, chain_registry):
        """Test transitive upstream query."""
        assert chain_registry.upstream("orders_fct") == ["raw.orders", "stg_orders"]
        assert chain_registry.upstream("raw.orders") == []

    def test_downstream(self, chain_registry):
        """Test transitive downstream query."""
        assert chain_registry.downstream("raw.orders") == ["stg_orders", "orders_fct"]
        assert chain_registry.downstream("raw.other") == []

    def test_query_unknown_node(self, chain_registry):
        """Test that queries on unknown nodes raise."""
        with pytest.raises(UnknownNodeError):
            chain_registry.upstream("nope")
        with pytest.raises(UnknownNodeError):
            chain_registry.downstream("nope")

    def test_statistics(self, chain_registry):
        """Test graph statistics."""
        stats = chain_registry.get_statistics()

        assert stats == {
            "total_nodes": 4,
            "model_nodes": 2,
            "source_nodes": 2,
            "total_edges": 2,
            "is_acyclic": True,
        }
