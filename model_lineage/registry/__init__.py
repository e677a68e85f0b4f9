"""
Registry module for model lineage.

This module provides the registry that owns the nodes and edges of a single
graph build.
"""

from model_lineage.registry.node_registry import NodeRegistry

__all__ = ["NodeRegistry"]
