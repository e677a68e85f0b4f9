"""
Utility helpers for model lineage.

This package contains helpers that support the graph builder, such as the
diagnostics collector.
"""

from model_lineage.utils.warnings import LineageWarning, WarningCollector

__all__ = [
    "LineageWarning",
    "WarningCollector",
]
