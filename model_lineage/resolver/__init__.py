"""
Identifier and reference resolution.

This package turns the loosely written names found in model records into
stable node ids.
"""

from model_lineage.resolver.canonical import canonicalize, split_qualified_reference
from model_lineage.resolver.identifier import resolve_model_id, strip_model_extension

__all__ = [
    "canonicalize",
    "resolve_model_id",
    "split_qualified_reference",
    "strip_model_extension",
]
