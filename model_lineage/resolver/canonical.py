"""
Reference canonicalization.

Column references in model records have the form ``"<owner>.<column>"``,
where the owner may carry a ``ref.`` or ``dbt_source.`` qualifier, or may
not be a table at all (a function call, a literal, a constant). This module
turns an owner into a comparable node id, or rejects it.
"""

from typing import Any, Optional

from model_lineage.models.config import LineageConfig


def canonicalize(raw_owner: Any, config: Optional[LineageConfig] = None) -> Optional[str]:
    """Normalize a raw owner reference to a node id.

    Leading qualifiers (``ref.``, ``dbt_source.``) are stripped until none
    is left. The result is then rejected if it starts with a pseudo-table
    prefix such as ``udtf:``. Rejection is a normal outcome, not an error.

    Args:
        raw_owner: Owner part of a reference, or a composed source id.
        config: Optional configuration with qualifiers and reject prefixes.

    Returns:
        The canonical id, or None if the reference does not name a table.

    Example:
        >>> canonicalize("dbt_source.raw.orders")
        'raw.orders'
        >>> canonicalize("udtf:generate_series") is None
        True
    """
    if not isinstance(raw_owner, str):
        return None
    config = config or LineageConfig()

    value = raw_owner
    stripped = True
    while stripped:
        stripped = False
        for qualifier in config.strip_qualifiers:
            if value.startswith(qualifier):
                value = value[len(qualifier):]
                stripped = True

    if not value:
        return None
    if value.startswith(config.reject_prefixes):
        return None
    return value


def split_qualified_reference(reference: Any) -> Optional[tuple[str, str]]:
    """Split ``"<owner>.<column>"`` on its last dot.

    Args:
        reference: Raw qualified reference.

    Returns:
        ``(owner, column)``, or None if the reference is not a string or has
        no owner or column part.

    Example:
        >>> split_qualified_reference("a.b.c")
        ('a.b', 'c')
    """
    if not isinstance(reference, str):
        return None
    owner, sep, column = reference.strip().rpartition(".")
    if not sep or not owner or not column:
        return None
    return owner, column
