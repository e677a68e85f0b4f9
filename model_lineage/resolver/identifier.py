"""
Model identifier resolution.

A model record may name itself through ``model_name``, ``target_table`` or
``file_name``. This module picks the authoritative one.
"""

from typing import Optional

from model_lineage.models.config import LineageConfig
from model_lineage.models.record import ModelRecord


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def strip_model_extension(file_name: str, extensions: tuple[str, ...]) -> str:
    """Remove a model file extension (e.g. ".sql") from a file name.

    Args:
        file_name: File name as declared by the record.
        extensions: Extensions to strip, matched case-insensitively.

    Returns:
        The file name without its extension.

    Example:
        >>> strip_model_extension("orders_fct.SQL", (".sql",))
        'orders_fct'
    """
    lowered = file_name.lower()
    for extension in extensions:
        if lowered.endswith(extension.lower()):
            return file_name[: -len(extension)]
    return file_name


def resolve_model_id(
    record: ModelRecord, config: Optional[LineageConfig] = None
) -> Optional[str]:
    """Derive the unique id of a model record.

    Priority: trimmed ``model_name``, then trimmed ``target_table``, then
    ``file_name`` with its model extension stripped.

    Args:
        record: Parsed model record.
        config: Optional configuration (for the extensions to strip).

    Returns:
        The model id, or None if no candidate yields a non-empty string.

    Example:
        >>> resolve_model_id(ModelRecord(model_name=" ", file_name="stg_orders.sql"))
        'stg_orders'
    """
    config = config or LineageConfig()

    model_id = _clean(record.model_name) or _clean(record.target_table)
    if model_id:
        return model_id

    file_name = _clean(record.file_name)
    if file_name is None:
        return None
    return _clean(strip_model_extension(file_name, config.model_file_extensions))
