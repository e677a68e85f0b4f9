"""
Model record data model.

This module defines the typed view of a "model description" document: one
document per transformation unit (a table or view build step), with its
output columns, declared upstream sources and intermediate steps.

Raw documents are loosely typed: a column's ``source`` may be a string or a
list, ``transform`` and ``transformation`` are synonyms, and keys may be
snake_case or camelCase. All of that is normalized once, here, so the graph
builder never has to re-check it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


def _get(raw: Mapping[str, Any], *keys: str) -> Any:
    """Return the first present, non-None value among ``keys``."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_sequence(value: Any) -> tuple[Any, ...]:
    """Normalize a scalar-or-list field into a tuple."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class SourceKind(str, Enum):
    """Kind of a declared upstream dependency."""

    REF = "ref"  # Another model in the project
    DBT_SOURCE = "dbt_source"  # An external source table
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Any) -> "SourceKind":
        if value == cls.REF.value:
            return cls.REF
        if value == cls.DBT_SOURCE.value:
            return cls.DBT_SOURCE
        return cls.UNKNOWN


@dataclass(frozen=True)
class ColumnMeta:
    """Declared lineage of one output column.

    Attributes:
        references: Raw qualified references ("<owner>.<column>") taken from
            ``source`` followed by ``derived_from``, as declared.
            Entries are kept as given, so non-string entries can be reported.
        transform: Transformation text from ``transform`` or
            ``transformation``.
    """

    references: tuple[Any, ...] = ()
    transform: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "ColumnMeta":
        if not isinstance(raw, Mapping):
            return cls()
        references = _as_sequence(raw.get("source")) + _as_sequence(
            _get(raw, "derived_from", "derivedFrom")
        )
        transform = _get(raw, "transform", "transformation")
        return cls(
            references=references,
            transform=transform if isinstance(transform, str) else None,
        )

    @property
    def source_refs(self) -> tuple[str, ...]:
        """String references only."""
        return tuple(ref for ref in self.references if isinstance(ref, str))


@dataclass(frozen=True)
class SourceRef:
    """A declared upstream dependency of a model.

    Attributes:
        kind: REF, DBT_SOURCE or UNKNOWN.
        name: Source name (for dbt sources, the source schema/group).
        table: Table name, required for DBT_SOURCE.
        model: Referenced model id, required for REF.
        raw: The original declaration, kept for diagnostics.
    """

    kind: SourceKind
    name: Optional[str] = None
    table: Optional[str] = None
    model: Optional[str] = None
    raw: Any = None

    @classmethod
    def from_dict(cls, raw: Any) -> "SourceRef":
        if not isinstance(raw, Mapping):
            return cls(kind=SourceKind.UNKNOWN, raw=raw)
        return cls(
            kind=SourceKind.from_value(raw.get("type")),
            name=_optional_str(raw.get("name")),
            table=_optional_str(raw.get("table")),
            model=_optional_str(raw.get("model")),
            raw=raw,
        )


@dataclass
class ModelRecord:
    """One model description document.

    Attributes:
        model_name: Preferred identifier.
        target_table: Second-choice identifier.
        file_name: Last-choice identifier (extension stripped).
        target_type: Materialization of the model (e.g. "table", "view").
        columns: Declared output columns, or None if the record has none.
        sources: Declared upstream dependencies, in declaration order.
        intermediate_steps: Names local to this record (CTEs).
        raw: The original document.
    """

    model_name: Optional[str] = None
    target_table: Optional[str] = None
    file_name: Optional[str] = None
    target_type: Optional[str] = None
    columns: Optional[dict[str, ColumnMeta]] = None
    sources: list[SourceRef] = field(default_factory=list)
    intermediate_steps: list[str] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ModelRecord":
        """Parse a raw document.

        Unknown keys are ignored and wrongly typed fields are treated as
        absent; parsing never fails for a mapping.

        Args:
            raw: The raw JSON-like document.

        Returns:
            The parsed ModelRecord.
        """
        raw_columns = raw.get("columns")
        columns: Optional[dict[str, ColumnMeta]] = None
        if isinstance(raw_columns, Mapping):
            columns = {
                name: ColumnMeta.from_dict(meta)
                for name, meta in raw_columns.items()
                if isinstance(name, str)
            }

        raw_sources = raw.get("sources")
        sources = (
            [SourceRef.from_dict(src) for src in raw_sources]
            if isinstance(raw_sources, (list, tuple))
            else []
        )

        steps: list[str] = []
        for step in _as_sequence(_get(raw, "intermediate_steps", "intermediateSteps")):
            name = step.get("cte") if isinstance(step, Mapping) else step
            if isinstance(name, str) and name.strip():
                steps.append(name.strip())

        return cls(
            model_name=_optional_str(_get(raw, "model_name", "modelName")),
            target_table=_optional_str(_get(raw, "target_table", "targetTable")),
            file_name=_optional_str(_get(raw, "file_name", "fileName")),
            target_type=_optional_str(_get(raw, "target_type", "targetType")),
            columns=columns,
            sources=sources,
            intermediate_steps=steps,
            raw=dict(raw),
        )

    def describe(self) -> str:
        """Short description for diagnostics."""
        return (
            f"model_name={self.model_name!r}, target_table={self.target_table!r}, "
            f"file_name={self.file_name!r}"
        )
