"""
Lineage node model.

This module defines the nodes of a lineage graph: model nodes (build targets
described by a record) and source nodes (upstream tables), together with the
per-column information attached to them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from model_lineage.models.record import ModelRecord


class NodeKind(str, Enum):
    """Node kind enumeration."""

    MODEL = "model"  # Build target, or a model referenced via ref()
    SOURCE = "source"  # Upstream table not built by any record


@dataclass(frozen=True)
class UsedBy:
    """A (model, column) pair that reads a source column."""

    model: str
    column: str

    def to_dict(self) -> Dict[str, str]:
        return {"model": self.model, "column": self.column}


@dataclass
class ColumnInfo:
    """Lineage information for one column of a node.

    Attributes:
        source_refs: Raw qualified references this column is built from
            (model columns only).
        transform: Transformation text, if declared.
        used_by: Consumers of this column, in processing order (filled for
            columns referenced by other models).
    """

    source_refs: List[str] = field(default_factory=list)
    transform: Optional[str] = None
    used_by: List[UsedBy] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_refs": list(self.source_refs),
            "transform": self.transform,
            "used_by": [entry.to_dict() for entry in self.used_by],
        }


@dataclass
class LineageNode:
    """A node of the lineage graph.

    Attributes:
        id: Unique node id, also used as the label.
        kind: MODEL or SOURCE. Fixed by the first registration.
        columns: Column name -> ColumnInfo.
        source_record: The record describing this model (model nodes only).
    """

    id: str
    kind: NodeKind
    columns: Dict[str, ColumnInfo] = field(default_factory=dict)
    source_record: Optional[ModelRecord] = None

    @property
    def label(self) -> str:
        return self.id

    @property
    def has_columns(self) -> bool:
        return bool(self.columns)

    @property
    def materialization(self) -> Optional[str]:
        if self.source_record is None:
            return None
        return self.source_record.target_type

    def get_column(self, name: str) -> Optional[ColumnInfo]:
        return self.columns.get(name)

    def ensure_column(self, name: str) -> ColumnInfo:
        """Return the column named ``name``, creating an empty one if needed."""
        if name not in self.columns:
            self.columns[name] = ColumnInfo()
        return self.columns[name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "columns": {name: col.to_dict() for name, col in self.columns.items()},
            "record": self.source_record.raw if self.source_record else None,
        }
