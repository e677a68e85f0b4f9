"""
Diagnostics for lineage graph builds.

This module defines the warning collection used while building a lineage
graph. Problems in the input records are never fatal; they are collected
here and handed back to the caller with the built graph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from model_lineage.models.config import ErrorMode

logger = logging.getLogger(__name__)

VALID_LEVELS = ("INFO", "WARNING", "ERROR")


@dataclass
class LineageWarning:
    """Warning or error message produced while building a graph.

    Attributes:
        level: Severity level ("INFO", "WARNING", "ERROR").
        message: Warning or error message text.
        context: Optional context, usually the record or reference involved.

    Example:
        >>> warning = LineageWarning(
        ...     level="WARNING",
        ...     message="Record has no usable identifier",
        ...     context="record #3",
        ... )
        >>> warning.level
        'WARNING'
    """

    level: str
    message: str
    context: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate warning level."""
        if self.level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid warning level: {self.level}. "
                f"Must be one of {list(VALID_LEVELS)}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "message": self.message, "context": self.context}


class WarningCollector:
    """Collects diagnostics during a single graph build.

    Example:
        >>> collector = WarningCollector()
        >>> collector.add("WARNING", "Malformed reference")
        >>> collector.has_errors()
        False
        >>> len(collector.get_all())
        1
    """

    def __init__(self) -> None:
        """Initialize a WarningCollector."""
        self.warnings: list[LineageWarning] = []

    def add(self, level: str, message: str, context: Optional[str] = None) -> None:
        """Add a warning or error message.

        Args:
            level: Severity level ("INFO", "WARNING", "ERROR").
            message: Warning or error message text.
            context: Optional context information.
        """
        self.warnings.append(LineageWarning(level=level, message=message, context=context))

    def report(
        self, mode: ErrorMode, message: str, context: Optional[str] = None
    ) -> None:
        """Report a recoverable problem according to an ErrorMode.

        WARN records a WARNING diagnostic and logs it; IGNORE only logs
        at DEBUG level.

        Args:
            mode: How the problem should be reported.
            message: Description of the problem.
            context: Optional context information.
        """
        if mode is ErrorMode.IGNORE:
            logger.debug("%s (%s)", message, context)
            return
        logger.warning("%s (%s)", message, context)
        self.add("WARNING", message, context)

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(warning.level == "ERROR" for warning in self.warnings)

    def get_all(self) -> list[LineageWarning]:
        """Get all collected warnings, in the order they were added."""
        return self.warnings.copy()

    def get_by_level(self, level: str) -> list[LineageWarning]:
        """Get warnings with the given severity level."""
        return [warning for warning in self.warnings if warning.level == level]

    def clear(self) -> None:
        """Clear all collected warnings."""
        self.warnings.clear()

    def add_unresolved_record(
        self, mode: ErrorMode, index: int, context: Optional[str] = None
    ) -> None:
        """Report a record that has no usable identifier.

        Args:
            mode: Reporting mode.
            index: Position of the record in the input collection.
            context: Optional description of the record.
        """
        self.report(
            mode,
            f"Record #{index} has no usable model_name, target_table or "
            f"file_name; it was excluded from the graph.",
            context,
        )

    def add_malformed_reference(
        self, mode: ErrorMode, model_id: str, column: str, reference: Any
    ) -> None:
        """Report a column reference that is not an '<owner>.<column>' string.

        Args:
            mode: Reporting mode.
            model_id: Model declaring the column.
            column: Column carrying the reference.
            reference: The offending raw reference.
        """
        self.report(
            mode,
            f"Column '{column}' of model '{model_id}' has a malformed source "
            f"reference {reference!r}; expected '<owner>.<column>'.",
            model_id,
        )

    def add_incomplete_source(
        self, mode: ErrorMode, model_id: str, source: Any, reason: str
    ) -> None:
        """Report a source declaration that cannot produce a node.

        Args:
            mode: Reporting mode.
            model_id: Model declaring the source.
            source: The raw source declaration.
            reason: Why it was skipped.
        """
        self.report(
            mode,
            f"Source declaration {source!r} of model '{model_id}' was skipped: {reason}.",
            model_id,
        )

    def get_summary(self) -> dict[str, int]:
        """Get a summary of warnings by level.

        Example:
            >>> collector = WarningCollector()
            >>> collector.add("INFO", "Info 1")
            >>> collector.add("WARNING", "Warning 1")
            >>> collector.get_summary() == {"INFO": 1, "WARNING": 1, "ERROR": 0}
            True
        """
        summary: dict[str, int] = {level: 0 for level in VALID_LEVELS}
        for warning in self.warnings:
            summary[warning.level] = summary.get(warning.level, 0) + 1
        return summary
