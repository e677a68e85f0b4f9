"""
Custom exception classes for model lineage.

This module defines the exceptions raised by the model_lineage package.
Problems found inside the supplied model records (unresolvable identifiers,
malformed column references, incomplete source declarations) are never
raised; they are collected as diagnostics instead. The exceptions here
cover the surrounding concerns: loading records and querying a built graph.
"""

from pathlib import Path
from typing import Optional, Union


class LineageError(Exception):
    """Base exception class for all model lineage errors.

    Attributes:
        message: Human-readable error message describing the error.
    """

    def __init__(self, message: str) -> None:
        """Initialize a LineageError with a message.

        Args:
            message: Error message describing what went wrong.
        """
        self.message = message
        super().__init__(self.message)


class RecordLoadError(LineageError):
    """Exception raised when a model record document cannot be loaded.

    Raised by the JSON record loader when a file cannot be read or does
    not contain valid JSON.

    Attributes:
        message: Error message describing the failure.
        path: Path of the offending file, if known.
    """

    def __init__(
        self, message: str, path: Optional[Union[str, Path]] = None
    ) -> None:
        """Initialize a RecordLoadError.

        Args:
            message: Error message describing the failure.
            path: Optional path of the file that failed to load.
        """
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class UnknownNodeError(LineageError):
    """Exception raised when a graph query names a node that does not exist.

    Attributes:
        message: Error message describing the failure.
        node_id: The unknown node identifier.
        available: A few registered node ids, for the error message.
    """

    def __init__(self, node_id: str, available: Optional[list[str]] = None) -> None:
        """Initialize an UnknownNodeError.

        Args:
            node_id: The node identifier that was not found.
            available: Optional list of known node ids to suggest.
        """
        self.node_id = node_id
        self.available = available or []
        message = f"Node '{node_id}' is not in the lineage graph."
        if self.available:
            message += " Known nodes include: " + ", ".join(self.available[:5])
        super().__init__(message)
