"""
Configuration model for model lineage.

This module defines the LineageConfig class and ErrorMode enum, which control
how references are canonicalized and how problems in the input records are
reported.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_STRIP_QUALIFIERS = ("ref.", "dbt_source.")
DEFAULT_REJECT_PREFIXES = (
    "udtf:",
    "udf:",
    "function:",
    "func:",
    "literal:",
    "const:",
    "constant:",
)
DEFAULT_MODEL_FILE_EXTENSIONS = (".sql",)


class ErrorMode(str, Enum):
    """How a recoverable problem in the input records is reported.

    Problems never abort a build. The mode only decides whether the problem
    is recorded as a diagnostic on the build result.

    Attributes:
        WARN: Record a WARNING diagnostic and log it at WARNING level.
        IGNORE: Log at DEBUG level only, record nothing.

    Example:
        >>> ErrorMode.values()
        ['warn', 'ignore']
    """

    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all possible error mode values."""
        return [member.value for member in cls]


@dataclass
class LineageConfig:
    """Configuration settings for building a lineage graph.

    Attributes:
        strip_qualifiers: Qualifiers removed from the front of an owner
            reference before it is compared or registered. They are stripped
            repeatedly until none applies.
        reject_prefixes: Pseudo-table markers (function calls, literals,
            constants). An owner reference starting with one of these never
            becomes a node.
        model_file_extensions: Extensions stripped from a record's file name
            when the file name is used as the model id. Matched
            case-insensitively.
        on_unresolved_record: Reporting mode for records without a usable id.
        on_malformed_reference: Reporting mode for malformed column
            references and incomplete source declarations.

    Example:
        >>> config = LineageConfig(reject_prefixes=("udtf:",))
        >>> config.on_unresolved_record
        <ErrorMode.WARN: 'warn'>
    """

    strip_qualifiers: tuple[str, ...] = DEFAULT_STRIP_QUALIFIERS
    reject_prefixes: tuple[str, ...] = DEFAULT_REJECT_PREFIXES
    model_file_extensions: tuple[str, ...] = DEFAULT_MODEL_FILE_EXTENSIONS
    on_unresolved_record: ErrorMode = ErrorMode.WARN
    on_malformed_reference: ErrorMode = ErrorMode.WARN

    def __post_init__(self) -> None:
        """Validate configuration settings."""
        for name in ("strip_qualifiers", "reject_prefixes", "model_file_extensions"):
            value = getattr(self, name)
            if isinstance(value, str) or not isinstance(value, (tuple, list)):
                raise TypeError(f"{name} must be a tuple of strings")
            if not all(isinstance(item, str) and item for item in value):
                raise ValueError(f"{name} must contain only non-empty strings")
            setattr(self, name, tuple(value))
        if not isinstance(self.on_unresolved_record, ErrorMode):
            raise TypeError("on_unresolved_record must be an ErrorMode instance")
        if not isinstance(self.on_malformed_reference, ErrorMode):
            raise TypeError("on_malformed_reference must be an ErrorMode instance")
