"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (adapter or format contract violations)
        2000-2999: Parse diagnostics (transient input, logged only)
    """

    # Configuration errors (1000-1999)
    FORMAT_EXPANSION_OVERFLOW = 1001
    MISSING_MAX_LENGTH = 1002
    EMPTY_TOKEN = 1003
    UNSUPPORTED_TOKEN = 1004
    UNSUPPORTED_SECTION_TYPE = 1005
    INVALID_SECTION_TYPE = 1006

    # Parse diagnostics (2000-2999)
    # Never raised: an unparseable section string is the normal "editing"
    # state. These codes only label debug log lines.
    PARSE_NO_MATCH = 2001
    PARSE_OUT_OF_RANGE = 2002
    DAY_CLAMP_FAILED = 2003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        token: Format token involved in the error, if any
        format: Format string involved in the error, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    token: str | None = None
    format: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[MISSING_MAX_LENGTH]: Token 'M' has no max length configured
              = token: M
              = help: Add max_length to the token's SectionTokenConfig

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
