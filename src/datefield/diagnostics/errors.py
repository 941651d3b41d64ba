"""datefield exception hierarchy with structured diagnostics.

All exceptions can store Diagnostic objects for rich error information.

Only configuration errors exist: a half-typed or semantically impossible date
(e.g. "Feb 30") is an ordinary editing state and never raises.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class DateFieldError(Exception):
    """Base exception for all datefield errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize DateFieldError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class FieldConfigurationError(DateFieldError):
    """Calendar adapter or format string violates its contract.

    Unrecoverable at the point of detection: construction is aborted.
    """


class FormatExpansionOverflowError(FieldConfigurationError):
    """Format macro expansion did not reach a fixed point."""


class MissingMaxLengthError(FieldConfigurationError):
    """Unpadded numeric token has no max digit count configured."""


class EmptyTokenError(FieldConfigurationError):
    """An empty token reached section construction."""


class UnsupportedTokenError(FieldConfigurationError):
    """Token is absent from the adapter's format token map."""


class UnsupportedSectionTypeError(FieldConfigurationError):
    """Section type not supported by the field appeared after a rebuild."""


class InvalidSectionTypeError(FieldConfigurationError):
    """Section type has no handler for the requested concern."""
