"""Diagnostic system for datefield errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    DateFieldError,
    EmptyTokenError,
    FieldConfigurationError,
    FormatExpansionOverflowError,
    InvalidSectionTypeError,
    MissingMaxLengthError,
    UnsupportedSectionTypeError,
    UnsupportedTokenError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "DateFieldError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "EmptyTokenError",
    "ErrorTemplate",
    "FieldConfigurationError",
    "FormatExpansionOverflowError",
    "InvalidSectionTypeError",
    "MissingMaxLengthError",
    "OutputFormat",
    "UnsupportedSectionTypeError",
    "UnsupportedTokenError",
]
