"""Enumerations for datefield type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class SectionType(StrEnum):
    """Logical date component an editable section represents.

    StrEnum provides automatic string conversion: str(SectionType.YEAR) == "year"
    """

    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    WEEK_DAY = "weekDay"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
    MERIDIEM = "meridiem"
    EMPTY = "empty"
    """Synthetic section for formats made only of literal text."""


class SectionContentType(StrEnum):
    """What kind of characters a section accepts."""

    DIGIT = "digit"
    """Numeric entry: 02, 2025"""

    DIGIT_WITH_LETTER = "digit-with-letter"
    """Numeric entry rendered with a suffix: 1st, 2nd"""

    LETTER = "letter"
    """Name entry: Feb, Tuesday, PM"""


class FormatDensity(StrEnum):
    """Spacing applied to date delimiters."""

    DENSE = "dense"
    """Separators rendered exactly as the format spells them: 02/28/2023"""

    SPACIOUS = "spacious"
    """Single-character delimiters padded with spaces: 02 / 28 / 2023"""


__all__ = [
    "FormatDensity",
    "SectionContentType",
    "SectionType",
]
