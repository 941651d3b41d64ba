"""Calendar adapter contract.

The sections and state packages never touch Babel or ``datetime`` arithmetic
directly. Everything locale- or calendar-specific goes through an object
satisfying ``CalendarAdapter``. ``BabelCalendarAdapter`` is the shipped
implementation; tests substitute small subclasses to simulate broken
adapters.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from datefield.enums import SectionContentType, SectionType

__all__ = [
    "CalendarAdapter",
    "EscapedCharacters",
    "SectionTokenConfig",
]


@dataclass(frozen=True, slots=True)
class SectionTokenConfig:
    """Static description of one format token.

    Attributes:
        section_type: Date component the token renders
        content_type: Characters the section accepts
        max_length: Max digit count for unpadded numeric tokens. None for
            letter tokens and for tokens whose canonical rendering is padded.
    """

    section_type: SectionType
    content_type: SectionContentType
    max_length: int | None = None


@dataclass(frozen=True, slots=True)
class EscapedCharacters:
    """Delimiters of literal text inside a format string."""

    start: str
    end: str


# pylint: disable=unnecessary-ellipsis
# Ellipsis (...) is the standard Protocol method body per PEP 544
class CalendarAdapter(Protocol):
    """Locale-aware date primitives consumed by the section engine.

    Setters return new values and clamp the day of month to the target
    month's length (Jan 31 with month set to 2 gives Feb 28/29).
    """

    @property
    def locale_code(self) -> str:
        """Locale the adapter formats and parses for."""
        ...

    @property
    def escaped_characters(self) -> EscapedCharacters:
        """Literal-text delimiters of the format syntax."""
        ...

    @property
    def format_token_map(self) -> Mapping[str, SectionTokenConfig]:
        """Every token the adapter can turn into a section."""
        ...

    def expand_format(self, format: str) -> str:
        """Replace composite macros by their constituent tokens (one pass)."""
        ...

    def format_by_string(self, value: datetime, format: str) -> str:
        """Render a date with a format string."""
        ...

    def parse(self, value: str, format: str) -> datetime | None:
        """Parse a string against a format. None when it does not parse."""
        ...

    def is_valid(self, value: object) -> bool:
        """True for a usable date value."""
        ...

    def now(self) -> datetime:
        """Current date-time, to the second."""
        ...

    def date(self, value: datetime | str | None = None) -> datetime | None:
        """Current date-time when value is None, else the value as a date."""
        ...

    def get_year(self, value: datetime) -> int: ...
    def get_month(self, value: datetime) -> int: ...
    def get_date(self, value: datetime) -> int: ...
    def get_hours(self, value: datetime) -> int: ...
    def get_minutes(self, value: datetime) -> int: ...
    def get_seconds(self, value: datetime) -> int: ...

    def set_year(self, value: datetime, year: int) -> datetime: ...
    def set_month(self, value: datetime, month: int) -> datetime: ...
    def set_date(self, value: datetime, day: int) -> datetime: ...
    def set_hours(self, value: datetime, hours: int) -> datetime: ...
    def set_minutes(self, value: datetime, minutes: int) -> datetime: ...
    def set_seconds(self, value: datetime, seconds: int) -> datetime: ...

    def add_hours(self, value: datetime, amount: int) -> datetime: ...
    def days_in_month(self, value: datetime) -> int: ...
    def start_of_year(self, value: datetime) -> datetime: ...
    def start_of_month(self, value: datetime) -> datetime: ...
    def start_of_week(self, value: datetime) -> datetime: ...

    def is_equal(self, value: datetime | None, comparing: datetime | None) -> bool:
        """Value equality treating two empty values as equal."""
        ...
# pylint: enable=unnecessary-ellipsis
