"""Per-section value boundaries.

A boundaries table maps every section type to a function returning the
minimum and maximum numeric value the section may take for the current date
context (e.g. 1..28 for the day of February 2023). Edit callbacks receive the
table; the engine itself only asks for day boundaries during clamp recovery.

Python 3.13+.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import MappingProxyType

from datefield.adapter import CalendarAdapter
from datefield.enums import SectionContentType, SectionType

from .utils import get_localized_digits, is_four_digit_year_format, remove_localized_digits

__all__ = [
    "Boundary",
    "BoundaryQuery",
    "SectionBoundaries",
    "get_section_boundaries",
]


@dataclass(frozen=True, slots=True)
class Boundary:
    """Inclusive numeric range of a section.

    Attributes:
        minimum: Smallest accepted value
        maximum: Largest accepted value
        longest_month: A date inside a month of maximal length (day only)
    """

    minimum: int
    maximum: int
    longest_month: datetime | None = None


@dataclass(frozen=True, slots=True)
class BoundaryQuery:
    """Context of a boundary lookup."""

    format: str
    content_type: SectionContentType
    current_date: datetime | None = None


BoundaryFunction: TypeAlias = "Callable[[BoundaryQuery], Boundary]"
SectionBoundaries: TypeAlias = "Mapping[SectionType, BoundaryFunction]"


def get_section_boundaries(
    adapter: CalendarAdapter, localized_digits: tuple[str, ...] | None = None
) -> SectionBoundaries:
    """Build the boundaries table for an adapter.

    Args:
        adapter: Calendar adapter
        localized_digits: Digits 0-9 as the adapter renders them
            (computed from the adapter when omitted)

    Returns:
        Read-only mapping from section type to boundary function
    """
    digits = localized_digits or get_localized_digits(adapter)
    today = adapter.now()
    start_of_year = adapter.start_of_year(today)
    months = [adapter.set_month(start_of_year, month) for month in range(1, 13)]
    longest_month = max(months, key=adapter.days_in_month)
    max_days_in_month = adapter.days_in_month(longest_month)
    start_of_day = today.replace(hour=0, minute=0, second=0, microsecond=0)

    def rendered_numbers(dates: list[datetime], token: str) -> list[int]:
        return [
            int(remove_localized_digits(adapter.format_by_string(value, token), digits))
            for value in dates
        ]

    def year(query: BoundaryQuery) -> Boundary:
        maximum = 9999 if is_four_digit_year_format(adapter, query.format) else 99
        return Boundary(minimum=0, maximum=maximum)

    def month(_query: BoundaryQuery) -> Boundary:
        return Boundary(minimum=1, maximum=len(months))

    def day(query: BoundaryQuery) -> Boundary:
        current = query.current_date
        if current is not None and adapter.is_valid(current):
            maximum = adapter.days_in_month(current)
        else:
            maximum = max_days_in_month
        return Boundary(minimum=1, maximum=maximum, longest_month=longest_month)

    def week_day(query: BoundaryQuery) -> Boundary:
        if query.content_type is SectionContentType.DIGIT:
            start = adapter.start_of_week(today)
            week = [adapter.add_hours(start, 24 * offset) for offset in range(7)]
            numbers = rendered_numbers(week, query.format)
            return Boundary(minimum=min(numbers), maximum=max(numbers))
        return Boundary(minimum=1, maximum=7)

    def hours(query: BoundaryQuery) -> Boundary:
        day_hours = [start_of_day + timedelta(hours=offset) for offset in range(24)]
        numbers = rendered_numbers(day_hours, query.format)
        return Boundary(minimum=min(numbers), maximum=max(numbers))

    def minutes(_query: BoundaryQuery) -> Boundary:
        return Boundary(minimum=0, maximum=59)

    def seconds(_query: BoundaryQuery) -> Boundary:
        return Boundary(minimum=0, maximum=59)

    def meridiem(_query: BoundaryQuery) -> Boundary:
        return Boundary(minimum=0, maximum=1)

    def empty(_query: BoundaryQuery) -> Boundary:
        return Boundary(minimum=0, maximum=0)

    return MappingProxyType({
        SectionType.YEAR: year,
        SectionType.MONTH: month,
        SectionType.DAY: day,
        SectionType.WEEK_DAY: week_day,
        SectionType.HOURS: hours,
        SectionType.MINUTES: minutes,
        SectionType.SECONDS: seconds,
        SectionType.MERIDIEM: meridiem,
        SectionType.EMPTY: empty,
    })
