"""Section helpers shared by the format parser and the state engine.

Covers:
- Token lookup and leading-zero detection
- Localized digit conversion
- Parsing the sections of one date back into a datetime
- Day clamp recovery for days past the end of the month
- Field-by-field merge of edited sections onto a reference date

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from datefield.constants import BIDI_ISOLATION_MARKS
from datefield.diagnostics import (
    EmptyTokenError,
    ErrorTemplate,
    InvalidSectionTypeError,
    UnsupportedSectionTypeError,
    UnsupportedTokenError,
)
from datefield.enums import SectionContentType, SectionType

if TYPE_CHECKING:
    from datefield.adapter import CalendarAdapter, SectionTokenConfig

    from .boundaries import Boundary, BoundaryQuery, SectionBoundaries
    from .models import Section

__all__ = [
    "ASCII_DIGITS",
    "apply_localized_digits",
    "apply_section_value_to_date",
    "clamp_day_section",
    "clean_digit_section_value",
    "clean_leading_zeros",
    "create_date_str_from_sections",
    "does_section_format_have_leading_zeros",
    "get_date_from_date_sections",
    "get_localized_digits",
    "get_section_config_from_format_token",
    "is_four_digit_year_format",
    "merge_date_into_reference_date",
    "remove_localized_digits",
    "validate_sections",
]

logger = logging.getLogger(__name__)

ASCII_DIGITS: tuple[str, ...] = tuple("0123456789")

# Seconds without padding render a single localized digit.
_SINGLE_DIGIT_TOKEN = "s"


# ============================================================================
# TOKENS
# ============================================================================


def get_section_config_from_format_token(
    adapter: CalendarAdapter, token: str
) -> SectionTokenConfig:
    """Static configuration of a format token.

    Raises:
        EmptyTokenError: token is empty
        UnsupportedTokenError: token is absent from the adapter's token map
    """
    if token == "":
        raise EmptyTokenError(ErrorTemplate.empty_token())
    config = adapter.format_token_map.get(token)
    if config is None:
        raise UnsupportedTokenError(ErrorTemplate.unsupported_token(token))
    return config


def is_four_digit_year_format(adapter: CalendarAdapter, format: str) -> bool:  # noqa: A002
    now = adapter.now()
    return len(adapter.format_by_string(now, format)) == 4


def does_section_format_have_leading_zeros(
    adapter: CalendarAdapter,
    content_type: SectionContentType,
    section_type: SectionType,
    format: str,  # noqa: A002
) -> bool:
    """Whether the canonical rendering of a numeric token is zero padded.

    Raises:
        InvalidSectionTypeError: section_type has no numeric rendering
    """
    if content_type is not SectionContentType.DIGIT:
        return False

    now = adapter.now()

    match section_type:
        case SectionType.YEAR:
            if is_four_digit_year_format(adapter, format):
                return adapter.format_by_string(adapter.set_year(now, 1), format) == "0001"
            return adapter.format_by_string(adapter.set_year(now, 2001), format) == "01"
        case SectionType.MONTH:
            sample = adapter.start_of_year(now)
        case SectionType.DAY:
            sample = adapter.start_of_month(now)
        case SectionType.WEEK_DAY:
            sample = adapter.start_of_week(now)
        case SectionType.HOURS:
            sample = adapter.set_hours(now, 1)
        case SectionType.MINUTES:
            sample = adapter.set_minutes(now, 1)
        case SectionType.SECONDS:
            sample = adapter.set_seconds(now, 1)
        case _:
            diagnostic = ErrorTemplate.invalid_section_type(section_type, "leading zeros")
            raise InvalidSectionTypeError(diagnostic)
    return len(adapter.format_by_string(sample, format)) > 1


# ============================================================================
# LOCALIZED DIGITS
# ============================================================================


def get_localized_digits(adapter: CalendarAdapter) -> tuple[str, ...]:
    """Digits 0-9 as the adapter renders them."""
    today = adapter.now()
    zero = adapter.format_by_string(adapter.set_seconds(today, 0), _SINGLE_DIGIT_TOKEN)
    if zero == "0":
        return ASCII_DIGITS
    return tuple(
        adapter.format_by_string(adapter.set_seconds(today, digit), _SINGLE_DIGIT_TOKEN)
        for digit in range(10)
    )


def remove_localized_digits(value: str, localized_digits: tuple[str, ...]) -> str:
    """Convert localized digits to ASCII, dropping anything else."""
    if localized_digits[0] == "0":
        return value

    digits: list[str] = []
    pending = ""
    for char in value:
        pending += char
        if pending in localized_digits:
            digits.append(str(localized_digits.index(pending)))
            pending = ""
    return "".join(digits)


def apply_localized_digits(value: str, localized_digits: tuple[str, ...]) -> str:
    """Convert ASCII digits to localized digits."""
    if localized_digits[0] == "0":
        return value
    return "".join(localized_digits[int(char)] for char in value)


def clean_leading_zeros(value: str, size: int) -> str:
    """Strip incidental zeros from a numeric string, then pad it to size."""
    return str(int(value)).zfill(size)


def clean_digit_section_value(
    adapter: CalendarAdapter,
    value: int,
    boundary: Boundary,
    localized_digits: tuple[str, ...],
    section: Section,
) -> str:
    """Render a number as the text of a digit section."""
    if (
        section.type is SectionType.DAY
        and section.content_type is SectionContentType.DIGIT_WITH_LETTER
        and boundary.longest_month is not None
    ):
        return adapter.format_by_string(
            adapter.set_date(boundary.longest_month, value), section.format
        )

    text = str(value)
    if section.has_leading_zeros_in_input and section.max_length is not None:
        text = clean_leading_zeros(text, section.max_length)
    return apply_localized_digits(text, localized_digits)


# ============================================================================
# SECTIONS TO DATE
# ============================================================================


def create_date_str_from_sections(sections: Iterable[Section]) -> str:
    """Displayed text of the sections with bidi isolation marks removed."""
    text = "".join(
        f"{section.start_separator}{section.value}{section.end_separator}"
        for section in sections
    )
    return "".join(char for char in text if char not in BIDI_ISOLATION_MARKS)


def _parse_parts(
    sections: Iterable[Section], localized_digits: tuple[str, ...]
) -> tuple[str, str] | None:
    candidates = tuple(sections)
    has_day = any(section.type is SectionType.DAY for section in candidates)
    parts = [
        section
        for section in candidates
        if section.type is not SectionType.EMPTY
        and not (has_day and section.type is SectionType.WEEK_DAY)
    ]
    if not parts or any(section.value == "" for section in parts):
        return None

    values = [
        remove_localized_digits(section.value, localized_digits)
        if section.content_type is SectionContentType.DIGIT
        else section.value
        for section in parts
    ]
    return " ".join(values), " ".join(section.format for section in parts)


def get_date_from_date_sections(
    adapter: CalendarAdapter,
    sections: Iterable[Section],
    localized_digits: tuple[str, ...] = ASCII_DIGITS,
) -> datetime | None:
    """Parse the sections of one date into a datetime.

    Section values are joined with single spaces and parsed against the
    section formats joined the same way, so separators, density padding and
    bidi marks never reach the parser. A week-day section is redundant next
    to a day section and is left out. Any empty section gives None.
    """
    parts = _parse_parts(sections, localized_digits)
    if parts is None:
        return None

    value, format_string = parts
    parsed = adapter.parse(value, format_string)
    if parsed is None or not adapter.is_valid(parsed):
        logger.debug(ErrorTemplate.parse_no_match(value, format_string).message)
        return None
    return parsed


def clamp_day_section(
    adapter: CalendarAdapter,
    sections: tuple[Section, ...],
    boundaries: SectionBoundaries,
    localized_digits: tuple[str, ...] = ASCII_DIGITS,
) -> tuple[Section, ...] | None:
    """Lower a day past the end of its month to the month's last day.

    The sections are first parsed with the day forced to its minimum. When
    that start-of-month date is valid, every day section above the month's
    maximum is replaced by the maximum.

    Returns:
        The clamped sections, or None when even the start of the month does
        not parse (the invalidity is not the day's fault).
    """
    day_boundary = boundaries[SectionType.DAY]

    def with_day(section: Section, day: Boundary, number: int) -> Section:
        text = clean_digit_section_value(adapter, number, day, localized_digits, section)
        return replace(section, value=text)

    start_of_month_sections = []
    for section in sections:
        if section.type is SectionType.DAY:
            day = day_boundary(_boundary_query(section, None))
            section = with_day(section, day, day.minimum)  # noqa: PLW2901
        start_of_month_sections.append(section)

    start_of_month = get_date_from_date_sections(adapter, start_of_month_sections, localized_digits)
    if start_of_month is None:
        logger.debug(
            ErrorTemplate.day_clamp_failed(create_date_str_from_sections(sections)).message
        )
        return None

    clamped: list[Section] = []
    for section in sections:
        if section.type is SectionType.DAY:
            day = day_boundary(_boundary_query(section, start_of_month))
            number = _section_number(section, localized_digits)
            if number is not None and number > day.maximum:
                section = with_day(section, day, day.maximum)  # noqa: PLW2901
        clamped.append(section)
    return tuple(clamped)


def _boundary_query(section: Section, current_date: datetime | None) -> BoundaryQuery:
    from .boundaries import BoundaryQuery  # noqa: PLC0415 - circular import

    return BoundaryQuery(
        format=section.format, content_type=section.content_type, current_date=current_date
    )


def _section_number(section: Section, localized_digits: tuple[str, ...]) -> int | None:
    digits = "".join(
        char for char in remove_localized_digits(section.value, localized_digits) if char.isdigit()
    )
    return int(digits) if digits else None


# ============================================================================
# DATE MERGE
# ============================================================================


def _transfer_year(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_year(target, adapter.get_year(source))


def _transfer_month(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_month(target, adapter.get_month(source))


def _transfer_day(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_date(target, adapter.get_date(source))


def _transfer_hours(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_hours(target, adapter.get_hours(source))


def _transfer_minutes(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_minutes(target, adapter.get_minutes(source))


def _transfer_seconds(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    return adapter.set_seconds(target, adapter.get_seconds(source))


def _transfer_meridiem(adapter: CalendarAdapter, target: datetime, source: datetime) -> datetime:
    is_am = adapter.get_hours(source) < 12
    target_hours = adapter.get_hours(target)
    if is_am and target_hours >= 12:
        return adapter.add_hours(target, -12)
    if not is_am and target_hours < 12:
        return adapter.add_hours(target, 12)
    return target


def _keep(_adapter: CalendarAdapter, target: datetime, _source: datetime) -> datetime:
    # The week day follows from year, month and day.
    return target


_Transfer: TypeAlias = "Callable[[CalendarAdapter, datetime, datetime], datetime]"

_TRANSFERS: Mapping[SectionType, _Transfer] = MappingProxyType({
    SectionType.YEAR: _transfer_year,
    SectionType.MONTH: _transfer_month,
    SectionType.DAY: _transfer_day,
    SectionType.WEEK_DAY: _keep,
    SectionType.HOURS: _transfer_hours,
    SectionType.MINUTES: _transfer_minutes,
    SectionType.SECONDS: _transfer_seconds,
    SectionType.MERIDIEM: _transfer_meridiem,
    SectionType.EMPTY: _keep,
})

# Merge order: coarse to fine, meridiem after the hour it adjusts.
_MERGE_ORDER: Mapping[SectionType, int] = MappingProxyType({
    section_type: position for position, section_type in enumerate(_TRANSFERS)
})


def apply_section_value_to_date(
    adapter: CalendarAdapter,
    target: datetime,
    section_type: SectionType,
    source: datetime,
) -> datetime:
    """Copy the component a section edits from source onto target."""
    return _TRANSFERS[section_type](adapter, target, source)


def merge_date_into_reference_date(
    adapter: CalendarAdapter,
    source: datetime,
    sections: Iterable[Section],
    reference: datetime,
    *,
    only_modified: bool = True,
) -> datetime:
    """Copy the components of the (modified) sections from source onto reference.

    Components are applied year first, meridiem last, whatever the on-screen
    order. Setters clamp the day so no intermediate value overflows.

    Week-day sections carry no component of their own: the day section
    decides the date. In a format without a day section a week-day edit
    leaves the reference date unchanged.
    """
    merged = reference
    for section in sorted(sections, key=lambda item: _MERGE_ORDER[item.type]):
        if section.modified or not only_modified:
            merged = apply_section_value_to_date(adapter, merged, section.type, source)
    return merged


def validate_sections(
    sections: Iterable[Section], supported_section_types: Iterable[SectionType]
) -> None:
    """Fail when a section type is not editable by the field.

    Raises:
        UnsupportedSectionTypeError: first offending section
    """
    supported = frozenset(supported_section_types) | {SectionType.EMPTY}
    for section in sections:
        if section.type not in supported:
            diagnostic = ErrorTemplate.unsupported_section_type(
                section.type, (str(name) for name in supported - {SectionType.EMPTY})
            )
            raise UnsupportedSectionTypeError(diagnostic)
