"""Pattern-driven parsing of CLDR date strings.

Python's strptime speaks a different directive language than CLDR and cannot
read localized month or period names for an arbitrary Babel locale, so the
adapter compiles each CLDR pattern into a regular expression instead:

    Pattern | Matches                        | Example
    --------|--------------------------------|--------
    y       | 1-4 digit year                 | 2025
    yy      | 2-digit year (strptime pivot)  | 25 -> 2025, 70 -> 1970
    yyyy    | 4-digit year                   | 2025
    M/MM    | Month 1-12                     | 2, 02
    MMM(M)  | Localized month name           | Feb, February
    d/dd    | Day of month                   | 5, 05
    E..EEEE | Localized weekday (ignored)    | Tue, Tuesday
    H/HH    | Hour 0-23                      | 14
    h/hh    | Hour 1-12                      | 2
    K/KK    | Hour 0-11                      | 2
    k/kk    | Hour 1-24                      | 24 -> 0
    m/mm    | Minute                         | 30
    s/ss    | Second                         | 45
    a       | Localized AM/PM marker         | PM

Literal runs match themselves, except whitespace which matches any
whitespace run (CLDR uses U+202F before AM/PM in recent releases).

Fields absent from the pattern default to the supplied reference date
(year, month, day) or to zero (time).

Compiled patterns are cached per (locale, pattern). Thread-safe.

Python 3.13+. Uses Babel CLDR data.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from babel import dates as babel_dates

from datefield.constants import MAX_PATTERN_CACHE_SIZE
from datefield.diagnostics import ErrorTemplate
from datefield.locale_utils import get_babel_locale

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["parse_with_pattern"]

logger = logging.getLogger(__name__)

# Two-digit years below the pivot land in the 2000s, the rest in the 1900s.
# Same window as strptime's %y.
_TWO_DIGIT_YEAR_PIVOT: int = 69

_NAME_WIDTHS: tuple[str, ...] = ("abbreviated", "wide", "short")
_PERIOD_WIDTHS: tuple[str, ...] = ("abbreviated", "wide", "narrow")
_CONTEXTS: tuple[str, ...] = ("format", "stand-alone")


@dataclass(frozen=True, slots=True)
class _Field:
    """One capturing group of a compiled pattern."""

    group: str
    char: str
    num: int


@dataclass(frozen=True, slots=True)
class _CompiledPattern:
    regex: re.Pattern[str]
    fields: tuple[_Field, ...]
    month_names: MappingProxyType[str, int]
    period_names: MappingProxyType[str, str]


def parse_with_pattern(
    value: str,
    pattern: str,
    locale_code: str,
    reference: datetime,
) -> datetime | None:
    """Parse a string against a CLDR pattern.

    Args:
        value: Text to parse (e.g. "02 28 2023")
        pattern: CLDR pattern (e.g. "MM dd yyyy")
        locale_code: Locale providing month and period names
        reference: Source of the year/month/day when the pattern has none,
            and of the tzinfo of the result

    Returns:
        The parsed datetime, or None when the text does not match or names
        an impossible date (e.g. month 13, Feb 30).
    """
    compiled = _compile_pattern(locale_code, pattern)
    if compiled is None:
        return None

    found = compiled.regex.fullmatch(value.strip())
    if found is None:
        return None

    year, month, day = reference.year, reference.month, reference.day
    hour = minute = second = 0
    hour_char: str | None = None
    period: str | None = None

    for field in compiled.fields:
        text = found.group(field.group)
        match field.char:
            case "y":
                year = int(text)
                if field.num == 2:
                    year += 2000 if year < _TWO_DIGIT_YEAR_PIVOT else 1900
            case "M" | "L" if field.num > 2:
                named = compiled.month_names.get(text.casefold())
                if named is None:
                    return None
                month = named
            case "M" | "L":
                month = int(text)
            case "d":
                day = int(text)
            case "H" | "h" | "K" | "k":
                hour = int(text)
                hour_char = field.char
            case "m":
                minute = int(text)
            case "s":
                second = int(text)
            case "a":
                period = compiled.period_names.get(text.casefold())
            case _:
                # Week-day names are matched but carry no information the
                # other fields do not already fix.
                pass

    resolved_hour = _resolve_hour(hour, hour_char, period)
    if resolved_hour is None:
        return None

    try:
        return datetime(
            year, month, day, resolved_hour, minute, second, tzinfo=reference.tzinfo
        )
    except ValueError:
        logger.debug(ErrorTemplate.parse_out_of_range(value, pattern).message)
        return None


def _resolve_hour(hour: int, hour_char: str | None, period: str | None) -> int | None:
    """Convert a raw hour field into 0-23, or None when out of range."""
    match hour_char:
        case None:
            return 12 if period == "pm" else 0
        case "H":
            return hour if 0 <= hour <= 23 else None
        case "k":
            if not 1 <= hour <= 24:
                return None
            return 0 if hour == 24 else hour
        case "h":
            if not 1 <= hour <= 12:
                return None
            hour %= 12
        case "K":
            if not 0 <= hour <= 11:
                return None
    return hour + 12 if period == "pm" else hour


@lru_cache(maxsize=MAX_PATTERN_CACHE_SIZE)
def _compile_pattern(locale_code: str, pattern: str) -> _CompiledPattern | None:
    """Compile a CLDR pattern for a locale, or None for unsupported fields."""
    locale = get_babel_locale(locale_code)
    month_names = _month_names(locale)
    weekday_names = _weekday_names(locale)
    period_names = _period_names(locale)

    parts: list[str] = []
    fields: list[_Field] = []

    for kind, token in babel_dates.tokenize_pattern(pattern):
        if kind == "chars":
            parts.append(_literal_regex(str(token)))
            continue

        char, num = token
        group = f"f{len(fields)}"
        body = _field_regex(char, num, month_names, weekday_names, period_names)
        if body is None:
            logger.debug("Pattern '%s' has unparseable field '%s'", pattern, char * num)
            return None
        parts.append(f"(?P<{group}>{body})")
        fields.append(_Field(group=group, char=char, num=num))

    return _CompiledPattern(
        regex=re.compile("".join(parts), re.IGNORECASE),
        fields=tuple(fields),
        month_names=MappingProxyType(month_names),
        period_names=MappingProxyType(period_names),
    )


def _field_regex(
    char: str,
    num: int,
    month_names: dict[str, int],
    weekday_names: set[str],
    period_names: dict[str, str],
) -> str | None:
    match char:
        case "y":
            if num == 1:
                return r"\d{1,4}"
            if num == 2:
                return r"\d{2}"
            return rf"\d{{{num},{max(num, 4)}}}"
        case "M" | "L":
            return r"\d{1,2}" if num <= 2 else _alternation(month_names)
        case "d" | "H" | "h" | "K" | "k" | "m" | "s":
            return r"\d{1,2}"
        case "E":
            return _alternation(weekday_names)
        case "c" if num >= 3:
            return _alternation(weekday_names)
        case "a":
            return _alternation(period_names)
        case _:
            return None


def _literal_regex(text: str) -> str:
    pieces = re.split(r"(\s+)", text)
    return "".join(r"\s+" if piece.isspace() else re.escape(piece) for piece in pieces if piece)


def _alternation(names: dict[str, object] | set[str]) -> str:
    # Longest first so "Sept" cannot shadow "September".
    ordered = sorted(names, key=len, reverse=True)
    return "|".join(re.escape(name) for name in ordered)


def _month_names(locale: Locale) -> dict[str, int]:
    names: dict[str, int] = {}
    for context in _CONTEXTS:
        for width in ("abbreviated", "wide"):
            for number, name in babel_dates.get_month_names(width, context, locale).items():
                names.setdefault(str(name).casefold(), int(number))
    return names


def _weekday_names(locale: Locale) -> set[str]:
    names: set[str] = set()
    for context in _CONTEXTS:
        for width in _NAME_WIDTHS:
            names.update(
                str(name).casefold()
                for name in babel_dates.get_day_names(width, context, locale).values()
            )
    return names


def _period_names(locale: Locale) -> dict[str, str]:
    names: dict[str, str] = {}
    for width in _PERIOD_WIDTHS:
        period_names = babel_dates.get_period_names(width, "format", locale)
        for period in ("am", "pm"):
            if period in period_names:
                names.setdefault(str(period_names[period]).casefold(), period)
    return names
