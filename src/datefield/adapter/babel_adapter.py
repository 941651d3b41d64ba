"""Babel-backed calendar adapter.

Implements the CalendarAdapter contract on top of CLDR data:

Architecture:
    - Format tokens are CLDR pattern fields (yyyy, MM, dd, HH, a, ...)
    - Literal text is single-quoted, '' is a literal quote (CLDR rule)
    - Macros P..PPPP (date styles) and p/pp (time styles) expand to the
      locale's own patterns, combined forms (Pp, PPpp, ...) use the
      locale's date-time glue pattern
    - Formatting delegates to babel.dates.format_datetime
    - Parsing compiles the CLDR pattern (see adapter.patterns)

Naive datetimes stay naive: Babel treats them as UTC and formats them
without conversion, so the rendered fields are exactly the stored ones.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import calendar
import logging
import re
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from threading import RLock
from types import MappingProxyType
from typing import ClassVar

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates

from datefield.constants import DEFAULT_LOCALE, MAX_ADAPTER_CACHE_SIZE
from datefield.enums import SectionContentType, SectionType
from datefield.locale_utils import normalize_locale

from .patterns import parse_with_pattern
from .protocol import EscapedCharacters, SectionTokenConfig

__all__ = ["CLDR_TOKEN_MAP", "BabelCalendarAdapter"]

logger = logging.getLogger(__name__)

_DIGIT = SectionContentType.DIGIT
_LETTER = SectionContentType.LETTER

# Unpadded numeric tokens carry the max digit count used to re-pad their
# editable value. Padded tokens derive it from their rendering.
CLDR_TOKEN_MAP: Mapping[str, SectionTokenConfig] = MappingProxyType({
    # Year
    "y": SectionTokenConfig(SectionType.YEAR, _DIGIT, max_length=4),
    "yy": SectionTokenConfig(SectionType.YEAR, _DIGIT),
    "yyyy": SectionTokenConfig(SectionType.YEAR, _DIGIT),
    # Month (format context)
    "M": SectionTokenConfig(SectionType.MONTH, _DIGIT, max_length=2),
    "MM": SectionTokenConfig(SectionType.MONTH, _DIGIT),
    "MMM": SectionTokenConfig(SectionType.MONTH, _LETTER),
    "MMMM": SectionTokenConfig(SectionType.MONTH, _LETTER),
    # Month (stand-alone context)
    "L": SectionTokenConfig(SectionType.MONTH, _DIGIT, max_length=2),
    "LL": SectionTokenConfig(SectionType.MONTH, _DIGIT),
    "LLL": SectionTokenConfig(SectionType.MONTH, _LETTER),
    "LLLL": SectionTokenConfig(SectionType.MONTH, _LETTER),
    # Day
    "d": SectionTokenConfig(SectionType.DAY, _DIGIT, max_length=2),
    "dd": SectionTokenConfig(SectionType.DAY, _DIGIT),
    # Weekday
    "E": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    "EE": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    "EEE": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    "EEEE": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    "ccc": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    "cccc": SectionTokenConfig(SectionType.WEEK_DAY, _LETTER),
    # Meridiem
    "a": SectionTokenConfig(SectionType.MERIDIEM, _LETTER),
    # Hours (0-23, 1-12, 0-11, 1-24)
    "H": SectionTokenConfig(SectionType.HOURS, _DIGIT, max_length=2),
    "HH": SectionTokenConfig(SectionType.HOURS, _DIGIT),
    "h": SectionTokenConfig(SectionType.HOURS, _DIGIT, max_length=2),
    "hh": SectionTokenConfig(SectionType.HOURS, _DIGIT),
    "K": SectionTokenConfig(SectionType.HOURS, _DIGIT, max_length=2),
    "KK": SectionTokenConfig(SectionType.HOURS, _DIGIT),
    "k": SectionTokenConfig(SectionType.HOURS, _DIGIT, max_length=2),
    "kk": SectionTokenConfig(SectionType.HOURS, _DIGIT),
    # Minutes
    "m": SectionTokenConfig(SectionType.MINUTES, _DIGIT, max_length=2),
    "mm": SectionTokenConfig(SectionType.MINUTES, _DIGIT),
    # Seconds
    "s": SectionTokenConfig(SectionType.SECONDS, _DIGIT, max_length=2),
    "ss": SectionTokenConfig(SectionType.SECONDS, _DIGIT),
})

_CLDR_ESCAPE = EscapedCharacters(start="'", end="'")

# Macro run length -> CLDR style.
_STYLES: dict[int, str] = {1: "short", 2: "medium", 3: "long", 4: "full"}

# A whole letter run made of 1-4 "P" (date) followed by 0-2 "p" (time),
# or of 1-2 "p" alone.
_MACRO_RE = re.compile(r"(?<![A-Za-z])(?=[Pp])(P{1,4})?(p{1,2})?(?![A-Za-z])")

# Quoted literal runs, left untouched by macro expansion.
_QUOTED_RE = re.compile(r"('[^']*')")


@dataclass(frozen=True, slots=True)
class BabelCalendarAdapter:
    """Immutable CLDR calendar adapter for one locale.

    Use BabelCalendarAdapter.create() factory to construct instances with
    proper validation and caching.

    Examples:
        >>> adapter = BabelCalendarAdapter.create("en-US")
        >>> adapter.format_by_string(datetime(2023, 2, 28), "MM/dd/yyyy")
        '02/28/2023'
        >>> adapter.expand_format("P")
        'M/d/yy'
        >>> adapter.parse("Feb 28 2023", "MMM dd yyyy")
        datetime.datetime(2023, 2, 28, 0, 0)

    Thread Safety:
        Immutable. Cache operations are protected by RLock.
    """

    _cache: ClassVar[OrderedDict[tuple[str, tzinfo | None], BabelCalendarAdapter]] = (
        OrderedDict()
    )
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    tz: tzinfo | None = None
    is_fallback: bool = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, locale_code: str, *, tz: tzinfo | None = None) -> BabelCalendarAdapter:
        """Create an adapter with graceful fallback for invalid locales.

        Unknown or malformed locale codes log a warning and use en_US rules.
        The instance then reports en_US as its locale code and sets
        is_fallback.

        Args:
            locale_code: BCP 47 or POSIX locale identifier
            tz: Timezone for "now" (naive local time when None)

        Returns:
            Cached adapter instance
        """
        cache_key = (normalize_locale(locale_code), tz)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key[0])
        except UnknownLocaleError as e:
            logger.warning(
                "Unknown locale '%s': %s. Falling back to %s", locale_code, e, DEFAULT_LOCALE
            )
            babel_locale = Locale.parse(DEFAULT_LOCALE)
            used_fallback = True
        except ValueError as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s",
                locale_code,
                e,
                DEFAULT_LOCALE,
            )
            babel_locale = Locale.parse(DEFAULT_LOCALE)
            used_fallback = True

        adapter = cls(
            locale_code=str(babel_locale),
            _babel_locale=babel_locale,
            tz=tz,
            is_fallback=used_fallback,
        )

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_ADAPTER_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = adapter
            return adapter

    @classmethod
    def create_or_raise(
        cls, locale_code: str, *, tz: tzinfo | None = None
    ) -> BabelCalendarAdapter:
        """Create an adapter or raise ValueError for unknown locales."""
        try:
            babel_locale = Locale.parse(normalize_locale(locale_code))
        except UnknownLocaleError as e:
            msg = f"Unknown locale identifier '{locale_code}': {e}"
            raise ValueError(msg) from None
        except ValueError as e:
            msg = f"Invalid locale format '{locale_code}': {e}"
            raise ValueError(msg) from None
        return cls(locale_code=str(babel_locale), _babel_locale=babel_locale, tz=tz)

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the adapter cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @property
    def babel_locale(self) -> Locale:
        """Pre-validated Babel Locale object for this adapter."""
        return self._babel_locale

    # ------------------------------------------------------------------
    # Format syntax
    # ------------------------------------------------------------------

    @property
    def escaped_characters(self) -> EscapedCharacters:
        return _CLDR_ESCAPE

    @property
    def format_token_map(self) -> Mapping[str, SectionTokenConfig]:
        return CLDR_TOKEN_MAP

    def expand_format(self, format: str) -> str:  # noqa: A002 - protocol name
        """Expand P/p style macros outside quoted literals (one pass)."""
        parts = _QUOTED_RE.split(format)
        # Odd indexes are the quoted runs captured by the split.
        return "".join(
            part if index % 2 else _MACRO_RE.sub(self._expand_macro, part)
            for index, part in enumerate(parts)
        )

    def _expand_macro(self, match: re.Match[str]) -> str:
        date_macro, time_macro = match.group(1), match.group(2)
        date_pattern = (
            self._babel_locale.date_formats[_STYLES[len(date_macro)]].pattern
            if date_macro
            else None
        )
        time_pattern = (
            self._babel_locale.time_formats[_STYLES[len(time_macro)]].pattern
            if time_macro
            else None
        )
        if date_pattern is None:
            return str(time_pattern)
        if time_pattern is None:
            return str(date_pattern)
        glue = str(self._babel_locale.datetime_formats[_STYLES[len(date_macro)]])
        return glue.replace("{1}", date_pattern).replace("{0}", time_pattern)

    # ------------------------------------------------------------------
    # Formatting and parsing
    # ------------------------------------------------------------------

    def format_by_string(self, value: datetime, format: str) -> str:  # noqa: A002
        return str(babel_dates.format_datetime(value, format=format, locale=self._babel_locale))

    def parse(self, value: str, format: str) -> datetime | None:  # noqa: A002
        if not value:
            return None
        return parse_with_pattern(value, format, self.locale_code, self.now())

    def is_valid(self, value: object) -> bool:
        return isinstance(value, datetime)

    def now(self) -> datetime:
        return datetime.now(self.tz).replace(microsecond=0)

    def date(self, value: datetime | date | str | None = None) -> datetime | None:
        """Current time for None, ISO 8601 strings parsed, None when invalid."""
        if value is None:
            return self.now()
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=self.tz)
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None

    def is_equal(self, value: datetime | None, comparing: datetime | None) -> bool:
        if value is None or comparing is None:
            return value is None and comparing is None
        return value == comparing

    # ------------------------------------------------------------------
    # Component access
    # ------------------------------------------------------------------

    def get_year(self, value: datetime) -> int:
        return value.year

    def get_month(self, value: datetime) -> int:
        return value.month

    def get_date(self, value: datetime) -> int:
        return value.day

    def get_hours(self, value: datetime) -> int:
        return value.hour

    def get_minutes(self, value: datetime) -> int:
        return value.minute

    def get_seconds(self, value: datetime) -> int:
        return value.second

    def set_year(self, value: datetime, year: int) -> datetime:
        day = min(value.day, calendar.monthrange(year, value.month)[1])
        return value.replace(year=year, day=day)

    def set_month(self, value: datetime, month: int) -> datetime:
        day = min(value.day, calendar.monthrange(value.year, month)[1])
        return value.replace(month=month, day=day)

    def set_date(self, value: datetime, day: int) -> datetime:
        return value.replace(day=min(day, self.days_in_month(value)))

    def set_hours(self, value: datetime, hours: int) -> datetime:
        return value.replace(hour=hours)

    def set_minutes(self, value: datetime, minutes: int) -> datetime:
        return value.replace(minute=minutes)

    def set_seconds(self, value: datetime, seconds: int) -> datetime:
        return value.replace(second=seconds)

    # ------------------------------------------------------------------
    # Calendar arithmetic
    # ------------------------------------------------------------------

    def add_hours(self, value: datetime, amount: int) -> datetime:
        return value + timedelta(hours=amount)

    def days_in_month(self, value: datetime) -> int:
        return calendar.monthrange(value.year, value.month)[1]

    def start_of_year(self, value: datetime) -> datetime:
        return value.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)

    def start_of_month(self, value: datetime) -> datetime:
        return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    def start_of_week(self, value: datetime) -> datetime:
        offset = (value.weekday() - self._babel_locale.first_week_day) % 7
        start = value - timedelta(days=offset)
        return start.replace(hour=0, minute=0, second=0, microsecond=0)
