"""Placeholder text for empty sections.

A LocaleText bundles one placeholder function per section type. The default
instance spells placeholders the English way (MM/DD/YYYY, hh:mm aa);
translations replace individual functions with dataclasses.replace().

Python 3.13+.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from datefield.diagnostics import ErrorTemplate, InvalidSectionTypeError
from datefield.enums import SectionContentType, SectionType

__all__ = [
    "DEFAULT_LOCALE_TEXT",
    "LocaleText",
    "PlaceholderFunction",
    "PlaceholderParams",
]


@dataclass(frozen=True, slots=True)
class PlaceholderParams:
    """Context handed to a placeholder function.

    Attributes:
        format: Raw format token of the section (e.g. "MMM")
        content_type: Content type of the section, when relevant
        digit_amount: Rendered digit count (years only)
    """

    format: str
    content_type: SectionContentType | None = None
    digit_amount: int | None = None


PlaceholderFunction: TypeAlias = "Callable[[PlaceholderParams], str]"


def _year(params: PlaceholderParams) -> str:
    return "Y" * (params.digit_amount or 4)


def _month(params: PlaceholderParams) -> str:
    return "MMMM" if params.content_type is SectionContentType.LETTER else "MM"


def _day(_params: PlaceholderParams) -> str:
    return "DD"


def _week_day(params: PlaceholderParams) -> str:
    return "EEEE" if params.content_type is SectionContentType.LETTER else "EE"


def _hours(_params: PlaceholderParams) -> str:
    return "hh"


def _minutes(_params: PlaceholderParams) -> str:
    return "mm"


def _seconds(_params: PlaceholderParams) -> str:
    return "ss"


def _meridiem(_params: PlaceholderParams) -> str:
    return "aa"


@dataclass(frozen=True, slots=True)
class LocaleText:
    """Placeholder functions keyed by section type.

    Example:
        >>> german = replace(DEFAULT_LOCALE_TEXT, year=lambda p: "J" * (p.digit_amount or 4))
        >>> german.placeholder(SectionType.YEAR, PlaceholderParams("yyyy", digit_amount=4))
        'JJJJ'
    """

    year: PlaceholderFunction = _year
    month: PlaceholderFunction = _month
    day: PlaceholderFunction = _day
    week_day: PlaceholderFunction = _week_day
    hours: PlaceholderFunction = _hours
    minutes: PlaceholderFunction = _minutes
    seconds: PlaceholderFunction = _seconds
    meridiem: PlaceholderFunction = _meridiem

    def placeholder(self, section_type: SectionType, params: PlaceholderParams) -> str:
        """Placeholder for a section type.

        Raises:
            InvalidSectionTypeError: No placeholder exists for the type
                (the synthetic EMPTY section has none)
        """
        attribute = _PLACEHOLDER_ATTRIBUTES.get(section_type)
        if attribute is None:
            diagnostic = ErrorTemplate.invalid_section_type(section_type, "placeholder")
            raise InvalidSectionTypeError(diagnostic)
        function: PlaceholderFunction = getattr(self, attribute)
        return function(params)


_PLACEHOLDER_ATTRIBUTES: Mapping[SectionType, str] = MappingProxyType({
    SectionType.YEAR: "year",
    SectionType.MONTH: "month",
    SectionType.DAY: "day",
    SectionType.WEEK_DAY: "week_day",
    SectionType.HOURS: "hours",
    SectionType.MINUTES: "minutes",
    SectionType.SECONDS: "seconds",
    SectionType.MERIDIEM: "meridiem",
})

DEFAULT_LOCALE_TEXT: LocaleText = LocaleText()
