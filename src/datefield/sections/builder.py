"""Format parser: format string to editable sections.

Turns a locale format string into an ordered tuple of typed sections:

    >>> adapter = BabelCalendarAdapter.create("en_US")
    >>> sections = build_sections_from_format(adapter, "MM/dd/yyyy", date=datetime(2023, 2, 28))
    >>> [(s.type, s.value, s.end_separator) for s in sections]
    [('month', '02', '/'), ('day', '28', '/'), ('year', '2023', '')]

Steps:
    1. Expand macros until the adapter returns the format unchanged
    2. Reverse space-delimited groups for RTL accessible layouts
    3. Locate escaped literal runs (never tokenized)
    4. Tokenize greedily, longest token first
    5. Build each section (value, max length, leading zeros, placeholder)
    6. Pure literal formats give a single EMPTY section
    7. Decorate separators (bidi isolation, spacious density)

The parser is pure: identical arguments give equal tuples.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING

from datefield.constants import LRI, MAX_FORMAT_EXPANSIONS, PDI, SPACIOUS_DELIMITERS
from datefield.diagnostics import (
    ErrorTemplate,
    FormatExpansionOverflowError,
    MissingMaxLengthError,
)
from datefield.enums import FormatDensity, SectionContentType, SectionType
from datefield.locale_text import DEFAULT_LOCALE_TEXT, LocaleText, PlaceholderParams

from .models import Section
from .utils import (
    apply_localized_digits,
    clean_leading_zeros,
    does_section_format_have_leading_zeros,
    get_localized_digits,
    get_section_config_from_format_token,
    remove_localized_digits,
)

if TYPE_CHECKING:
    from datefield.adapter import CalendarAdapter, EscapedCharacters, SectionTokenConfig

__all__ = ["build_sections_from_format", "expand_format"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _EscapedRun:
    """Coalesced escaped run: [start, end) in the expanded format."""

    start: int
    end: int
    literal: str


def expand_format(adapter: CalendarAdapter, format: str) -> str:  # noqa: A002
    """Expand format macros until a fixed point.

    Raises:
        FormatExpansionOverflowError: Still changing after the allowed passes
    """
    remaining = MAX_FORMAT_EXPANSIONS
    previous = format
    expanded = adapter.expand_format(format)
    while expanded != previous:
        previous = expanded
        expanded = adapter.expand_format(previous)
        remaining -= 1
        if remaining < 0:
            diagnostic = ErrorTemplate.format_expansion_overflow(format, MAX_FORMAT_EXPANSIONS)
            raise FormatExpansionOverflowError(diagnostic)
    return expanded


def _find_escaped_runs(expanded: str, escaped: EscapedCharacters) -> dict[int, _EscapedRun]:
    start, end = re.escape(escaped.start), re.escape(escaped.end)
    single = re.compile(f"{start}([^{end}]*){end}")
    coalesced = re.compile(f"(?:{start}[^{end}]*{end})+")

    runs: dict[int, _EscapedRun] = {}
    for found in coalesced.finditer(expanded):
        raw = found.group()
        if escaped.start == escaped.end:
            # Quote syntax: a doubled quote is one literal quote.
            quote = escaped.start
            if raw.strip(quote) == "":
                literal = quote * (len(raw) // 2)
            else:
                literal = raw[1:-1].replace(quote * 2, quote)
        else:
            literal = "".join(single.findall(raw))
        runs[found.start()] = _EscapedRun(found.start(), found.end(), literal)
    return runs


def _token_regex(adapter: CalendarAdapter) -> re.Pattern[str]:
    tokens = sorted(adapter.format_token_map, key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in tokens))


def _placeholder_params(
    adapter: CalendarAdapter, config: SectionTokenConfig, token: str, now: datetime
) -> PlaceholderParams:
    match config.section_type:
        case SectionType.YEAR:
            digit_amount = len(adapter.format_by_string(now, token))
            return PlaceholderParams(format=token, digit_amount=digit_amount)
        case SectionType.MONTH | SectionType.WEEK_DAY:
            return PlaceholderParams(format=token, content_type=config.content_type)
        case _:
            return PlaceholderParams(format=token)


def _create_section(
    adapter: CalendarAdapter,
    token: str,
    start_separator: str,
    *,
    date: datetime | None,
    now: datetime,
    should_respect_leading_zeros: bool,
    locale_text: LocaleText,
    localized_digits: tuple[str, ...],
) -> Section:
    config = get_section_config_from_format_token(adapter, token)

    has_leading_zeros_in_format = does_section_format_have_leading_zeros(
        adapter, config.content_type, config.section_type, token
    )
    has_leading_zeros_in_input = (
        has_leading_zeros_in_format
        if should_respect_leading_zeros
        else config.content_type is SectionContentType.DIGIT
    )

    is_valid_date = date is not None and adapter.is_valid(date)
    value = adapter.format_by_string(date, token) if date is not None and is_valid_date else ""
    max_length: int | None = None

    if has_leading_zeros_in_input:
        if has_leading_zeros_in_format:
            max_length = len(value) if value else len(adapter.format_by_string(now, token))
        else:
            if config.max_length is None:
                raise MissingMaxLengthError(ErrorTemplate.missing_max_length(token))
            max_length = config.max_length
            if is_valid_date:
                digits = remove_localized_digits(value, localized_digits)
                value = apply_localized_digits(
                    clean_leading_zeros(digits, max_length), localized_digits
                )

    placeholder = locale_text.placeholder(
        config.section_type, _placeholder_params(adapter, config, token, now)
    )

    return Section(
        type=config.section_type,
        content_type=config.content_type,
        format=token,
        value=value,
        placeholder=placeholder,
        max_length=max_length,
        has_leading_zeros_in_format=has_leading_zeros_in_format,
        has_leading_zeros_in_input=has_leading_zeros_in_input,
        start_separator=start_separator,
    )


def _clean_separator(separator: str, *, is_rtl: bool, format_density: FormatDensity) -> str:
    if is_rtl and any(char.isspace() for char in separator):
        separator = f"{PDI}{separator}{LRI}"
    if format_density is FormatDensity.SPACIOUS and separator in SPACIOUS_DELIMITERS:
        separator = f" {separator} "
    return separator


def build_sections_from_format(
    adapter: CalendarAdapter,
    format: str,  # noqa: A002
    *,
    date: datetime | None = None,
    format_density: FormatDensity = FormatDensity.DENSE,
    is_rtl: bool = False,
    should_respect_leading_zeros: bool = False,
    locale_text: LocaleText = DEFAULT_LOCALE_TEXT,
    localized_digits: tuple[str, ...] | None = None,
    enable_accessible_field_dom_structure: bool = False,
) -> tuple[Section, ...]:
    """Build the editable sections of a format.

    Args:
        adapter: Calendar adapter providing tokens, expansion and rendering
        format: Format string, macros allowed (e.g. "MM/dd/yyyy", "Pp")
        date: Date rendered into the section values (empty values when None
            or invalid)
        format_density: DENSE keeps separators, SPACIOUS pads / . and -
        is_rtl: Right-to-left layout
        should_respect_leading_zeros: Pad input exactly as the format renders
            (otherwise every numeric section is padded)
        locale_text: Placeholder functions
        localized_digits: Digits 0-9 as rendered by the adapter
        enable_accessible_field_dom_structure: Sections are laid out as
            separate elements (RTL reverses space-delimited groups)

    Returns:
        Ordered sections. A format without tokens gives one EMPTY section.

    Raises:
        FormatExpansionOverflowError: Macro expansion never settles
        MissingMaxLengthError: Padded input on an unpadded token without
            a configured max length
    """
    expanded = expand_format(adapter, format)
    if is_rtl and enable_accessible_field_dom_structure:
        expanded = " ".join(reversed(expanded.split(" ")))

    digits = localized_digits or get_localized_digits(adapter)
    now = adapter.now()

    escaped_runs = _find_escaped_runs(expanded, adapter.escaped_characters)
    token_regex = _token_regex(adapter)

    sections: list[Section] = []
    start_separator = ""
    pending_token = ""

    def commit() -> None:
        nonlocal pending_token
        if pending_token:
            sections.append(
                _create_section(
                    adapter,
                    pending_token,
                    start_separator if not sections else "",
                    date=date,
                    now=now,
                    should_respect_leading_zeros=should_respect_leading_zeros,
                    locale_text=locale_text,
                    localized_digits=digits,
                )
            )
            pending_token = ""

    def add_separator(text: str) -> None:
        nonlocal start_separator
        commit()
        if sections:
            last = sections[-1]
            sections[-1] = replace(last, end_separator=last.end_separator + text)
        else:
            start_separator += text

    index = 0
    while index < len(expanded):
        run = escaped_runs.get(index)
        if run is not None:
            add_separator(run.literal)
            index = run.end
            continue

        char = expanded[index]
        found = token_regex.match(expanded, index) if char in string.ascii_letters else None
        if found is not None and found.group():
            commit()
            pending_token = found.group()
            index = found.end()
            continue

        add_separator(char)
        index += 1

    commit()

    if not sections and start_separator:
        sections.append(
            Section(
                type=SectionType.EMPTY,
                content_type=SectionContentType.LETTER,
                format="",
                value="",
                placeholder="",
                max_length=None,
                has_leading_zeros_in_format=False,
                has_leading_zeros_in_input=False,
                start_separator=start_separator,
            )
        )

    logger.debug(
        "Built %d sections from format '%s' (expanded '%s')", len(sections), format, expanded
    )

    return tuple(
        replace(
            section,
            start_separator=_clean_separator(
                section.start_separator, is_rtl=is_rtl, format_density=format_density
            ),
            end_separator=_clean_separator(
                section.end_separator, is_rtl=is_rtl, format_density=format_density
            ),
        )
        for section in sections
    )
