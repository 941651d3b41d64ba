"""Calendar adapter: locale-aware date primitives for the section engine.

Provides:
- CalendarAdapter: Protocol the sections and state packages depend on
- BabelCalendarAdapter: CLDR implementation backed by Babel
- SectionTokenConfig / EscapedCharacters: format syntax descriptors

Python 3.13+.
"""

from .babel_adapter import CLDR_TOKEN_MAP, BabelCalendarAdapter
from .patterns import parse_with_pattern
from .protocol import CalendarAdapter, EscapedCharacters, SectionTokenConfig

__all__ = [
    "CLDR_TOKEN_MAP",
    "BabelCalendarAdapter",
    "CalendarAdapter",
    "EscapedCharacters",
    "SectionTokenConfig",
    "parse_with_pattern",
]
