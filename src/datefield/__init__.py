"""datefield - locale-aware editable date sections.

Renders a date/time value as independently editable sections (year, month,
day, hours, ...) and keeps them synchronized with the value while a user
edits one section at a time.

Public API:
    BabelCalendarAdapter - CLDR calendar adapter (Babel)
    build_sections_from_format - Format string to sections
    FieldStateEngine - Stateful field: edits, merge, day clamp recovery
    FieldConfig - Format and layout options of a field
    Section - One editable unit of a formatted date

Exceptions:
    DateFieldError - Base exception class
    FieldConfigurationError - Adapter or format contract violations

Submodules:
    datefield.adapter - CalendarAdapter protocol and Babel implementation
    datefield.sections - Section model, format parser, boundaries, helpers
    datefield.state - FieldState, pure reducers, value managers
    datefield.diagnostics - Error types, codes and formatting
    datefield.locale_text - Placeholder text
"""

from .adapter import BabelCalendarAdapter, CalendarAdapter
from .diagnostics import DateFieldError, FieldConfigurationError
from .enums import FormatDensity, SectionContentType, SectionType
from .locale_text import DEFAULT_LOCALE_TEXT, LocaleText
from .sections import Section, SelectedSectionsIndexes, build_sections_from_format
from .state import FieldConfig, FieldState, FieldStateEngine

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("datefield")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_LOCALE_TEXT",
    "BabelCalendarAdapter",
    "CalendarAdapter",
    "DateFieldError",
    "FieldConfig",
    "FieldConfigurationError",
    "FieldState",
    "FieldStateEngine",
    "FormatDensity",
    "LocaleText",
    "Section",
    "SectionContentType",
    "SectionType",
    "SelectedSectionsIndexes",
    "__version__",
    "build_sections_from_format",
]
