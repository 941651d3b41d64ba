"""Editable sections of a formatted date.

Provides:
- Section / SelectedSectionsIndexes: data model
- build_sections_from_format: the format parser
- get_section_boundaries: per-section min/max
- Section helpers used by the state engine (parse, clamp, merge)

Python 3.13+.
"""

from .boundaries import Boundary, BoundaryQuery, SectionBoundaries, get_section_boundaries
from .builder import build_sections_from_format, expand_format
from .models import (
    Section,
    SelectedSections,
    SelectedSectionsIndexes,
    get_displayed_string,
    resolve_selected_sections,
)
from .utils import (
    ASCII_DIGITS,
    apply_localized_digits,
    apply_section_value_to_date,
    clamp_day_section,
    clean_digit_section_value,
    clean_leading_zeros,
    create_date_str_from_sections,
    does_section_format_have_leading_zeros,
    get_date_from_date_sections,
    get_localized_digits,
    get_section_config_from_format_token,
    is_four_digit_year_format,
    merge_date_into_reference_date,
    remove_localized_digits,
    validate_sections,
)

__all__ = [
    "ASCII_DIGITS",
    "Boundary",
    "BoundaryQuery",
    "Section",
    "SectionBoundaries",
    "SelectedSections",
    "SelectedSectionsIndexes",
    "apply_localized_digits",
    "apply_section_value_to_date",
    "build_sections_from_format",
    "clamp_day_section",
    "clean_digit_section_value",
    "clean_leading_zeros",
    "create_date_str_from_sections",
    "does_section_format_have_leading_zeros",
    "expand_format",
    "get_date_from_date_sections",
    "get_displayed_string",
    "get_localized_digits",
    "get_section_boundaries",
    "get_section_config_from_format_token",
    "is_four_digit_year_format",
    "merge_date_into_reference_date",
    "remove_localized_digits",
    "resolve_selected_sections",
    "validate_sections",
]
