"""Section data model.

Sections are immutable. Edits produce new tuples through dataclasses.replace()
and every published value regenerates the whole tuple.

Python 3.13+.
"""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass

from datefield.enums import SectionContentType, SectionType

__all__ = [
    "Section",
    "SelectedSections",
    "SelectedSectionsIndexes",
    "get_displayed_string",
    "resolve_selected_sections",
]


@dataclass(frozen=True, slots=True)
class Section:
    """One editable unit of a formatted date.

    Attributes:
        type: Date component the section edits
        content_type: Characters the section accepts
        format: Format token the section was built from (e.g. "MM")
        value: Current text, empty when unset
        placeholder: Text shown while value is empty
        max_length: Max digit count for digit entry, None when unbounded
        has_leading_zeros_in_format: Canonical rendering is zero padded
        has_leading_zeros_in_input: Editable value reserves padded width
        start_separator: Literal text before the section
        end_separator: Literal text after the section
        modified: The user supplied this section's value
    """

    type: SectionType
    content_type: SectionContentType
    format: str
    value: str
    placeholder: str
    max_length: int | None
    has_leading_zeros_in_format: bool
    has_leading_zeros_in_input: bool
    start_separator: str = ""
    end_separator: str = ""
    modified: bool = False

    @property
    def displayed_value(self) -> str:
        """Value, or the placeholder while the section is empty."""
        return self.value or self.placeholder

    def render(self) -> str:
        return f"{self.start_separator}{self.displayed_value}{self.end_separator}"


@dataclass(frozen=True, slots=True)
class SelectedSectionsIndexes:
    """Inclusive range of selected section indexes."""

    start_index: int
    end_index: int

    def __post_init__(self) -> None:
        if self.start_index < 0 or self.end_index < self.start_index:
            msg = f"Invalid selection range {self.start_index}..{self.end_index}"
            raise ValueError(msg)

    @property
    def is_multiple(self) -> bool:
        return self.end_index > self.start_index


# Selection descriptor accepted from the UI layer: nothing, a single index,
# the first section of a type, or an explicit range.
SelectedSections: TypeAlias = "int | SectionType | SelectedSectionsIndexes | None"


def resolve_selected_sections(
    sections: tuple[Section, ...], selected: SelectedSections
) -> SelectedSectionsIndexes | None:
    """Resolve a selection descriptor against a section tuple.

    Returns:
        The inclusive index range, or None when nothing is selected, the
        index is out of range, or no section has the requested type.
    """
    match selected:
        case None:
            return None
        case SelectedSectionsIndexes():
            if selected.end_index >= len(sections):
                return None
            return selected
        case SectionType():
            for index, section in enumerate(sections):
                if section.type is selected:
                    return SelectedSectionsIndexes(index, index)
            return None
        case int():
            if not 0 <= selected < len(sections):
                return None
            return SelectedSectionsIndexes(selected, selected)
    return None


def get_displayed_string(sections: tuple[Section, ...]) -> str:
    """Concatenate separators and displayed values of every section."""
    return "".join(section.render() for section in sections)
