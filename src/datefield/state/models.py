"""Field state, configuration and transition types.

All types are immutable. Reducers take a FieldState and return a Transition
holding the next FieldState and the notifications to deliver after it is
installed.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, TypeAlias

from datefield.enums import FormatDensity, SectionType
from datefield.locale_text import DEFAULT_LOCALE_TEXT, LocaleText
from datefield.sections import (
    ASCII_DIGITS,
    Section,
    SelectedSections,
    SelectedSectionsIndexes,
    get_localized_digits,
    get_section_boundaries,
    resolve_selected_sections,
)

from .managers import SingleDateFieldValueManager, SingleDateValueManager

if TYPE_CHECKING:
    from datefield.adapter import CalendarAdapter
    from datefield.sections import SectionBoundaries

    from .managers import FieldValueManager, ValueManager

__all__ = [
    "ALL_SECTION_TYPES",
    "DATE_SECTION_TYPES",
    "TIME_SECTION_TYPES",
    "FieldConfig",
    "FieldContext",
    "FieldInput",
    "FieldState",
    "Notification",
    "SelectedSectionsChanged",
    "Transition",
    "ValueChanged",
]

DATE_SECTION_TYPES: frozenset[SectionType] = frozenset({
    SectionType.YEAR,
    SectionType.MONTH,
    SectionType.DAY,
    SectionType.WEEK_DAY,
})

TIME_SECTION_TYPES: frozenset[SectionType] = frozenset({
    SectionType.HOURS,
    SectionType.MINUTES,
    SectionType.SECONDS,
    SectionType.MERIDIEM,
})

ALL_SECTION_TYPES: frozenset[SectionType] = DATE_SECTION_TYPES | TIME_SECTION_TYPES


@dataclass(frozen=True, slots=True)
class FieldState:
    """Snapshot of one field.

    Attributes:
        sections: Current sections, regenerated on every published value
        value: Published value (None is the empty value)
        reference_value: Always-valid base that partial edits merge onto
        android_fallback: Opaque staging text for composition input
        selected_sections: Selection descriptor as last set
        section_query: Text typed so far into the selected section by a
            keyboard layer built on the engine. The engine never sets it;
            changing the selection resets it to None.
    """

    sections: tuple[Section, ...]
    value: datetime | None
    reference_value: datetime
    android_fallback: str | None = None
    selected_sections: SelectedSections = None
    section_query: str | None = None

    @property
    def selected_section_indexes(self) -> SelectedSectionsIndexes | None:
        return resolve_selected_sections(self.sections, self.selected_sections)


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Static configuration of a field.

    Attributes:
        format: Format string (macros allowed)
        format_density: Separator spacing
        is_rtl: Right-to-left layout
        should_respect_leading_zeros: Pad input exactly as the format does
        enable_accessible_field_dom_structure: One element per section
        supported_section_types: Section types the field can edit
        locale_text: Placeholder functions
    """

    format: str
    format_density: FormatDensity = FormatDensity.DENSE
    is_rtl: bool = False
    should_respect_leading_zeros: bool = False
    enable_accessible_field_dom_structure: bool = False
    supported_section_types: frozenset[SectionType] = ALL_SECTION_TYPES
    locale_text: LocaleText = DEFAULT_LOCALE_TEXT

    def __post_init__(self) -> None:
        if not isinstance(self.format, str):
            msg = f"format must be str, got {type(self.format).__name__}"
            raise TypeError(msg)
        if not isinstance(self.format_density, FormatDensity):
            msg = f"format_density must be FormatDensity, got {self.format_density!r}"
            raise TypeError(msg)
        if not self.supported_section_types:
            msg = "supported_section_types must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FieldInput:
    """Externally supplied value after precedence resolution.

    Resolution order: explicit value, then default value, then the value
    manager's empty value.
    """

    value: datetime | None

    @classmethod
    def resolve(
        cls,
        *,
        value: datetime | None = None,
        default_value: datetime | None = None,
        value_manager: ValueManager,
    ) -> FieldInput:
        if value is not None:
            return cls(value)
        if default_value is not None:
            return cls(default_value)
        return cls(value_manager.empty_value)


@dataclass(frozen=True, slots=True)
class FieldContext:
    """Collaborators the reducers consult.

    Use FieldContext.create() to derive boundaries and localized digits from
    the adapter.
    """

    adapter: CalendarAdapter
    config: FieldConfig
    value_manager: ValueManager
    field_value_manager: FieldValueManager
    boundaries: SectionBoundaries
    localized_digits: tuple[str, ...] = ASCII_DIGITS

    @classmethod
    def create(
        cls,
        adapter: CalendarAdapter,
        config: FieldConfig,
        *,
        value_manager: ValueManager | None = None,
        field_value_manager: FieldValueManager | None = None,
    ) -> FieldContext:
        localized_digits = get_localized_digits(adapter)
        return cls(
            adapter=adapter,
            config=config,
            value_manager=value_manager or SingleDateValueManager(),
            field_value_manager=field_value_manager or SingleDateFieldValueManager(),
            boundaries=get_section_boundaries(adapter, localized_digits),
            localized_digits=localized_digits,
        )

    def with_format(self, format: str) -> FieldContext:  # noqa: A002
        return replace(self, config=replace(self.config, format=format))


@dataclass(frozen=True, slots=True)
class ValueChanged:
    """The published value changed."""

    value: datetime | None


@dataclass(frozen=True, slots=True)
class SelectedSectionsChanged:
    """The selection descriptor was set."""

    selected_sections: SelectedSections


Notification: TypeAlias = "ValueChanged | SelectedSectionsChanged"


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of a reducer: next state plus notifications in delivery order."""

    state: FieldState
    notifications: tuple[Notification, ...] = ()
