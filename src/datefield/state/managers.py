"""Value managers: how a field's value maps to dates and sections.

ValueManager knows the value type (empty sentinel, equality, "today").
FieldValueManager knows how the value splits into active dates and sections.
The single-date implementations ship here; a range field supplies its own
pair where the active date is one endpoint.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from datefield.sections import build_sections_from_format

if TYPE_CHECKING:
    from datefield.adapter import CalendarAdapter
    from datefield.sections import Section

    from .models import FieldConfig, FieldState

__all__ = [
    "ActiveDateManager",
    "FieldValueManager",
    "NewValue",
    "SingleDateFieldValueManager",
    "SingleDateValueManager",
    "ValueManager",
]


@dataclass(frozen=True, slots=True)
class NewValue:
    """Value and reference value to install after an edit."""

    value: datetime | None
    reference_value: datetime


@dataclass(frozen=True, slots=True)
class ActiveDateManager:
    """The date a section belongs to, and how to write it back.

    Attributes:
        active_date: Current value of the active date (None when empty)
        reference_active_date: Valid date partial edits merge onto
        get_new_value_from_new_active_date: Field value with the active
            date replaced
    """

    active_date: datetime | None
    reference_active_date: datetime
    get_new_value_from_new_active_date: Callable[[datetime | None], NewValue]


# pylint: disable=unnecessary-ellipsis
class ValueManager(Protocol):
    """Value-type operations."""

    @property
    def empty_value(self) -> datetime | None:
        """Sentinel published by clear_value()."""
        ...

    def are_values_equal(
        self, adapter: CalendarAdapter, value: datetime | None, comparing: datetime | None
    ) -> bool: ...

    def get_today_value(self, adapter: CalendarAdapter) -> datetime:
        """Reference value used when the field starts empty."""
        ...


class FieldValueManager(Protocol):
    """Value-to-sections operations."""

    def get_sections_from_value(
        self,
        adapter: CalendarAdapter,
        prev_sections: tuple[Section, ...] | None,
        value: datetime | None,
        config: FieldConfig,
    ) -> tuple[Section, ...]: ...

    def update_reference_value(
        self, adapter: CalendarAdapter, value: datetime | None, fallback: datetime
    ) -> datetime: ...

    def get_active_date_manager(
        self, adapter: CalendarAdapter, state: FieldState, section: Section
    ) -> ActiveDateManager: ...

    def get_active_date_sections(
        self, sections: tuple[Section, ...], section: Section
    ) -> tuple[Section, ...]: ...
# pylint: enable=unnecessary-ellipsis


@dataclass(frozen=True, slots=True)
class SingleDateValueManager:
    """Value manager for a single optional datetime."""

    @property
    def empty_value(self) -> datetime | None:
        return None

    def are_values_equal(
        self, adapter: CalendarAdapter, value: datetime | None, comparing: datetime | None
    ) -> bool:
        return adapter.is_equal(value, comparing)

    def get_today_value(self, adapter: CalendarAdapter) -> datetime:
        return adapter.now()


@dataclass(frozen=True, slots=True)
class SingleDateFieldValueManager:
    """Field value manager for a single optional datetime.

    The whole field is one date: every section belongs to it and previous
    sections are never reused.
    """

    def get_sections_from_value(
        self,
        adapter: CalendarAdapter,
        prev_sections: tuple[Section, ...] | None,  # noqa: ARG002 - range managers use it
        value: datetime | None,
        config: FieldConfig,
    ) -> tuple[Section, ...]:
        return build_sections_from_format(
            adapter,
            config.format,
            date=value,
            format_density=config.format_density,
            is_rtl=config.is_rtl,
            should_respect_leading_zeros=config.should_respect_leading_zeros,
            locale_text=config.locale_text,
            enable_accessible_field_dom_structure=config.enable_accessible_field_dom_structure,
        )

    def update_reference_value(
        self, adapter: CalendarAdapter, value: datetime | None, fallback: datetime
    ) -> datetime:
        if value is None or not adapter.is_valid(value):
            return fallback
        return value

    def get_active_date_manager(
        self,
        adapter: CalendarAdapter,
        state: FieldState,
        section: Section,  # noqa: ARG002 - range managers use it
    ) -> ActiveDateManager:
        reference = state.reference_value

        def get_new_value_from_new_active_date(active_date: datetime | None) -> NewValue:
            if active_date is not None and adapter.is_valid(active_date):
                return NewValue(value=active_date, reference_value=active_date)
            return NewValue(value=active_date, reference_value=reference)

        return ActiveDateManager(
            active_date=state.value,
            reference_active_date=reference,
            get_new_value_from_new_active_date=get_new_value_from_new_active_date,
        )

    def get_active_date_sections(
        self,
        sections: tuple[Section, ...],
        section: Section,  # noqa: ARG002 - range managers use it
    ) -> tuple[Section, ...]:
        return sections
