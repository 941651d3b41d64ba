"""Stateful facade over the section state reducers.

FieldStateEngine owns one FieldState, applies reducers to it and delivers
notifications to the host's callbacks after the new snapshot is installed.

    >>> engine = FieldStateEngine.create(BabelCalendarAdapter.create("en_US"), "MM/dd/yyyy")
    >>> engine.set_selected_sections(0)
    >>> engine.set_section_text(0, "02")
    >>> engine.set_section_text(1, "31")
    >>> engine.set_section_text(2, "2023")
    >>> engine.value.date()
    datetime.date(2023, 2, 28)

Not thread-safe: edits must be applied one at a time, each to completion,
as a UI event loop delivers them.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING

from datefield.sections import (
    apply_section_value_to_date,
    clamp_day_section,
    get_date_from_date_sections,
    get_displayed_string,
)

from . import reducer
from .models import (
    FieldConfig,
    FieldContext,
    FieldInput,
    FieldState,
    SelectedSectionsChanged,
    Transition,
    ValueChanged,
)

if TYPE_CHECKING:
    from datefield.adapter import CalendarAdapter
    from datefield.sections import (
        Section,
        SectionBoundaries,
        SelectedSections,
        SelectedSectionsIndexes,
    )

    from .managers import FieldValueManager, ValueManager

__all__ = ["FieldStateEngine"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FieldStateEngine:
    """One field instance: current snapshot plus change callbacks.

    Use FieldStateEngine.create() to resolve the input value and build the
    initial snapshot.

    Attributes:
        ctx: Adapter, configuration and value managers
        state: Current snapshot, replaced whole on every transition
        default_value: Default remembered from creation
        external_value: Last resolved external value
        on_change: Called with the new value when the value changes
        on_selected_sections_change: Called with the new selection descriptor
    """

    ctx: FieldContext
    state: FieldState
    default_value: datetime | None = None
    external_value: datetime | None = None
    on_change: Callable[[datetime | None], None] | None = None
    on_selected_sections_change: Callable[[SelectedSections], None] | None = None

    @classmethod
    def create(
        cls,
        adapter: CalendarAdapter,
        config: FieldConfig | str,
        *,
        value: datetime | None = None,
        default_value: datetime | None = None,
        value_manager: ValueManager | None = None,
        field_value_manager: FieldValueManager | None = None,
        on_change: Callable[[datetime | None], None] | None = None,
        on_selected_sections_change: Callable[[SelectedSections], None] | None = None,
    ) -> FieldStateEngine:
        """Create an engine for a format.

        Args:
            adapter: Calendar adapter
            config: Field configuration, or a bare format string
            value: Externally controlled value
            default_value: Initial value when value is None
            value_manager: Value-type operations (single date by default)
            field_value_manager: Value-to-sections operations
            on_change: Value change callback
            on_selected_sections_change: Selection change callback

        Raises:
            FieldConfigurationError: The format cannot be turned into
                sections the field supports
        """
        if isinstance(config, str):
            config = FieldConfig(format=config)
        ctx = FieldContext.create(
            adapter,
            config,
            value_manager=value_manager,
            field_value_manager=field_value_manager,
        )
        field_input = FieldInput.resolve(
            value=value, default_value=default_value, value_manager=ctx.value_manager
        )
        return cls(
            ctx=ctx,
            state=reducer.create_initial_state(ctx, field_input),
            default_value=default_value,
            external_value=field_input.value,
            on_change=on_change,
            on_selected_sections_change=on_selected_sections_change,
        )

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def sections(self) -> tuple[Section, ...]:
        return self.state.sections

    @property
    def value(self) -> datetime | None:
        return self.state.value

    @property
    def reference_value(self) -> datetime:
        return self.state.reference_value

    @property
    def selected_section_indexes(self) -> SelectedSectionsIndexes | None:
        return self.state.selected_section_indexes

    @property
    def text(self) -> str:
        """Displayed string, placeholders included."""
        return get_displayed_string(self.state.sections)

    def _apply(self, transition: Transition) -> None:
        self.state = transition.state
        for notification in transition.notifications:
            match notification:
                case ValueChanged(value=value):
                    if self.on_change is not None:
                        self.on_change(value)
                case SelectedSectionsChanged(selected_sections=selected):
                    if self.on_selected_sections_change is not None:
                        self.on_selected_sections_change(selected)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_selected_sections(self, selection: SelectedSections) -> None:
        self._apply(reducer.set_selected_sections(self.state, self.ctx, selection))

    def clear_value(self) -> None:
        self._apply(reducer.clear_value(self.state, self.ctx))

    def clear_active_section(self) -> None:
        self._apply(reducer.clear_active_section(self.state, self.ctx))

    def update_section_value(
        self,
        active_section_index: int,
        set_value_on_date: reducer.SetValueOnDate,
        set_value_on_sections: reducer.SetValueOnSections,
    ) -> None:
        self._apply(
            reducer.update_section_value(
                self.state,
                self.ctx,
                active_section_index=active_section_index,
                set_value_on_date=set_value_on_date,
                set_value_on_sections=set_value_on_sections,
            )
        )

    def set_section_text(self, index: int, text: str) -> None:
        """Edit one section with its full new text.

        With a valid value the text is parsed in the context of the other
        sections and only this section's component is copied onto the date.
        A day past the end of the resulting month is lowered to the month's
        last day; text that still does not parse leaves the date unchanged.
        Without a valid value the text is stored and the merge algorithm runs.
        """
        adapter = self.ctx.adapter
        digits = self.ctx.localized_digits
        section = self.state.sections[index]
        logger.debug("Section %d (%s) set to '%s'", index, section.type, text)

        def on_date(active_date: datetime, boundaries: SectionBoundaries) -> datetime:
            edited = (
                *self.state.sections[:index],
                replace(section, value=text),
                *self.state.sections[index + 1 :],
            )
            parsed = get_date_from_date_sections(adapter, edited, digits)
            if parsed is None:
                clamped = clamp_day_section(adapter, edited, boundaries, digits)
                if clamped is not None:
                    parsed = get_date_from_date_sections(adapter, clamped, digits)
            if parsed is None:
                return active_date
            return apply_section_value_to_date(adapter, active_date, section.type, parsed)

        def on_sections(_boundaries: SectionBoundaries) -> str:
            return text

        self.update_section_value(index, on_date, on_sections)

    def set_temp_android_value_str(self, text: str) -> None:
        self._apply(reducer.set_temp_android_value_str(self.state, text))

    def set_value(self, value: datetime | None) -> None:
        """Report the externally controlled value.

        Nothing happens unless the resolved value differs from the last one
        reported. A changed value that equals the held value (the host echoing
        a published value) is adopted without a rebuild.
        """
        manager = self.ctx.value_manager
        field_input = FieldInput.resolve(
            value=value, default_value=self.default_value, value_manager=manager
        )
        if manager.are_values_equal(self.ctx.adapter, self.external_value, field_input.value):
            return
        self.external_value = field_input.value
        self._apply(reducer.sync_external_value(self.state, self.ctx, field_input.value))

    def set_format(self, format: str) -> None:  # noqa: A002
        """Switch to a new format, keeping the current value.

        Raises:
            UnsupportedSectionTypeError: The new format produces a section
                type the field does not support (the engine is unchanged)
        """
        ctx = self.ctx.with_format(format)
        transition = reducer.rebuild_for_format(self.state, ctx)
        self.ctx = ctx
        self._apply(transition)
