"""Section state engine: pure reducers over FieldState.

Every operation takes the current snapshot and returns a Transition with the
next snapshot and the notifications to deliver once it is installed. Inputs
are never mutated.

State machine:
    Idle (valid value) -> Editing (sections modified, date unparseable)
    Editing -> Editing (each keystroke that keeps the date unparseable)
    Editing -> Idle (sections parse, value published)

The invalid-date path of update_section_value is the core merge algorithm:

    1. Write the new text into the active section (marked modified)
    2. Parse the sections of the active date
    3. If every section is filled, a day section exists and parsing failed,
       clamp the day to the month's last day and parse again
    4. On success, copy the components of the modified sections onto the
       reference date and publish. Untouched components keep the reference
       values.
    5. Otherwise keep the text and publish nothing

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, TypeAlias

from datefield.enums import SectionType
from datefield.sections import (
    SectionBoundaries,
    SelectedSections,
    clamp_day_section,
    create_date_str_from_sections,
    get_date_from_date_sections,
    merge_date_into_reference_date,
    validate_sections,
)

from .managers import NewValue
from .models import (
    FieldContext,
    FieldInput,
    FieldState,
    Notification,
    SelectedSectionsChanged,
    Transition,
    ValueChanged,
)

if TYPE_CHECKING:
    from datefield.sections import Section

__all__ = [
    "SetValueOnDate",
    "SetValueOnSections",
    "clear_active_section",
    "clear_value",
    "create_initial_state",
    "rebuild_for_format",
    "set_selected_sections",
    "set_temp_android_value_str",
    "sync_external_value",
    "update_section_value",
]

logger = logging.getLogger(__name__)

SetValueOnDate: TypeAlias = "Callable[[datetime, SectionBoundaries], datetime]"
SetValueOnSections: TypeAlias = "Callable[[SectionBoundaries], str]"


def create_initial_state(ctx: FieldContext, field_input: FieldInput) -> FieldState:
    """Build the first snapshot of a field.

    Raises:
        FieldConfigurationError: The format is invalid for the adapter or
            produces a section type the field does not support
    """
    adapter = ctx.adapter
    sections = ctx.field_value_manager.get_sections_from_value(
        adapter, None, field_input.value, ctx.config
    )
    validate_sections(sections, ctx.config.supported_section_types)
    reference_value = ctx.field_value_manager.update_reference_value(
        adapter, field_input.value, ctx.value_manager.get_today_value(adapter)
    )
    return FieldState(sections=sections, value=field_input.value, reference_value=reference_value)


def _value_notifications(
    ctx: FieldContext, previous: datetime | None, value: datetime | None
) -> tuple[Notification, ...]:
    if ctx.value_manager.are_values_equal(ctx.adapter, previous, value):
        return ()
    return (ValueChanged(value),)


def _publish(state: FieldState, ctx: FieldContext, new_value: NewValue) -> Transition:
    sections = ctx.field_value_manager.get_sections_from_value(
        ctx.adapter, state.sections, new_value.value, ctx.config
    )
    logger.debug("Publishing value %r", new_value.value)
    published = replace(
        state,
        sections=sections,
        value=new_value.value,
        reference_value=new_value.reference_value,
        android_fallback=None,
    )
    return Transition(published, _value_notifications(ctx, state.value, new_value.value))


def _set_section_value(
    sections: tuple[Section, ...], index: int, value: str
) -> tuple[Section, ...]:
    edited = replace(sections[index], value=value, modified=True)
    return (*sections[:index], edited, *sections[index + 1 :])


def set_selected_sections(
    state: FieldState, ctx: FieldContext, selection: SelectedSections
) -> Transition:
    """Record the selection descriptor and reset the typed-text query."""
    logger.debug("Selected sections %r (format '%s')", selection, ctx.config.format)
    selected = replace(state, selected_sections=selection, section_query=None)
    return Transition(selected, (SelectedSectionsChanged(selection),))


def clear_value(state: FieldState, ctx: FieldContext) -> Transition:
    """Publish the empty value, keeping the reference value."""
    empty = NewValue(value=ctx.value_manager.empty_value, reference_value=state.reference_value)
    return _publish(state, ctx, empty)


def clear_active_section(state: FieldState, ctx: FieldContext) -> Transition:
    """Blank the first selected section and empty its date.

    No-op without a selection. The blanked section counts as modified and
    keeps its empty text: sections are not regenerated.
    """
    indexes = state.selected_section_indexes
    if indexes is None:
        return Transition(state)

    active_section = state.sections[indexes.start_index]
    manager = ctx.field_value_manager.get_active_date_manager(ctx.adapter, state, active_section)
    new_value = manager.get_new_value_from_new_active_date(None)
    cleared = replace(
        state,
        sections=_set_section_value(state.sections, indexes.start_index, ""),
        value=new_value.value,
        reference_value=new_value.reference_value,
    )
    return Transition(cleared, _value_notifications(ctx, state.value, new_value.value))


def update_section_value(
    state: FieldState,
    ctx: FieldContext,
    *,
    active_section_index: int,
    set_value_on_date: SetValueOnDate,
    set_value_on_sections: SetValueOnSections,
) -> Transition:
    """Apply one user edit to one section.

    Args:
        state: Current snapshot
        ctx: Field collaborators
        active_section_index: Index of the edited section
        set_value_on_date: New active date from the current one (valid path)
        set_value_on_sections: New text of the active section (invalid path)

    Returns:
        Transition with a ValueChanged notification when a value was
        published, preceded by SelectedSectionsChanged when a multi-section
        selection collapsed.
    """
    adapter = ctx.adapter
    active_section = state.sections[active_section_index]
    manager = ctx.field_value_manager.get_active_date_manager(adapter, state, active_section)
    notifications: list[Notification] = []

    indexes = state.selected_section_indexes
    if indexes is not None and indexes.is_multiple:
        collapsed = set_selected_sections(state, ctx, indexes.start_index)
        state = collapsed.state
        notifications.extend(collapsed.notifications)

    active_date = manager.active_date
    if active_date is not None and adapter.is_valid(active_date):
        new_date = set_value_on_date(active_date, ctx.boundaries)
        published = _publish(state, ctx, manager.get_new_value_from_new_active_date(new_date))
        return Transition(published.state, (*notifications, *published.notifications))

    section_text = set_value_on_sections(ctx.boundaries)
    sections = _set_section_value(state.sections, active_section_index, section_text)
    date_sections = ctx.field_value_manager.get_active_date_sections(
        sections, sections[active_section_index]
    )
    new_date = get_date_from_date_sections(adapter, date_sections, ctx.localized_digits)

    if (
        new_date is None
        and all(section.value != "" for section in date_sections)
        and any(section.type is SectionType.DAY for section in date_sections)
    ):
        clamped = clamp_day_section(adapter, date_sections, ctx.boundaries, ctx.localized_digits)
        if clamped is not None:
            new_date = get_date_from_date_sections(adapter, clamped, ctx.localized_digits)
            logger.debug(
                "Day clamped: '%s' -> '%s'",
                create_date_str_from_sections(date_sections),
                create_date_str_from_sections(clamped),
            )

    if new_date is not None and adapter.is_valid(new_date):
        merged = merge_date_into_reference_date(
            adapter, new_date, date_sections, manager.reference_active_date
        )
        published = _publish(state, ctx, manager.get_new_value_from_new_active_date(merged))
        return Transition(published.state, (*notifications, *published.notifications))

    pending = manager.get_new_value_from_new_active_date(None)
    editing = replace(
        state,
        sections=sections,
        android_fallback=None,
        value=pending.value,
        reference_value=pending.reference_value,
    )
    return Transition(editing, tuple(notifications))


def set_temp_android_value_str(state: FieldState, text: str) -> Transition:
    """Store the opaque composition fallback text verbatim."""
    return Transition(replace(state, android_fallback=text))


def sync_external_value(
    state: FieldState, ctx: FieldContext, value: datetime | None
) -> Transition:
    """Adopt an externally supplied value.

    A value equal to the held one (typically the one just published) is a
    no-op. Otherwise sections are rebuilt from it, discarding local edits.
    """
    adapter = ctx.adapter
    if ctx.value_manager.are_values_equal(adapter, state.value, value):
        return Transition(state)

    logger.debug("External value %r replaces %r", value, state.value)
    sections = ctx.field_value_manager.get_sections_from_value(
        adapter, state.sections, value, ctx.config
    )
    reference_value = ctx.field_value_manager.update_reference_value(
        adapter, value, state.reference_value
    )
    return Transition(
        replace(state, sections=sections, value=value, reference_value=reference_value)
    )


def rebuild_for_format(state: FieldState, ctx: FieldContext) -> Transition:
    """Rebuild sections from the held value with the context's format.

    Raises:
        UnsupportedSectionTypeError: The format produces a section type the
            field does not support
    """
    sections = ctx.field_value_manager.get_sections_from_value(
        ctx.adapter, state.sections, state.value, ctx.config
    )
    validate_sections(sections, ctx.config.supported_section_types)
    return Transition(replace(state, sections=sections))
