"""Tests for the section state reducers.

Each reducer is exercised through snapshots built by create_initial_state,
checking the next snapshot and the notifications of the Transition.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime

import pytest

from datefield.adapter import BabelCalendarAdapter
from datefield.diagnostics import UnsupportedSectionTypeError
from datefield.enums import SectionType
from datefield.sections import SelectedSectionsIndexes, build_sections_from_format
from datefield.state import (
    DATE_SECTION_TYPES,
    FieldConfig,
    FieldContext,
    FieldInput,
    FieldState,
    SelectedSectionsChanged,
    Transition,
    ValueChanged,
    reducer,
)

FEB_28 = datetime(2023, 2, 28, 9, 15)
REFERENCE = datetime(2024, 1, 15, 10, 30)


def _state(ctx: FieldContext, value: datetime | None = None) -> FieldState:
    return reducer.create_initial_state(ctx, FieldInput(value))


def _type(state: FieldState, ctx: FieldContext, index: int, text: str) -> Transition:
    return reducer.update_section_value(
        state,
        ctx,
        active_section_index=index,
        set_value_on_date=lambda active_date, _boundaries: active_date,
        set_value_on_sections=lambda _boundaries: text,
    )


def _values(state: FieldState) -> list[str]:
    return [section.value for section in state.sections]


def _empty_with_reference(ctx: FieldContext) -> FieldState:
    return reducer.clear_value(_state(ctx, REFERENCE), ctx).state


class TestCreateInitialState:
    """First snapshot."""

    def test_with_value(self, ctx: FieldContext) -> None:
        state = _state(ctx, FEB_28)
        assert _values(state) == ["02", "28", "2023"]
        assert state.value == FEB_28
        assert state.reference_value == FEB_28

    def test_empty_uses_today_as_reference(self, ctx: FieldContext) -> None:
        state = _state(ctx)
        assert state.value is None
        assert _values(state) == ["", "", ""]
        assert state.reference_value.microsecond == 0

    def test_unsupported_section_rejected(self, adapter: BabelCalendarAdapter) -> None:
        config = FieldConfig("MM/dd/yyyy HH:mm", supported_section_types=DATE_SECTION_TYPES)
        ctx = FieldContext.create(adapter, config)
        with pytest.raises(UnsupportedSectionTypeError):
            _state(ctx)


class TestSelection:
    """Selection descriptors."""

    def test_set_selected_sections(self, ctx: FieldContext) -> None:
        state = replace(_state(ctx), section_query="0")
        transition = reducer.set_selected_sections(state, ctx, SectionType.DAY)
        assert transition.state.selected_sections is SectionType.DAY
        assert transition.state.selected_section_indexes == SelectedSectionsIndexes(1, 1)
        assert transition.state.section_query is None
        assert transition.notifications == (SelectedSectionsChanged(SectionType.DAY),)

    def test_out_of_range_index_resolves_to_nothing(self, ctx: FieldContext) -> None:
        state = reducer.set_selected_sections(_state(ctx), ctx, 7).state
        assert state.selected_section_indexes is None


class TestClearValue:
    """Publishing the empty value."""

    def test_clears_sections_and_keeps_reference(self, ctx: FieldContext) -> None:
        transition = reducer.clear_value(_state(ctx, FEB_28), ctx)
        assert transition.state.value is None
        assert _values(transition.state) == ["", "", ""]
        assert transition.state.reference_value == FEB_28
        assert transition.notifications == (ValueChanged(None),)

    def test_already_empty_is_silent(self, ctx: FieldContext) -> None:
        transition = reducer.clear_value(_state(ctx), ctx)
        assert transition.notifications == ()


class TestClearActiveSection:
    """Blanking the selected section."""

    def test_no_selection_is_noop(self, ctx: FieldContext) -> None:
        state = _state(ctx, FEB_28)
        transition = reducer.clear_active_section(state, ctx)
        assert transition.state is state
        assert transition.notifications == ()

    def test_blanks_first_selected_section(self, ctx: FieldContext) -> None:
        state = replace(_state(ctx, FEB_28), selected_sections=SelectedSectionsIndexes(1, 2))
        transition = reducer.clear_active_section(state, ctx)
        assert _values(transition.state) == ["02", "", "2023"]
        assert transition.state.sections[1].modified
        assert transition.state.value is None
        assert transition.state.reference_value == FEB_28
        assert transition.notifications == (ValueChanged(None),)


class TestUpdateSectionValueValidPath:
    """Edits applied to a valid value."""

    def test_set_value_on_date(self, ctx: FieldContext, adapter: BabelCalendarAdapter) -> None:
        transition = reducer.update_section_value(
            _state(ctx, FEB_28),
            ctx,
            active_section_index=0,
            set_value_on_date=lambda active_date, _b: adapter.set_month(active_date, 3),
            set_value_on_sections=lambda _b: pytest.fail("invalid path taken"),
        )
        expected = datetime(2023, 3, 28, 9, 15)
        assert transition.state.value == expected
        assert transition.state.reference_value == expected
        assert _values(transition.state) == ["03", "28", "2023"]
        assert transition.notifications == (ValueChanged(expected),)

    def test_boundaries_passed_to_callback(self, ctx: FieldContext) -> None:
        seen = []

        def on_date(active_date: datetime, boundaries: object) -> datetime:
            seen.append(boundaries)
            return active_date

        reducer.update_section_value(
            _state(ctx, FEB_28),
            ctx,
            active_section_index=1,
            set_value_on_date=on_date,
            set_value_on_sections=lambda _b: "",
        )
        assert seen == [ctx.boundaries]

    def test_unchanged_date_is_silent(self, ctx: FieldContext) -> None:
        transition = _type(_state(ctx, FEB_28), ctx, 0, "02")
        assert transition.notifications == ()

    def test_multi_selection_collapses_first(self, ctx: FieldContext) -> None:
        state = replace(_state(ctx, FEB_28), selected_sections=SelectedSectionsIndexes(0, 2))
        transition = reducer.update_section_value(
            state,
            ctx,
            active_section_index=0,
            set_value_on_date=lambda active_date, _b: active_date.replace(year=2022),
            set_value_on_sections=lambda _b: "",
        )
        assert transition.state.selected_sections == 0
        assert transition.notifications == (
            SelectedSectionsChanged(0),
            ValueChanged(datetime(2022, 2, 28, 9, 15)),
        )


class TestUpdateSectionValueInvalidPath:
    """Edits while the value is empty: text storage, clamping and merging."""

    def test_partial_entry_keeps_text(self, ctx: FieldContext) -> None:
        transition = _type(_empty_with_reference(ctx), ctx, 0, "03")
        assert _values(transition.state) == ["03", "", ""]
        assert transition.state.sections[0].modified
        assert transition.state.value is None
        assert transition.state.reference_value == REFERENCE
        assert transition.notifications == ()

    def test_complete_entry_publishes_onto_reference(self, ctx: FieldContext) -> None:
        state = _empty_with_reference(ctx)
        state = _type(state, ctx, 0, "03").state
        state = _type(state, ctx, 1, "31").state
        transition = _type(state, ctx, 2, "2023")
        expected = datetime(2023, 3, 31, 10, 30)
        assert transition.state.value == expected
        assert transition.state.reference_value == expected
        assert _values(transition.state) == ["03", "31", "2023"]
        assert not any(section.modified for section in transition.state.sections)
        assert transition.notifications == (ValueChanged(expected),)

    def test_day_clamped_to_month_end(self, ctx: FieldContext) -> None:
        state = _empty_with_reference(ctx)
        state = _type(state, ctx, 0, "02").state
        state = _type(state, ctx, 1, "31").state
        transition = _type(state, ctx, 2, "2023")
        assert transition.state.value == datetime(2023, 2, 28, 10, 30)
        assert _values(transition.state) == ["02", "28", "2023"]

    def test_invalid_month_not_clamped(self, ctx: FieldContext) -> None:
        state = _empty_with_reference(ctx)
        state = _type(state, ctx, 0, "13").state
        state = _type(state, ctx, 1, "31").state
        transition = _type(state, ctx, 2, "2023")
        assert transition.state.value is None
        assert _values(transition.state) == ["13", "31", "2023"]
        assert transition.notifications == ()

    def test_untouched_components_keep_reference(
        self, ctx: FieldContext, adapter: BabelCalendarAdapter
    ) -> None:
        sections = build_sections_from_format(adapter, "MM/dd/yyyy", date=REFERENCE)
        state = FieldState(sections=sections, value=None, reference_value=REFERENCE)
        transition = _type(state, ctx, 0, "03")
        assert transition.state.value == datetime(2024, 3, 15, 10, 30)

    def test_edit_clears_android_fallback(self, ctx: FieldContext) -> None:
        state = replace(_empty_with_reference(ctx), android_fallback="0")
        assert _type(state, ctx, 0, "0").state.android_fallback is None


class TestAndroidFallback:
    """Composition staging text."""

    def test_stored_verbatim(self, ctx: FieldContext) -> None:
        transition = reducer.set_temp_android_value_str(_state(ctx), "02/2")
        assert transition.state.android_fallback == "02/2"
        assert transition.notifications == ()

    def test_cleared_by_publish(self, ctx: FieldContext) -> None:
        state = reducer.set_temp_android_value_str(_state(ctx, FEB_28), "x").state
        assert reducer.clear_value(state, ctx).state.android_fallback is None


class TestSyncExternalValue:
    """Adopting values supplied by the host."""

    def test_equal_value_is_identity(self, ctx: FieldContext) -> None:
        state = _state(ctx, FEB_28)
        transition = reducer.sync_external_value(state, ctx, datetime(2023, 2, 28, 9, 15))
        assert transition.state is state

    def test_new_value_discards_edits(self, ctx: FieldContext) -> None:
        editing = _type(_empty_with_reference(ctx), ctx, 0, "03").state
        transition = reducer.sync_external_value(editing, ctx, datetime(2022, 5, 6))
        assert _values(transition.state) == ["05", "06", "2022"]
        assert not any(section.modified for section in transition.state.sections)
        assert transition.state.value == datetime(2022, 5, 6)
        assert transition.state.reference_value == datetime(2022, 5, 6)
        assert transition.notifications == ()

    def test_empty_value_keeps_reference(self, ctx: FieldContext) -> None:
        transition = reducer.sync_external_value(_state(ctx, FEB_28), ctx, None)
        assert transition.state.value is None
        assert transition.state.reference_value == FEB_28


class TestRebuildForFormat:
    """Format changes keep the value."""

    def test_sections_follow_new_format(self, ctx: FieldContext) -> None:
        state = _state(ctx, FEB_28)
        transition = reducer.rebuild_for_format(state, ctx.with_format("yyyy-MM-dd"))
        assert _values(transition.state) == ["2023", "02", "28"]
        assert transition.state.value == FEB_28

    def test_unsupported_format_rejected(self, adapter: BabelCalendarAdapter) -> None:
        config = FieldConfig("MM/dd/yyyy", supported_section_types=DATE_SECTION_TYPES)
        ctx = FieldContext.create(adapter, config)
        state = _state(ctx, FEB_28)
        with pytest.raises(UnsupportedSectionTypeError):
            reducer.rebuild_for_format(state, ctx.with_format("HH:mm"))


def test_published_value_is_a_date_of_the_typed_day(ctx: FieldContext) -> None:
    state = _state(ctx)
    for index, text in enumerate(("12", "25", "2030")):
        state = _type(state, ctx, index, text).state
    assert state.value is not None
    assert state.value.date() == date(2030, 12, 25)
