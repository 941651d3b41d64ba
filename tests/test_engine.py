"""Tests for FieldStateEngine: snapshot ownership and host callbacks.

Python 3.13+.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from datefield import FieldStateEngine
from datefield.adapter import BabelCalendarAdapter
from datefield.diagnostics import UnsupportedSectionTypeError
from datefield.enums import FormatDensity, SectionType
from datefield.sections import SelectedSections, SelectedSectionsIndexes
from datefield.state import DATE_SECTION_TYPES, FieldConfig

FEB_28 = datetime(2023, 2, 28, 9, 15)


class _Recorder:
    """Collects callback invocations."""

    def __init__(self) -> None:
        self.values: list[datetime | None] = []
        self.selections: list[SelectedSections] = []

    def on_change(self, value: datetime | None) -> None:
        self.values.append(value)

    def on_selected_sections_change(self, selected: SelectedSections) -> None:
        self.selections.append(selected)


@pytest.fixture
def recorder() -> _Recorder:
    return _Recorder()


def _engine(
    adapter: BabelCalendarAdapter,
    recorder: _Recorder,
    config: FieldConfig | str = "MM/dd/yyyy",
    **kwargs: datetime | None,
) -> FieldStateEngine:
    return FieldStateEngine.create(
        adapter,
        config,
        on_change=recorder.on_change,
        on_selected_sections_change=recorder.on_selected_sections_change,
        **kwargs,
    )


class TestCreate:
    """Construction and input precedence."""

    def test_value_wins_over_default(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28, default_value=datetime(2020, 1, 1))
        assert engine.value == FEB_28
        assert engine.text == "02/28/2023"

    def test_default_used_without_value(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, default_value=FEB_28)
        assert engine.value == FEB_28
        assert engine.reference_value == FEB_28

    def test_empty_field(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        engine = _engine(adapter, recorder)
        assert engine.value is None
        assert engine.text == "MM/DD/YYYY"
        assert recorder.values == []

    def test_full_config(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        config = FieldConfig("MM/dd/yyyy", format_density=FormatDensity.SPACIOUS)
        engine = _engine(adapter, recorder, config, value=FEB_28)
        assert engine.text == "02 / 28 / 2023"

    def test_invalid_config_type(self) -> None:
        with pytest.raises(TypeError):
            FieldConfig(format=123)  # type: ignore[arg-type]

    def test_empty_supported_types(self) -> None:
        with pytest.raises(ValueError, match="supported_section_types"):
            FieldConfig(format="MM", supported_section_types=frozenset())


class TestEditing:
    """Typing into sections."""

    def test_typing_a_full_date(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        engine = _engine(adapter, recorder)
        engine.set_section_text(0, "02")
        engine.set_section_text(1, "31")
        assert recorder.values == []
        assert engine.text == "02/31/YYYY"
        engine.set_section_text(2, "2023")
        assert engine.value is not None
        assert engine.value.date() == date(2023, 2, 28)
        assert engine.text == "02/28/2023"
        assert recorder.values == [engine.value]

    def test_editing_a_valid_value(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.set_section_text(2, "2024")
        assert engine.value == datetime(2024, 2, 28, 9, 15)
        assert recorder.values == [datetime(2024, 2, 28, 9, 15)]

    def test_unparseable_text_on_valid_value_keeps_date(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.set_section_text(0, "13")
        assert engine.value == FEB_28
        assert recorder.values == []

    def test_month_edit_lowers_day_to_month_end(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=datetime(2023, 1, 31, 9, 15))
        engine.set_section_text(0, "02")
        assert engine.value == datetime(2023, 2, 28, 9, 15)
        assert engine.text == "02/28/2023"
        assert recorder.values == [datetime(2023, 2, 28, 9, 15)]

    def test_year_edit_leaves_leap_day(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=datetime(2024, 2, 29, 9, 15))
        engine.set_section_text(2, "2023")
        assert engine.value == datetime(2023, 2, 28, 9, 15)
        assert engine.text == "02/28/2023"
        assert recorder.values == [datetime(2023, 2, 28, 9, 15)]

    def test_update_section_value(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.update_section_value(1, lambda d, _b: adapter.set_date(d, 1), lambda _b: "01")
        assert engine.value == datetime(2023, 2, 1, 9, 15)

    def test_clear_active_section(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.set_selected_sections(SectionType.YEAR)
        engine.clear_active_section()
        assert engine.value is None
        assert engine.text == "02/28/YYYY"
        assert recorder.values == [None]
        assert recorder.selections == [SectionType.YEAR]

    def test_clear_value(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.clear_value()
        assert engine.value is None
        assert engine.reference_value == FEB_28
        assert recorder.values == [None]

    def test_selection_collapse_notified_before_value(
        self, adapter: BabelCalendarAdapter
    ) -> None:
        events: list[str] = []
        engine = FieldStateEngine.create(
            adapter,
            "MM/dd/yyyy",
            value=FEB_28,
            on_change=lambda _v: events.append("value"),
            on_selected_sections_change=lambda s: events.append(f"selection {s}"),
        )
        engine.set_selected_sections(SelectedSectionsIndexes(0, 2))
        events.clear()
        engine.set_section_text(0, "03")
        assert events == ["selection 0", "value"]
        assert engine.selected_section_indexes == SelectedSectionsIndexes(0, 0)

    def test_android_fallback(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        engine = _engine(adapter, recorder)
        engine.set_temp_android_value_str("0")
        assert engine.state.android_fallback == "0"


class TestExternalValue:
    """Controlled value synchronization."""

    def test_echo_of_published_value_is_ignored(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.set_section_text(2, "2024")
        state = engine.state
        engine.set_value(engine.value)
        assert engine.state is state

    def test_new_external_value_discards_edits(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder)
        engine.set_section_text(0, "03")
        engine.set_value(datetime(2022, 5, 6))
        assert engine.text == "05/06/2022"
        assert recorder.values == []

    def test_repeated_external_value_keeps_local_edits(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder)
        engine.set_section_text(0, "03")
        engine.set_value(None)
        assert engine.text == "03/DD/YYYY"

    def test_none_falls_back_to_default(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        engine = _engine(adapter, recorder, value=FEB_28, default_value=datetime(2020, 1, 1))
        engine.set_value(None)
        assert engine.value == datetime(2020, 1, 1)


class TestSetFormat:
    """Format switches."""

    def test_value_kept(self, adapter: BabelCalendarAdapter, recorder: _Recorder) -> None:
        engine = _engine(adapter, recorder, value=FEB_28)
        engine.set_format("yyyy-MM-dd HH:mm")
        assert engine.text == "2023-02-28 09:15"
        assert engine.ctx.config.format == "yyyy-MM-dd HH:mm"
        assert recorder.values == []

    def test_rejected_format_leaves_engine_unchanged(
        self, adapter: BabelCalendarAdapter, recorder: _Recorder
    ) -> None:
        config = FieldConfig("MM/dd/yyyy", supported_section_types=DATE_SECTION_TYPES)
        engine = _engine(adapter, recorder, config, value=FEB_28)
        state, ctx = engine.state, engine.ctx
        with pytest.raises(UnsupportedSectionTypeError):
            engine.set_format("HH:mm")
        assert engine.state is state
        assert engine.ctx is ctx
