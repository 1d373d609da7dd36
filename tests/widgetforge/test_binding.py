"""
Tests for data-binding resolution.

Tests cover:
- resolve_binding prefix/suffix and empty-text fallback
- resolve_project side table and materialize()
- Default formatter per value kind and style
- SnapshotProvider lookups with a pinned clock
"""

from datetime import date, datetime, time, timedelta

import pytest

from widgetforge.binding import (
    SnapshotProvider,
    WidgetDataSnapshot,
    format_value,
    parse_reference,
    placeholder_text,
    resolve_binding,
    resolve_project,
)
from widgetforge.layers import (
    DataBindingConfig,
    DataFormatStyle,
    TextElementConfig,
    WidgetDataType,
)

# Saturday
NOW = datetime(2026, 1, 3, 14, 5, 9)


def _provider(values: dict):
    return lambda data_type: values.get(data_type)


class TestResolveBinding:
    """Tests for single-binding resolution."""

    def test_prefix_and_suffix(self):
        """The formatted value is wrapped in prefix and suffix."""
        config = DataBindingConfig(data_type=WidgetDataType.READING_STREAK, prefix="Day ", suffix="!")
        assert resolve_binding(config, _provider({WidgetDataType.READING_STREAK: 7})) == "Day 7!"

    def test_missing_value_uses_empty_text_alone(self):
        """Without a value only empty_text is shown, never wrapped."""
        config = DataBindingConfig(data_type=WidgetDataType.READING_STREAK, prefix="Day ", suffix="!")
        assert resolve_binding(config, _provider({})) == "—"

    def test_empty_string_is_missing(self):
        config = DataBindingConfig(data_type=WidgetDataType.PLAN_NAME, empty_text="No plan")
        assert resolve_binding(config, _provider({WidgetDataType.PLAN_NAME: ""})) == "No plan"

    def test_zero_is_a_value(self):
        """Falsy numbers are real values."""
        config = DataBindingConfig(data_type=WidgetDataType.ACTIVE_PRAYER_COUNT)
        assert resolve_binding(config, _provider({WidgetDataType.ACTIVE_PRAYER_COUNT: 0})) == "0"

    def test_custom_formatter(self):
        """A host formatter replaces the default one."""
        config = DataBindingConfig(data_type=WidgetDataType.VERSE_TEXT, suffix="?")
        result = resolve_binding(
            config,
            _provider({WidgetDataType.VERSE_TEXT: "hello"}),
            formatter=lambda value, style, data_type: value.upper(),
        )
        assert result == "HELLO?"


class TestResolveProject:
    """Tests for whole-project resolution."""

    def test_values_by_layer_id(self, project):
        """Each binding layer gets an entry; the project is unchanged."""
        before = project.model_dump()
        resolved = resolve_project(project, _provider({WidgetDataType.READING_STREAK: 12}))

        binding = project.binding_layers()[0]
        assert resolved.values == {binding.id: "Day 12!"}
        assert resolved.text_for(binding.id) == "Day 12!"
        assert resolved.text_for("other") is None
        assert project.model_dump() == before

    def test_materialize(self, project):
        """Bindings become text elements carrying the binding's text style."""
        binding = project.binding_layers()[0]
        binding.element.text_style.font_size = 30
        resolved = resolve_project(project, _provider({}))

        materialized = resolved.materialize()
        layer = materialized.get_layer(binding.id)
        assert isinstance(layer.element, TextElementConfig)
        assert layer.element.text == "—"
        assert layer.element.font_size == 30
        assert layer.z_index == binding.z_index
        # Source keeps its binding
        assert project.get_layer(binding.id).is_binding()


class TestFormatValue:
    """Tests for the default formatter."""

    @pytest.mark.parametrize("value, style, data_type, expected", [
        (1234, DataFormatStyle.DEFAULT, WidgetDataType.READING_STREAK, "1,234"),
        (1234, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "1.2K"),
        (2_000_000, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "2M"),
        (999, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "999"),
        (999_950, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "1M"),
        (999_999, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "1M"),
        (1_050, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "1.1K"),
        (2_500_000_000, DataFormatStyle.SHORT, WidgetDataType.READING_STREAK, "2.5B"),
        (7, DataFormatStyle.LONG, WidgetDataType.READING_STREAK, "7 days"),
        (1, DataFormatStyle.LONG, WidgetDataType.ACTIVE_PRAYER_COUNT, "1 prayer"),
        (12, DataFormatStyle.LONG, WidgetDataType.CURRENT_PLAN_DAY, "Day 12"),
        (45, DataFormatStyle.PERCENTAGE, WidgetDataType.READING_PROGRESS, "45%"),
        (0.45, DataFormatStyle.DEFAULT, WidgetDataType.READING_PROGRESS, "45%"),
        (0.45, DataFormatStyle.LONG, WidgetDataType.READING_PROGRESS, "45% complete"),
        (0.45, DataFormatStyle.NUMERIC, WidgetDataType.HABIT_PROGRESS, "0.45"),
        (True, DataFormatStyle.DEFAULT, WidgetDataType.LAST_MOOD, "Yes"),
        ("Psalms", DataFormatStyle.DEFAULT, WidgetDataType.VERSE_BOOK, "Psalms"),
    ])
    def test_scalars(self, value, style, data_type, expected):
        assert format_value(value, style, data_type) == expected

    @pytest.mark.parametrize("style, data_type, expected", [
        (DataFormatStyle.DEFAULT, WidgetDataType.CURRENT_DATE, "January 3, 2026"),
        (DataFormatStyle.SHORT, WidgetDataType.CURRENT_DATE, "Jan 3"),
        (DataFormatStyle.NUMERIC, WidgetDataType.CURRENT_DATE, "2026-01-03"),
        (DataFormatStyle.LONG, WidgetDataType.CURRENT_DATE, "Saturday, January 3, 2026"),
        (DataFormatStyle.DEFAULT, WidgetDataType.CURRENT_TIME, "2:05 PM"),
        (DataFormatStyle.NUMERIC, WidgetDataType.CURRENT_TIME, "14:05"),
        (DataFormatStyle.LONG, WidgetDataType.CURRENT_TIME, "2:05:09 PM"),
        (DataFormatStyle.DEFAULT, WidgetDataType.DAY_OF_WEEK, "Saturday"),
        (DataFormatStyle.SHORT, WidgetDataType.DAY_OF_WEEK, "Sat"),
        (DataFormatStyle.DEFAULT, WidgetDataType.MONTH_YEAR, "January 2026"),
        (DataFormatStyle.NUMERIC, WidgetDataType.MONTH_YEAR, "01/2026"),
    ])
    def test_datetimes(self, style, data_type, expected):
        assert format_value(NOW, style, data_type) == expected

    def test_plain_date_and_time(self):
        assert format_value(date(2026, 4, 5), DataFormatStyle.DEFAULT, WidgetDataType.CURRENT_DATE) == "April 5, 2026"
        assert format_value(time(0, 30), DataFormatStyle.DEFAULT, WidgetDataType.CURRENT_TIME) == "12:30 AM"

    @pytest.mark.parametrize("style, expected", [
        (DataFormatStyle.DEFAULT, "14 days"),
        (DataFormatStyle.SHORT, "14d"),
        (DataFormatStyle.NUMERIC, "14"),
    ])
    def test_durations(self, style, expected):
        assert format_value(timedelta(days=14), style, WidgetDataType.DAYS_REMAINING) == expected

    def test_single_day(self):
        assert format_value(timedelta(days=1), DataFormatStyle.DEFAULT, WidgetDataType.DAYS_REMAINING) == "1 day"


class TestSnapshotProvider:
    """Tests for the snapshot-backed data provider."""

    @pytest.fixture
    def provider(self) -> SnapshotProvider:
        snapshot = WidgetDataSnapshot.placeholder(now=NOW)
        return SnapshotProvider(snapshot, clock=lambda: NOW)

    def test_snapshot_fields(self, provider):
        assert provider(WidgetDataType.READING_STREAK) == 7
        assert provider(WidgetDataType.READING_PROGRESS) == 0.4
        assert provider(WidgetDataType.COUNTDOWN_TITLE) == "Easter"
        assert provider(WidgetDataType.PLAN_NAME) == "Getting Started"

    def test_clock_values(self, provider):
        """Date and time data types come from the clock."""
        assert provider(WidgetDataType.CURRENT_DATE) == NOW
        assert provider(WidgetDataType.DAY_OF_WEEK) == NOW

    def test_reference_parts(self, provider):
        """Book, chapter and verse are split from the verse reference."""
        assert provider(WidgetDataType.VERSE_BOOK) == "John"
        assert provider(WidgetDataType.VERSE_CHAPTER) == 3
        assert provider(WidgetDataType.VERSE_NUMBER) == 16

    def test_days_remaining(self, provider):
        assert provider(WidgetDataType.DAYS_REMAINING) == timedelta(days=14)

    def test_unset_fields_resolve_to_empty_text(self):
        """A fresh snapshot has no values; bindings fall back."""
        provider = SnapshotProvider(WidgetDataSnapshot(), clock=lambda: NOW)
        config = DataBindingConfig(data_type=WidgetDataType.DAYS_REMAINING, suffix=" to go")
        assert provider(WidgetDataType.VERSE_BOOK) is None
        assert resolve_binding(config, provider) == "—"

    def test_end_to_end(self, provider):
        config = DataBindingConfig(
            data_type=WidgetDataType.DAYS_REMAINING,
            format_style=DataFormatStyle.SHORT,
            suffix=" left",
        )
        assert resolve_binding(config, provider) == "14d left"

    def test_snapshot_json_aliases(self):
        snapshot = WidgetDataSnapshot.model_validate({"readingStreak": 3, "lastMood": "🙏"})
        assert snapshot.reading_streak == 3
        assert snapshot.last_mood == "🙏"


class TestReferences:
    """Tests for verse reference parsing."""

    @pytest.mark.parametrize("reference, expected", [
        ("John 3:16", ("John", 3, 16)),
        ("1 Corinthians 13:4-7", ("1 Corinthians", 13, 4)),
        ("Psalm 23", ("Psalm", 23, None)),
        ("Revelation", None),
    ])
    def test_parse_reference(self, reference, expected):
        assert parse_reference(reference) == expected

    def test_placeholder_text(self):
        assert placeholder_text(WidgetDataType.VERSE_REFERENCE) == "John 3:16"
        assert placeholder_text(WidgetDataType.HABIT_STREAK) == "Habit Streak"
