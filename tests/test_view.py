"""Tests for elapsed-time formatting and the report."""

from datetime import datetime, timedelta, timezone

import pytest

from loago.tasks.store import TaskRecord, TaskStore
from loago.tasks.view import (
    Elapsed,
    OutputTasks,
    Unit,
    format_auto,
    format_days,
    get_formatter,
    output,
)
from tests.conftest import DECEMBER


def days_ago(days: float) -> datetime:
    return DECEMBER - timedelta(days=days)


class TestFormatters:
    """Tests for format_days and format_auto."""

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (timedelta(0), "0"),
            (timedelta(hours=23, minutes=59), "0"),
            (timedelta(days=1), "1"),
            (timedelta(days=14, hours=20), "14"),
        ],
    )
    def test_format_days(self, duration: timedelta, expected: str):
        assert format_days(duration).text == expected

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (timedelta(0), "0"),
            (timedelta(seconds=59), "0"),
            (timedelta(minutes=1), "1m"),
            (timedelta(minutes=5, seconds=30), "5m"),
            (timedelta(minutes=59, seconds=59), "59m"),
            (timedelta(hours=1), "1h"),
            (timedelta(hours=3, minutes=40), "3h"),
            (timedelta(hours=23, minutes=59), "23h"),
            (timedelta(days=1), "1"),
            (timedelta(days=6, hours=23), "6"),
        ],
    )
    def test_format_auto_thresholds(self, duration: timedelta, expected: str):
        assert format_auto(duration).text == expected

    def test_negative_duration_clamped_to_zero(self):
        assert format_days(timedelta(minutes=-5)) == Elapsed(0, Unit.DAYS)
        assert format_auto(timedelta(days=-2)).text == "0"

    def test_shown_is_truncated_duration(self):
        elapsed = format_auto(timedelta(hours=2, minutes=59))

        assert elapsed == Elapsed(2, Unit.HOURS)
        assert elapsed.shown == timedelta(hours=2)

    def test_get_formatter(self):
        assert get_formatter("auto") is format_auto
        assert get_formatter("days") is format_days

    def test_get_formatter_unknown(self):
        with pytest.raises(ValueError, match="Unknown elapsed format 'weeks'"):
            get_formatter("weeks")


class TestOutput:
    """Tests for output() sorting and rendering."""

    def test_sorted_ascending_with_aligned_names(self):
        store = TaskStore(
            {"floor": days_ago(6), "bed": days_ago(4), "keyboard": days_ago(8)}
        )

        report = output(store.get(["floor", "bed", "keyboard"]), now=DECEMBER)

        assert report.to_string() == (
            "bed      — 4\n"
            "floor    — 6\n"
            "keyboard — 8\n"
        )

    def test_fresh_tasks_show_zero(self):
        store = TaskStore(clock=lambda: DECEMBER)
        store.update({"dust", "vacuum"})

        assert str(output(store.get_all(), now=DECEMBER)) == "dust   — 0\nvacuum — 0\n"

    def test_fresh_task_with_real_clock(self):
        store = TaskStore()
        store.update(["dust"])

        assert output(store.get_all()).rows == [("dust", "0")]

    def test_days_from_calendar_dates(self):
        store = TaskStore(
            {
                "dust": datetime(2023, 1, 20, tzinfo=timezone.utc),
                "vacuum": datetime(2023, 2, 20, tzinfo=timezone.utc),
                "exercise": datetime(2023, 3, 20, tzinfo=timezone.utc),
            }
        )

        report = output(store.get_all(), format_days, now=DECEMBER)

        assert report.to_string() == (
            "exercise — 275\n"
            "vacuum   — 303\n"
            "dust     — 334\n"
        )

    def test_ties_broken_by_name(self):
        records = [
            TaskRecord("vacuum", days_ago(2)),
            TaskRecord("dust", days_ago(2)),
            TaskRecord("bed", days_ago(1)),
        ]

        report = output(records, format_days, now=DECEMBER)

        assert [name for name, _ in report] == ["bed", "dust", "vacuum"]

    def test_sorts_by_displayed_value_not_raw_duration(self):
        # Both show "1h"; the name decides, not the extra minutes
        records = [
            TaskRecord("a", DECEMBER - timedelta(hours=1, minutes=59)),
            TaskRecord("b", DECEMBER - timedelta(hours=1, minutes=1)),
        ]

        report = output(records, format_auto, now=DECEMBER)

        assert report.rows == [("a", "1h"), ("b", "1h")]

    def test_mixed_units_sorted_by_elapsed_time(self):
        records = [
            TaskRecord("laundry", days_ago(2)),
            TaskRecord("tea", DECEMBER - timedelta(minutes=5)),
            TaskRecord("walk", DECEMBER - timedelta(hours=3)),
            TaskRecord("plants", DECEMBER - timedelta(minutes=59)),
        ]

        report = output(records, now=DECEMBER)

        assert report.rows == [
            ("tea", "5m"),
            ("plants", "59m"),
            ("walk", "3h"),
            ("laundry", "2"),
        ]

    def test_custom_formatter(self):
        def weeks(duration: timedelta) -> Elapsed:
            return Elapsed(duration // timedelta(weeks=1), Unit.DAYS)

        report = output([TaskRecord("gutters", days_ago(15))], weeks, now=DECEMBER)

        assert report.to_string() == "gutters — 2\n"

    def test_empty_report(self):
        report = output([], now=DECEMBER)

        assert len(report) == 0
        assert report.to_string() == ""

    def test_unknown_name_gives_no_entry(self):
        store = TaskStore({"dust": DECEMBER})

        assert output(store.get(["never"]), now=DECEMBER).rows == []


class TestOutputTasks:
    """Tests for OutputTasks rendering."""

    def test_single_row(self):
        assert OutputTasks([("dust", "3")]).to_string() == "dust — 3\n"

    def test_wide_names_aligned_by_cell_width(self):
        # "床" is one code point but two terminal cells
        report = OutputTasks([("床", "1"), ("dust", "2")])

        assert report.to_string() == "床   — 1\ndust — 2\n"

    def test_rows_is_a_copy(self):
        report = OutputTasks([("dust", "3")])
        report.rows.append(("extra", "1"))

        assert len(report) == 1
