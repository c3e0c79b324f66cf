"""Unit tests for recurrence utilities."""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone

import pytest

from tasklens.models import PatternKind, RecurringPattern
from tasklens.utils.recurrence import (
    VALID_PATTERNS,
    add_months,
    calculate_next_occurrence,
    describe_pattern,
    format_day,
    next_occurrence_for,
    should_generate_next_instance,
)


class TestCalculateNextOccurrence:
    @pytest.mark.parametrize(
        "current,expected",
        [
            (date(2024, 1, 15), date(2024, 1, 16)),
            (date(2024, 1, 31), date(2024, 2, 1)),
            (date(2024, 2, 28), date(2024, 2, 29)),
            (date(2023, 12, 31), date(2024, 1, 1)),
        ],
    )
    def test_daily(self, current, expected):
        assert calculate_next_occurrence(current, "daily") == expected

    def test_daily_drops_time_of_day(self):
        assert calculate_next_occurrence(
            datetime(2024, 1, 15, 23, 45), PatternKind.DAILY
        ) == date(2024, 1, 16)

    def test_weekly(self):
        assert calculate_next_occurrence(date(2024, 12, 28), "weekly") == date(2025, 1, 4)

    @pytest.mark.parametrize(
        "current,expected",
        [
            (date(2024, 1, 15), date(2024, 1, 16)),  # Mon -> Tue
            (date(2024, 1, 18), date(2024, 1, 19)),  # Thu -> Fri
            (date(2024, 1, 19), date(2024, 1, 22)),  # Fri -> Mon
            (date(2024, 1, 20), date(2024, 1, 22)),  # Sat -> Mon
            (date(2024, 1, 21), date(2024, 1, 22)),  # Sun -> Mon
        ],
    )
    def test_weekday(self, current, expected):
        assert calculate_next_occurrence(current, "weekday") == expected

    @pytest.mark.parametrize(
        "current,expected",
        [
            (date(2024, 1, 15), date(2024, 2, 15)),
            (date(2024, 1, 31), date(2024, 2, 29)),
            (date(2023, 1, 31), date(2023, 2, 28)),
            (date(2024, 3, 31), date(2024, 4, 30)),
            (date(2024, 12, 10), date(2025, 1, 10)),
        ],
    )
    def test_monthly_clamps_to_month_end(self, current, expected):
        assert calculate_next_occurrence(current, "monthly") == expected

    def test_yearly(self):
        assert calculate_next_occurrence(date(2024, 6, 1), "yearly") == date(2025, 6, 1)

    def test_yearly_from_leap_day(self):
        assert calculate_next_occurrence(date(2024, 2, 29), "yearly") == date(2025, 2, 28)

    def test_custom_returns_none(self):
        assert (
            calculate_next_occurrence(date(2024, 1, 15), "custom", "Every 2nd Tuesday")
            is None
        )

    def test_custom_is_logged(self, isolated_dirs):
        calculate_next_occurrence(date(2024, 1, 15), "custom", "Every 2nd Tuesday")
        from tasklens.utils.logger import get_logger

        for handler in get_logger().handlers:
            handler.flush()
        log = (isolated_dirs / "logs" / "tasklens.log").read_text()
        assert "Every 2nd Tuesday" in log
        assert "tasklens.recurrence" in log

    def test_unknown_pattern_returns_none(self):
        assert calculate_next_occurrence(date(2024, 1, 15), "hourly") is None


class TestAddMonths:
    def test_negative_months(self):
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_across_several_years(self):
        assert add_months(date(2024, 1, 31), 25) == date(2026, 2, 28)


class TestShouldGenerateNextInstance:
    def test_no_end_date(self):
        assert should_generate_next_instance(date(2024, 1, 15), "daily") is True

    def test_end_date_boundary_is_inclusive(self):
        current = date(2024, 1, 15)
        end = current + timedelta(days=1)
        assert should_generate_next_instance(current, "daily", end) is True

    def test_weekly_past_end_date(self):
        current = date(2024, 1, 15)
        end = current + timedelta(days=1)
        assert should_generate_next_instance(current, "weekly", end) is False

    def test_end_date_time_of_day_ignored(self):
        current = datetime(2024, 1, 15, 18, 0)
        end = datetime(2024, 1, 16, 0, 0)
        assert should_generate_next_instance(current, "daily", end) is True

    def test_custom_never_generates(self):
        assert should_generate_next_instance(date(2024, 1, 15), "custom") is False

    def test_unknown_never_generates(self):
        assert should_generate_next_instance(date(2024, 1, 15), "hourly") is False

    def test_empty_pattern(self):
        assert should_generate_next_instance(date(2024, 1, 15), "") is False


class TestNextOccurrenceFor:
    def test_within_series(self):
        pattern = RecurringPattern(pattern="weekday", end_date="2024-01-31")
        assert next_occurrence_for(pattern, date(2024, 1, 19)) == date(2024, 1, 22)

    def test_series_ended(self):
        pattern = RecurringPattern(pattern="monthly", end_date="2024-02-01")
        assert next_occurrence_for(pattern, date(2024, 1, 15)) is None

    def test_custom(self):
        pattern = RecurringPattern(pattern="custom", custom_pattern="Odd days")
        assert next_occurrence_for(pattern, date(2024, 1, 15)) is None


class TestDescribePattern:
    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("daily", "Every day"),
            ("weekly", "Every week"),
            ("weekday", "Every weekday"),
            ("monthly", "Every month"),
            ("yearly", "Every year"),
        ],
    )
    def test_fixed_phrases(self, pattern, expected):
        assert describe_pattern(pattern) == expected

    def test_with_end_date(self):
        assert (
            describe_pattern("daily", None, datetime(2024, 12, 31))
            == "Every day until 12/31/2024"
        )

    def test_custom_echoed(self):
        assert describe_pattern("custom", "Every 2nd Tuesday") == "Every 2nd Tuesday"

    def test_custom_fallback(self):
        assert describe_pattern("custom", "") == "Custom pattern"
        assert describe_pattern(PatternKind.CUSTOM) == "Custom pattern"

    def test_custom_with_end_date(self):
        assert (
            describe_pattern("custom", "Odd days", date(2025, 3, 1))
            == "Odd days until 3/1/2025"
        )

    def test_unknown(self):
        assert describe_pattern("hourly", None, date(2025, 3, 1)) == "No recurrence"

    def test_custom_date_format(self):
        assert (
            describe_pattern(
                "weekly", end_date=date(2025, 3, 1), date_format="{year}-{month:02d}-{day:02d}"
            )
            == "Every week until 2025-03-01"
        )


class TestHelpers:
    def test_valid_patterns(self):
        assert set(VALID_PATTERNS) == {
            "daily",
            "weekly",
            "weekday",
            "monthly",
            "yearly",
            "custom",
        }

    def test_format_day(self):
        assert format_day(datetime(2024, 7, 4, 12, 0)) == "7/4/2024"


@pytest.fixture()
def tokyo_time(monkeypatch):
    """Run with a local time zone well ahead of UTC."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Asia/Tokyo")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestLocalDay:
    LATE_UTC = datetime(2024, 1, 19, 23, 30, tzinfo=timezone.utc)

    def test_aware_current_date_read_in_local_time(self):
        expected = self.LATE_UTC.astimezone().date() + timedelta(days=1)
        assert calculate_next_occurrence(self.LATE_UTC, "daily") == expected

    def test_daily_across_utc_midnight(self, tokyo_time):
        # 23:30 UTC on the 19th is the morning of the 20th in Tokyo
        assert calculate_next_occurrence(self.LATE_UTC, "daily") == date(2024, 1, 21)

    def test_end_date_compared_by_local_day(self, tokyo_time):
        end = datetime(2024, 1, 20, 14, 0, tzinfo=timezone.utc)  # 23:00 on the 20th
        assert should_generate_next_instance(self.LATE_UTC, "daily", end) is False

    def test_format_day_uses_local_day(self, tokyo_time):
        assert format_day(datetime(2024, 7, 4, 20, 0, tzinfo=timezone.utc)) == "7/5/2024"
