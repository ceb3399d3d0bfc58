"""Tests for datetime arithmetic in datekit.core.arithmetic.

Covers month-end clamping, DST-aware elapsed time, ISO and US week rules,
period boundaries and boundary counting.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from datekit.core.arithmetic import (
    add_elapsed,
    count_between,
    div_toward_zero,
    elapsed_seconds,
    end_of,
    shift,
    start_of,
    week_year,
    week_year_start,
)
from datekit.enums import FieldKind

NEW_YORK = ZoneInfo("America/New_York")
US_WEEKS = {"first_weekday": 6, "min_week_days": 1}


class TestDivTowardZero:
    """Integer division truncating toward zero."""

    @pytest.mark.parametrize(
        ("value", "divisor", "expected"),
        [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 5, 0), (6, 3, 2)],
    )
    def test_truncates(self, value: int, divisor: int, expected: int) -> None:
        assert div_toward_zero(value, divisor) == expected


class TestShift:
    """shift() applies symbolic magnitudes."""

    def test_month_end_clamps_in_leap_year(self) -> None:
        assert shift(datetime(2024, 1, 31), {FieldKind.MONTH: 1}) == datetime(2024, 2, 29)

    def test_month_end_clamps_in_common_year(self) -> None:
        assert shift(datetime(2023, 1, 31), {FieldKind.MONTH: 1}) == datetime(2023, 2, 28)

    def test_quarter_is_three_months(self) -> None:
        assert shift(datetime(2024, 1, 15), {FieldKind.QUARTER: 1}) == datetime(2024, 4, 15)

    def test_negative_magnitudes(self) -> None:
        result = shift(datetime(2024, 3, 1), {FieldKind.YEAR: -1, FieldKind.DAY: -1})
        assert result == datetime(2023, 2, 28)

    def test_weeks(self) -> None:
        assert shift(datetime(2024, 1, 1), {FieldKind.WEEK_OF_YEAR: 2}) == datetime(2024, 1, 15)

    def test_weekday_ordinal_moves_by_days(self) -> None:
        result = shift(datetime(2024, 1, 1), {FieldKind.WEEKDAY_ORDINAL: 2})
        assert result == datetime(2024, 1, 3)

    def test_nanoseconds_truncate_to_microseconds(self) -> None:
        base = datetime(2024, 1, 1)
        assert shift(base, {FieldKind.NANOSECOND: 1500}) == base + timedelta(microseconds=1)
        assert shift(base, {FieldKind.NANOSECOND: -1500}) == base - timedelta(microseconds=1)

    def test_labels_are_ignored(self) -> None:
        base = datetime(2024, 1, 1)
        assert shift(base, {FieldKind.ERA: 1, FieldKind.TIMEZONE: 3600}) == base

    def test_day_across_dst_keeps_wall_clock(self) -> None:
        """A calendar day across spring-forward keeps 12:00 local."""
        start = datetime(2024, 3, 9, 12, tzinfo=NEW_YORK)
        result = shift(start, {FieldKind.DAY: 1})
        assert (result.hour, result.day) == (12, 10)
        assert result.utcoffset() == timedelta(hours=-4)

    def test_hours_across_dst_are_elapsed(self) -> None:
        """24 hours across spring-forward land at 13:00 local."""
        start = datetime(2024, 3, 9, 12, tzinfo=NEW_YORK)
        result = shift(start, {FieldKind.HOUR: 24})
        assert (result.day, result.hour) == (10, 13)


class TestElapsed:
    """elapsed_seconds / add_elapsed use the UTC timeline."""

    def test_dst_gap_is_not_counted(self) -> None:
        start = datetime(2024, 3, 10, 0, tzinfo=NEW_YORK)
        end = datetime(2024, 3, 10, 4, tzinfo=NEW_YORK)
        assert elapsed_seconds(start, end) == 3 * 3600

    def test_naive(self) -> None:
        assert elapsed_seconds(datetime(2024, 1, 1), datetime(2024, 1, 2)) == 86400

    def test_add_elapsed_keeps_zone(self) -> None:
        start = datetime(2024, 3, 10, 1, tzinfo=NEW_YORK)
        result = add_elapsed(start, timedelta(hours=1))
        assert result.tzinfo is NEW_YORK
        assert result.hour == 3

    def test_add_elapsed_naive(self) -> None:
        assert add_elapsed(datetime(2024, 1, 1), timedelta(days=1)) == datetime(2024, 1, 2)


class TestWeekYear:
    """Week-based year under ISO and US rules."""

    def test_iso_week_one_of_2021(self) -> None:
        assert week_year_start(2021) == datetime(2021, 1, 4)

    def test_iso_week_one_of_2025_starts_in_2024(self) -> None:
        assert week_year_start(2025) == datetime(2024, 12, 30)

    def test_us_week_one_contains_january_first(self) -> None:
        assert week_year_start(2024, **US_WEEKS) == datetime(2023, 12, 31)

    def test_zone_is_attached(self) -> None:
        assert week_year_start(2021, UTC).tzinfo is UTC

    def test_january_first_in_previous_iso_year(self) -> None:
        assert week_year(datetime(2021, 1, 1)) == 2020

    def test_late_december_in_next_iso_year(self) -> None:
        assert week_year(datetime(2024, 12, 30)) == 2025

    def test_matches_isocalendar(self) -> None:
        """ISO defaults agree with date.isocalendar()."""
        day = datetime(2020, 1, 1)
        while day.year < 2022:
            assert week_year(day) == day.isocalendar().year
            day += timedelta(days=5)


class TestStartOf:
    """start_of() truncation."""

    INSTANT = datetime(2024, 5, 15, 13, 45, 30, 123456)  # Wednesday

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (FieldKind.SECOND, datetime(2024, 5, 15, 13, 45, 30)),
            (FieldKind.MINUTE, datetime(2024, 5, 15, 13, 45)),
            (FieldKind.HOUR, datetime(2024, 5, 15, 13)),
            (FieldKind.DAY, datetime(2024, 5, 15)),
            (FieldKind.WEEK_OF_YEAR, datetime(2024, 5, 13)),
            (FieldKind.MONTH, datetime(2024, 5, 1)),
            (FieldKind.QUARTER, datetime(2024, 4, 1)),
            (FieldKind.YEAR, datetime(2024, 1, 1)),
            (FieldKind.ERA, datetime(1, 1, 1)),
        ],
    )
    def test_iso(self, kind: FieldKind, expected: datetime) -> None:
        assert start_of(self.INSTANT, kind) == expected

    def test_nanosecond_is_identity(self) -> None:
        assert start_of(self.INSTANT, FieldKind.NANOSECOND) == self.INSTANT

    def test_us_week_starts_sunday(self) -> None:
        assert start_of(self.INSTANT, FieldKind.WEEK_OF_YEAR, **US_WEEKS) == datetime(2024, 5, 12)

    def test_week_year_start(self) -> None:
        result = start_of(datetime(2021, 1, 2), FieldKind.YEAR_FOR_WEEK_OF_YEAR)
        assert result == datetime(2019, 12, 30)

    @pytest.mark.parametrize("kind", [FieldKind.TIMEZONE, FieldKind.CALENDAR])
    def test_non_periods_raise(self, kind: FieldKind) -> None:
        with pytest.raises(ValueError, match="calendar period"):
            start_of(self.INSTANT, kind)


class TestEndOf:
    """end_of() is the last microsecond of the period."""

    def test_february_in_leap_year(self) -> None:
        assert end_of(datetime(2024, 2, 10), FieldKind.MONTH) == datetime(
            2024, 2, 29, 23, 59, 59, 999999
        )

    def test_year(self) -> None:
        assert end_of(datetime(2024, 6, 1), FieldKind.YEAR) == datetime(
            2024, 12, 31, 23, 59, 59, 999999
        )

    def test_hour(self) -> None:
        assert end_of(datetime(2024, 6, 1, 10, 15), FieldKind.HOUR) == datetime(
            2024, 6, 1, 10, 59, 59, 999999
        )

    def test_era_is_max(self) -> None:
        assert end_of(datetime(2024, 6, 1), FieldKind.ERA) == datetime.max

    def test_end_is_before_next_start(self) -> None:
        instant = datetime(2024, 11, 20)
        for kind in (FieldKind.DAY, FieldKind.WEEK_OF_YEAR, FieldKind.MONTH, FieldKind.QUARTER):
            end = end_of(instant, kind)
            assert start_of(end, kind) == start_of(instant, kind)
            assert start_of(end + timedelta(microseconds=1), kind) > start_of(instant, kind)


class TestCountBetween:
    """count_between() counts period boundaries."""

    def test_days_across_midnight(self) -> None:
        start = datetime(2024, 1, 1, 23, 59)
        end = datetime(2024, 1, 2, 0, 1)
        assert count_between(FieldKind.DAY, start, end) == 1

    def test_weekday_ordinal_counts_days(self) -> None:
        start, end = datetime(2024, 1, 1), datetime(2024, 1, 4)
        assert count_between(FieldKind.WEEKDAY_ORDINAL, start, end) == 3

    def test_months_by_boundary_not_length(self) -> None:
        assert count_between(FieldKind.MONTH, datetime(2024, 1, 31), datetime(2024, 3, 1)) == 2

    def test_negative_when_reversed(self) -> None:
        assert count_between(FieldKind.MONTH, datetime(2024, 3, 1), datetime(2024, 1, 31)) == -2

    def test_years_across_new_year(self) -> None:
        assert count_between(FieldKind.YEAR, datetime(2023, 12, 31), datetime(2024, 1, 1)) == 1

    def test_quarters(self) -> None:
        assert count_between(FieldKind.QUARTER, datetime(2024, 3, 31), datetime(2024, 4, 1)) == 1

    def test_weeks_across_iso_boundary(self) -> None:
        """Sunday to Monday crosses an ISO week boundary."""
        result = count_between(FieldKind.WEEK_OF_YEAR, datetime(2024, 5, 12), datetime(2024, 5, 13))
        assert result == 1

    def test_weeks_within_us_week(self) -> None:
        """Sunday to Monday is the same US week."""
        result = count_between(
            FieldKind.WEEK_OF_YEAR, datetime(2024, 5, 12), datetime(2024, 5, 13), **US_WEEKS
        )
        assert result == 0

    def test_hours(self) -> None:
        start, end = datetime(2024, 1, 1, 10, 59), datetime(2024, 1, 1, 11)
        result = count_between(FieldKind.HOUR, start, end)
        assert result == 1

    def test_nanoseconds(self) -> None:
        start = datetime(2024, 1, 1)
        end = start + timedelta(microseconds=1)
        assert count_between(FieldKind.NANOSECOND, start, end) == 1000

    def test_era_is_zero(self) -> None:
        assert count_between(FieldKind.ERA, datetime(1, 1, 1), datetime(2024, 1, 1)) == 0

    def test_hours_over_dst_gap(self) -> None:
        start = datetime(2024, 3, 10, 0, tzinfo=NEW_YORK)
        end = datetime(2024, 3, 10, 4, tzinfo=NEW_YORK)
        assert count_between(FieldKind.HOUR, start, end) == 3
