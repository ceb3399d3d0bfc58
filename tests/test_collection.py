"""Tests for DatesCollection - lazy random-access stepped instants."""

from __future__ import annotations

import pytest

from datekit.enums import FieldKind
from datekit.runtime import CalendarContext, DatesCollection


@pytest.fixture
def month_ends(utc_context: CalendarContext) -> DatesCollection:
    return DatesCollection(utc_context.date(2024, 1, 31), 4, FieldKind.MONTH, 1, utc_context)


class TestSequenceProtocol:
    """len, indexing, slicing, iteration."""

    def test_len(self, month_ends: DatesCollection) -> None:
        assert len(month_ends) == 4

    def test_elements_computed_from_start(self, month_ends: DatesCollection) -> None:
        assert [d.day for d in month_ends] == [31, 29, 31, 30]

    def test_index(self, month_ends: DatesCollection) -> None:
        assert month_ends[1].month == 2

    def test_negative_index(self, month_ends: DatesCollection) -> None:
        assert month_ends[-1].month == 4

    def test_index_out_of_range(self, month_ends: DatesCollection) -> None:
        with pytest.raises(IndexError):
            month_ends[4]
        with pytest.raises(IndexError):
            month_ends[-5]

    def test_slice(self, month_ends: DatesCollection) -> None:
        assert [d.month for d in month_ends[1:3]] == [2, 3]
        assert [d.month for d in month_ends[::-2]] == [4, 2]

    def test_contains(self, month_ends: DatesCollection, utc_context: CalendarContext) -> None:
        assert utc_context.date(2024, 2, 29) in month_ends
        assert utc_context.date(2024, 2, 28) not in month_ends

    def test_to_list(self, month_ends: DatesCollection) -> None:
        assert month_ends.to_list() == list(month_ends)

    def test_negative_step(self, utc_context: CalendarContext) -> None:
        countdown = DatesCollection(utc_context.date(2024, 1, 3), 3, FieldKind.DAY, -1, utc_context)
        assert [d.day for d in countdown] == [3, 2, 1]

    def test_empty(self, utc_context: CalendarContext) -> None:
        empty = DatesCollection(utc_context.date(2024, 1, 1), 0, FieldKind.DAY, 1, utc_context)
        assert list(empty) == []


class TestIdentity:
    """Equality, hashing and repr."""

    def test_equal_parameters(self, utc_context: CalendarContext) -> None:
        start = utc_context.date(2024, 1, 1)
        first = DatesCollection(start, 3, FieldKind.DAY, 1, utc_context)
        second = DatesCollection(start, 3, FieldKind.DAY, 1, utc_context)
        assert first == second
        assert hash(first) == hash(second)

    def test_different_step(self, utc_context: CalendarContext) -> None:
        start = utc_context.date(2024, 1, 1)
        assert DatesCollection(start, 3, FieldKind.DAY, 1, utc_context) != DatesCollection(
            start, 3, FieldKind.DAY, 2, utc_context
        )

    def test_not_equal_to_list(self, month_ends: DatesCollection) -> None:
        assert month_ends != list(month_ends)

    def test_repr(self, month_ends: DatesCollection) -> None:
        assert repr(month_ends) == (
            "DatesCollection(start=2024-01-31T00:00:00+00:00, count=4, kind=month, step=1)"
        )

    def test_accessors(self, month_ends: DatesCollection, utc_context: CalendarContext) -> None:
        assert month_ends.kind is FieldKind.MONTH
        assert month_ends.step == 1
        assert month_ends.context is utc_context
        assert month_ends.start == utc_context.date(2024, 1, 31)


class TestValidation:
    """Constructor argument checks."""

    def test_negative_count(self, utc_context: CalendarContext) -> None:
        with pytest.raises(ValueError, match="count"):
            DatesCollection(utc_context.now(), -1, FieldKind.DAY, 1, utc_context)

    def test_zero_step(self, utc_context: CalendarContext) -> None:
        with pytest.raises(ValueError, match="step"):
            DatesCollection(utc_context.now(), 1, FieldKind.DAY, 0, utc_context)
