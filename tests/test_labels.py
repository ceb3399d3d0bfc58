"""Tests for pick_label (most specific matching key wins)."""

from __future__ import annotations

from datetime import datetime

from datekit.duration import ComponentMap, days, from_components, from_instants, pick_label, weeks

LABELS = {days(-1): "Yesterday", days(0): "Today", days(1): "Tomorrow"}


class TestPickLabel:
    """Selection rules."""

    def test_exact_match(self) -> None:
        assert pick_label(LABELS, days(0)) == "Today"
        assert pick_label(LABELS, days(-1)) == "Yesterday"

    def test_default_when_nothing_matches(self) -> None:
        assert pick_label(LABELS, days(5), "Other") == "Other"

    def test_none_without_default(self) -> None:
        assert pick_label(LABELS, days(5)) is None

    def test_finer_key_wins(self) -> None:
        """days(0) and weeks(0) collide as dict keys, so pass pairs."""
        candidates = [(weeks(0), "This week"), (days(0), "Today")]
        same_day = from_instants(datetime(2024, 5, 15, 9), datetime(2024, 5, 15, 17))
        assert pick_label(candidates, same_day) == "Today"

    def test_coarser_key_when_finer_fails(self) -> None:
        candidates = [(weeks(0), "This week"), (days(0), "Today")]
        later_this_week = from_instants(datetime(2024, 5, 13), datetime(2024, 5, 15))
        assert pick_label(candidates, later_this_week) == "This week"

    def test_ties_keep_first_candidate(self) -> None:
        assert pick_label([(days(0), "A"), (days(0), "B")], days(0)) == "A"

    def test_empty_key_matches_anything_last(self) -> None:
        candidates = [(ComponentMap({}), "Any"), (days(0), "Today")]
        assert pick_label(candidates, days(3)) == "Any"
        assert pick_label(candidates, days(0)) == "Today"

    def test_multi_field_key(self) -> None:
        key = from_components(year=0, month=0)
        pair = from_instants(datetime(2024, 5, 1), datetime(2024, 5, 30))
        assert pick_label([(key, "This month")], pair) == "This month"

    def test_week_rules_are_forwarded(self) -> None:
        """Sunday -> Monday is the same US week but a new ISO week."""
        pair = from_instants(datetime(2024, 5, 12), datetime(2024, 5, 13))
        candidates = [(weeks(0), "Same week")]
        assert pick_label(candidates, pair, "Other") == "Other"
        assert pick_label(candidates, pair, "Other", first_weekday=6) == "Same week"

    def test_accepts_any_representation(self) -> None:
        assert pick_label(LABELS, from_components(day=1)) == "Tomorrow"
