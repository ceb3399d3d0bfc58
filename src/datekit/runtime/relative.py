"""RelativeDateFormat: pick a pattern by the distance to a reference date.

    >>> fmt = (
    ...     RelativeDateFormat(DateFormat("dd.MM.yyyy"))
    ...     .at(days(-1), "'Yesterday'")
    ...     .at(days(0), "'Today'")
    ...     .at(weeks(0), DateFormat.of(FieldKind.WEEKDAY))
    ...     .at(years(0), "dd.MM")
    ... )

Rules are kept as ordered (key, pattern) pairs and resolved with
``pick_label``: the most specific matching key wins, so "Today" beats
"same week" for the current day.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from datekit.duration import ComponentMap, from_components, pick_label
from datekit.enums import FieldKind
from datekit.syntax import DateFormat

if TYPE_CHECKING:
    from .calendar_context import CalendarContext

__all__ = ["RelativeDateFormat"]


def _as_format(pattern: DateFormat | str) -> DateFormat:
    return pattern if isinstance(pattern, DateFormat) else DateFormat(pattern)


@dataclass(frozen=True, slots=True)
class RelativeDateFormat:
    """Default pattern plus relative overrides.

    Attributes:
        default: Pattern used when no rule matches
        rules: Ordered (key, pattern) pairs; earlier rules win ties
    """

    default: DateFormat
    rules: tuple[tuple[ComponentMap, DateFormat], ...] = ()

    def __post_init__(self) -> None:
        """Accept a pattern string as the default."""
        object.__setattr__(self, "default", _as_format(self.default))

    def at(
        self,
        key: ComponentMap | Mapping[FieldKind, int],
        pattern: DateFormat | str,
    ) -> RelativeDateFormat:
        """Return a copy with one more rule.

        Args:
            key: Difference to match (e.g. ``days(0)``)
            pattern: Pattern rendered when the key matches

        Returns:
            New RelativeDateFormat
        """
        rule_key = key if isinstance(key, ComponentMap) else from_components(key)
        return RelativeDateFormat(self.default, (*self.rules, (rule_key, _as_format(pattern))))

    def kinds(self) -> tuple[FieldKind, ...]:
        """Fields mentioned by any rule key, in first-seen order."""
        seen: dict[FieldKind, None] = {}
        for key, _ in self.rules:
            seen.update(dict.fromkeys(key.magnitudes))
        return tuple(seen)

    def select(
        self,
        instant: datetime,
        relative_to: datetime,
        context: CalendarContext,
    ) -> DateFormat:
        """Pattern for ``instant`` seen from ``relative_to``.

        The difference is counted in calendar boundaries in the context's
        time zone and week rules, so 23:59 yesterday is ``days(-1)``.
        """
        if not self.rules:
            return self.default
        difference = context.difference(relative_to, instant, self.kinds())
        selected = pick_label(
            self.rules,
            difference,
            self.default,
            first_weekday=context.first_weekday,
            min_week_days=context.min_week_days,
        )
        return selected if selected is not None else self.default

    def format(
        self,
        instant: datetime,
        relative_to: datetime,
        context: CalendarContext,
    ) -> str:
        """Render ``instant`` with the selected pattern."""
        return context.format(instant, self.select(instant, relative_to, context))
