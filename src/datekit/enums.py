"""Enumerations for datekit type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class FieldKind(StrEnum):
    """Calendar field granularity.

    Closed enumeration; ordering, neighbours and nominal lengths live in
    explicit tables in ``datekit.core.fields``.

    StrEnum provides automatic string conversion: str(FieldKind.DAY) == "day"
    """

    ERA = "era"
    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"
    WEEK_OF_YEAR = "week_of_year"
    WEEK_OF_MONTH = "week_of_month"
    DAY = "day"
    WEEKDAY = "weekday"
    WEEKDAY_ORDINAL = "weekday_ordinal"
    """Ordinal of the weekday within the month (2nd Tuesday -> 2)"""

    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    NANOSECOND = "nanosecond"
    YEAR_FOR_WEEK_OF_YEAR = "year_for_week_of_year"
    TIMEZONE = "timezone"
    CALENDAR = "calendar"


class FieldStyle(StrEnum):
    """Verbosity at which a calendar field is rendered in a pattern.

    StrEnum provides automatic string conversion: str(FieldStyle.SHORT) == "short"
    """

    SHORT = "short"
    """Minimal numeric form: M -> 1"""

    FULL = "full"
    """Zero-padded numeric form: MM -> 01"""

    SPELL_OUT = "spell_out"
    """Full name: MMMM -> January"""

    ABBREVIATED = "abbreviated"
    """Abbreviated name: MMM -> Jan"""

    NARROW = "narrow"
    """Narrow name: MMMMM -> J"""


class Weekday(IntEnum):
    """Weekday numbering used by ``FieldKind.WEEKDAY`` (1 = Sunday)."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @classmethod
    def from_python(cls, weekday: int) -> "Weekday":
        """Convert ``datetime.weekday()`` (0 = Monday) to a Weekday."""
        return cls((weekday + 1) % 7 + 1)

    def to_python(self) -> int:
        """Convert to ``datetime.weekday()`` numbering (0 = Monday)."""
        return (self.value - 2) % 7

    def __str__(self) -> str:
        return self.name.lower()


__all__ = [
    "FieldKind",
    "FieldStyle",
    "Weekday",
]
