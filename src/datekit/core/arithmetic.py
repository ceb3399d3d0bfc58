"""Calendar arithmetic on ``datetime`` instants.

Thin layer over stdlib ``datetime`` and ``dateutil.relativedelta``: every
variable-length computation (month lengths, leap years, clamping Jan 31 +
1 month to Feb 28/29) is delegated to relativedelta.

Conventions:
    - Calendar fields (years, quarters, months, weeks, days) move the
      wall clock: adding a day across a DST change keeps the local time.
    - Clock fields (hours, minutes, seconds, nanoseconds) add absolute
      elapsed time.
    - Week boundaries follow ``first_weekday`` (0 = Monday, as in
      ``datetime.weekday()``) and ``min_week_days`` (CLDR rule for the
      first week of a year). Defaults are ISO 8601.
    - Instants carry microsecond resolution; nanosecond magnitudes are
      truncated toward zero.

Python 3.13+. Uses python-dateutil.
"""

import logging
from collections.abc import Mapping
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from dateutil.relativedelta import relativedelta

from datekit.constants import (
    DAYS_PER_WEEK,
    MONTHS_PER_QUARTER,
    MONTHS_PER_YEAR,
    NANOSECONDS_PER_MICROSECOND,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from datekit.enums import FieldKind

__all__ = [
    "add_elapsed",
    "count_between",
    "div_toward_zero",
    "elapsed_delta",
    "elapsed_seconds",
    "end_of",
    "shift",
    "start_of",
    "week_year",
    "week_year_start",
]

logger = logging.getLogger(__name__)

_ISO_FIRST_WEEKDAY: int = 0
_ISO_MIN_WEEK_DAYS: int = 4
_MICROSECOND: timedelta = timedelta(microseconds=1)

# Kinds that are labels rather than amounts of time.
_NON_DURATION_KINDS: frozenset[FieldKind] = frozenset(
    {FieldKind.ERA, FieldKind.TIMEZONE, FieldKind.CALENDAR}
)


def div_toward_zero(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def elapsed_delta(start: datetime, end: datetime) -> timedelta:
    """Elapsed physical time from ``start`` to ``end``.

    Aware instants are compared on the UTC timeline (Python's own
    subtraction uses wall-clock time when both share a tzinfo object).
    Mixing naive and aware instants raises TypeError, as datetime does.
    """
    return _utc(end) - _utc(start)


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Elapsed physical seconds from ``start`` to ``end`` (see ``elapsed_delta``)."""
    return elapsed_delta(start, end).total_seconds()


def add_elapsed(instant: datetime, delta: timedelta) -> datetime:
    """Add absolute elapsed time, preserving the instant's time zone."""
    if instant.tzinfo is None:
        return instant + delta
    return (instant.astimezone(UTC) + delta).astimezone(instant.tzinfo)


def shift(instant: datetime, magnitudes: Mapping[FieldKind, int]) -> datetime:
    """Move ``instant`` by a symbolic amount of calendar fields.

    Args:
        instant: Starting point
        magnitudes: Signed amount per field kind. Era, timezone and calendar
            entries are ignored (they are not amounts of time).

    Returns:
        The shifted instant, in the same time zone

    Example:
        >>> shift(datetime(2024, 1, 31), {FieldKind.MONTH: 1})
        datetime.datetime(2024, 2, 29, 0, 0)
    """
    amounts = {FieldKind(kind): int(value) for kind, value in magnitudes.items()}
    ignored = [kind for kind in amounts if kind in _NON_DURATION_KINDS and amounts[kind]]
    if ignored:
        logger.debug("Ignoring non-duration fields while shifting: %s", ignored)

    def amount(kind: FieldKind) -> int:
        return amounts.get(kind, 0)

    calendar_part = relativedelta(
        years=amount(FieldKind.YEAR) + amount(FieldKind.YEAR_FOR_WEEK_OF_YEAR),
        months=amount(FieldKind.MONTH) + MONTHS_PER_QUARTER * amount(FieldKind.QUARTER),
        weeks=amount(FieldKind.WEEK_OF_YEAR) + amount(FieldKind.WEEK_OF_MONTH),
        days=(
            amount(FieldKind.DAY)
            + amount(FieldKind.WEEKDAY)
            + amount(FieldKind.WEEKDAY_ORDINAL)
        ),
    )
    clock_part = timedelta(
        hours=amount(FieldKind.HOUR),
        minutes=amount(FieldKind.MINUTE),
        seconds=amount(FieldKind.SECOND),
        microseconds=div_toward_zero(amount(FieldKind.NANOSECOND), NANOSECONDS_PER_MICROSECOND),
    )
    shifted = instant + calendar_part
    if clock_part:
        shifted = add_elapsed(shifted, clock_part)
    return shifted


# ============================================================================
# WEEK-BASED YEAR
# ============================================================================


def week_year_start(
    year: int,
    zone: tzinfo | None = None,
    *,
    first_weekday: int = _ISO_FIRST_WEEKDAY,
    min_week_days: int = _ISO_MIN_WEEK_DAYS,
) -> datetime:
    """Midnight starting week 1 of the week-based ``year``.

    Week 1 is the first week (starting on ``first_weekday``) that has at
    least ``min_week_days`` days in ``year``.
    """
    january_first = date(year, 1, 1)
    offset = (january_first.weekday() - first_weekday) % DAYS_PER_WEEK
    first_week = january_first - timedelta(days=offset)
    if DAYS_PER_WEEK - offset < min_week_days:
        first_week += timedelta(days=DAYS_PER_WEEK)
    return datetime.combine(first_week, time(), tzinfo=zone)


def week_year(
    instant: datetime,
    *,
    first_weekday: int = _ISO_FIRST_WEEKDAY,
    min_week_days: int = _ISO_MIN_WEEK_DAYS,
) -> int:
    """Week-based year containing ``instant`` (ISO 8601 by default)."""
    rules = {"first_weekday": first_weekday, "min_week_days": min_week_days}
    day = instant.date()
    year = day.year
    if day < week_year_start(year, **rules).date():
        return year - 1
    if day >= week_year_start(year + 1, **rules).date():
        return year + 1
    return year


# ============================================================================
# PERIOD BOUNDARIES
# ============================================================================


def _midnight(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of(
    instant: datetime,
    kind: FieldKind,
    *,
    first_weekday: int = _ISO_FIRST_WEEKDAY,
    min_week_days: int = _ISO_MIN_WEEK_DAYS,
) -> datetime:
    """First instant of the ``kind`` period containing ``instant``.

    Raises:
        ValueError: For timezone and calendar, which are not periods
    """
    match FieldKind(kind):
        case FieldKind.NANOSECOND:
            return instant
        case FieldKind.SECOND:
            return instant.replace(microsecond=0)
        case FieldKind.MINUTE:
            return instant.replace(second=0, microsecond=0)
        case FieldKind.HOUR:
            return instant.replace(minute=0, second=0, microsecond=0)
        case FieldKind.DAY | FieldKind.WEEKDAY | FieldKind.WEEKDAY_ORDINAL:
            return _midnight(instant)
        case FieldKind.WEEK_OF_YEAR | FieldKind.WEEK_OF_MONTH:
            day = _midnight(instant)
            offset = (day.weekday() - first_weekday) % DAYS_PER_WEEK
            return day - timedelta(days=offset)
        case FieldKind.MONTH:
            return _midnight(instant).replace(day=1)
        case FieldKind.QUARTER:
            first_month = MONTHS_PER_QUARTER * ((instant.month - 1) // MONTHS_PER_QUARTER) + 1
            return _midnight(instant).replace(month=first_month, day=1)
        case FieldKind.YEAR:
            return _midnight(instant).replace(month=1, day=1)
        case FieldKind.YEAR_FOR_WEEK_OF_YEAR:
            year = week_year(instant, first_weekday=first_weekday, min_week_days=min_week_days)
            return week_year_start(
                year,
                instant.tzinfo,
                first_weekday=first_weekday,
                min_week_days=min_week_days,
            )
        case FieldKind.ERA:
            return _midnight(instant).replace(year=1, month=1, day=1)
        case _:
            msg = f"'{kind}' does not denote a calendar period"
            raise ValueError(msg)


def end_of(
    instant: datetime,
    kind: FieldKind,
    *,
    first_weekday: int = _ISO_FIRST_WEEKDAY,
    min_week_days: int = _ISO_MIN_WEEK_DAYS,
) -> datetime:
    """Last representable instant (microsecond) of the ``kind`` period.

    Raises:
        ValueError: For timezone and calendar, which are not periods
    """
    kind = FieldKind(kind)
    rules = {"first_weekday": first_weekday, "min_week_days": min_week_days}
    start = start_of(instant, kind, **rules)
    match kind:
        case FieldKind.NANOSECOND:
            return instant
        case FieldKind.ERA:
            return datetime.max.replace(tzinfo=instant.tzinfo)
        case FieldKind.YEAR_FOR_WEEK_OF_YEAR:
            year = week_year(instant, **rules)
            following = week_year_start(year + 1, instant.tzinfo, **rules)
        case FieldKind.DAY | FieldKind.WEEKDAY | FieldKind.WEEKDAY_ORDINAL:
            following = start + relativedelta(days=1)
        case FieldKind.WEEK_OF_YEAR | FieldKind.WEEK_OF_MONTH:
            following = start + relativedelta(weeks=1)
        case FieldKind.MONTH:
            following = start + relativedelta(months=1)
        case FieldKind.QUARTER:
            following = start + relativedelta(months=MONTHS_PER_QUARTER)
        case FieldKind.YEAR:
            following = start + relativedelta(years=1)
        case FieldKind.HOUR:
            following = start + timedelta(hours=1)
        case FieldKind.MINUTE:
            following = start + timedelta(minutes=1)
        case _:
            following = start + timedelta(seconds=1)
    return following - timedelta(microseconds=1)


# ============================================================================
# COUNTING
# ============================================================================


def count_between(
    kind: FieldKind,
    start: datetime,
    end: datetime,
    *,
    first_weekday: int = _ISO_FIRST_WEEKDAY,
    min_week_days: int = _ISO_MIN_WEEK_DAYS,
) -> int:
    """Number of ``kind`` boundaries crossed going from ``start`` to ``end``.

    Both instants are truncated to the start of their ``kind`` period
    before counting, so 23:59 yesterday and 00:01 today are one day apart.
    Negative when ``end`` precedes ``start``. Era always counts 0.

    Raises:
        ValueError: For timezone and calendar, which are not periods

    Example:
        >>> count_between(FieldKind.DAY, datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 2, 0, 1))
        1
    """
    kind = FieldKind(kind)
    rules = {"first_weekday": first_weekday, "min_week_days": min_week_days}
    if kind is FieldKind.ERA:
        return 0
    lower = start_of(start, kind, **rules)
    upper = start_of(end, kind, **rules)

    match kind:
        case FieldKind.YEAR:
            return upper.year - lower.year
        case FieldKind.YEAR_FOR_WEEK_OF_YEAR:
            return week_year(end, **rules) - week_year(start, **rules)
        case FieldKind.MONTH | FieldKind.QUARTER:
            months = (upper.year - lower.year) * MONTHS_PER_YEAR + (upper.month - lower.month)
            if kind is FieldKind.QUARTER:
                return div_toward_zero(months, MONTHS_PER_QUARTER)
            return months
        case FieldKind.WEEK_OF_YEAR | FieldKind.WEEK_OF_MONTH:
            days = (upper.date() - lower.date()).days
            return div_toward_zero(days, DAYS_PER_WEEK)
        case FieldKind.DAY | FieldKind.WEEKDAY | FieldKind.WEEKDAY_ORDINAL:
            return (upper.date() - lower.date()).days
        case FieldKind.HOUR:
            return int(elapsed_seconds(lower, upper) / SECONDS_PER_HOUR)
        case FieldKind.MINUTE:
            return int(elapsed_seconds(lower, upper) / SECONDS_PER_MINUTE)
        case FieldKind.SECOND:
            return int(elapsed_seconds(lower, upper))
        case _:
            return (elapsed_delta(lower, upper) // _MICROSECOND) * NANOSECONDS_PER_MICROSECOND


def _utc(instant: datetime) -> datetime:
    return instant if instant.tzinfo is None else instant.astimezone(UTC)
