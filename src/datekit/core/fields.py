"""Calendar field tables: ordering, neighbours and nominal lengths.

Every table is hand-maintained and keyed by ``FieldKind``; nothing is
derived by iterating enum members, so adding a kind forces an explicit
decision in each table (``_check_tables`` enforces completeness at import).

Nominal lengths are fixed-second approximations (a month is 1/12 of a mean
Gregorian year). They support coarse ordering and the precision-loss tier
of the duration algebra; real arithmetic goes through
``datekit.core.arithmetic``.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from datekit.constants import (
    DAYS_PER_WEEK,
    DAYS_PER_YEAR,
    MONTHS_PER_QUARTER,
    MONTHS_PER_YEAR,
    NANOSECONDS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from datekit.enums import FieldKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Tables
    "FIELD_ORDER",
    "MINIMAL_FIELDS",
    "COUNTABLE_FIELDS",
    # Ordering
    "field_rank",
    "is_finer",
    "finest",
    "sorted_fields",
    # Neighbours
    "smaller",
    "larger",
    "all_larger",
    # Nominal lengths
    "nominal_seconds",
    "convert",
]

# ============================================================================
# ORDER
# ============================================================================

# Finest to coarsest. Used for tie-breaking and containment checks.
FIELD_ORDER: tuple[FieldKind, ...] = (
    FieldKind.NANOSECOND,
    FieldKind.SECOND,
    FieldKind.MINUTE,
    FieldKind.HOUR,
    FieldKind.DAY,
    FieldKind.WEEKDAY,
    FieldKind.WEEKDAY_ORDINAL,
    FieldKind.WEEK_OF_MONTH,
    FieldKind.WEEK_OF_YEAR,
    FieldKind.MONTH,
    FieldKind.QUARTER,
    FieldKind.YEAR,
    FieldKind.YEAR_FOR_WEEK_OF_YEAR,
    FieldKind.TIMEZONE,
    FieldKind.CALENDAR,
    FieldKind.ERA,
)

_RANK: dict[FieldKind, int] = {kind: index for index, kind in enumerate(FIELD_ORDER)}

# Fields that fully determine a wall-clock instant.
MINIMAL_FIELDS: tuple[FieldKind, ...] = (
    FieldKind.YEAR,
    FieldKind.MONTH,
    FieldKind.DAY,
    FieldKind.HOUR,
    FieldKind.MINUTE,
    FieldKind.SECOND,
    FieldKind.NANOSECOND,
)

# ============================================================================
# NEIGHBOURS
# ============================================================================

_SMALLER: dict[FieldKind, FieldKind | None] = {
    FieldKind.ERA: FieldKind.YEAR,
    FieldKind.YEAR: FieldKind.MONTH,
    FieldKind.QUARTER: FieldKind.MONTH,
    FieldKind.MONTH: FieldKind.DAY,
    FieldKind.WEEK_OF_YEAR: FieldKind.DAY,
    FieldKind.WEEK_OF_MONTH: FieldKind.DAY,
    FieldKind.DAY: FieldKind.HOUR,
    FieldKind.WEEKDAY: FieldKind.HOUR,
    FieldKind.WEEKDAY_ORDINAL: FieldKind.HOUR,
    FieldKind.HOUR: FieldKind.MINUTE,
    FieldKind.MINUTE: FieldKind.SECOND,
    FieldKind.SECOND: FieldKind.NANOSECOND,
    FieldKind.NANOSECOND: None,
    FieldKind.YEAR_FOR_WEEK_OF_YEAR: FieldKind.WEEK_OF_YEAR,
    FieldKind.TIMEZONE: None,
    FieldKind.CALENDAR: None,
}

_LARGER: dict[FieldKind, FieldKind | None] = {
    FieldKind.ERA: None,
    FieldKind.YEAR: FieldKind.ERA,
    FieldKind.QUARTER: FieldKind.YEAR,
    FieldKind.MONTH: FieldKind.YEAR,
    FieldKind.WEEK_OF_YEAR: FieldKind.YEAR_FOR_WEEK_OF_YEAR,
    FieldKind.WEEK_OF_MONTH: FieldKind.MONTH,
    FieldKind.DAY: FieldKind.MONTH,
    FieldKind.WEEKDAY: FieldKind.DAY,
    FieldKind.WEEKDAY_ORDINAL: FieldKind.DAY,
    FieldKind.HOUR: FieldKind.DAY,
    FieldKind.MINUTE: FieldKind.HOUR,
    FieldKind.SECOND: FieldKind.MINUTE,
    FieldKind.NANOSECOND: FieldKind.SECOND,
    FieldKind.YEAR_FOR_WEEK_OF_YEAR: FieldKind.ERA,
    FieldKind.TIMEZONE: None,
    FieldKind.CALENDAR: None,
}

# ============================================================================
# NOMINAL LENGTHS
# ============================================================================

_YEAR_SECONDS: float = DAYS_PER_YEAR * SECONDS_PER_DAY
_MONTH_SECONDS: float = _YEAR_SECONDS / MONTHS_PER_YEAR
_WEEK_SECONDS: int = DAYS_PER_WEEK * SECONDS_PER_DAY

# None: length depends on the calendar or is not a duration at all.
_NOMINAL_SECONDS: dict[FieldKind, float | None] = {
    FieldKind.ERA: None,
    FieldKind.YEAR: _YEAR_SECONDS,
    FieldKind.QUARTER: MONTHS_PER_QUARTER * _MONTH_SECONDS,
    FieldKind.MONTH: _MONTH_SECONDS,
    FieldKind.WEEK_OF_YEAR: float(_WEEK_SECONDS),
    FieldKind.WEEK_OF_MONTH: float(_WEEK_SECONDS),
    FieldKind.DAY: float(SECONDS_PER_DAY),
    FieldKind.WEEKDAY: float(SECONDS_PER_DAY),
    FieldKind.WEEKDAY_ORDINAL: float(SECONDS_PER_DAY),
    FieldKind.HOUR: float(SECONDS_PER_HOUR),
    FieldKind.MINUTE: float(SECONDS_PER_MINUTE),
    FieldKind.SECOND: 1.0,
    FieldKind.NANOSECOND: 1.0 / NANOSECONDS_PER_SECOND,
    FieldKind.YEAR_FOR_WEEK_OF_YEAR: _YEAR_SECONDS,
    FieldKind.TIMEZONE: None,
    FieldKind.CALENDAR: None,
}

# Kinds that measure an amount of time (have a nominal length), finest first.
COUNTABLE_FIELDS: tuple[FieldKind, ...] = tuple(
    kind for kind in FIELD_ORDER if _NOMINAL_SECONDS[kind] is not None
)


def _check_tables() -> None:
    """Fail fast if a FieldKind is missing from any table."""
    expected = set(FieldKind)
    for name, table in (
        ("FIELD_ORDER", dict.fromkeys(FIELD_ORDER)),
        ("_SMALLER", _SMALLER),
        ("_LARGER", _LARGER),
        ("_NOMINAL_SECONDS", _NOMINAL_SECONDS),
    ):
        missing = expected - set(table)
        if missing or len(table) != len(expected):
            msg = f"{name} does not cover every FieldKind: missing {sorted(missing)}"
            raise RuntimeError(msg)


_check_tables()


# ============================================================================
# ORDERING
# ============================================================================


def field_rank(kind: FieldKind) -> int:
    """Position of ``kind`` in FIELD_ORDER (0 = nanosecond, finest)."""
    return _RANK[FieldKind(kind)]


def is_finer(lhs: FieldKind, rhs: FieldKind) -> bool:
    """Return True if ``lhs`` is strictly finer-grained than ``rhs``.

    Example:
        >>> is_finer(FieldKind.DAY, FieldKind.MONTH)
        True
    """
    return field_rank(lhs) < field_rank(rhs)


def finest(kinds: Iterable[FieldKind]) -> FieldKind | None:
    """Return the finest-grained kind in ``kinds`` (None when empty)."""
    return min(kinds, key=field_rank, default=None)


def sorted_fields(kinds: Iterable[FieldKind], *, reverse: bool = False) -> list[FieldKind]:
    """Sort kinds finest first (coarsest first with ``reverse=True``)."""
    return sorted({FieldKind(kind) for kind in kinds}, key=field_rank, reverse=reverse)


# ============================================================================
# NEIGHBOURS
# ============================================================================


def smaller(kind: FieldKind) -> FieldKind | None:
    """Next finer field that subdivides ``kind`` (None for the finest)."""
    return _SMALLER[FieldKind(kind)]


def larger(kind: FieldKind) -> FieldKind | None:
    """Next coarser field that contains ``kind`` (None at the top)."""
    return _LARGER[FieldKind(kind)]


def all_larger(kind: FieldKind) -> tuple[FieldKind, ...]:
    """Chain of containing fields, nearest first.

    Example:
        >>> all_larger(FieldKind.DAY)
        (<FieldKind.MONTH: 'month'>, <FieldKind.YEAR: 'year'>, <FieldKind.ERA: 'era'>)
    """
    chain: list[FieldKind] = []
    current = larger(kind)
    while current is not None:
        chain.append(current)
        current = larger(current)
    return tuple(chain)


# ============================================================================
# NOMINAL LENGTHS
# ============================================================================


def nominal_seconds(kind: FieldKind) -> float | None:
    """Approximate length of one ``kind`` unit in seconds.

    Returns None for kinds without a fixed length (era, timezone, calendar).
    The value is non-authoritative: a nominal month is 30.436875 days.
    """
    return _NOMINAL_SECONDS[FieldKind(kind)]


def convert(value: float, source: FieldKind, target: FieldKind) -> float:
    """Convert ``value`` units of ``source`` into units of ``target``.

    Uses nominal lengths. A source without a nominal length converts to
    0.0 (it contributes no elapsed time); a target without one yields 0.0
    as well, since no amount of time is expressible in it.

    Example:
        >>> convert(2, FieldKind.WEEK_OF_YEAR, FieldKind.DAY)
        14.0
    """
    source_seconds = nominal_seconds(source)
    target_seconds = nominal_seconds(target)
    if source_seconds is None or target_seconds is None:
        return 0.0
    return value * source_seconds / target_seconds
