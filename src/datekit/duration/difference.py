"""DateDifference: symbolic, elapsed and instant-anchored durations.

Three immutable representations share one algebra:

    Seconds(value)          elapsed time, calendar independent
    InstantPair(start, end) anchored to two concrete instants
    ComponentMap({...})     symbolic ("+1 month, -1 day")

Binary operations (``+``, ``-``):
    ComponentMap with ComponentMap -> ComponentMap (key union, no loss)
    Seconds with Seconds           -> Seconds
    InstantPair with Seconds       -> InstantPair re-anchored at its start
    anything else                  -> Seconds of the projected values

The last row is a precision-loss tier: once a symbolic amount is mixed
with an anchored or unit-less one, "a month" becomes its nominal length
(1/12 of a mean Gregorian year). This is logged at DEBUG.

Comparisons:
    InstantPair with InstantPair -> elapsed seconds
    InstantPair with other       -> the other operand is applied to the
                                    pair's start and the resulting elapsed
                                    times are compared (calendar exact);
                                    projected seconds if that leaves the
                                    datetime range
    otherwise                    -> projected seconds (approximate)

Python 3.13+. Uses python-dateutil (through datekit.core.arithmetic).
"""

import functools
import logging
import operator
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from types import MappingProxyType

from datekit.core.arithmetic import (
    add_elapsed,
    count_between,
    div_toward_zero,
    elapsed_delta,
    elapsed_seconds,
    shift,
)
from datekit.core.fields import COUNTABLE_FIELDS, nominal_seconds
from datekit.enums import FieldKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Representations
    "DateDifference",
    "Seconds",
    "InstantPair",
    "ComponentMap",
    # Constructors
    "from_seconds",
    "from_instants",
    "from_components",
    "eras",
    "years",
    "quarters",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "nanoseconds",
]

logger = logging.getLogger(__name__)

type _BinaryOp = Callable[[float, float], float]

_NOT_PERIODS: frozenset[FieldKind] = frozenset({FieldKind.TIMEZONE, FieldKind.CALENDAR})


def _coerce(value: object) -> "DateDifference | None":
    """Operand conversion: timedelta becomes Seconds, foreign types None."""
    if isinstance(value, DateDifference):
        return value
    if isinstance(value, timedelta):
        return Seconds(value.total_seconds())
    return None


def _anchored_seconds(pair: "InstantPair", other: "DateDifference") -> float:
    """Elapsed seconds of ``other`` applied at ``pair.start``.

    Falls back to the nominal projection when the shifted instant leaves
    the datetime range.
    """
    try:
        return elapsed_seconds(pair.start, other.added_to(pair.start))
    except (OverflowError, ValueError):
        logger.debug(
            "%s does not fit at %s; comparing nominal lengths",
            type(other).__name__,
            pair.start.isoformat(),
        )
        return other.total_seconds()


@functools.total_ordering
class DateDifference:
    """Base class of the three duration representations.

    Not instantiated directly; use ``from_seconds``, ``from_instants`` or
    ``from_components``.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def total_seconds(self) -> float:
        """Projection to elapsed seconds.

        Exact for Seconds and InstantPair. Approximate for ComponentMap,
        which sums nominal field lengths; use it for ordering only.
        """
        raise NotImplementedError

    def component(
        self,
        kind: FieldKind,
        *,
        first_weekday: int = 0,
        min_week_days: int = 4,
    ) -> int:
        """Integer amount of ``kind`` in this difference.

        Args:
            kind: Field to project onto
            first_weekday: First day of the week (0 = Monday) for week
                boundaries of anchored differences
            min_week_days: Days required in the first week of a year

        Returns:
            Truncated amount (toward zero). Fields that are not amounts of
            time (era, timezone, calendar) project to 0 unless a
            ComponentMap stores them explicitly.
        """
        raise NotImplementedError

    def to_components(
        self,
        kinds: Iterable[FieldKind] = COUNTABLE_FIELDS,
        *,
        first_weekday: int = 0,
        min_week_days: int = 4,
    ) -> "ComponentMap":
        """ComponentMap holding ``component(kind)`` for each requested kind.

        Each entry is an independent projection, not a decomposition: an
        InstantPair spanning 36 hours yields ``{day: 1, hour: 36}``.
        """
        return ComponentMap(
            {
                FieldKind(kind): self.component(
                    kind, first_weekday=first_weekday, min_week_days=min_week_days
                )
                for kind in kinds
            }
        )

    def added_to(self, instant: datetime) -> datetime:
        """Shift ``instant`` by this difference (same as ``instant + self``)."""
        raise NotImplementedError

    @property
    def years(self) -> int:
        """Projection onto years."""
        return self.component(FieldKind.YEAR)

    @property
    def quarters(self) -> int:
        """Projection onto quarters."""
        return self.component(FieldKind.QUARTER)

    @property
    def months(self) -> int:
        """Projection onto months."""
        return self.component(FieldKind.MONTH)

    @property
    def weeks(self) -> int:
        """Projection onto weeks."""
        return self.component(FieldKind.WEEK_OF_YEAR)

    @property
    def days(self) -> int:
        """Projection onto days."""
        return self.component(FieldKind.DAY)

    @property
    def hours(self) -> int:
        """Projection onto hours."""
        return self.component(FieldKind.HOUR)

    @property
    def minutes(self) -> int:
        """Projection onto minutes."""
        return self.component(FieldKind.MINUTE)

    @property
    def seconds(self) -> int:
        """Projection onto whole seconds."""
        return self.component(FieldKind.SECOND)

    @property
    def nanoseconds(self) -> int:
        """Projection onto nanoseconds."""
        return self.component(FieldKind.NANOSECOND)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _scale(self, factor: int, op: Callable[[int, int], float]) -> "DateDifference":
        raise NotImplementedError

    def _combine(self, other: "DateDifference", op: _BinaryOp) -> "DateDifference":
        match (self, other):
            case (ComponentMap(), ComponentMap()):
                return self._merge(other, op)
            case (Seconds(), Seconds()):
                return Seconds(op(self.value, other.value))
            case (InstantPair(), Seconds()):
                return self._reanchored(op(self.total_seconds(), other.value))
            case (Seconds(), InstantPair()):
                return other._reanchored(op(self.value, other.total_seconds()))
            case _:
                logger.debug(
                    "Combining %s with %s as elapsed seconds (nominal field lengths)",
                    type(self).__name__,
                    type(other).__name__,
                )
                return Seconds(op(self.total_seconds(), other.total_seconds()))

    def __add__(self, other: object) -> "DateDifference":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self._combine(coerced, operator.add)

    def __sub__(self, other: object) -> "DateDifference":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return self._combine(coerced, operator.sub)

    def __radd__(self, other: object) -> "DateDifference | datetime":
        if isinstance(other, datetime):
            return self.added_to(other)
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced._combine(self, operator.add)

    def __rsub__(self, other: object) -> "DateDifference | datetime":
        if isinstance(other, datetime):
            return (-self).added_to(other)
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced._combine(self, operator.sub)

    def __mul__(self, other: object) -> "DateDifference":
        if not isinstance(other, int):
            return NotImplemented
        return self._scale(other, operator.mul)

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "DateDifference":
        """Divide by an integer.

        ComponentMap magnitudes truncate toward zero; Seconds and
        InstantPair divide their elapsed time exactly. Dividing by zero
        raises ZeroDivisionError.
        """
        if not isinstance(other, int):
            return NotImplemented
        return self._scale(other, operator.truediv)

    def __neg__(self) -> "DateDifference":
        return self * -1

    def __pos__(self) -> "DateDifference":
        return self

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _comparable(self, other: object) -> tuple[float, float] | None:
        coerced = _coerce(other)
        if coerced is None:
            return None
        match (self, coerced):
            case (InstantPair(), InstantPair()):
                return self.total_seconds(), coerced.total_seconds()
            case (InstantPair(), _):
                return self.total_seconds(), _anchored_seconds(self, coerced)
            case (_, InstantPair()):
                return _anchored_seconds(coerced, self), coerced.total_seconds()
            case _:
                return self.total_seconds(), coerced.total_seconds()

    def __eq__(self, other: object) -> bool:
        pair = self._comparable(other)
        if pair is None:
            return NotImplemented
        return pair[0] == pair[1]

    def __lt__(self, other: object) -> bool:
        pair = self._comparable(other)
        if pair is None:
            return NotImplemented
        return pair[0] < pair[1]

    def __hash__(self) -> int:
        return hash(self.total_seconds())


# ============================================================================
# REPRESENTATIONS
# ============================================================================


@dataclass(frozen=True, slots=True, eq=False)
class Seconds(DateDifference):
    """Elapsed time in seconds, independent of any calendar.

    Attributes:
        value: Signed number of seconds
    """

    value: float

    def __post_init__(self) -> None:
        """Store the magnitude as float."""
        object.__setattr__(self, "value", float(self.value))

    def total_seconds(self) -> float:
        return self.value

    def component(
        self,
        kind: FieldKind,
        *,
        first_weekday: int = 0,
        min_week_days: int = 4,
    ) -> int:
        length = nominal_seconds(kind)
        if length is None:
            return 0
        return int(self.value / length)

    def added_to(self, instant: datetime) -> datetime:
        return add_elapsed(instant, timedelta(seconds=self.value))

    def _scale(self, factor: int, op: Callable[[int, int], float]) -> DateDifference:
        return Seconds(op(self.value, factor))  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True, eq=False)
class InstantPair(DateDifference):
    """Difference anchored to two instants.

    Component projections count calendar boundaries between the instants,
    so Jan 31 -> Mar 1 is 2 months even though it is only 30 days.

    Unhashable: its calendar-exact equality against symbolic values has
    no hash that could agree with it.

    Attributes:
        start: Earlier (or reference) instant
        end: Later (or target) instant
    """

    start: datetime
    end: datetime

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        """Validate both endpoints are datetimes of the same awareness."""
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            msg = "InstantPair endpoints must be datetime instances"
            raise ValueError(msg)
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            msg = "InstantPair endpoints must both be naive or both be aware"
            raise ValueError(msg)

    def total_seconds(self) -> float:
        return elapsed_seconds(self.start, self.end)

    def component(
        self,
        kind: FieldKind,
        *,
        first_weekday: int = 0,
        min_week_days: int = 4,
    ) -> int:
        kind = FieldKind(kind)
        if kind in _NOT_PERIODS:
            return 0
        return count_between(
            kind,
            self.start,
            self.end,
            first_weekday=first_weekday,
            min_week_days=min_week_days,
        )

    def added_to(self, instant: datetime) -> datetime:
        return add_elapsed(instant, elapsed_delta(self.start, self.end))

    def _reanchored(self, elapsed: float) -> "InstantPair":
        return InstantPair(self.start, add_elapsed(self.start, timedelta(seconds=elapsed)))

    def _scale(self, factor: int, op: Callable[[int, int], float]) -> DateDifference:
        return self._reanchored(op(self.total_seconds(), factor))  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class ComponentMap(DateDifference):
    """Symbolic difference: signed magnitude per calendar field.

    An absent key means "not specified", never zero. Arithmetic between two
    maps keeps the union of their keys, so zero entries only appear where
    an operand mentioned the field.

    Attributes:
        magnitudes: Read-only mapping FieldKind -> int

    Example:
        >>> (months(1) + days(-1)).magnitudes
        mappingproxy({<FieldKind.MONTH: 'month'>: 1, <FieldKind.DAY: 'day'>: -1})
    """

    magnitudes: Mapping[FieldKind, int]

    def __post_init__(self) -> None:
        """Freeze a normalized copy of the magnitudes."""
        frozen = MappingProxyType(
            {FieldKind(kind): int(value) for kind, value in self.magnitudes.items()}
        )
        object.__setattr__(self, "magnitudes", frozen)

    def __repr__(self) -> str:
        entries = ", ".join(f"{kind.value}={value}" for kind, value in self.magnitudes.items())
        return f"ComponentMap({entries})"

    def __contains__(self, kind: object) -> bool:
        return kind in self.magnitudes

    def get(self, kind: FieldKind, default: int | None = None) -> int | None:
        """Stored magnitude of ``kind``, or ``default`` when unspecified."""
        return self.magnitudes.get(FieldKind(kind), default)

    def total_seconds(self) -> float:
        total = 0.0
        for kind, value in self.magnitudes.items():
            length = nominal_seconds(kind)
            if length is not None:
                total += value * length
        return total

    def component(
        self,
        kind: FieldKind,
        *,
        first_weekday: int = 0,
        min_week_days: int = 4,
    ) -> int:
        kind = FieldKind(kind)
        if kind in self.magnitudes:
            return self.magnitudes[kind]
        length = nominal_seconds(kind)
        if length is None:
            return 0
        return int(self.total_seconds() / length)

    def added_to(self, instant: datetime) -> datetime:
        return shift(instant, self.magnitudes)

    def _merge(self, other: "ComponentMap", op: _BinaryOp) -> "ComponentMap":
        keys = dict.fromkeys((*self.magnitudes, *other.magnitudes))
        return ComponentMap(
            {
                kind: int(op(self.magnitudes.get(kind, 0), other.magnitudes.get(kind, 0)))
                for kind in keys
            }
        )

    def _scale(self, factor: int, op: Callable[[int, int], float]) -> DateDifference:
        if op is operator.truediv:
            return ComponentMap(
                {kind: div_toward_zero(value, factor) for kind, value in self.magnitudes.items()}
            )
        return ComponentMap({kind: value * factor for kind, value in self.magnitudes.items()})


# ============================================================================
# CONSTRUCTORS
# ============================================================================


def from_seconds(value: float) -> Seconds:
    """Elapsed-time difference.

    Example:
        >>> from_seconds(90).total_seconds()
        90.0
    """
    return Seconds(value)


def from_instants(start: datetime, end: datetime) -> InstantPair:
    """Difference anchored at ``start`` and ``end``."""
    return InstantPair(start, end)


def from_components(
    mapping: Mapping[FieldKind | str, int] | None = None,
    **fields: int,
) -> ComponentMap:
    """Symbolic difference from a mapping and/or keyword fields.

    Keyword names are FieldKind values (``day``, ``week_of_year``, ...).
    Keywords override mapping entries for the same field.

    Raises:
        ValueError: If a key is not a FieldKind

    Example:
        >>> from_components({FieldKind.YEAR: 1}, day=-1)
        ComponentMap(year=1, day=-1)
    """
    magnitudes: dict[FieldKind, int] = {}
    for kind, value in (mapping or {}).items():
        magnitudes[FieldKind(kind)] = value
    for name, value in fields.items():
        magnitudes[FieldKind(name)] = value
    return ComponentMap(magnitudes)


def eras(count: int) -> ComponentMap:
    """``count`` eras."""
    return ComponentMap({FieldKind.ERA: count})


def years(count: int) -> ComponentMap:
    """``count`` years."""
    return ComponentMap({FieldKind.YEAR: count})


def quarters(count: int) -> ComponentMap:
    """``count`` quarters."""
    return ComponentMap({FieldKind.QUARTER: count})


def months(count: int) -> ComponentMap:
    """``count`` months."""
    return ComponentMap({FieldKind.MONTH: count})


def weeks(count: int) -> ComponentMap:
    """``count`` weeks (stored under ``week_of_year``)."""
    return ComponentMap({FieldKind.WEEK_OF_YEAR: count})


def days(count: int) -> ComponentMap:
    """``count`` days."""
    return ComponentMap({FieldKind.DAY: count})


def hours(count: int) -> ComponentMap:
    """``count`` hours."""
    return ComponentMap({FieldKind.HOUR: count})


def minutes(count: int) -> ComponentMap:
    """``count`` minutes."""
    return ComponentMap({FieldKind.MINUTE: count})


def seconds(count: int) -> ComponentMap:
    """``count`` seconds as a symbolic field (see ``from_seconds`` for elapsed time)."""
    return ComponentMap({FieldKind.SECOND: count})


def nanoseconds(count: int) -> ComponentMap:
    """``count`` nanoseconds."""
    return ComponentMap({FieldKind.NANOSECOND: count})
