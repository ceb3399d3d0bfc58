"""DatesCollection: lazy, random-access sequence of stepped instants.

Element ``i`` is ``start`` shifted by ``i * step`` units of ``kind``,
computed directly from ``start`` rather than by repeated addition, so
month stepping from Jan 31 yields Feb 29, Mar 31, Apr 30 (no drift).

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, overload

from datekit.duration import ComponentMap
from datekit.enums import FieldKind

if TYPE_CHECKING:
    from .calendar_context import CalendarContext

__all__ = ["DatesCollection"]


class DatesCollection(Sequence[datetime]):
    """Immutable sequence of ``count`` instants stepped by ``step`` ``kind`` units.

    Attributes:
        start: First element
        count: Number of elements (``len()``)
        kind: Field stepped by
        step: Units of ``kind`` between consecutive elements (non-zero)
        context: CalendarContext performing the shifts

    Example:
        >>> ctx = CalendarContext.create("en-US", "UTC")
        >>> months = DatesCollection(ctx.date(2024, 1, 31), 3, FieldKind.MONTH, 1, ctx)
        >>> [d.day for d in months]
        [31, 29, 31]
    """

    __slots__ = ("_context", "_count", "_kind", "_start", "_step")

    def __init__(
        self,
        start: datetime,
        count: int,
        kind: FieldKind,
        step: int,
        context: CalendarContext,
    ) -> None:
        if count < 0:
            msg = f"DatesCollection count must be >= 0, got {count}"
            raise ValueError(msg)
        if step == 0:
            msg = "DatesCollection step must be non-zero"
            raise ValueError(msg)
        self._start = start
        self._count = count
        self._kind = FieldKind(kind)
        self._step = step
        self._context = context

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def kind(self) -> FieldKind:
        return self._kind

    @property
    def step(self) -> int:
        return self._step

    @property
    def context(self) -> CalendarContext:
        return self._context

    def _element(self, position: int) -> datetime:
        offset = ComponentMap({self._kind: position * self._step})
        return self._context.add(self._start, offset)

    def __len__(self) -> int:
        return self._count

    @overload
    def __getitem__(self, index: int) -> datetime: ...

    @overload
    def __getitem__(self, index: slice) -> list[datetime]: ...

    def __getitem__(self, index: int | slice) -> datetime | list[datetime]:
        if isinstance(index, slice):
            return [self._element(i) for i in range(*index.indices(self._count))]
        position = index + self._count if index < 0 else index
        if not 0 <= position < self._count:
            msg = "DatesCollection index out of range"
            raise IndexError(msg)
        return self._element(position)

    def __iter__(self) -> Iterator[datetime]:
        for position in range(self._count):
            yield self._element(position)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DatesCollection):
            return NotImplemented
        return (
            self._start == other._start
            and self._count == other._count
            and self._kind is other._kind
            and self._step == other._step
            and self._context is other._context
        )

    def __hash__(self) -> int:
        return hash((self._start, self._count, self._kind, self._step))

    def __repr__(self) -> str:
        return (
            f"DatesCollection(start={self._start.isoformat()}, count={self._count}, "
            f"kind={self._kind.value}, step={self._step})"
        )

    def to_list(self) -> list[datetime]:
        """Materialize every element."""
        return list(self)
