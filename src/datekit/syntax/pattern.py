"""DateFormat: immutable date pattern value.

Wraps a CLDR pattern string together with its token sequence and offers
construction from tokens, from calendar fields at a given style, and by
concatenation.

    >>> DateFormat.of(
    ...     (FieldKind.DAY, FieldStyle.FULL), ".",
    ...     (FieldKind.MONTH, FieldStyle.FULL), ".",
    ...     (FieldKind.YEAR, FieldStyle.FULL),
    ... ).pattern
    'dd.MM.yyyy'

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import ClassVar

from datekit.enums import FieldKind, FieldStyle

from .serializer import serialize
from .tokenizer import tokenize
from .tokens import FieldRun, FormatToken, QuotedLiteral, TextLiteral

__all__ = ["DateFormat", "field_run"]

# ============================================================================
# FIELD STYLE TABLE
# ============================================================================
#
# FieldKind -> FieldStyle -> (symbol, width). Every kind lists every style
# so a lookup never needs a default.

_S, _F, _SP, _AB, _N = (
    FieldStyle.SHORT,
    FieldStyle.FULL,
    FieldStyle.SPELL_OUT,
    FieldStyle.ABBREVIATED,
    FieldStyle.NARROW,
)

_WEEKDAY_RUNS: dict[FieldStyle, tuple[str, int]] = {
    _S: ("E", 1),
    _AB: ("E", 1),
    _F: ("E", 4),
    _SP: ("E", 4),
    _N: ("E", 5),
}

_ZONE_RUNS: dict[FieldStyle, tuple[str, int]] = {
    _S: ("Z", 1),
    _AB: ("Z", 5),
    _F: ("z", 4),
    _SP: ("z", 4),
    _N: ("z", 3),
}

_FIELD_RUNS: dict[FieldKind, dict[FieldStyle, tuple[str, int]]] = {
    FieldKind.ERA: {_S: ("G", 1), _N: ("G", 1), _AB: ("G", 3), _F: ("G", 4), _SP: ("G", 4)},
    FieldKind.YEAR: {_S: ("y", 2), _N: ("y", 2), _AB: ("y", 1), _F: ("y", 4), _SP: ("y", 4)},
    FieldKind.MONTH: {_S: ("M", 1), _F: ("M", 2), _AB: ("M", 3), _SP: ("M", 4), _N: ("M", 5)},
    FieldKind.DAY: {_S: ("d", 1), _F: ("d", 2), _AB: ("d", 2), _SP: ("d", 2), _N: ("d", 2)},
    FieldKind.HOUR: {_S: ("h", 1), _N: ("h", 1), _F: ("h", 2), _AB: ("H", 1), _SP: ("H", 2)},
    FieldKind.MINUTE: {_S: ("m", 1), _N: ("m", 1), _F: ("m", 2), _AB: ("m", 2), _SP: ("m", 2)},
    FieldKind.SECOND: {_S: ("s", 1), _F: ("s", 2), _AB: ("s", 2), _SP: ("s", 2), _N: ("s", 2)},
    FieldKind.WEEKDAY: _WEEKDAY_RUNS,
    FieldKind.WEEKDAY_ORDINAL: _WEEKDAY_RUNS,
    FieldKind.QUARTER: {_S: ("Q", 1), _F: ("Q", 3), _AB: ("Q", 3), _N: ("Q", 3), _SP: ("Q", 4)},
    FieldKind.WEEK_OF_MONTH: dict.fromkeys(FieldStyle, ("W", 1)),
    FieldKind.WEEK_OF_YEAR: {
        _S: ("w", 1), _N: ("w", 1), _F: ("w", 2), _AB: ("w", 2), _SP: ("w", 2),
    },
    FieldKind.YEAR_FOR_WEEK_OF_YEAR: {
        _S: ("Y", 2),
        _N: ("Y", 2),
        _AB: ("Y", 1),
        _F: ("Y", 4),
        _SP: ("Y", 4),
    },
    FieldKind.NANOSECOND: {_S: ("S", 3), _N: ("S", 3), _F: ("S", 4), _AB: ("S", 4), _SP: ("S", 4)},
    FieldKind.TIMEZONE: _ZONE_RUNS,
    FieldKind.CALENDAR: _ZONE_RUNS,
}


def field_run(kind: FieldKind, style: FieldStyle = FieldStyle.FULL) -> FieldRun:
    """Pattern run rendering ``kind`` at ``style``.

    Args:
        kind: Calendar field
        style: Rendering verbosity

    Returns:
        FieldRun for the field

    Example:
        >>> field_run(FieldKind.MONTH, FieldStyle.ABBREVIATED)
        FieldRun(symbol='M', width=3)
    """
    symbol, width = _FIELD_RUNS[FieldKind(kind)][FieldStyle(style)]
    return FieldRun(symbol, width)


type _Part = DateFormat | FormatToken | FieldKind | tuple[FieldKind, FieldStyle] | str


@dataclass(frozen=True, slots=True)
class DateFormat:
    """Immutable CLDR date pattern.

    Attributes:
        pattern: Pattern text (e.g., "yyyy-MM-dd")

    Equality compares pattern text, so two formats that differ only in
    quoting are distinct values even though they render identically.

    Example:
        >>> fmt = DateFormat("yyyy-MM-dd") + DateFormat(" HH:mm")
        >>> fmt.pattern
        'yyyy-MM-dd HH:mm'
    """

    ISO8601: ClassVar["DateFormat"]

    pattern: str
    _tokens: tuple[FormatToken, ...] = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Tokenize once; tokenizing is lenient so this never fails."""
        object.__setattr__(self, "_tokens", tokenize(self.pattern))

    def __str__(self) -> str:
        return self.pattern

    @property
    def tokens(self) -> tuple[FormatToken, ...]:
        """Token sequence of this pattern."""
        return self._tokens

    @classmethod
    def from_tokens(cls, tokens: Iterable[FormatToken]) -> "DateFormat":
        """Build a DateFormat from tokens.

        Example:
            >>> DateFormat.from_tokens([FieldRun("H", 2), TextLiteral("h")]).pattern
            "HH'h'"
        """
        return cls(serialize(tokens))

    @classmethod
    def of(cls, *parts: _Part) -> "DateFormat":
        """Build a DateFormat from a mix of parts.

        Args:
            *parts: Any of
                - DateFormat: its tokens are spliced in
                - FormatToken: used as-is
                - FieldKind: the field at FieldStyle.FULL
                - (FieldKind, FieldStyle): the field at that style
                - str: plain literal text (never interpreted as a pattern)

        Returns:
            New DateFormat

        Raises:
            TypeError: If a part has an unsupported type
        """
        tokens: list[FormatToken] = []
        for part in parts:
            tokens.extend(_part_tokens(part))
        return cls.from_tokens(tokens)

    @staticmethod
    def field(kind: FieldKind, style: FieldStyle = FieldStyle.FULL) -> FieldRun:
        """FieldRun for ``kind`` at ``style`` (see ``field_run``)."""
        return field_run(kind, style)

    def __add__(self, other: object) -> "DateFormat":
        if isinstance(other, DateFormat | TextLiteral | QuotedLiteral | FieldRun | str):
            return DateFormat.from_tokens((*self.tokens, *_part_tokens(other)))
        return NotImplemented

    def __radd__(self, other: object) -> "DateFormat":
        if isinstance(other, TextLiteral | QuotedLiteral | FieldRun | str):
            return DateFormat.from_tokens((*_part_tokens(other), *self.tokens))
        return NotImplemented


def _part_tokens(part: object) -> tuple[FormatToken, ...]:
    match part:
        case DateFormat():
            return part.tokens
        case TextLiteral() | QuotedLiteral() | FieldRun():
            return (part,)
        case FieldKind():
            return (field_run(part),)
        case (FieldKind() as kind, FieldStyle() as style):
            return (field_run(kind, style),)
        case str():
            return (TextLiteral(part),) if part else ()
        case _:
            msg = f"Cannot build a DateFormat from {type(part).__name__}"
            raise TypeError(msg)


DateFormat.ISO8601 = DateFormat.of(
    FieldRun("y", 4),
    "-",
    FieldRun("M", 2),
    "-",
    FieldRun("d", 2),
    QuotedLiteral("T"),
    FieldRun("H", 2),
    ":",
    FieldRun("m", 2),
    ":",
    FieldRun("s", 2),
    ".",
    FieldRun("S", 3),
    FieldRun("Z", 5),
)
