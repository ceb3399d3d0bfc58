"""Date pattern token definitions.

A CLDR date pattern is a flat sequence of three token kinds:

    "yyyy-MM-dd'T'HH"
     ^^^^ FieldRun("y", 4)
         ^ TextLiteral("-")
               ^^^ QuotedLiteral("T")

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from datekit.constants import FIELD_SYMBOLS

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "TextLiteral",
    "QuotedLiteral",
    "FieldRun",
    # Type aliases
    "FormatToken",
]


@dataclass(frozen=True, slots=True)
class TextLiteral:
    """Unquoted literal text, emitted verbatim.

    Attributes:
        text: Non-empty literal text (apostrophes already unescaped)
    """

    text: str

    def __post_init__(self) -> None:
        """Validate literal is non-empty."""
        if not self.text:
            msg = "TextLiteral text must be non-empty"
            raise ValueError(msg)

    @staticmethod
    def guard(token: object) -> TypeIs["TextLiteral"]:
        """Type guard for TextLiteral."""
        return isinstance(token, TextLiteral)


@dataclass(frozen=True, slots=True)
class QuotedLiteral:
    """Text that appeared between apostrophes in the source pattern.

    Attributes:
        text: Non-empty literal text (apostrophes already unescaped)
    """

    text: str

    def __post_init__(self) -> None:
        """Validate literal is non-empty."""
        if not self.text:
            msg = "QuotedLiteral text must be non-empty"
            raise ValueError(msg)

    @staticmethod
    def guard(token: object) -> TypeIs["QuotedLiteral"]:
        """Type guard for QuotedLiteral."""
        return isinstance(token, QuotedLiteral)


@dataclass(frozen=True, slots=True)
class FieldRun:
    """Maximal run of one field symbol.

    The run width selects the rendering: M -> 1, MM -> 01, MMM -> Jan.

    Attributes:
        symbol: Single CLDR field-symbol letter
        width: Run length (>= 1)

    Example:
        >>> FieldRun("M", 3).pattern
        'MMM'
    """

    symbol: str
    width: int

    def __post_init__(self) -> None:
        """Validate symbol and width."""
        if len(self.symbol) != 1 or self.symbol not in FIELD_SYMBOLS:
            msg = f"FieldRun symbol must be one field letter, got {self.symbol!r}"
            raise ValueError(msg)
        if self.width < 1:
            msg = f"FieldRun width must be >= 1, got {self.width}"
            raise ValueError(msg)

    @property
    def pattern(self) -> str:
        """Pattern text of this run."""
        return self.symbol * self.width

    @staticmethod
    def guard(token: object) -> TypeIs["FieldRun"]:
        """Type guard for FieldRun."""
        return isinstance(token, FieldRun)


type FormatToken = TextLiteral | QuotedLiteral | FieldRun
"""Any token produced by ``tokenize``."""
