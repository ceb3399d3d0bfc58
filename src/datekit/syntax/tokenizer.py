"""CLDR date pattern tokenizer.

Splits a pattern such as ``"h 'o''clock' a"`` into tokens:

    FieldRun("h", 1), TextLiteral(" "), QuotedLiteral("o'clock"),
    TextLiteral(" "), FieldRun("a", 1)

Quote rules (UTS #35):
    - Apostrophes delimit literal text: 'at' -> "at"
    - Two apostrophes are one literal apostrophe, inside or outside quotes
    - An unterminated quoted section runs to the end of the pattern

Total in the default lenient mode: any string tokenizes. Use
``strict=True`` to reject unterminated quotes.

Python 3.13+. Zero external dependencies.
"""

import logging

from datekit.constants import FIELD_SYMBOLS, QUOTE
from datekit.diagnostics import ErrorTemplate, PatternSyntaxError

from .tokens import FieldRun, FormatToken, QuotedLiteral, TextLiteral

__all__ = ["tokenize"]

logger = logging.getLogger(__name__)


def _read_quoted(pattern: str, start: int) -> tuple[str, int, bool]:
    """Read a quoted section whose opening quote is at ``start``.

    Returns:
        Tuple of (text, next_index, terminated)
    """
    chars: list[str] = []
    i = start + 1
    n = len(pattern)
    while i < n:
        if pattern[i] == QUOTE:
            if i + 1 < n and pattern[i + 1] == QUOTE:
                chars.append(QUOTE)
                i += 2
                continue
            return "".join(chars), i + 1, True
        chars.append(pattern[i])
        i += 1
    return "".join(chars), n, False


def tokenize(pattern: str, *, strict: bool = False) -> tuple[FormatToken, ...]:
    """Tokenize a CLDR date pattern.

    Args:
        pattern: Date pattern (e.g., "yyyy-MM-dd'T'HH:mm")
        strict: Raise PatternSyntaxError on an unterminated quote instead of
            emitting the partial quoted text

    Returns:
        Tuple of tokens. Empty pattern yields an empty tuple. Adjacent
        unquoted literal characters are merged into one TextLiteral. A lone
        trailing apostrophe opens an empty section and produces no token.

    Raises:
        PatternSyntaxError: Only with ``strict=True``, for an unterminated quote

    Examples:
        >>> tokenize("HH:mm")
        (FieldRun(symbol='H', width=2), TextLiteral(text=':'), FieldRun(symbol='m', width=2))

        >>> tokenize("'o''clock'")
        (QuotedLiteral(text="o'clock"),)
    """
    tokens: list[FormatToken] = []
    buffer: list[str] = []
    i = 0
    n = len(pattern)

    def flush() -> None:
        if buffer:
            tokens.append(TextLiteral("".join(buffer)))
            buffer.clear()

    while i < n:
        char = pattern[i]

        if char == QUOTE:
            # '' outside quotes -> literal apostrophe, stays in the buffer
            if i + 1 < n and pattern[i + 1] == QUOTE:
                buffer.append(QUOTE)
                i += 2
                continue

            flush()
            position = i
            text, i, terminated = _read_quoted(pattern, i)
            if not terminated:
                if strict:
                    diagnostic = ErrorTemplate.unterminated_quote(pattern, position)
                    raise PatternSyntaxError(diagnostic, pattern=pattern, position=position)
                logger.debug("Unterminated quote in pattern %r at offset %d", pattern, position)
            if text:
                tokens.append(QuotedLiteral(text))
            continue

        if char in FIELD_SYMBOLS:
            flush()
            j = i + 1
            while j < n and pattern[j] == char:
                j += 1
            tokens.append(FieldRun(char, j - i))
            i = j
            continue

        buffer.append(char)
        i += 1

    flush()
    return tuple(tokens)
