"""Date pattern serializer.

Converts token sequences back to CLDR pattern text.

Round trip: ``tokenize(serialize(tokens))`` reproduces ``tokens`` up to
the choice between TextLiteral and QuotedLiteral and the merging of
adjacent literals. Literal text is always preserved.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from datekit.constants import FIELD_SYMBOLS, QUOTE

from .tokens import FieldRun, FormatToken, QuotedLiteral, TextLiteral

__all__ = ["serialize"]

_ESCAPED_QUOTE = QUOTE * 2


def _escape(text: str) -> str:
    return text.replace(QUOTE, _ESCAPED_QUOTE)


def _needs_quotes(text: str) -> bool:
    """Unquoted text would be read as fields if it holds a field letter."""
    return any(char in FIELD_SYMBOLS for char in text)


def serialize(tokens: Iterable[FormatToken]) -> str:
    """Serialize tokens to pattern text.

    Args:
        tokens: Tokens as produced by ``tokenize`` (any iterable)

    Returns:
        Pattern string

    Rules:
        - FieldRun: symbol repeated ``width`` times
        - QuotedLiteral: quoted, apostrophes doubled; leading apostrophes are
          written as '' before the opening quote
        - TextLiteral: apostrophes doubled; quoted when the text contains a
          field-symbol letter
        - Consecutive quoted sections are emitted as one section, since
          ``'a''b'`` would read back as the single literal ``a'b``
        - Text opening with an apostrophe right after a quoted section joins
          that section, since a bare '' there would read as part of it

    Example:
        >>> serialize([FieldRun("h", 1), TextLiteral(" "), QuotedLiteral("o'clock")])
        "h 'o''clock'"
    """
    parts: list[str] = []
    previous_quoted = False

    for token in tokens:
        match token:
            case FieldRun():
                parts.append(token.pattern)
                previous_quoted = False
            case QuotedLiteral(text=text) | TextLiteral(text=text) if (
                isinstance(token, QuotedLiteral)
                or _needs_quotes(text)
                or (previous_quoted and text.startswith(QUOTE))
            ):
                if previous_quoted:
                    # Reopen the previous section instead of starting a new one
                    parts[-1] = parts[-1][:-1]
                    parts.append(f"{_escape(text)}{QUOTE}")
                    continue
                # A section may not open with '' (it would read as a bare
                # apostrophe), so leading apostrophes go outside the quotes
                rest = text.lstrip(QUOTE)
                parts.append(_ESCAPED_QUOTE * (len(text) - len(rest)))
                if rest:
                    parts.append(f"{QUOTE}{_escape(rest)}{QUOTE}")
                previous_quoted = bool(rest)
            case TextLiteral(text=text):
                parts.append(_escape(text))
                previous_quoted = False
            case _:
                msg = f"Unknown token type: {type(token).__name__}"
                raise TypeError(msg)

    return "".join(parts)
