"""Date pattern syntax package.

Provides the CLDR pattern tokenizer, token types, serializer and the
DateFormat value. Independent of locale data so it can be used by tooling
that only inspects or rewrites patterns.

Python 3.13+.
"""

from .pattern import DateFormat, field_run
from .serializer import serialize
from .tokenizer import tokenize
from .tokens import FieldRun, FormatToken, QuotedLiteral, TextLiteral

__all__ = [
    "DateFormat",
    "FieldRun",
    "FormatToken",
    "QuotedLiteral",
    "TextLiteral",
    "field_run",
    "serialize",
    "tokenize",
]
