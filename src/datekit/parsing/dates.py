"""Pattern-driven datetime parsing.

- parse_datetime() returns tuple[datetime | None, tuple[DateParseError, ...]]
- Functions NEVER raise, errors are returned in the tuple
- Patterns are tokenized with datekit.syntax, so quoting rules match formatting
- Conversion to strptime directives is cached per pattern

Timezone Handling:
    UTC offset fields (Z, ZZ, ZZZ, ZZZZZ, x..xxxxx, X..XXXXX) are parsed via
    strptime %z. ZZZZ (localized GMT, "GMT+01:00") is parsed as a literal
    "GMT" followed by %z.

    Timezone NAME fields (z, v, V, O series) are dropped from the pattern,
    but the input is NOT pre-processed. Names are locale-specific and
    strptime has no zone-name parsing; callers must pre-strip them or use
    offset fields.

Names:
    Month and weekday names (MMM, MMMM, EEE, EEEE) are matched by strptime,
    which reads the names of the process C locale (English).

Hour-24 Limitation:
    k/kk (hour 1-24) map to %H (0-23); "24:00" does not parse.

Thread-safe. Uses Python 3.13 stdlib strptime.

Python 3.13+.
"""

import re
from datetime import datetime, tzinfo as TzInfo
from functools import lru_cache

from datekit.constants import MAX_PATTERN_CACHE_SIZE
from datekit.diagnostics import DateParseError, ErrorTemplate
from datekit.syntax import DateFormat, FieldRun, QuotedLiteral, TextLiteral, tokenize

__all__ = ["parse_datetime"]

# ==============================================================================
# FIELD RUN -> STRPTIME CONVERTER
# ==============================================================================
# ruff: noqa: ERA001 - Documentation table is not commented-out code
#
#   Run     | Meaning                | strptime
#   --------|------------------------|---------
#   y/yyyy  | Year                   | %Y
#   yy      | 2-digit year           | %y
#   M/MM    | Month (numeric)        | %m
#   MMM     | Month (short name)     | %b
#   MMMM    | Month (full name)      | %B
#   d/dd    | Day of month           | %d
#   E..EEE  | Weekday (short)        | %a
#   EEEE    | Weekday (full)         | %A
#   G       | Era (AD/BC)            | stripped from input
#   H/k     | Hour (0-23)            | %H
#   h/K     | Hour (1-12)            | %I
#   m/mm    | Minute                 | %M
#   s/ss    | Second                 | %S
#   S+      | Fraction (1-6 digits)  | %f
#   a       | AM/PM marker           | %p
#
# Every field run maps by (symbol, width). Symbols missing from the table
# (quarters, week numbers, day of year, ...) make the pattern unparseable.

# Symbol -> directive per width. The last entry repeats for longer runs;
# a None entry marks an unsupported width.
_SYMBOL_DIRECTIVES: dict[str, tuple[str | None, ...]] = {
    # Year
    "y": ("%Y", "%y", "%Y"),
    "u": ("%Y",),
    # Month (format and stand-alone context)
    "M": ("%m", "%m", "%b", "%B", None),
    "L": ("%m", "%m", "%b", "%B", None),
    # Day
    "d": ("%d", "%d", None),
    # Weekday (format and stand-alone context)
    "E": ("%a", "%a", "%a", "%A", None),
    "c": (None, None, "%a", "%A", None),
    "e": (None, None, "%a", "%A", None),
    # Hour
    "H": ("%H", "%H", None),
    "k": ("%H", "%H", None),
    "h": ("%I", "%I", None),
    "K": ("%I", "%I", None),
    # Minute / second
    "m": ("%M", "%M", None),
    "s": ("%S", "%S", None),
    # Fractional seconds; %f accepts one to six digits
    "S": ("%f", "%f", "%f", "%f", "%f", "%f", None),
    # AM/PM
    "a": ("%p",),
    # UTC offsets
    "Z": ("%z", "%z", "%z", "GMT%z", "%z", None),
    "x": ("%z",),
    "X": ("%z",),
}

_ERA_SYMBOL: str = "G"
_TIMEZONE_NAME_SYMBOLS: frozenset[str] = frozenset("zvVO")

# Era strings to strip from input when the pattern contains an era field.
# Longer forms first so "BCE" is removed before "BC".
_ERA_STRINGS: tuple[str, ...] = (
    "Before Common Era",
    "Before Christ",
    "Anno Domini",
    "Common Era",
    "A.D.",
    "B.C.",
    "C.E.",
    "BCE",
    "AD",
    "BC",
    "CE",
)

# Whole-word match so "CE" inside "December" survives
_ERA_PATTERN: re.Pattern[str] = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(era) for era in _ERA_STRINGS) + r")(?!\w)",
    re.IGNORECASE,
)


def _strip_era(value: str) -> str:
    """Strip era designations from a date string.

    Args:
        value: Date string potentially containing era text

    Returns:
        Date string with era text removed and whitespace normalized
    """
    return " ".join(_ERA_PATTERN.sub("", value).split())


def _directive(run: FieldRun) -> str | None:
    """strptime directive for one field run, or None if unsupported."""
    widths = _SYMBOL_DIRECTIVES.get(run.symbol)
    if widths is None:
        return None
    return widths[min(run.width, len(widths)) - 1]


@lru_cache(maxsize=MAX_PATTERN_CACHE_SIZE)
def _pattern_to_strptime(pattern: str) -> tuple[str, bool, str | None]:
    """Convert a CLDR pattern to a strptime format.

    Args:
        pattern: CLDR date pattern

    Returns:
        Tuple of (strptime_format, has_era, unsupported_run):
        - strptime_format: Python strptime format
        - has_era: True if era text must be stripped from the input
        - unsupported_run: First field run that cannot be parsed, or None
    """
    parts: list[str] = []
    has_era = False
    dropped = False

    for token in tokenize(pattern):
        match token:
            case FieldRun(symbol=symbol) if symbol == _ERA_SYMBOL:
                has_era = True
                dropped = True
            case FieldRun(symbol=symbol) if symbol in _TIMEZONE_NAME_SYMBOLS:
                dropped = True
            case FieldRun():
                directive = _directive(token)
                if directive is None:
                    return ("", has_era, token.pattern)
                parts.append(directive)
            case TextLiteral(text=text) | QuotedLiteral(text=text):
                parts.append(text.replace("%", "%%"))

    strptime_format = "".join(parts)
    if dropped:
        # Dropped fields leave dangling separators behind
        strptime_format = " ".join(strptime_format.split())
    return (strptime_format, has_era, None)


def parse_datetime(
    value: str,
    pattern: DateFormat | str,
    *,
    tzinfo: TzInfo | None = None,
) -> tuple[datetime | None, tuple[DateParseError, ...]]:
    """Parse a datetime string with a CLDR pattern.

    Never raises. Errors are returned in the tuple.

    Args:
        value: Datetime string (e.g., "2025-01-28 14:30")
        pattern: CLDR pattern (e.g., "yyyy-MM-dd HH:mm")
        tzinfo: Zone to assign if the input has no offset (default: naive)

    Returns:
        Tuple of (result, errors):
        - result: Parsed datetime, or None if parsing failed
        - errors: Tuple of DateParseError (empty tuple on success)

    Examples:
        >>> result, errors = parse_datetime("2025-01-28 14:30", "yyyy-MM-dd HH:mm")
        >>> result
        datetime.datetime(2025, 1, 28, 14, 30)
        >>> errors
        ()

        >>> result, errors = parse_datetime("invalid", "yyyy-MM-dd")
        >>> result is None
        True
        >>> len(errors)
        1

    Thread Safety:
        Thread-safe. Uses stdlib only (no global state).
    """
    pattern_text = str(pattern)

    # Runtime defense for untyped callers
    if not isinstance(value, str):
        diagnostic = ErrorTemplate.parse_datetime_failed(  # type: ignore[unreachable]
            str(value), pattern_text, f"Expected string, got {type(value).__name__}"
        )
        error = DateParseError(
            diagnostic, input_value=str(value), pattern=pattern_text, parse_type="datetime"
        )
        return (None, (error,))

    strptime_format, has_era, unsupported = _pattern_to_strptime(pattern_text)
    if unsupported is not None:
        diagnostic = ErrorTemplate.parse_pattern_unsupported(pattern_text, unsupported)
        error = DateParseError(
            diagnostic, input_value=value, pattern=pattern_text, parse_type="datetime"
        )
        return (None, (error,))

    parse_value = _strip_era(value) if has_era else value
    try:
        parsed = datetime.strptime(parse_value, strptime_format)
    except ValueError as e:
        diagnostic = ErrorTemplate.parse_datetime_failed(value, pattern_text, str(e))
        error = DateParseError(
            diagnostic, input_value=value, pattern=pattern_text, parse_type="datetime"
        )
        return (None, (error,))

    if tzinfo is not None and parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tzinfo)
    return (parsed, ())
