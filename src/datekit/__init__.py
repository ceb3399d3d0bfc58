"""datekit - locale-aware calendar arithmetic, formatting and parsing.

Calendar operations bound to an explicit locale, time zone and calendar,
a symbolic duration algebra and a lossless CLDR date pattern tokenizer.

Public API:
    CalendarContext - Locale/zone/calendar bound date operations
    CalendarDefaults - Injected defaults (with environment loading)
    DateFormat - Immutable CLDR date pattern
    RelativeDateFormat - Pattern selection by distance to a reference date
    DatesCollection - Lazy stepped sequence of instants
    FieldKind / FieldStyle / Weekday - Field enumerations
    days, weeks, months, ... - DateDifference constructors
    pick_label - Choose a label by matching a difference
    parse_datetime - Pattern-driven parsing (never raises)

Exceptions:
    DateKitError - Base exception class
    PatternSyntaxError - Malformed pattern (strict tokenizing only)
    FormattingError - Babel formatting failure
    DateParseError - Returned by parsing functions

Submodules:
    datekit.syntax - Tokenizer, serializer and DateFormat
    datekit.duration - DateDifference representations and algebra
    datekit.core - Field tables and datetime arithmetic
    datekit.parsing - parse_datetime and type guards
    datekit.diagnostics - Error types and diagnostic codes
"""

from .diagnostics import DateKitError, DateParseError, FormattingError, PatternSyntaxError
from .duration import (
    ComponentMap,
    DateDifference,
    InstantPair,
    Seconds,
    days,
    eras,
    from_components,
    from_instants,
    from_seconds,
    hours,
    minutes,
    months,
    nanoseconds,
    pick_label,
    quarters,
    seconds,
    weeks,
    years,
)
from .enums import FieldKind, FieldStyle, Weekday
from .parsing import is_valid_datetime, parse_datetime
from .runtime import CalendarContext, CalendarDefaults, DatesCollection, RelativeDateFormat
from .syntax import DateFormat, tokenize

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("datekit")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CalendarContext",
    "CalendarDefaults",
    "ComponentMap",
    "DateDifference",
    "DateFormat",
    "DateKitError",
    "DateParseError",
    "DatesCollection",
    "FieldKind",
    "FieldStyle",
    "FormattingError",
    "InstantPair",
    "PatternSyntaxError",
    "RelativeDateFormat",
    "Seconds",
    "Weekday",
    "__version__",
    "days",
    "eras",
    "from_components",
    "from_instants",
    "from_seconds",
    "hours",
    "is_valid_datetime",
    "minutes",
    "months",
    "nanoseconds",
    "parse_datetime",
    "pick_label",
    "quarters",
    "seconds",
    "tokenize",
    "weeks",
    "years",
]
