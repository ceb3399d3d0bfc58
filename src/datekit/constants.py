"""Shared constants for datekit.

This module provides centralized configuration constants used across
the syntax, duration and runtime packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Pattern syntax: Quote delimiter and field-symbol alphabet
- Nominal lengths: Approximate seconds per calendar unit
- Context defaults: Fallback locale, calendar and cache bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Pattern syntax
    "QUOTE",
    "FIELD_SYMBOLS",
    # Nominal lengths
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "DAYS_PER_WEEK",
    "DAYS_PER_YEAR",
    "MONTHS_PER_YEAR",
    "MONTHS_PER_QUARTER",
    "NANOSECONDS_PER_SECOND",
    "NANOSECONDS_PER_MICROSECOND",
    # Context defaults
    "DEFAULT_LOCALE",
    "DEFAULT_CALENDAR",
    "SUPPORTED_CALENDARS",
    "MAX_CONTEXT_CACHE_SIZE",
    "MAX_PATTERN_CACHE_SIZE",
    "ENV_LOCALE",
    "ENV_TIMEZONE",
    "ENV_CALENDAR",
]

# ============================================================================
# PATTERN SYNTAX
# ============================================================================

# Delimiter for literal text inside a pattern. Doubled ('') it stands for a
# single apostrophe, both inside and outside a quoted section.
QUOTE: str = "'"

# CLDR date field pattern letters (UTS #35, "Date Field Symbol Table").
# Every other character in a pattern is literal text.
FIELD_SYMBOLS: frozenset[str] = frozenset("GyYuUrQqMLlwWdDFgEecabBhHKkjJCmsSAzZOvVXx")

# ============================================================================
# NOMINAL LENGTHS
# ============================================================================
#
# Fixed-length approximations of calendar units. Used only for coarse
# ordering and for the mixed-representation fallback of the duration
# algebra, never for date arithmetic.

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY: int = 24 * SECONDS_PER_HOUR
DAYS_PER_WEEK: int = 7

# Mean Gregorian year (400-year cycle)
DAYS_PER_YEAR: float = 365.2425

MONTHS_PER_YEAR: int = 12
MONTHS_PER_QUARTER: int = 3
NANOSECONDS_PER_SECOND: int = 1_000_000_000
NANOSECONDS_PER_MICROSECOND: int = 1_000

# ============================================================================
# CONTEXT DEFAULTS
# ============================================================================

# Locale used when a requested locale is unknown to Babel.
DEFAULT_LOCALE: str = "en_US"

# Babel's CLDR formatting only implements the Gregorian calendar.
DEFAULT_CALENDAR: str = "gregorian"
SUPPORTED_CALENDARS: frozenset[str] = frozenset({DEFAULT_CALENDAR})

# Maximum cached CalendarContext instances.
# 128 covers typical multi-region applications (major locales x zones).
MAX_CONTEXT_CACHE_SIZE: int = 128

# Maximum cached pattern -> strptime conversions in datekit.parsing.
MAX_PATTERN_CACHE_SIZE: int = 256

# Environment variables read by CalendarDefaults.from_environ().
ENV_LOCALE: str = "DATEKIT_LOCALE"
ENV_TIMEZONE: str = "DATEKIT_TIMEZONE"
ENV_CALENDAR: str = "DATEKIT_CALENDAR"
