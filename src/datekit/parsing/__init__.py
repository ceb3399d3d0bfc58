"""Parse display strings back to datetimes using CLDR patterns.

- Functions NEVER raise exceptions, errors are returned in tuple
- Inverse of CalendarContext.format(): pattern + text -> datetime

Public API:
    Parsing Functions:
        parse_datetime - Returns tuple[datetime | None, tuple[DateParseError, ...]]

    Type Guards:
        is_valid_datetime - TypeIs guard for datetime (not None)

Example:
    >>> from datekit.parsing import parse_datetime, is_valid_datetime
    >>> result, errors = parse_datetime("28.01.2025", "dd.MM.yyyy")
    >>> if is_valid_datetime(result):
    ...     print(result.date())
    2025-01-28

Python 3.13+. Uses datekit.syntax + stdlib strptime.
"""

from .dates import parse_datetime
from .guards import is_valid_datetime

__all__ = [
    # Type guards
    "is_valid_datetime",
    # Parsing functions
    "parse_datetime",
]
