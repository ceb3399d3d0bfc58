"""Type guard functions for parsing result type narrowing.

parse_datetime() returns tuple[result, tuple[DateParseError, ...]].
The guard checks the result component to narrow its type for mypy.

Python 3.13+ with TypeIs support (PEP 742).

Note: The guard accepts None and returns False, so
`if not errors and is_valid_datetime(result)` can be written as
`if is_valid_datetime(result)`.

Example:
    >>> from datekit.parsing import parse_datetime
    >>> result, errors = parse_datetime("2025-01-28 14:30", "yyyy-MM-dd HH:mm")
    >>> if is_valid_datetime(result):
    ...     timestamp = result.timestamp()
"""

from datetime import datetime
from typing import TypeIs

__all__ = ["is_valid_datetime"]


def is_valid_datetime(value: datetime | None) -> TypeIs[datetime]:
    """Type guard: Check if parsed datetime is valid (not None).

    Args:
        value: Datetime from parse_datetime() result tuple (may be None on error)

    Returns:
        True if value is a datetime object, False otherwise
    """
    return value is not None
