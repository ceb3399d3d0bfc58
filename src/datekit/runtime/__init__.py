"""Calendar runtime package.

Provides CalendarContext (locale + zone + calendar bound operations),
injected defaults, stepped date collections and relative formats.
Depends on the core, syntax, duration and parsing packages.

Python 3.13+.
"""

from .calendar_context import CalendarContext
from .collection import DatesCollection
from .config import CalendarDefaults
from .relative import RelativeDateFormat

__all__ = [
    "CalendarContext",
    "CalendarDefaults",
    "DatesCollection",
    "RelativeDateFormat",
]
