"""Duration algebra.

DateDifference values in three representations (Seconds, InstantPair,
ComponentMap) with arithmetic and comparison across all combinations,
plus ``pick_label`` for choosing labels by matching differences.

Python 3.13+.
"""

from .difference import (
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
    quarters,
    seconds,
    weeks,
    years,
)
from .labels import pick_label

__all__ = [
    "ComponentMap",
    "DateDifference",
    "InstantPair",
    "Seconds",
    "days",
    "eras",
    "from_components",
    "from_instants",
    "from_seconds",
    "hours",
    "minutes",
    "months",
    "nanoseconds",
    "pick_label",
    "quarters",
    "seconds",
    "weeks",
    "years",
]
