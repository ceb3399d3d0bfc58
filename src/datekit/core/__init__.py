"""Core field tables and calendar arithmetic shared by every layer.

Both the duration algebra and the runtime layer depend on these modules,
which keeps the dependency graph acyclic:

    core <- syntax, duration <- runtime

Exports:
    fields: Field ordering, neighbours and nominal lengths
    arithmetic: shift / start_of / end_of / count_between on datetimes

Python 3.13+.
"""

from .arithmetic import (
    add_elapsed,
    count_between,
    div_toward_zero,
    elapsed_delta,
    elapsed_seconds,
    end_of,
    shift,
    start_of,
    week_year,
    week_year_start,
)
from .fields import (
    COUNTABLE_FIELDS,
    FIELD_ORDER,
    MINIMAL_FIELDS,
    all_larger,
    convert,
    field_rank,
    finest,
    is_finer,
    larger,
    nominal_seconds,
    smaller,
    sorted_fields,
)

__all__ = [
    "COUNTABLE_FIELDS",
    "FIELD_ORDER",
    "MINIMAL_FIELDS",
    "add_elapsed",
    "all_larger",
    "convert",
    "count_between",
    "div_toward_zero",
    "elapsed_delta",
    "elapsed_seconds",
    "end_of",
    "field_rank",
    "finest",
    "is_finer",
    "larger",
    "nominal_seconds",
    "shift",
    "smaller",
    "sorted_fields",
    "start_of",
    "week_year",
    "week_year_start",
]
