"""Label selection over symbolic differences.

``pick_label`` chooses the label whose ComponentMap key matches a
difference, preferring the most specific key. It is the selection rule
behind relative formatting ("Yesterday", "Today", "Tomorrow").

Because DateDifference equality is projection based, ``days(0)`` and
``weeks(0)`` are equal (and hash alike) and collide as dict keys. Pass an
iterable of ``(key, label)`` pairs when such keys must coexist.

Python 3.13+.
"""

from collections.abc import Iterable, Mapping
from typing import TypeVar

from datekit.core.fields import field_rank
from datekit.enums import FieldKind

from .difference import ComponentMap, DateDifference

__all__ = ["pick_label"]

T = TypeVar("T")

# Rank used for keys that specify no field: below every real field.
_UNSPECIFIED_RANK: int = len(FieldKind)


def _matches(
    key: ComponentMap,
    difference: DateDifference,
    *,
    first_weekday: int,
    min_week_days: int,
) -> bool:
    return all(
        difference.component(kind, first_weekday=first_weekday, min_week_days=min_week_days)
        == value
        for kind, value in key.magnitudes.items()
    )


def _specificity(key: ComponentMap) -> int:
    """Rank of the finest field the key specifies (lower is more specific)."""
    return min((field_rank(kind) for kind in key.magnitudes), default=_UNSPECIFIED_RANK)


def pick_label(
    candidates: Mapping[ComponentMap, T] | Iterable[tuple[ComponentMap, T]],
    difference: DateDifference,
    default: T | None = None,
    *,
    first_weekday: int = 0,
    min_week_days: int = 4,
) -> T | None:
    """Select the label of the most specific matching key.

    A key matches when every field it specifies equals
    ``difference.component(field)``. Among matching keys, the one whose
    finest field is finest wins; ties go to the earliest candidate. A key
    with no fields matches anything at the lowest priority.

    Args:
        candidates: Mapping or iterable of (ComponentMap, label) pairs
        difference: Difference to classify (any representation)
        default: Returned when no key matches
        first_weekday: Week start (0 = Monday) for week projections
        min_week_days: Days required in the first week of a year

    Returns:
        Selected label, or ``default``

    Example:
        >>> labels = {days(-1): "Yesterday", days(0): "Today", days(1): "Tomorrow"}
        >>> pick_label(labels, days(0))
        'Today'
        >>> pick_label(labels, days(5), "Other")
        'Other'
    """
    pairs = candidates.items() if isinstance(candidates, Mapping) else candidates

    best: T | None = default
    best_rank: int | None = None
    for key, label in pairs:
        if not _matches(
            key, difference, first_weekday=first_weekday, min_week_days=min_week_days
        ):
            continue
        rank = _specificity(key)
        if best_rank is None or rank < best_rank:
            best, best_rank = label, rank
    return best
