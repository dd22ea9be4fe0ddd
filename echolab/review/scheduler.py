"""
Review scheduler - Stage advancement and due-time computation.

All functions are pure: they take the current time explicitly and return
new items instead of mutating their inputs.
"""

import math
from typing import Protocol, Sequence

from echolab.schemas import ReviewableItem

from .intervals import (
    EBBINGHAUS_INTERVALS,
    MILLIS_PER_DAY,
    day_offset_at,
    length_of,
    validate_table,
)


class Schedulable(Protocol):
    next_review_at: int


def check_now(now: int) -> int:
    """Validate a caller-supplied epoch-ms timestamp; raise ValueError if unusable."""
    if isinstance(now, bool) or not isinstance(now, (int, float)):
        raise ValueError(f"Timestamp must be a number, got {type(now).__name__}")
    if isinstance(now, float):
        if not math.isfinite(now) or not now.is_integer():
            raise ValueError(f"Timestamp must be a finite whole number of milliseconds: {now}")
        now = int(now)
    if now < 0:
        raise ValueError(f"Timestamp must not be negative: {now}")
    return now


def initial_review_at(now: int, table: Sequence[int] = EBBINGHAUS_INTERVALS) -> int:
    """Due time of a freshly collected item (first interval pre-applied)."""
    validate_table(table)
    return check_now(now) + day_offset_at(table, 0) * MILLIS_PER_DAY


def is_due(item: Schedulable, now: int) -> bool:
    """True when the item is due at `now`, boundary inclusive."""
    return item.next_review_at <= check_now(now)


def complete_review(
    item: ReviewableItem,
    now: int,
    table: Sequence[int] = EBBINGHAUS_INTERVALS,
) -> ReviewableItem:
    """
    Record a successful review of `item` at time `now`.

    Args:
        item: Item being reviewed
        now: Completion time (epoch ms)
        table: Interval table (day offsets per stage)

    Returns:
        Copy of the item with the next stage (clamped at the last table
        index) and a due time of `now` plus that stage's interval.

    Raises:
        ValueError: If the table is invalid, the item's stage is not a
            valid table index, or `now` is not a usable timestamp
    """
    validate_table(table)
    now = check_now(now)
    last = length_of(table) - 1
    if not 0 <= item.stage <= last:
        raise ValueError(
            f"Item {item.id} has stage {item.stage}, outside [0, {last}]"
        )

    new_stage = min(item.stage + 1, last)
    next_review_at = now + day_offset_at(table, new_stage) * MILLIS_PER_DAY
    return item.model_copy(update={"stage": new_stage, "next_review_at": next_review_at})


def complete_by_id(
    items: Sequence[ReviewableItem],
    item_id: str,
    now: int,
    table: Sequence[int] = EBBINGHAUS_INTERVALS,
) -> list[ReviewableItem]:
    """Complete the review of one item in a collection, by id."""
    updated = []
    found = False
    for item in items:
        if item.id == item_id:
            item = complete_review(item, now, table)
            found = True
        updated.append(item)
    if not found:
        raise KeyError(item_id)
    return updated
