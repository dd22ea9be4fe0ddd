"""
Ebbinghaus interval table.

A table is an ordered sequence of positive day offsets. Index `k` is the
wait after an item reaches stage `k`.
"""

from typing import Sequence

# Reference policy: 1, 2, 4, 7, 15, 30 days
EBBINGHAUS_INTERVALS: tuple[int, ...] = (1, 2, 4, 7, 15, 30)

MILLIS_PER_DAY = 86_400_000


def validate_table(table: Sequence[int]) -> Sequence[int]:
    """Reject empty tables and non-positive offsets."""
    if len(table) == 0:
        raise ValueError("Interval table must not be empty")
    for offset in table:
        if isinstance(offset, bool) or not isinstance(offset, int) or offset <= 0:
            raise ValueError(f"Invalid interval offset: {offset!r} (must be a positive integer)")
    return table


def length_of(table: Sequence[int]) -> int:
    return len(table)


def day_offset_at(table: Sequence[int], stage: int) -> int:
    """
    Day offset for a stage.

    Callers clamp before indexing; an out-of-range stage is an error,
    never wrapped around like a negative Python index would be.
    """
    if not 0 <= stage < len(table):
        raise ValueError(f"Stage {stage} out of range for interval table of length {len(table)}")
    return table[stage]
