"""
EchoLab Review - Ebbinghaus spaced-repetition engine.

This module provides:
- Interval table: day offsets per mastery stage
- Scheduler: stage advancement and due checks
- Queue builder: merged, sorted review tasks and batch completion
"""

from .intervals import (
    EBBINGHAUS_INTERVALS,
    MILLIS_PER_DAY,
    validate_table,
    length_of,
    day_offset_at,
)

from .scheduler import (
    check_now,
    initial_review_at,
    is_due,
    complete_review,
    complete_by_id,
)

from .queue import (
    ReviewBatch,
    to_task,
    build_queue,
    count_due,
    due_tasks,
    complete_all_due,
)

__all__ = [
    # Intervals
    "EBBINGHAUS_INTERVALS",
    "MILLIS_PER_DAY",
    "validate_table",
    "length_of",
    "day_offset_at",
    # Scheduler
    "check_now",
    "initial_review_at",
    "is_due",
    "complete_review",
    "complete_by_id",
    # Queue
    "ReviewBatch",
    "to_task",
    "build_queue",
    "count_due",
    "due_tasks",
    "complete_all_due",
]
