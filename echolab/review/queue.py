"""
Review queue builder - Merge vocabulary and grammar items into one
prioritized task list, and batch-complete everything that is due.
"""

from typing import NamedTuple, Sequence

from echolab.schemas import ReviewableItem, ReviewTask

from .intervals import EBBINGHAUS_INTERVALS
from .scheduler import check_now, complete_review, is_due


class ReviewBatch(NamedTuple):
    """Result of completing all due items."""
    vocabulary: list[ReviewableItem]
    grammar: list[ReviewableItem]
    advanced: int


def to_task(item: ReviewableItem) -> ReviewTask:
    return ReviewTask(
        id=item.id,
        title=item.title,
        kind=item.kind,
        next_review_at=item.next_review_at,
    )


def build_queue(
    vocab_items: Sequence[ReviewableItem],
    grammar_items: Sequence[ReviewableItem],
) -> list[ReviewTask]:
    """
    Build the review queue, earliest due first.

    Vocabulary tasks are concatenated before grammar tasks and the sort is
    stable, so on equal due times vocabulary comes first. That order is an
    inherited convention, not a priority rule.
    """
    tasks = [to_task(v) for v in vocab_items] + [to_task(g) for g in grammar_items]
    return sorted(tasks, key=lambda t: t.next_review_at)


def count_due(queue: Sequence[ReviewTask], now: int) -> int:
    now = check_now(now)
    return sum(1 for task in queue if is_due(task, now))


def due_tasks(queue: Sequence[ReviewTask], now: int) -> list[ReviewTask]:
    """Tasks due at `now`, in queue order."""
    now = check_now(now)
    return [task for task in queue if is_due(task, now)]


def _complete_due(items, now, table) -> tuple[list[ReviewableItem], int]:
    updated = []
    advanced = 0
    for item in items:
        if is_due(item, now):
            item = complete_review(item, now, table)
            advanced += 1
        updated.append(item)
    return updated, advanced


def complete_all_due(
    vocab_items: Sequence[ReviewableItem],
    grammar_items: Sequence[ReviewableItem],
    now: int,
    table: Sequence[int] = EBBINGHAUS_INTERVALS,
) -> ReviewBatch:
    """
    Advance every due item exactly once; leave the rest untouched.

    Nothing is persisted here. The caller writes both returned collections
    in a single store write so the batch lands all-or-nothing.
    """
    now = check_now(now)
    vocabulary, vocab_advanced = _complete_due(vocab_items, now, table)
    grammar, grammar_advanced = _complete_due(grammar_items, now, table)
    return ReviewBatch(vocabulary, grammar, vocab_advanced + grammar_advanced)
