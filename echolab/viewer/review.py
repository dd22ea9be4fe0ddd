"""
Review renderer - Dashboard review list display.

Provides:
- Relative due labels ("Today", "Tomorrow", "In 3 days")
- Review task list HTML with kind badges
"""

import html
import math
from typing import Sequence

from echolab.review import MILLIS_PER_DAY
from echolab.schemas import ReviewTask, TaskKind


KIND_LABELS = {
    TaskKind.WORD: "Word",
    TaskKind.GRAMMAR: "Grammar",
}


def get_review_css() -> str:
    """Get CSS styles for the review list."""
    return """
    <style>
    .review-list {
        display: flex;
        flex-direction: column;
        gap: 0.6em;
    }
    .review-item {
        display: flex;
        align-items: center;
        justify-content: space-between;
        background: #fafafa;
        border-radius: 10px;
        padding: 0.7em 1em;
    }
    .review-kind {
        font-size: 0.75em;
        font-weight: 600;
        padding: 0.15em 0.6em;
        border-radius: 6px;
        margin-right: 0.6em;
    }
    .review-kind-word {
        background: #ede7f6;
        color: #6a11cb;
    }
    .review-kind-grammar {
        background: #e3f2fd;
        color: #1565C0;
    }
    .review-due {
        font-size: 0.85em;
        color: #888;
    }
    .review-due-now {
        color: #e65100;
        font-weight: 600;
    }
    .review-empty {
        text-align: center;
        color: #aaa;
        padding: 1em 0;
    }
    </style>
    """


def due_label(next_review_at: int, now: int) -> str:
    """Human-readable time until an item is due."""
    diff = next_review_at - now
    if diff <= 0:
        return "Today"
    days = math.ceil(diff / MILLIS_PER_DAY)
    if days == 1:
        return "Tomorrow"
    return f"In {days} days"


def render_review_item(task: ReviewTask, now: int) -> str:
    """Render one review task row."""
    due_class = "review-due review-due-now" if task.next_review_at <= now else "review-due"
    parts = ['<div class="review-item">']
    parts.append('<div>')
    parts.append(
        f'<span class="review-kind review-kind-{task.kind.value}">{KIND_LABELS[task.kind]}</span>'
    )
    parts.append(f'<span class="review-title">{html.escape(task.title)}</span>')
    parts.append('</div>')
    parts.append(f'<span class="{due_class}">{due_label(task.next_review_at, now)}</span>')
    parts.append('</div>')
    return ''.join(parts)


def render_review_list(tasks: Sequence[ReviewTask], now: int, limit: int = 5) -> str:
    """
    Render the head of the review queue.

    Args:
        tasks: Review queue, earliest due first
        now: Current time (epoch ms)
        limit: Maximum number of rows

    Returns:
        HTML string for the list
    """
    if not tasks:
        return '<div class="review-empty">No review tasks yet</div>'

    parts = ['<div class="review-list">']
    for task in tasks[:limit]:
        parts.append(render_review_item(task, now))
    parts.append('</div>')
    return ''.join(parts)
