"""
EchoLab Viewer - Rendering helpers for the dashboard.
"""

from .review import (
    get_review_css,
    due_label,
    render_review_item,
    render_review_list,
    KIND_LABELS,
)

__all__ = [
    "get_review_css",
    "due_label",
    "render_review_item",
    "render_review_list",
    "KIND_LABELS",
]
