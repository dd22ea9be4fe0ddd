"""
EchoLab Schemas - Pydantic models for the English learning companion.

This module exports all schema classes for:
- Review: reviewable items, payload variants, review tasks
- Content: materials and classifier results
- Progress: learner statistics
"""

# Review schemas
from .review import (
    TaskKind,
    VocabularyPayload,
    GrammarPayload,
    ReviewableItem,
    VocabularyItem,
    GrammarItem,
    ReviewTask,
)

# Content schemas
from .content import (
    Difficulty,
    MaterialType,
    Material,
    WordAnalysis,
)

# Progress schemas
from .progress import (
    UserStats,
)

__all__ = [
    # Review
    'TaskKind',
    'VocabularyPayload',
    'GrammarPayload',
    'ReviewableItem',
    'VocabularyItem',
    'GrammarItem',
    'ReviewTask',
    # Content
    'Difficulty',
    'MaterialType',
    'Material',
    'WordAnalysis',
    # Progress
    'UserStats',
]
