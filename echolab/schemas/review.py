"""
Review schemas for EchoLab.

Defines Pydantic models for spaced-repetition review data:
- Payload variants (vocabulary word, grammar pattern)
- ReviewableItem, generic over its payload
- ReviewTask, the flattened projection shown in the review queue

All timestamps are epoch milliseconds.
"""

from enum import Enum
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class TaskKind(str, Enum):
    WORD = "word"
    GRAMMAR = "grammar"


# -----------------------------------------------------------------------------
# Payload variants
# -----------------------------------------------------------------------------

class VocabularyPayload(BaseModel):
    """A word collected from a material, with its AI-provided meaning."""
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[TaskKind] = TaskKind.WORD

    word: str
    context: str = ""       # material title the word was collected from
    definition: str = ""    # English definition
    translation: str = ""   # Chinese translation

    @property
    def title(self) -> str:
        return self.word


class GrammarPayload(BaseModel):
    """A sentence pattern collected during listening practice."""
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[TaskKind] = TaskKind.GRAMMAR

    sentence: str
    rule: str = ""
    explanation: str = ""

    @property
    def title(self) -> str:
        return self.rule


PayloadT = TypeVar("PayloadT", VocabularyPayload, GrammarPayload)


# -----------------------------------------------------------------------------
# Reviewable items
# -----------------------------------------------------------------------------

class ReviewableItem(BaseModel, Generic[PayloadT]):
    """
    An item on the Ebbinghaus review schedule.

    `stage` counts survived reviews and indexes the interval table.
    `next_review_at` is always an absolute timestamp, never a duration.
    Instances are frozen; the scheduler returns updated copies.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    payload: PayloadT
    added_at: int = Field(..., ge=0, strict=True)
    next_review_at: int = Field(..., ge=0, strict=True)
    stage: int = Field(default=0, ge=0, strict=True)

    @property
    def kind(self) -> TaskKind:
        return self.payload.kind

    @property
    def title(self) -> str:
        return self.payload.title


VocabularyItem = ReviewableItem[VocabularyPayload]
GrammarItem = ReviewableItem[GrammarPayload]


class ReviewTask(BaseModel):
    """Queue entry projected from a ReviewableItem (never persisted)."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    kind: TaskKind
    next_review_at: int
