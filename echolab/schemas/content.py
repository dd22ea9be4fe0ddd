"""
Content schemas for EchoLab.

Defines Pydantic models for imported learning materials and for the
results returned by the content classifier.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class MaterialType(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    TEXT = "text"


class Material(BaseModel):
    """An imported listening/reading material."""
    id: str = Field(..., min_length=1)
    title: str
    type: MaterialType
    duration: str = ""          # display string, e.g. "3:45"
    source: str = "Uploaded"    # URL or "Uploaded"
    difficulty: Difficulty = Difficulty.INTERMEDIATE
    topic: str = "General"
    thumbnail: Optional[str] = None
    audio_url: Optional[str] = None
    transcript: str = ""        # "00:00 sentence 00:05 sentence ..."
    created_at: int = Field(..., ge=0)  # epoch ms


class WordAnalysis(BaseModel):
    """Definition and translation of a word in context."""
    definition: str = ""
    translation: str = ""
