"""
EchoLab Classroom - Runtime components around the review engine.

This module provides:
- ReviewStore: Persist review items, materials and stats
- ContentClassifier: AI-backed word analysis and material labelling
- MaterialLibrary: Material import and transcript-to-shadowing sync
"""

from .store import (
    ReviewStore,
    DEFAULT_DATA_DIR,
    DEFAULT_STORE_DB,
    DEFAULT_SPEAKING_SENTENCES,
)

from .classifier import (
    ContentClassifier,
    GeminiClient,
    DEFAULT_TOPIC,
    MAX_INPUT_CHARS,
)

from .library import (
    MaterialLibrary,
    split_sentences,
    estimate_reading_duration,
)

__all__ = [
    # Store
    "ReviewStore",
    "DEFAULT_DATA_DIR",
    "DEFAULT_STORE_DB",
    "DEFAULT_SPEAKING_SENTENCES",
    # Classifier
    "ContentClassifier",
    "GeminiClient",
    "DEFAULT_TOPIC",
    "MAX_INPUT_CHARS",
    # Library
    "MaterialLibrary",
    "split_sentences",
    "estimate_reading_duration",
]
