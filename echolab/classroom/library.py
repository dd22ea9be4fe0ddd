"""
MaterialLibrary - Import materials and feed finished ones into shadowing.

Imports come in three forms, like the import dialog offers them:
- Pasted text (becomes the transcript)
- A web link (video resource)
- An uploaded file (audio/video, or plain text read as transcript)

Every import is labelled with a topic and difficulty by the classifier,
using the richest text available (full text over title).
"""

import logging
import math
import re
import uuid
from pathlib import PurePath
from typing import Optional

from echolab.schemas import Material, MaterialType

from .classifier import ContentClassifier
from .store import ReviewStore


logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 150
UNKNOWN_DURATION = "Unknown"

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def estimate_reading_duration(text: str) -> str:
    """Display duration for a text at 150 words per minute, e.g. "3:00"."""
    words = len(text.split())
    return f"{max(1, math.ceil(words / WORDS_PER_MINUTE))}:00"


def format_media_duration(seconds: float) -> str:
    """Format a media length in seconds as m:ss."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def split_sentences(transcript: str) -> list[str]:
    """
    Split a transcript into sentences ending in . ! or ?

    Text without any terminal punctuation is kept as a single sentence.
    Trailing text after the last terminator is dropped.
    """
    sentences = _SENTENCE_RE.findall(transcript) or [transcript]
    return [s.strip() for s in sentences if s.strip()]


class MaterialLibrary:
    """
    Material import and completion on top of a ReviewStore.

    Args:
        store: Where materials and speaking sentences are persisted
        classifier: Labels topic and difficulty of new materials
    """

    def __init__(self, store: ReviewStore, classifier: ContentClassifier):
        self.store = store
        self.classifier = classifier

    def _label_and_save(self, material: Material, text: str) -> Material:
        material = material.model_copy(update={
            "topic": self.classifier.classify_topic(text),
            "difficulty": self.classifier.estimate_difficulty(text),
        })
        self.store.save_material(material)
        logger.info("Imported %s material %r (%s, %s)",
                    material.type.value, material.title, material.topic, material.difficulty.value)
        return material

    def import_text(self, text: str, now: int, title: str = "Text Material") -> Material:
        """Import pasted text as a transcript-only material."""
        material = Material(
            id=str(uuid.uuid4()),
            title=title,
            type=MaterialType.TEXT,
            duration=estimate_reading_duration(text),
            source="User Import",
            transcript=text,
            created_at=now,
        )
        return self._label_and_save(material, text)

    def import_link(self, url: str, now: int, title: str = "Web Video Resource") -> Material:
        """Import a web video by URL; it is labelled from the URL itself."""
        material = Material(
            id=str(uuid.uuid4()),
            title=title,
            type=MaterialType.VIDEO,
            duration=UNKNOWN_DURATION,
            source=url,
            created_at=now,
        )
        return self._label_and_save(material, url)

    def import_file(
        self,
        filename: str,
        content_type: str,
        now: int,
        text: Optional[str] = None,
        media_seconds: Optional[float] = None,
        audio_url: Optional[str] = None,
    ) -> Material:
        """
        Import an uploaded file.

        Args:
            filename: Original file name; the title is the name without extension
            content_type: MIME type of the upload
            now: Import time (epoch ms)
            text: Decoded contents, for text/plain uploads
            media_seconds: Length of an audio/video upload, if known
            audio_url: Where the media can be played back from
        """
        title = PurePath(filename).stem or filename
        if content_type == "text/plain":
            body = text or ""
            material = Material(
                id=str(uuid.uuid4()),
                title=title,
                type=MaterialType.TEXT,
                duration=estimate_reading_duration(body),
                source="User Import",
                transcript=body,
                created_at=now,
            )
            return self._label_and_save(material, body or title)

        material = Material(
            id=str(uuid.uuid4()),
            title=title,
            type=MaterialType.VIDEO if content_type.startswith("video") else MaterialType.AUDIO,
            duration=format_media_duration(media_seconds) if media_seconds else UNKNOWN_DURATION,
            source="User Import",
            audio_url=audio_url,
            created_at=now,
        )
        return self._label_and_save(material, title)

    def attach_transcript(self, material_id: str, transcript: str) -> Material:
        """
        Replace the transcript of an existing material.

        Raises:
            KeyError: If no material has that id
        """
        material = next((m for m in self.store.get_materials() if m.id == material_id), None)
        if material is None:
            raise KeyError(material_id)
        material = material.model_copy(update={"transcript": transcript})
        self.store.update_material(material)
        return material

    def sync_speaking_sentences(self, material: Material) -> list[str]:
        """
        Finish a material: send its transcript sentences to shadowing practice.

        Returns:
            The updated practice list
        """
        sentences = split_sentences(material.transcript)
        updated = self.store.add_speaking_sentences(sentences)
        stats = self.store.get_stats()
        self.store.save_stats(stats.model_copy(update={
            "materials_completed": stats.materials_completed + 1,
        }))
        logger.info("Synced %d sentences from %r", len(sentences), material.title)
        return updated
