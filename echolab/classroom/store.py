"""
ReviewStore - Persist learner data in ~/.echolab/store.db.

Each collection is stored whole, as one JSON document per key:
- Vocabulary and grammar review items
- Imported materials
- Shadowing sentences
- Learner statistics

The scheduler never touches storage. This class loads collections, hands
them to the pure review functions, and writes the results back.
"""

import json
import logging
import os
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter

from echolab.review import (
    EBBINGHAUS_INTERVALS,
    build_queue,
    complete_all_due,
    complete_by_id,
    initial_review_at,
)
from echolab.schemas import (
    GrammarItem,
    GrammarPayload,
    Material,
    ReviewableItem,
    ReviewTask,
    TaskKind,
    UserStats,
    VocabularyItem,
    VocabularyPayload,
)


logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(os.environ.get("ECHOLAB_HOME", Path.home() / ".echolab"))
DEFAULT_STORE_DB = DEFAULT_DATA_DIR / "store.db"

MATERIALS_KEY = "materials"
SPEAKING_KEY = "speaking_sentences"
STATS_KEY = "stats"

DEFAULT_SPEAKING_SENTENCES = [
    "00:00 The quick brown fox jumps over the lazy dog.",
    "00:05 Artificial intelligence is transforming industries worldwide.",
    "00:10 I would like to schedule a meeting for next Tuesday.",
]

_ITEM_ADAPTERS = {
    TaskKind.WORD: TypeAdapter(list[VocabularyItem]),
    TaskKind.GRAMMAR: TypeAdapter(list[GrammarItem]),
}
_MATERIALS_ADAPTER = TypeAdapter(list[Material])


class ReviewStore:
    """
    Key-value store over SQLite.

    Each method opens its own connection. Writes that span several keys
    share one transaction.
    """

    def __init__(self, db_path: Optional[Path] = None, intervals=EBBINGHAUS_INTERVALS):
        """
        Initialize the store.

        Args:
            db_path: Path to store.db (default: ~/.echolab/store.db)
            intervals: Interval table used when scheduling reviews
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STORE_DB
        self.intervals = intervals
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS collections (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _read(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM collections WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def _write(self, entries: dict[str, str]):
        """Write one or more keys in a single transaction."""
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            with conn:
                for key, value in entries.items():
                    conn.execute(
                        """INSERT INTO collections (key, value, updated_at)
                           VALUES (?, ?, ?)
                           ON CONFLICT(key) DO UPDATE SET
                             value = excluded.value,
                             updated_at = excluded.updated_at""",
                        (key, value, now)
                    )
            logger.debug("Saved keys: %s", ", ".join(entries))
        finally:
            conn.close()

    @staticmethod
    def _dump_items(kind: TaskKind, items) -> str:
        return _ITEM_ADAPTERS[kind].dump_json(list(items)).decode("utf-8")

    # -------------------------------------------------------------------------
    # Review Items
    # -------------------------------------------------------------------------

    def load(self, kind: TaskKind) -> list[ReviewableItem]:
        """
        Load a whole item collection.

        Raises:
            pydantic.ValidationError: If the stored collection is corrupt
        """
        kind = TaskKind(kind)
        raw = self._read(kind.value)
        if raw is None:
            return []
        return _ITEM_ADAPTERS[kind].validate_json(raw)

    def save(self, kind: TaskKind, items: list[ReviewableItem]):
        """Replace a whole item collection."""
        kind = TaskKind(kind)
        self._write({kind.value: self._dump_items(kind, items)})

    def save_all(self, vocabulary: list[ReviewableItem], grammar: list[ReviewableItem]):
        """Replace both item collections in one transaction."""
        self._write({
            TaskKind.WORD.value: self._dump_items(TaskKind.WORD, vocabulary),
            TaskKind.GRAMMAR.value: self._dump_items(TaskKind.GRAMMAR, grammar),
        })

    def add_vocabulary(
        self,
        word: str,
        now: int,
        context: str = "",
        definition: str = "",
        translation: str = "",
        item_id: Optional[str] = None,
    ) -> VocabularyItem:
        """Collect a word; it is first due one interval after `now`."""
        item = VocabularyItem(
            id=item_id or str(uuid.uuid4()),
            payload=VocabularyPayload(
                word=word,
                context=context,
                definition=definition,
                translation=translation,
            ),
            added_at=now,
            next_review_at=initial_review_at(now, self.intervals),
            stage=0,
        )
        self.save(TaskKind.WORD, [item] + self.load(TaskKind.WORD))
        logger.info("Collected word %r", word)
        return item

    def add_grammar(
        self,
        sentence: str,
        now: int,
        rule: str = "",
        explanation: str = "",
        item_id: Optional[str] = None,
    ) -> GrammarItem:
        """Collect a sentence pattern; it is first due one interval after `now`."""
        item = GrammarItem(
            id=item_id or str(uuid.uuid4()),
            payload=GrammarPayload(sentence=sentence, rule=rule, explanation=explanation),
            added_at=now,
            next_review_at=initial_review_at(now, self.intervals),
            stage=0,
        )
        self.save(TaskKind.GRAMMAR, [item] + self.load(TaskKind.GRAMMAR))
        logger.info("Collected sentence pattern %r", rule or sentence[:30])
        return item

    def delete(self, kind: TaskKind, item_id: str) -> bool:
        """Delete an item. Returns False if no item had that id."""
        items = self.load(kind)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self.save(kind, remaining)
        return True

    # -------------------------------------------------------------------------
    # Reviewing
    # -------------------------------------------------------------------------

    def get_review_queue(self) -> list[ReviewTask]:
        """Get all review tasks, earliest due first."""
        return build_queue(self.load(TaskKind.WORD), self.load(TaskKind.GRAMMAR))

    def mark_review_complete(self, item_id: str, kind: TaskKind, now: int):
        """
        Complete the review of one item.

        Raises:
            KeyError: If no item of that kind has the id
        """
        kind = TaskKind(kind)
        updated = complete_by_id(self.load(kind), item_id, now, self.intervals)
        self.save(kind, updated)

    def start_review(self, now: int) -> int:
        """
        Complete every item due at `now`.

        Both collections are written together, so either every due item
        is advanced or none is.

        Returns:
            Number of items advanced
        """
        batch = complete_all_due(
            self.load(TaskKind.WORD),
            self.load(TaskKind.GRAMMAR),
            now,
            self.intervals,
        )
        if batch.advanced:
            self.save_all(batch.vocabulary, batch.grammar)
        logger.info("Review session completed %d due items", batch.advanced)
        return batch.advanced

    # -------------------------------------------------------------------------
    # Materials
    # -------------------------------------------------------------------------

    def get_materials(self) -> list[Material]:
        raw = self._read(MATERIALS_KEY)
        if raw is None:
            return []
        return _MATERIALS_ADAPTER.validate_json(raw)

    def _save_materials(self, materials: list[Material]):
        self._write({MATERIALS_KEY: _MATERIALS_ADAPTER.dump_json(materials).decode("utf-8")})

    def save_material(self, material: Material) -> list[Material]:
        """Add a material at the front of the library."""
        materials = [material] + self.get_materials()
        self._save_materials(materials)
        return materials

    def update_material(self, material: Material) -> list[Material]:
        """
        Replace the material with the same id.

        Raises:
            KeyError: If no material has that id
        """
        materials = self.get_materials()
        if not any(m.id == material.id for m in materials):
            raise KeyError(material.id)
        materials = [material if m.id == material.id else m for m in materials]
        self._save_materials(materials)
        return materials

    # -------------------------------------------------------------------------
    # Speaking Sentences
    # -------------------------------------------------------------------------

    def get_speaking_sentences(self) -> list[str]:
        raw = self._read(SPEAKING_KEY)
        if raw is None:
            return list(DEFAULT_SPEAKING_SENTENCES)
        return json.loads(raw)

    def add_speaking_sentences(self, sentences: list[str]) -> list[str]:
        """Prepend sentences not already in the practice list."""
        current = self.get_speaking_sentences()
        new = []
        for sentence in sentences:
            if sentence not in current and sentence not in new:
                new.append(sentence)
        updated = new + current
        self._write({SPEAKING_KEY: json.dumps(updated, ensure_ascii=False)})
        return updated

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self) -> UserStats:
        raw = self._read(STATS_KEY)
        if raw is None:
            return UserStats()
        return UserStats.model_validate_json(raw)

    def save_stats(self, stats: UserStats):
        self._write({STATS_KEY: stats.model_dump_json()})
