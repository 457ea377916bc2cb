"""Denied-words validation unit and its shared word list.

The word list is read-only for the duration of a run. Refreshing it swaps in a
new frozenset in a single assignment, so a run sees either the old list or the
new one and never a partially updated list.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, FrozenSet, Iterable, List

import yaml

from ..config import DENYLIST_PRIORITY

logger = logging.getLogger(__name__)


def _normalize_words(words: Iterable[str]) -> FrozenSet[str]:
    return frozenset(w.strip().lower() for w in words if w and w.strip())


class Denylist:
    """Shared, atomically refreshable set of denied words."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: FrozenSet[str] = _normalize_words(words)
        self._refresh_lock = threading.Lock()

    @property
    def words(self) -> FrozenSet[str]:
        """Current snapshot. Callers should read it once per evaluation."""
        return self._words

    def refresh(self, words: Iterable[str]) -> None:
        """Replace the word set atomically."""
        new_words = _normalize_words(words)
        with self._refresh_lock:
            self._words = new_words
        logger.info("Denylist refreshed: %d words", len(new_words))

    def extend(self, words: Iterable[str]) -> None:
        """Add words to the current set, replacing it atomically."""
        with self._refresh_lock:
            self._words = self._words | _normalize_words(words)

    def find_in(self, text: str) -> List[str]:
        """Return denied words contained in ``text``, sorted for stable output."""
        snapshot = self._words
        lowered = text.lower()
        return sorted(w for w in snapshot if w in lowered)

    @staticmethod
    def read_words(path: Path) -> List[str]:
        """Read words from a YAML list (.yaml/.yml) or a text file, one word per line.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file cannot be parsed.
        """
        if not path.exists():
            raise FileNotFoundError(f"Denylist file not found: {path}")

        if path.suffix.lower() in (".yaml", ".yml"):
            try:
                with path.open("r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or []
            except (OSError, yaml.YAMLError) as e:
                raise ValueError(f"Failed to read denylist file {path}: {e}") from e
            if isinstance(data, dict):
                data = data.get("words", []) or []
            if not isinstance(data, list):
                raise ValueError(f"Denylist file {path} must contain a list of words")
            return [str(w) for w in data]

        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise ValueError(f"Failed to read denylist file {path}: {e}") from e
        return [line for line in lines if line.strip() and not line.lstrip().startswith("#")]

    @classmethod
    def from_file(cls, path: Path) -> "Denylist":
        return cls(cls.read_words(path))

    def reload(self, path: Path) -> None:
        """Re-read the word list from ``path`` and swap it in."""
        self.refresh(self.read_words(path))

    def __len__(self) -> int:
        return len(self._words)


class DenylistUnit:
    """Fail once per denied word contained in the value (case-insensitive)."""

    def __init__(
        self,
        denylist: Denylist,
        name: str = "denylist",
        priority: int = DENYLIST_PRIORITY,
        stop_on_error: bool = False,
        message_template: str = "must not contain '{word}'",
    ) -> None:
        self.denylist = denylist
        self.name = name
        self.priority = priority
        self.stop_on_error = stop_on_error
        self.message_template = message_template

    def evaluate(self, value: Any) -> List[str]:
        if value is None:
            return []
        return [self.message_template.format(word=w) for w in self.denylist.find_in(value)]
