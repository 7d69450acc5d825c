"""Persistent top-five score tables kept in a key-value store."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterator, MutableMapping, Optional

logger = logging.getLogger(__name__)

NAME_LIMIT = 3
MAX_SCORES = 5


@dataclass(frozen=True)
class Score:
    """One table entry; names longer than :data:`NAME_LIMIT` are cut short."""

    name: str
    score: int

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError("score must not be negative")
        object.__setattr__(self, "name", str(self.name)[:NAME_LIMIT])


class Highscore:
    """Up to :data:`MAX_SCORES` scores, best first, saved under a name in ``store``.

    Nothing is written to the store until :meth:`begin` has named the table.
    """

    def __init__(self, store: Optional[MutableMapping[str, str]] = None):
        self._store: MutableMapping[str, str] = {} if store is None else store
        self._key: Optional[str] = None
        self._scores: list[Score] = []

    def begin(self, name: str) -> None:
        """Bind the table to ``name``: create it if new, otherwise load it."""
        self._key = name
        if name not in self._store:
            self._scores = []
            self._save()
        else:
            self._load()

    def add(self, score: Score) -> None:
        """Insert ``score`` after every entry that is at least as high."""
        for index, existing in enumerate(self._scores):
            if score.score > existing.score:
                break
        else:
            index = len(self._scores)

        if index >= MAX_SCORES:
            return

        self._scores.insert(index, score)
        del self._scores[MAX_SCORES:]
        self._save()

    def get(self, index: int) -> Score:
        if not 0 <= index < len(self._scores):
            raise IndexError(f"no score at position {index}")
        return self._scores[index]

    def clear(self) -> None:
        self._scores = []
        self._save()

    def count(self) -> int:
        return len(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[Score]:
        return iter(tuple(self._scores))

    def _save(self) -> None:
        if self._key is None:
            return
        self._store[self._key] = json.dumps([[s.name, s.score] for s in self._scores])

    def _load(self) -> None:
        if self._key is None:
            return
        try:
            entries = json.loads(self._store[self._key])
            scores = [Score(str(name), int(value)) for name, value in entries]
        except (ValueError, TypeError) as error:
            logger.error("Highscore: load failed for %s: %s", self._key, error)
            self.clear()
            return
        if not scores:
            self.clear()
            return
        self._scores = scores[:MAX_SCORES]