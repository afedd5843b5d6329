"""
Bounded storage for keyword trials.

A sweep over a 12-letter keyword can produce 479,001,600 trials, far more
than can be kept. The store holds at most ``max_trials`` and, when full,
drops the oldest ``eviction_batch`` trials in one go before appending.
"""

import heapq
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass
class Trial:
    """One keyword tried during a sweep."""

    index: int
    keyword: str
    text: str
    count: int = 0


class KeyValueStore(Protocol):
    """Minimal key-value storage used to persist trials."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class TrialArchive(Protocol):
    """Saves and restores trials as three parallel lists."""

    def save(self, indices: list[int], keywords: list[str], texts: list[str]) -> None: ...

    def restore(self) -> tuple[list[Any], list[Any], list[Any]] | None: ...


class MemoryKeyValueStore:
    """Dictionary-backed key-value store."""

    def __init__(self):
        self._values: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class KeyValueTrialArchive:
    """Stores the trial lists under three keys of a key-value store."""

    INDEXES_KEY = "SubstitutionSolverResultIndexes"
    KEYWORDS_KEY = "SubstitutionSolverResultKeys"
    PLAINTEXTS_KEY = "SubstitutionSolverResultPlaintexts"

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, indices: list[int], keywords: list[str], texts: list[str]) -> None:
        self.store.set(self.INDEXES_KEY, indices)
        self.store.set(self.KEYWORDS_KEY, keywords)
        self.store.set(self.PLAINTEXTS_KEY, texts)

    def restore(self) -> tuple[list[Any], list[Any], list[Any]] | None:
        indices = self.store.get(self.INDEXES_KEY)
        keywords = self.store.get(self.KEYWORDS_KEY)
        texts = self.store.get(self.PLAINTEXTS_KEY)
        if not all(isinstance(v, list) for v in (indices, keywords, texts)):
            return None
        return indices, keywords, texts


class TrialStore:
    """
    Ordered, bounded collection of trials.

    Indices are assigned by ``record`` and always increase. The store is not
    thread-safe; callers feed it from a single producer.
    """

    MAX_TRIALS = 10_100
    EVICTION_BATCH = 100

    def __init__(self, max_trials: int = MAX_TRIALS, eviction_batch: int = EVICTION_BATCH):
        self.max_trials = max_trials
        self.eviction_batch = eviction_batch
        self._trials: list[Trial] = []
        self._next_index = 0

    def record(self, keyword: str, text: str, count: int = 0) -> Trial:
        """Append a trial with the next index, evicting the oldest batch if full."""
        if len(self._trials) >= self.max_trials:
            self._evict_oldest()

        trial = Trial(index=self._next_index, keyword=keyword, text=text, count=count)
        self._next_index += 1
        self._trials.append(trial)
        return trial

    def _evict_oldest(self) -> None:
        oldest = heapq.nsmallest(self.eviction_batch, self._trials, key=attrgetter("index"))
        dropped = {trial.index for trial in oldest}
        self._trials = [t for t in self._trials if t.index not in dropped]
        logger.debug("Evicted %d oldest trials", len(dropped))

    def sort_by_index(self) -> None:
        """Restore generation order."""
        self._trials.sort(key=attrgetter("index"))

    def sort_by_count(self, descending: bool = False) -> None:
        """Order by common-word count; equal counts keep their relative order."""
        self._trials.sort(key=attrgetter("count"), reverse=descending)

    def update_count(self, position: int, count: int) -> None:
        self._trials[position].count = count

    def best(self, limit: int) -> list[Trial]:
        """Highest-scoring trials, earliest first among equal counts."""
        return sorted(self._trials, key=lambda t: (-t.count, t.index))[:limit]

    def clear(self) -> None:
        self._trials = []
        self._next_index = 0

    @property
    def trials(self) -> list[Trial]:
        return list(self._trials)

    def __len__(self) -> int:
        return len(self._trials)

    def __iter__(self) -> Iterator[Trial]:
        return iter(self._trials)

    def __getitem__(self, position: int) -> Trial:
        return self._trials[position]

    def save(self, archive: TrialArchive) -> None:
        """Write indices, keywords and texts. Counts are not saved."""
        archive.save(
            [t.index for t in self._trials],
            [t.keyword for t in self._trials],
            [t.text for t in self._trials],
        )
        logger.info("Saved %d trials", len(self._trials))

    def restore(self, archive: TrialArchive) -> bool:
        """
        Replace the contents with saved trials.

        Returns:
            False if nothing was saved or the saved lists differ in length
        """
        saved = archive.restore()
        if saved is None:
            return False

        indices, keywords, texts = saved
        if not (len(indices) == len(keywords) == len(texts)):
            logger.warning(
                "Not restoring trials: list lengths differ (%d, %d, %d)",
                len(indices), len(keywords), len(texts),
            )
            return False

        self._trials = [
            Trial(index=index, keyword=keyword, text=text)
            for index, keyword, text in zip(indices, keywords, texts)
            if _is_int(index) and isinstance(keyword, str) and isinstance(text, str)
        ]
        self.sort_by_index()
        self._next_index = self._trials[-1].index + 1 if self._trials else 0

        logger.info("Restored %d trials", len(self._trials))
        return True


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
