"""
Common-word scorer.

Ranks candidate plaintexts from a keyword sweep by how many of their words
appear in a list of common words. A correct keyword turns the ciphertext
back into ordinary prose, which is dense with such words; wrong keywords
produce a handful of accidental hits at most.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from app.core.exceptions import DictionaryLoadError

logger = logging.getLogger(__name__)

# Unicode letters/digits, with apostrophes allowed inside a word (DON'T, O’CLOCK)
WORD_PATTERN = re.compile(r"\w+(?:['’]\w+)*")


def split_words(text: str) -> list[str]:
    """Split text into words on Unicode word boundaries."""
    return WORD_PATTERN.findall(text)


class CommonWordIndex(Mapping[str, int]):
    """
    Read-only mapping of uppercase word -> rank in the word list.

    Build one with ``from_file`` at startup and share it; it is never
    modified after construction.
    """

    def __init__(self, ranks: dict[str, int]):
        self._ranks = dict(ranks)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "CommonWordIndex":
        ranks: dict[str, int] = {}
        for rank, word in enumerate(words):
            word = word.strip().upper()
            if word:
                ranks.setdefault(word, rank)
        return cls(ranks)

    @classmethod
    def from_file(cls, path: str | Path) -> "CommonWordIndex":
        """
        Load a newline-delimited word list.

        Raises:
            DictionaryLoadError: If the file is missing, unreadable or empty
        """
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryLoadError(str(path), str(e)) from e

        index = cls.from_words(contents.split("\n"))
        if not index:
            raise DictionaryLoadError(str(path), "no words found")

        logger.info("Loaded %d common words from %s", len(index), path)
        return index

    def __getitem__(self, word: str) -> int:
        return self._ranks[word]

    def __contains__(self, word: object) -> bool:
        return word in self._ranks

    def __iter__(self):
        return iter(self._ranks)

    def __len__(self) -> int:
        return len(self._ranks)


class CommonWordScorer:
    """Counts common words in candidate plaintexts."""

    def __init__(self, index: CommonWordIndex):
        self.index = index

    def score(self, text: str) -> int:
        """Number of words in text (repeats included) found in the index."""
        return sum(1 for word in split_words(text) if word.upper() in self.index)

    def score_all(self, texts: Iterable[str]) -> list[int]:
        return [self.score(text) for text in texts]
