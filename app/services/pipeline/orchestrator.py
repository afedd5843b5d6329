"""
Keyword solver - drives a brute-force keyword sweep.

For a ciphertext and the letters of a suspected keyword:
1. Generate every ordering of the letters (Heap's algorithm)
2. Decrypt the ciphertext with each ordering as the key
3. Count common words in the result
4. Record the trial in the bounded trial store

The best keywords are then read back sorted by word count.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from app.core.exceptions import SweepAbortedError
from app.models.schemas import CipherKind
from app.services.engines import codec
from app.services.engines.alphabet import GRID_PAD
from app.services.pipeline.permutations import (
    count_permutations,
    iter_letter_permutations_ignoring,
    letter_permutations_ignoring,
)
from app.services.pipeline.scorer import CommonWordScorer
from app.services.pipeline.trials import Trial, TrialStore

logger = logging.getLogger(__name__)


@dataclass
class KeyAttempt:
    """Result of decrypting with a single keyword."""

    keyword: str
    keyed_alphabet: str
    plaintext: str
    common_word_count: int


@dataclass
class SweepResult:
    """Summary of a keyword sweep."""

    keyword: str
    total_permutations: int
    recorded: int
    stored: int
    truncated: bool


class KeywordSolver:
    """
    Tries keyword permutations against a ciphertext.

    The scorer and store are supplied by the caller, so one dictionary can be
    shared by many solvers while each sweep owns its own store.
    """

    MATERIALIZE_LIMIT = 8

    def __init__(
        self,
        scorer: CommonWordScorer,
        store: TrialStore,
        materialize_limit: int = MATERIALIZE_LIMIT,
    ):
        self.scorer = scorer
        self.store = store
        self.materialize_limit = materialize_limit

    def try_key(
        self,
        ciphertext: str,
        keyword: str,
        kind: CipherKind = CipherKind.SUBSTITUTION,
    ) -> KeyAttempt:
        """Decrypt with one keyword and score the result."""
        engine = codec.get_engine(kind)
        plaintext = engine.decrypt(ciphertext, keyword)
        return KeyAttempt(
            keyword=keyword,
            keyed_alphabet=engine.keyed_alphabet(keyword),
            plaintext=plaintext,
            common_word_count=self.scorer.score(plaintext),
        )

    def record_permutation(self, keyword: str, plaintext: str, count: int | None = None) -> Trial:
        """
        Record one permutation reported by an external enumeration driver.

        An empty plaintext, or one starting with the grid pad symbol, means the
        driver hit an invalid keyword and the sweep must stop.

        Raises:
            SweepAbortedError: On the invalid-keyword sentinel
        """
        if not plaintext or plaintext.startswith(GRID_PAD):
            raise SweepAbortedError(keyword, plaintext)
        return self.store.record(keyword, plaintext, count or 0)

    def sweep(
        self,
        ciphertext: str,
        keyword: str,
        *,
        fixed_letters: str = "",
        kind: CipherKind = CipherKind.SUBSTITUTION,
        count_words: bool = True,
        max_permutations: int | None = None,
    ) -> SweepResult:
        """
        Decrypt with every permutation of the keyword's letters.

        Letters in ``fixed_letters`` stay in place. Permutations are built up
        front for short keywords and streamed for long ones; ``max_permutations``
        stops the sweep early.

        Every permutation is recorded, including ones whose plaintext is empty
        (a ciphertext with nothing the cipher can read); those score 0.
        """
        engine = codec.get_engine(kind)
        total = count_permutations(keyword, fixed_letters)
        free_letters = len(keyword) - sum(1 for c in keyword if c in fixed_letters)

        candidates: Iterable[str]
        if free_letters <= self.materialize_limit:
            candidates = letter_permutations_ignoring(keyword, fixed_letters)
        else:
            candidates = iter_letter_permutations_ignoring(keyword, fixed_letters)

        logger.info(
            "Sweeping %d permutations of '%s' (%s)", total, keyword, CipherKind(kind).value
        )

        recorded = 0
        truncated = False
        for candidate in candidates:
            if max_permutations is not None and recorded >= max_permutations:
                truncated = True
                break

            plaintext = engine.decrypt(ciphertext, candidate)
            count = self.scorer.score(plaintext) if count_words else 0
            self.store.record(candidate, plaintext, count)
            recorded += 1

        if truncated:
            logger.info("Sweep of '%s' stopped after %d permutations", keyword, recorded)

        return SweepResult(
            keyword=keyword,
            total_permutations=total,
            recorded=recorded,
            stored=len(self.store),
            truncated=truncated,
        )

    def count_words(self) -> int:
        """Recount common words for every stored trial; returns the total."""
        total = 0
        for position, trial in enumerate(self.store):
            count = self.scorer.score(trial.text)
            self.store.update_count(position, count)
            total += count
        return total

    def ranked(self, limit: int) -> list[Trial]:
        """Trials with the most common words, best first."""
        return self.store.best(limit)
