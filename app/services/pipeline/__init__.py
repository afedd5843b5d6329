"""
Keyword recovery pipeline.

This package implements the brute-force keyword search:
1. Generates keyword permutations (Heap's algorithm)
2. Decrypts the ciphertext with each one
3. Scores candidates by their number of common words
4. Keeps the trials in a bounded, sortable store
"""

from app.services.pipeline.orchestrator import KeywordSolver
from app.services.pipeline.scorer import CommonWordIndex, CommonWordScorer
from app.services.pipeline.trials import Trial, TrialStore

__all__ = [
    "CommonWordIndex",
    "CommonWordScorer",
    "KeywordSolver",
    "Trial",
    "TrialStore",
]
