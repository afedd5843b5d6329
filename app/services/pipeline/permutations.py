"""
Keyword permutations for brute-force keyword recovery.

Both generators implement Heap's algorithm and produce the same order. The
recursive ``permutations`` builds the whole list up front, which is what the
sweep uses for short keywords; ``iter_permutations`` yields one ordering at a
time and is used once n! gets too large to hold in memory.
"""

import math
from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")


def permutations(symbols: Sequence[T]) -> list[list[T]]:
    """
    Return every ordering of the symbols (n! lists).

    Orderings are counted by position, so repeated symbols give repeated
    orderings.
    """
    result: list[list[T]] = []
    arrangement = list(symbols)

    def generate(n: int) -> None:
        if n <= 1:
            result.append(list(arrangement))
            return

        for i in range(n - 1):
            generate(n - 1)
            if n % 2 == 0:
                # n is even => swap element i with the last
                arrangement[i], arrangement[n - 1] = arrangement[n - 1], arrangement[i]
            else:
                # n is odd => swap the first element with the last
                arrangement[0], arrangement[n - 1] = arrangement[n - 1], arrangement[0]

        generate(n - 1)

    generate(len(arrangement))
    return result


def iter_permutations(symbols: Sequence[T]) -> Iterator[tuple[T, ...]]:
    """Yield every ordering of the symbols, in the same order as ``permutations``."""
    arrangement = list(symbols)
    n = len(arrangement)
    counters = [0] * n

    yield tuple(arrangement)

    i = 1
    while i < n:
        if counters[i] < i:
            j = 0 if i % 2 == 0 else counters[i]
            arrangement[j], arrangement[i] = arrangement[i], arrangement[j]
            yield tuple(arrangement)
            counters[i] += 1
            i = 1
        else:
            counters[i] = 0
            i += 1


def letter_permutations(word: str) -> list[str]:
    """Return every permutation of the letters in a word."""
    return ["".join(p) for p in permutations(word)]


def _interleave(word: str, ignore: str, permutation: Sequence[str]) -> str:
    free = iter(permutation)
    return "".join(letter if letter in ignore else next(free) for letter in word)


def _free_letters(word: str, ignore: str) -> str:
    return "".join(letter for letter in word if letter not in ignore)


def letter_permutations_ignoring(word: str, ignore: str) -> list[str]:
    """
    Permute the letters of a word, leaving letters in ``ignore`` where they are.

        >>> letter_permutations_ignoring("ABC", "B")
        ['ABC', 'CBA']
    """
    return [
        _interleave(word, ignore, permutation)
        for permutation in permutations(_free_letters(word, ignore))
    ]


def iter_letter_permutations_ignoring(word: str, ignore: str = "") -> Iterator[str]:
    """Lazy version of ``letter_permutations_ignoring``."""
    for permutation in iter_permutations(_free_letters(word, ignore)):
        yield _interleave(word, ignore, permutation)


def count_permutations(word: str, ignore: str = "") -> int:
    """Number of keywords a sweep over ``word`` will try."""
    return math.factorial(len(_free_letters(word, ignore)))
