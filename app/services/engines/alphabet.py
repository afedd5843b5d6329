"""
Keyed alphabets and cipher grids.

A keyed alphabet moves the unique letters of a keyword to the front of an
alphabet, dropping them from their original positions:

    alphabet: ABCDEFGHIJKLMNOPQRSTUVWXYZ
    key:      APPLE
    keyed:    APLEBCDFGHIJKMNOQRSTUVWXYZ

Substitution, Polybius and Playfair all build their tables from one.
"""

import string
from collections.abc import Sequence
from typing import ClassVar

UPPERCASE_ALPHABET = string.ascii_uppercase
LOWERCASE_ALPHABET = string.ascii_lowercase
GRID_PAD = "*"


def unique_symbols(symbols: Sequence[str]) -> list[str]:
    """Return the symbols with duplicates dropped, keeping first occurrences."""
    return list(dict.fromkeys(symbols))


def build_keyed_alphabet(base: Sequence[str], key: Sequence[str]) -> str | list[str]:
    """
    Derive a keyed alphabet from a base alphabet and a key.

    Args:
        base: The base alphabet, as a string or a list of symbols
        key: The key symbols

    Returns:
        Unique key symbols followed by the base alphabet without them.
        A string when the base is a string, otherwise a list.
    """
    key_symbols = unique_symbols(key)
    removed = set(key_symbols)
    keyed = key_symbols + [symbol for symbol in base if symbol not in removed]

    if isinstance(base, str):
        return "".join(keyed)
    return keyed


class Grid:
    """
    A square of symbols laid out row by row.

    Cells beyond the end of the alphabet are filled with ``*``; symbols
    beyond ``size * size`` do not appear in the grid.
    """

    PAD: ClassVar[str] = GRID_PAD

    def __init__(self, rows: list[list[str]]):
        self.rows = rows
        self.size = len(rows)
        self._positions: dict[str, tuple[int, int]] = {}
        for r, row in enumerate(rows):
            for c, symbol in enumerate(row):
                self._positions.setdefault(symbol, (r, c))

    @classmethod
    def from_alphabet(cls, alphabet: Sequence[str], size: int) -> "Grid":
        symbols = list(alphabet)
        rows = []
        i = 0
        for _ in range(size):
            row = []
            for _ in range(size):
                row.append(symbols[i] if i < len(symbols) else cls.PAD)
                i += 1
            rows.append(row)
        return cls(rows)

    def locate(self, symbol: str) -> tuple[int, int] | None:
        """Return the (row, column) of a symbol, or None if absent."""
        return self._positions.get(symbol)

    def at(self, row: int, column: int) -> str:
        return self.rows[row % self.size][column % self.size]

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._positions

    def __str__(self) -> str:
        return "\n".join(" ".join(row) for row in self.rows)


def substitute(text: str, source: Sequence[str], target: Sequence[str]) -> str:
    """
    Replace every symbol of ``source`` in text with the symbol at the same
    position in ``target``. Characters not in ``source`` pass through.
    """
    table = {
        symbol: target[i]
        for i, symbol in reversed(list(enumerate(source)))
        if i < len(target)
    }
    return "".join(table.get(char, char) for char in text)
