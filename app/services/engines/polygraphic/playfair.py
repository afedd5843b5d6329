import logging
import random
from typing import ClassVar

from app.core.exceptions import GridLookupError
from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import Grid
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry

logger = logging.getLogger(__name__)


@EngineRegistry.register
class PlayfairEngine(CipherEngine):
    """
    Playfair cipher engine.

    The Playfair cipher encrypts digrams (pairs of letters) using a 5x5 key square.
    The alphabet is reduced to 25 letters (I and J are combined).

    Rules for encryption:
    1. Same row: replace each letter with the one to its right
    2. Same column: replace each letter with the one below
    3. Rectangle: swap corners horizontally

    Non-letters are dropped and odd-length text is padded with 'X'. When both
    letters of a digram are the same, the second becomes 'X' (e.g. "LL" -> "LX").
    """

    name = "Playfair Cipher"
    cipher_kind = CipherKind.PLAYFAIR
    cipher_family = CipherFamily.POLYGRAPHIC
    description = (
        "A digram substitution cipher using a 5x5 key square. "
        "Pairs of letters are encrypted together based on their positions "
        "in the square. I and J are treated as the same letter."
    )

    ALPHABET: ClassVar[str] = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # 25 letters, I=J
    SQUARE_SIZE: ClassVar[int] = 5
    FILLER: ClassVar[str] = "X"
    COMMON_KEYS: ClassVar[list[str]] = [
        "PLAYFAIR", "SECRET", "KEYWORD", "CIPHER", "MONARCHY",
        "EXAMPLE", "CRYPTO", "HIDDEN", "SECURE", "SQUARE",
    ]

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt using Playfair cipher."""
        return self._transform(plaintext, key, step=1)

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Decrypt using Playfair cipher."""
        return self._transform(ciphertext, key, step=-1)

    def key_square(self, key: str) -> Grid:
        """Build the 5x5 key square from a keyword."""
        return Grid.from_alphabet(self.keyed_alphabet(key), self.SQUARE_SIZE)

    def generate_random_key(self) -> str:
        return random.choice(self.COMMON_KEYS)

    def validate_key(self, key: str) -> bool:
        """Keys may contain letters only."""
        return bool(key) and all(c.isascii() and c.isalpha() for c in key)

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        square = self.key_square(key)

        # Show first two rows of the key square
        square_preview = " ".join(square.rows[0]) + "\n" + " ".join(square.rows[1])

        return (
            f"Playfair cipher with keyword '{key}'. "
            f"5x5 key square (first 2 rows):\n{square_preview}\n"
            f"Letters are decrypted in pairs using row/column rules."
        )

    def key_symbols(self, key: str) -> str:
        return self._clean(key)

    def _clean(self, text: str) -> str:
        """Uppercase, fold J into I and drop anything outside the square's alphabet."""
        text = (text or "").upper().replace("J", "I")
        return "".join(c for c in text if c in self.ALPHABET)

    def _digrams(self, text: str) -> list[tuple[str, str]]:
        letters = self._clean(text)
        if len(letters) % 2 == 1:
            letters += self.FILLER

        digrams = []
        for i in range(0, len(letters), 2):
            a, b = letters[i], letters[i + 1]
            digrams.append((a, self.FILLER if b == a else b))
        return digrams

    def _transform(self, text: str, key: str, step: int) -> str:
        """Apply the Playfair rules, moving right/down (step=1) or left/up (step=-1)."""
        square = self.key_square(key)

        result = []
        for a, b in self._digrams(text):
            try:
                result.append(self._transform_digram(square, a, b, step))
            except GridLookupError as e:
                logger.warning("Skipping digram: %s", e.message)

        return "".join(result)

    def _transform_digram(self, square: Grid, a: str, b: str, step: int) -> str:
        pos_a = square.locate(a)
        pos_b = square.locate(b)
        if pos_a is None or pos_b is None:
            raise GridLookupError(a + b)

        (row_a, col_a), (row_b, col_b) = pos_a, pos_b

        if row_a == row_b:
            # Same row: shift along the row
            return square.at(row_a, col_a + step) + square.at(row_b, col_b + step)
        if col_a == col_b:
            # Same column: shift along the column
            return square.at(row_a + step, col_a) + square.at(row_b + step, col_b)
        # Rectangle: swap columns
        return square.at(row_a, col_b) + square.at(row_b, col_a)
