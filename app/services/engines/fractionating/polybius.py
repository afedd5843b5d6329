import random
import string
from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import UPPERCASE_ALPHABET, Grid
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


@EngineRegistry.register
class PolybiusEngine(CipherEngine):
    """
    Polybius square cipher engine.

    A keyed alphabet of A-Z and 0-9 is written into a 6x6 square. Each
    symbol found in the square is replaced by its row and column digits, so
    with an empty key "A" becomes "00" and "H" becomes "11".

    On decryption digits are read in pairs; a pair pointing outside the
    square (a 6, 7, 8 or 9) decodes to '?'. Anything that is not a digit
    passes through in both directions.
    """

    name = "Polybius Square Cipher"
    cipher_kind = CipherKind.POLYBIUS
    cipher_family = CipherFamily.FRACTIONATING
    description = (
        "Each letter or digit is replaced by its row and column in a 6x6 "
        "square filled with a keyed alphabet."
    )

    ALPHABET: ClassVar[str] = UPPERCASE_ALPHABET + string.digits
    SQUARE_SIZE: ClassVar[int] = 6
    OUT_OF_BOUNDS: ClassVar[str] = "?"

    def encrypt(self, plaintext: str, key: str) -> str:
        """Replace every symbol in the square with its coordinates."""
        square = self.key_square(key)

        result = []
        for char in plaintext:
            position = square.locate(char)
            if position is None:
                result.append(char)
            else:
                result.append(f"{position[0]}{position[1]}")

        return "".join(result)

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Read coordinate pairs back into symbols."""
        square = self.key_square(key)

        result = []
        coordinates: list[int] = []
        for char in ciphertext:
            if char not in string.digits:
                result.append(char)
                continue

            coordinates.append(int(char))
            if len(coordinates) < 2:
                continue

            row, column = coordinates
            if row < square.size and column < square.size:
                result.append(square.rows[row][column])
            else:
                result.append(self.OUT_OF_BOUNDS)
            coordinates = []

        return "".join(result)

    def key_square(self, key: str) -> Grid:
        """Build the 6x6 square from a keyword."""
        return Grid.from_alphabet(self.keyed_alphabet(key), self.SQUARE_SIZE)

    def generate_random_key(self) -> str:
        return "".join(random.sample(UPPERCASE_ALPHABET, 6))

    def validate_key(self, key: str) -> bool:
        """Key symbols must come from A-Z and 0-9 (any case)."""
        return all(c in self.ALPHABET for c in (key or "").upper())

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        square = self.key_square(key)
        return (
            f"Polybius square with keyword '{key}'. "
            f"Each pair of digits is a row and column in the square:\n{square}"
        )
