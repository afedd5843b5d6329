import random
from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import LOWERCASE_ALPHABET, UPPERCASE_ALPHABET
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. Upper and lower case letters are shifted within their
    own alphabets, so case is preserved. The key is the shift as text; a key
    that is not an integer (empty, a bare "-", ...) leaves the text unchanged.
    """

    name = "Caesar Cipher"
    cipher_kind = CipherKind.CAESAR
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    ALPHABETS: ClassVar[tuple[str, str]] = (UPPERCASE_ALPHABET, LOWERCASE_ALPHABET)

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt plaintext with the given shift."""
        shift = self._parse_key(key)
        if shift is None:
            return plaintext
        return self._shift(plaintext, shift)

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Decrypt by shifting in reverse."""
        shift = self._parse_key(key)
        if shift is None:
            return ciphertext
        return self._shift(ciphertext, -shift)

    def generate_random_key(self) -> str:
        """Generate a random shift (1-25, excluding 0 and 26)."""
        return str(random.randint(1, 25))

    def validate_key(self, key: str) -> bool:
        """Any integer shift is valid."""
        return self._parse_key(key) is not None

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        shift = self._parse_key(key)
        if shift is None:
            return f"'{key}' is not a shift, so the text was left unchanged."

        return (
            f"Caesar cipher with shift of {shift}. "
            f"Each letter was shifted back {shift % 26} positions in the alphabet. "
            f"For example, the first ciphertext letter '{ciphertext[0] if ciphertext else 'N/A'}' "
            f"becomes '{plaintext[0] if plaintext else 'N/A'}'."
        )

    def _parse_key(self, key: str) -> int | None:
        """Parse key to integer shift value, or None if it is not a number."""
        try:
            return int(key)
        except (TypeError, ValueError):
            return None

    def _shift(self, text: str, shift: int) -> str:
        """Shift each ASCII letter within its own case alphabet."""
        result = []

        for char in text:
            for alphabet in self.ALPHABETS:
                idx = alphabet.find(char)
                if idx >= 0:
                    result.append(alphabet[(idx + shift) % len(alphabet)])
                    break
            else:
                result.append(char)

        return "".join(result)
