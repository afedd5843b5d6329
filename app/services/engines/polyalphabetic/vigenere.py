import random
from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import LOWERCASE_ALPHABET, UPPERCASE_ALPHABET
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


@EngineRegistry.register
class VigenereEngine(CipherEngine):
    """
    Vigenère cipher engine.

    A polyalphabetic substitution cipher that uses a keyword to determine
    the shift for each letter. Each letter of the keyword represents a
    different Caesar shift applied in sequence.

    The key position advances on every character of the text, not only on
    letters, and letters keep their case. A key without letters produces
    an empty result.
    """

    name = "Vigenère Cipher"
    cipher_kind = CipherKind.VIGENERE
    cipher_family = CipherFamily.POLYALPHABETIC
    description = (
        "A polyalphabetic cipher where each letter is shifted by a different amount "
        "based on a repeating keyword. More secure than Caesar but vulnerable to "
        "Kasiski examination and frequency analysis per key position."
    )

    ALPHABET: ClassVar[str] = UPPERCASE_ALPHABET
    COMMON_WORDS: ClassVar[list[str]] = [
        "KEY", "SECRET", "PASSWORD", "CIPHER", "CODE", "CRYPTO",
        "HIDDEN", "LOCK", "SAFE", "SECURE", "VIGENERE",
    ]

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt plaintext with the keyword."""
        offsets = self._key_offsets(key)
        if not offsets:
            return ""

        result = []
        for i, char in enumerate(plaintext):
            alphabet = self._alphabet_for(char)
            if alphabet is None:
                result.append(char)
                continue
            shift = offsets[i % len(offsets)]
            result.append(alphabet[(alphabet.index(char) + shift) % len(alphabet)])

        return "".join(result)

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Decrypt by finding each letter in the row rotated by its key letter."""
        offsets = self._key_offsets(key)
        if not offsets:
            return ""

        result = []
        for i, char in enumerate(ciphertext):
            alphabet = self._alphabet_for(char)
            if alphabet is None:
                result.append(char)
                continue
            shift = offsets[i % len(offsets)]
            row = alphabet[shift:] + alphabet[:shift]
            result.append(alphabet[row.index(char)])

        return "".join(result)

    def generate_random_key(self) -> str:
        """Pick a keyword from a short list of common ones."""
        return random.choice(self.COMMON_WORDS)

    def validate_key(self, key: str) -> bool:
        """A key needs at least one letter."""
        return bool(self._key_offsets(key))

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        offsets = self._key_offsets(key)
        shifts = ", ".join(str(s) for s in offsets[:8])

        return (
            f"Vigenère cipher with keyword '{key}'. "
            f"Successive characters were shifted back by {shifts}"
            f"{', ...' if len(offsets) > 8 else ''}, repeating with the keyword."
        )

    def _key_offsets(self, key: str) -> list[int]:
        """Alphabet positions of the key's letters."""
        return [
            self.ALPHABET.index(c)
            for c in (key or "").upper()
            if c in self.ALPHABET
        ]

    def _alphabet_for(self, char: str) -> str | None:
        if char in UPPERCASE_ALPHABET:
            return UPPERCASE_ALPHABET
        if char in LOWERCASE_ALPHABET:
            return LOWERCASE_ALPHABET
        return None
