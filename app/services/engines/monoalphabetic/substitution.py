import random
from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import UPPERCASE_ALPHABET, substitute
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


@EngineRegistry.register
class KeyedSubstitutionEngine(CipherEngine):
    """
    Keyed substitution cipher engine.

    The key's unique letters are written at the start of the alphabet and
    the unused letters follow in order. Each plaintext letter is replaced by
    the letter at the same position in that keyed alphabet:

        plain:  ABCDEFGHIJKLMNOPQRSTUVWXYZ
        cipher: OBSCUREADFGHIJKLMNPQTVWXYZ   (key OBSCURE)

    Only uppercase A-Z are substituted; everything else passes through.
    """

    name = "Keyed Substitution Cipher"
    cipher_kind = CipherKind.SUBSTITUTION
    cipher_family = CipherFamily.MONOALPHABETIC
    description = (
        "A monoalphabetic substitution whose cipher alphabet starts with the "
        "letters of a keyword, followed by the rest of the alphabet in order."
    )

    ALPHABET: ClassVar[str] = UPPERCASE_ALPHABET
    KEY_LENGTH: ClassVar[int] = 7

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt plaintext with the keyed alphabet."""
        return substitute(plaintext, self.ALPHABET, self.keyed_alphabet(key))

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Decrypt ciphertext by reversing the keyed alphabet."""
        return substitute(ciphertext, self.keyed_alphabet(key), self.ALPHABET)

    def generate_random_key(self) -> str:
        """Generate a keyword of distinct random letters."""
        return "".join(random.sample(self.ALPHABET, self.KEY_LENGTH))

    def validate_key(self, key: str) -> bool:
        """A key needs at least one letter."""
        return any(c in self.ALPHABET for c in (key or "").upper())

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Generate human-readable explanation."""
        keyed = self.keyed_alphabet(key)
        sample_mappings = ", ".join(
            f"{keyed[i]}→{self.ALPHABET[i]}" for i in range(5)
        )

        return (
            f"Keyed substitution with keyword '{key}'. "
            f"The cipher alphabet is {keyed}, so {sample_mappings}, etc."
        )
