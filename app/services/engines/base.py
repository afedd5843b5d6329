from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import UPPERCASE_ALPHABET, build_keyed_alphabet


@dataclass
class DecryptionResult:
    """Plaintext recovered with a known key, plus a short explanation."""

    plaintext: str
    key: str
    explanation: str


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    Engines convert text in both directions with a key given as a string.
    They never raise on bad input: keys that make no sense for the cipher and
    symbols outside its alphabet are handled inside ``encrypt``/``decrypt``
    (text left unchanged, passed through, or replaced with '?').

    Engines hold no per-call state, so the registry shares one instance.
    """

    # Cipher metadata
    name: str
    cipher_kind: CipherKind
    cipher_family: CipherFamily
    description: str
    requires_key: ClassVar[bool] = True

    # Symbols the cipher works on; keys are reduced to these
    ALPHABET: ClassVar[str] = UPPERCASE_ALPHABET

    @abstractmethod
    def encrypt(self, plaintext: str, key: str) -> str:
        """
        Encrypt plaintext with the given key.

        Args:
            plaintext: Text to encrypt; may be empty
            key: The key as entered by the user

        Returns:
            Ciphertext
        """

    @abstractmethod
    def decrypt(self, ciphertext: str, key: str) -> str:
        """Inverse of ``encrypt`` for texts the cipher supports."""

    def key_symbols(self, key: str) -> str:
        """The key uppercased, keeping only symbols of ``ALPHABET``."""
        return "".join(c for c in (key or "").upper() if c in self.ALPHABET)

    def keyed_alphabet(self, key: str) -> str:
        """``ALPHABET`` with the key's symbols moved to the front."""
        return build_keyed_alphabet(self.ALPHABET, self.key_symbols(key))

    def decrypt_with_key(self, ciphertext: str, key: str) -> DecryptionResult:
        plaintext = self.decrypt(ciphertext, key)
        return DecryptionResult(
            plaintext=plaintext,
            key=key,
            explanation=self.explain(ciphertext, plaintext, key),
        )

    @abstractmethod
    def generate_random_key(self) -> str:
        """Return a key that ``validate_key`` accepts ("" for keyless ciphers)."""

    @abstractmethod
    def validate_key(self, key: str) -> bool:
        """Whether the key changes the text in the way the user expects."""

    @abstractmethod
    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        """Human-readable description of how plaintext was obtained."""
