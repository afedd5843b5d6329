"""
Encrypt/decrypt by cipher kind.

Thin dispatch over the engine registry so callers that only know a
``CipherKind`` (or its string value) do not need engine instances.
"""

from app.core.exceptions import EngineNotFoundError
from app.models.schemas import CipherKind
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


def get_engine(kind: CipherKind | str) -> CipherEngine:
    """Return the engine for a cipher kind."""
    try:
        kind = CipherKind(kind)
    except ValueError:
        raise EngineNotFoundError(str(kind)) from None

    engine = EngineRegistry().get_engine(kind)
    if engine is None:
        raise EngineNotFoundError(kind.value)
    return engine


def encrypt(kind: CipherKind | str, plaintext: str, key: str | None = None) -> str:
    """Encrypt plaintext with the cipher selected by ``kind``."""
    return get_engine(kind).encrypt(plaintext, key or "")


def decrypt(kind: CipherKind | str, ciphertext: str, key: str | None = None) -> str:
    """Decrypt ciphertext with the cipher selected by ``kind``."""
    return get_engine(kind).decrypt(ciphertext, key or "")
