from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


@EngineRegistry.register
class IdentityEngine(CipherEngine):
    """Passes text through untouched. Any key is ignored."""

    name = "No Cipher"
    cipher_kind = CipherKind.NONE
    cipher_family = CipherFamily.IDENTITY
    description = "Text is left as it is."
    requires_key: ClassVar[bool] = False

    def encrypt(self, plaintext: str, key: str) -> str:
        return plaintext

    def decrypt(self, ciphertext: str, key: str) -> str:
        return ciphertext

    def generate_random_key(self) -> str:
        return ""

    def validate_key(self, key: str) -> bool:
        return True

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return "No cipher was applied; the text is unchanged."
