from typing import ClassVar

from app.models.schemas import CipherFamily, CipherKind
from app.services.engines.alphabet import UPPERCASE_ALPHABET, substitute
from app.services.engines.base import CipherEngine
from app.services.engines.registry import EngineRegistry


def bacon_rashers(alphabet: str, symbols: str = "AB") -> list[str]:
    """
    Build the rasher for each letter of an alphabet.

    A rasher is the letter's index in binary, zero-padded to the width of the
    largest index, written with ``symbols[0]`` for 0 and ``symbols[1]`` for 1.
    For A-Z that is five symbols: A -> AAAAA, B -> AAAAB, Z -> BBAAB.
    """
    width = (len(alphabet) - 1).bit_length()
    zero, one = symbols
    return [
        format(i, f"0{width}b").replace("0", zero).replace("1", one)
        for i in range(len(alphabet))
    ]


@EngineRegistry.register
class BaconEngine(CipherEngine):
    """
    Bacon's cipher engine.

    Every uppercase letter becomes a five-symbol rasher of A's and B's. The
    cipher has no key. On decryption A's and B's are collected five at a time;
    a rasher with no letter (past Z) decodes to '?', and any other character
    passes straight through.
    """

    name = "Bacon's Cipher"
    cipher_kind = CipherKind.BACON
    cipher_family = CipherFamily.FRACTIONATING
    description = (
        "Francis Bacon's biliteral cipher: each letter is written as a "
        "five-symbol group of A's and B's."
    )
    requires_key: ClassVar[bool] = False

    ALPHABET: ClassVar[str] = UPPERCASE_ALPHABET
    RASHER_SYMBOLS: ClassVar[str] = "AB"
    UNKNOWN: ClassVar[str] = "?"

    def __init__(self):
        self.rashers = bacon_rashers(self.ALPHABET, self.RASHER_SYMBOLS)
        self.rasher_length = len(self.rashers[0])
        self._letters = {rasher: letter for rasher, letter in zip(self.rashers, self.ALPHABET)}

    def encrypt(self, plaintext: str, key: str) -> str:
        return substitute(plaintext, self.ALPHABET, self.rashers)

    def decrypt(self, ciphertext: str, key: str) -> str:
        result = []
        rasher = ""
        for char in ciphertext:
            if char not in self.RASHER_SYMBOLS:
                result.append(char)
                continue

            rasher += char
            if len(rasher) < self.rasher_length:
                continue

            result.append(self._letters.get(rasher, self.UNKNOWN))
            rasher = ""

        # Trailing symbols that never made a full rasher
        result.append(rasher)
        return "".join(result)

    def generate_random_key(self) -> str:
        return ""

    def validate_key(self, key: str) -> bool:
        return True

    def explain(self, ciphertext: str, plaintext: str, key: str) -> str:
        return (
            f"Bacon's cipher. Each group of {self.rasher_length} A/B symbols is a "
            f"letter's position in binary (A=0, B=1), e.g. "
            f"{self.rashers[0]}=A, {self.rashers[1]}=B, {self.rashers[-1]}=Z."
        )
