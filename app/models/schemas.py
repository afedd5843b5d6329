from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================


class CipherFamily(str, Enum):
    """Supported cipher families."""

    IDENTITY = "identity"
    MONOALPHABETIC = "monoalphabetic"
    POLYALPHABETIC = "polyalphabetic"
    POLYGRAPHIC = "polygraphic"
    FRACTIONATING = "fractionating"


class CipherKind(str, Enum):
    """Specific cipher kinds."""

    NONE = "none"
    SUBSTITUTION = "substitution"
    POLYBIUS = "polybius"
    BACON = "bacon"
    VIGENERE = "vigenere"
    PLAYFAIR = "playfair"
    CAESAR = "caesar"


# ============================================================================
# Request Schemas
# ============================================================================


class EncryptRequest(BaseModel):
    """Request schema for /encrypt endpoint."""

    plaintext: str = Field(max_length=100_000)
    cipher_type: CipherKind
    key: str | None = None


class DecryptRequest(BaseModel):
    """Request schema for /decrypt endpoint."""

    ciphertext: str = Field(max_length=100_000)
    cipher_type: CipherKind
    key: str = ""


class KeyedAlphabetRequest(BaseModel):
    """Request schema for /solver/keyed-alphabet endpoint."""

    key: str
    alphabet: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class TryKeyRequest(BaseModel):
    """Request schema for /solver/try-key endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    keyword: str = Field(min_length=1)
    cipher_type: CipherKind = CipherKind.SUBSTITUTION


class SweepRequest(BaseModel):
    """Request schema for /solver/sweep endpoint."""

    ciphertext: str = Field(min_length=1, max_length=100_000)
    keyword: str = Field(min_length=1)
    fixed_letters: str = ""
    cipher_type: CipherKind = CipherKind.SUBSTITUTION
    count_words: bool = True
    max_permutations: int | None = Field(default=None, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ScoreRequest(BaseModel):
    """Request schema for /solver/score endpoint."""

    text: str = Field(max_length=100_000)


class RecordTrialRequest(BaseModel):
    """One permutation reported by an external enumeration driver."""

    keyword: str
    plaintext: str
    count: int | None = Field(default=None, ge=0)


# ============================================================================
# Response Schemas
# ============================================================================


class EncryptResponse(BaseModel):
    """Response schema for /encrypt endpoint."""

    ciphertext: str
    cipher_type: CipherKind
    key_used: str


class DecryptResponse(BaseModel):
    """Response schema for /decrypt endpoint."""

    plaintext: str
    key_used: str
    explanation: str


class KeyedAlphabetResponse(BaseModel):
    """Response schema for /solver/keyed-alphabet endpoint."""

    alphabet: str


class TrialSchema(BaseModel):
    """A single keyword trial."""

    model_config = ConfigDict(from_attributes=True)

    index: int
    keyword: str
    text: str
    count: int


class TryKeyResponse(BaseModel):
    """Response schema for /solver/try-key endpoint."""

    keyword: str
    keyed_alphabet: str
    plaintext: str
    common_word_count: int


class SweepResponse(BaseModel):
    """Response schema for /solver/sweep endpoint."""

    keyword: str
    total_permutations: int
    recorded: int
    stored: int
    truncated: bool
    best: list[TrialSchema]


class ScoreResponse(BaseModel):
    """Response schema for /solver/score endpoint."""

    count: int
    words: int


class TrialListResponse(BaseModel):
    """Response schema for GET /trials."""

    items: list[TrialSchema]
    total: int
    order: Literal["index", "count"]
    offset: int
    limit: int


class WordCountResponse(BaseModel):
    """Response schema for /trials/count-words."""

    trials: int
    total_words: int


class ArchiveResponse(BaseModel):
    """Response schema for /trials/save and /trials/restore."""

    ok: bool
    trials: int


class CipherInfo(BaseModel):
    """One entry of GET /ciphers."""

    cipher_type: CipherKind
    name: str
    family: CipherFamily
    description: str
    requires_key: bool


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
