"""Monoalphabetic cipher engines."""

from app.services.engines.monoalphabetic.caesar import CaesarEngine
from app.services.engines.monoalphabetic.substitution import KeyedSubstitutionEngine

__all__ = [
    "CaesarEngine",
    "KeyedSubstitutionEngine",
]
