"""Fractionating cipher engines (letters written as several symbols)."""

from app.services.engines.fractionating.bacon import BaconEngine
from app.services.engines.fractionating.polybius import PolybiusEngine

__all__ = [
    "BaconEngine",
    "PolybiusEngine",
]
