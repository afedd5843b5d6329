"""Polygraphic cipher engines."""

from app.services.engines.polygraphic.playfair import PlayfairEngine

__all__ = [
    "PlayfairEngine",
]
