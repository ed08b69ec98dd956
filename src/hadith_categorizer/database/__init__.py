"""Database package for the hadith categorizer."""

from .models import Base, Hadith

__all__ = [
    "Base",
    "Hadith",
]
