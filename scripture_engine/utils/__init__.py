"""Utility modules for static book data and verse text cleanup."""

from .text_utils import normalize_verse_text

__all__ = ["normalize_verse_text"]
