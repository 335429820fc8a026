"""Utility functions for the stop game."""

import math
import re
import unicodedata


def normalize_answer(text: str) -> str:
    """Trim, collapse inner whitespace and case-fold an answer for comparison."""
    return re.sub(r'\s+', ' ', (text or '').strip()).casefold()


def fold_accents(text: str) -> str:
    """Remove diacritics, so 'Água' compares like 'Agua'."""
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def first_letter(text: str) -> str:
    """First character of text, upper-cased and without accents.
    Returns '' if text is blank or does not start with a letter."""
    stripped = fold_accents((text or '').strip())
    if stripped and stripped[0].isalpha():
        return stripped[0].upper()
    return ''


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)


def normalize_shape(text: str) -> str:
    """Compose accents (NFC), straighten curly apostrophes and collapse whitespace."""
    text = unicodedata.normalize('NFC', text).replace('’', "'").replace('‘', "'")
    return re.sub(r'\s+', ' ', text.strip())
