"""Utility functions for romaja application."""

import unicodedata

from .config import HANGUL_SYLLABLE_FIRST, HANGUL_SYLLABLE_LAST


def normalize(text: str) -> str:
    """Reduce free-text input to a comparable canonical form.

    Lowercases, strips diacritics and drops everything that is not a letter
    or a decimal digit in any script. Superscripts, fractions and Roman
    numerals are dropped. Hangul syllables are recomposed, so native
    script input survives intact.
    """
    if not text:
        return ''
    decomposed = unicodedata.normalize('NFD', text.strip().lower())
    kept = []
    for ch in decomposed:
        if unicodedata.combining(ch):
            continue
        category = unicodedata.category(ch)
        if category[0] == 'L' or category == 'Nd':
            kept.append(ch)
    return unicodedata.normalize('NFC', ''.join(kept))


def is_hangul_syllable(ch: str) -> bool:
    return HANGUL_SYLLABLE_FIRST <= ord(ch) <= HANGUL_SYLLABLE_LAST


def count_syllables(word: str) -> int:
    """Count the Hangul syllable characters in a word."""
    return sum(1 for ch in word if is_hangul_syllable(ch))
