"""Letter normalization for word comparison."""

import re
import unicodedata
from typing import Set

# Ñ is a letter of its own and must survive diacritic stripping.
SHIELDED_LETTER = "Ñ"
_PLACEHOLDER = "\u2588"
_COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def normalize_text(text: str) -> str:
    """
    Case-fold and strip diacritics, keeping Ñ intact.

    The text is composed first so a decomposed "n" + combining tilde is
    shielded the same way as a precomposed "ñ".
    """
    composed = unicodedata.normalize("NFC", text)
    shielded = composed.replace("ñ", _PLACEHOLDER).replace("Ñ", _PLACEHOLDER)
    # Uppercasing can itself emit combining marks (e.g. "ǰ"), so strip after it.
    stripped = _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", shielded.upper()))
    return stripped.replace(_PLACEHOLDER, SHIELDED_LETTER)


def is_letter_in_word(letter: str, word: str) -> bool:
    """Check whether a guessed letter occurs in the word, ignoring case and accents."""
    if not letter or not word:
        return False
    return normalize_text(letter) in normalize_text(word)


def unique_letters(word: str) -> Set[str]:
    """Distinct normalized letters a player has to guess (spaces and punctuation excluded)."""
    return {ch for ch in normalize_text(word) if ch.isalpha()}


def letters_match(a: str, b: str) -> bool:
    return normalize_text(a) == normalize_text(b)
