"""Spanish word-shape heuristics shared by the loader and the word listing."""

import re

VOWELS = frozenset("aeiou")

_CC_BAD = re.compile(r"cc(?![ei])")


def has_vowel(word: str) -> bool:
    return any(ch in VOWELS for ch in word)


def has_triple_repeat(word: str) -> bool:
    """True if any letter appears three or more times in a row."""
    run = 1
    for prev, ch in zip(word, word[1:]):
        if ch == prev:
            run += 1
            if run >= 3:
                return True
        else:
            run = 1
    return False


def valid_cc_context(word: str) -> bool:
    # "cc" is only Spanish before e/i (accion, accidente)
    return _CC_BAD.search(word) is None


def acceptable_for_listing(word: str | None) -> bool:
    """Soft filter for listing board words: at least one vowel and a sane "cc"."""
    if not word or len(word) < 3:
        return False
    return has_vowel(word) and valid_cc_context(word)
