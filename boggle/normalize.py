import re
import unicodedata

_NON_LETTERS = re.compile(r"[^a-z]")


def strip_diacritics(text: str) -> str:
    """Decompose to NFD and drop every combining mark."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw: str | None) -> str:
    """Lowercase, strip diacritics and keep only ``a``-``z``."""
    if not raw:
        return ""
    return _NON_LETTERS.sub("", strip_diacritics(raw.lower()))
