from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from boggle.heuristics import has_triple_repeat, has_vowel
from boggle.normalize import normalize
from boggle.trie import Trie

logger = logging.getLogger("boggle")

_ALL_CAPS_TOKEN = re.compile(r"^[A-ZÁÉÍÓÚÜÑ .\-+/]+$")
_PROPER_NOUN = re.compile(r"^[A-ZÁÉÍÓÚÜ][a-záéíóúü]+$")
_PUNCTUATED = re.compile(r"[./\-+_0-9]")


@dataclass(frozen=True)
class LoadOptions:
    min_length: int = 3
    exclude_all_caps: bool = True
    exclude_proper_nouns: bool = True
    exclude_punctuated: bool = True
    require_vowel: bool = False


@dataclass
class LoadStats:
    total: int = 0
    loaded: int = 0
    skipped: dict[str, int] = field(default_factory=lambda: {
        "enye": 0, "all_caps": 0, "punctuated": 0, "proper_noun": 0,
        "too_short": 0, "triples": 0, "no_vowel": 0,
    })


def contains_enye(raw: str) -> bool:
    return "ñ" in raw or "Ñ" in raw


def is_all_caps_token(raw: str) -> bool:
    """Acronym heuristic: at least two letters, nearly all of them uppercase."""
    if len(raw) < 2 or not _ALL_CAPS_TOKEN.match(raw):
        return False
    letters = [ch for ch in raw if ch.isalpha()]
    upper = sum(1 for ch in letters if ch.isupper())
    return len(letters) >= 2 and upper >= max(2, int(len(letters) * 0.8 + 0.5))


def is_proper_noun(raw: str) -> bool:
    return _PROPER_NOUN.match(raw) is not None


def has_punctuation(raw: str) -> bool:
    return _PUNCTUATED.search(raw) is not None


def clean_word(raw: str, options: LoadOptions, stats: LoadStats | None = None) -> str | None:
    """Run one raw word-list token through the filters; None if it is rejected."""
    def skip(reason: str):
        if stats is not None:
            stats.skipped[reason] += 1
        return None

    token = raw.strip()
    if not token:
        return None
    if contains_enye(token):
        return skip("enye")
    if options.exclude_all_caps and is_all_caps_token(token):
        return skip("all_caps")
    if options.exclude_punctuated and has_punctuation(token):
        return skip("punctuated")
    if options.exclude_proper_nouns and is_proper_noun(token):
        return skip("proper_noun")

    word = normalize(token)
    if len(word) < options.min_length:
        return skip("too_short")
    if has_triple_repeat(word):
        return skip("triples")
    if options.require_vowel and not has_vowel(word):
        return skip("no_vowel")
    return word


def build_dictionary_with_stats(
    lines: Iterable[str],
    options: LoadOptions = LoadOptions(),
    dictionary: Trie | None = None,
) -> tuple[Trie, LoadStats]:
    trie = dictionary if dictionary is not None else Trie()
    stats = LoadStats()
    unique: set[str] = set()
    for line in lines:
        stats.total += 1
        word = clean_word(line, options, stats)
        if word is not None:
            unique.add(word)

    # Insertion order does not change a character-keyed trie; sorted keeps loads reproducible
    for word in sorted(unique):
        trie.insert(word)
    stats.loaded = trie.size()
    return trie, stats


def build_dictionary(words: Iterable[str], options: LoadOptions = LoadOptions()) -> Trie:
    trie, _ = build_dictionary_with_stats(words, options)
    return trie


def load_dictionary_with_stats(
    path: str | Path,
    options: LoadOptions = LoadOptions(),
    dictionary: Trie | None = None,
) -> tuple[Trie, LoadStats]:
    """Load a UTF-8 newline-delimited word list. I/O errors propagate."""
    with open(path, "r", encoding="utf-8") as f:
        trie, stats = build_dictionary_with_stats(f, options, dictionary)

    logger.info(
        "Dictionary %s: lines=%d loaded=%d skipped=%s",
        path, stats.total, stats.loaded,
        " ".join(f"{k}={v}" for k, v in stats.skipped.items()),
    )
    return trie, stats


def load_dictionary(
    path: str | Path,
    options: LoadOptions = LoadOptions(),
    dictionary: Trie | None = None,
) -> Trie:
    trie, _ = load_dictionary_with_stats(path, options, dictionary)
    return trie
