from __future__ import annotations

import enum
from dataclasses import dataclass

from boggle.normalize import normalize
from boggle.solver import MIN_WORD_LENGTH, Solver
from boggle.trie import Trie


class ValidationResult(str, enum.Enum):
    OK = "OK"
    TOO_SHORT = "TOO_SHORT"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"  # "ñ", digits, punctuation or nothing left
    NOT_FORMABLE_ON_BOARD = "NOT_FORMABLE_ON_BOARD"
    NOT_IN_DICTIONARY = "NOT_IN_DICTIONARY"


@dataclass(frozen=True)
class Validation:
    result: ValidationResult
    normalized: str = ""

    @property
    def is_ok(self) -> bool:
        return self.result is ValidationResult.OK


def has_invalid_characters(raw: str) -> bool:
    """True for "ñ"/"Ñ" or any character that is neither whitespace nor a letter."""
    if "ñ" in raw or "Ñ" in raw:
        return True
    return any(not (ch.isspace() or ch.isalpha()) for ch in raw)


class WordValidator:
    """Classify one raw user submission against a board and a dictionary.

    Checks run in a fixed order and stop at the first failure:

    1. "ñ"/"Ñ", blank input, or any character other than letters and
       whitespace -> INVALID_CHARACTERS. This scan runs on the raw text,
       before normalization would silently drop those characters.
    2. Normalize; nothing left -> INVALID_CHARACTERS.
    3. Shorter than the minimum length -> TOO_SHORT.
    4. No path on the board -> NOT_FORMABLE_ON_BOARD.
    5. Not a dictionary word -> NOT_IN_DICTIONARY.
    """

    def __init__(self, solver: Solver, dictionary: Trie, min_word_length: int = MIN_WORD_LENGTH):
        self.solver = solver
        self.dictionary = dictionary
        self.min_word_length = min_word_length

    def validate(self, raw: str | None) -> Validation:
        if raw is None or not raw.strip() or has_invalid_characters(raw):
            return Validation(ValidationResult.INVALID_CHARACTERS)

        word = normalize(raw)
        if not word:
            return Validation(ValidationResult.INVALID_CHARACTERS)
        if len(word) < self.min_word_length:
            return Validation(ValidationResult.TOO_SHORT, word)
        if not self.solver.can_form_word(word):
            return Validation(ValidationResult.NOT_FORMABLE_ON_BOARD, word)
        if not self.dictionary.contains_word(word):
            return Validation(ValidationResult.NOT_IN_DICTIONARY, word)
        return Validation(ValidationResult.OK, word)
