from __future__ import annotations

import enum
import logging
import random
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from boggle.board import Board, random_board
from boggle.graph import build_graph
from boggle.normalize import normalize
from boggle.solver import MIN_WORD_LENGTH, Solver, rank_words
from boggle.trie import Trie
from boggle.validator import ValidationResult, WordValidator

logger = logging.getLogger("boggle")

# (minimum length, points), longest tier first
SCORE_TIERS: tuple[tuple[int, int], ...] = ((8, 11), (7, 5), (6, 3), (5, 2), (3, 1))


def score_word(word: str) -> int:
    length = len(word)
    for min_len, points in SCORE_TIERS:
        if length >= min_len:
            return points
    return 0


class SessionState(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"


class SubmitStatus(str, enum.Enum):
    OK = "OK"
    TOO_SHORT = "TOO_SHORT"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"
    NOT_FORMABLE_ON_BOARD = "NOT_FORMABLE_ON_BOARD"
    NOT_IN_DICTIONARY = "NOT_IN_DICTIONARY"
    REPEATED = "REPEATED"


class SessionFinishedError(RuntimeError):
    """Raised when a word is submitted to a finished session."""


@dataclass(frozen=True)
class SubmitOutcome:
    status: SubmitStatus
    normalized: str = ""
    points: int = 0

    @property
    def is_ok(self) -> bool:
        return self.status is SubmitStatus.OK


@dataclass(frozen=True)
class GameSummary:
    """What player records and notifications get from a finished game."""

    player_name: str
    score: int
    words: list[str] = field(default_factory=list)
    last_played: datetime | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """One playthrough: board, accepted words, score and lifecycle.

    ``submit_word`` and ``finish`` are serialized by a lock, so a session may be
    shared between threads.
    """

    def __init__(
        self,
        player_name: str,
        dictionary: Trie,
        board: Board | None = None,
        rng: random.Random | None = None,
        min_word_length: int = MIN_WORD_LENGTH,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if player_name is None or not player_name.strip():
            raise ValueError("Player name must not be empty")
        if dictionary is None:
            raise ValueError("Dictionary must not be None")

        self.player_name = player_name.strip()
        self.dictionary = dictionary
        self.board = board if board is not None else random_board(rng)
        self.min_word_length = min_word_length
        self.graph = build_graph(self.board)
        self.solver = Solver(self.graph, min_word_length)
        self.validator = WordValidator(self.solver, dictionary, min_word_length)

        self._clock = clock
        self._lock = threading.RLock()
        self._accepted: dict[str, None] = {}  # insertion-ordered set
        self._score = 0
        self._state = SessionState.NOT_STARTED
        self._started_at: datetime | None = None
        self._finished_at: datetime | None = None
        self._started_monotonic: float | None = None
        self._finished_monotonic: float | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_finished(self) -> bool:
        return self._state is SessionState.FINISHED

    @property
    def score(self) -> int:
        return self._score

    @property
    def accepted_words(self) -> list[str]:
        with self._lock:
            return list(self._accepted)

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def finished_at(self) -> datetime | None:
        return self._finished_at

    @property
    def elapsed_seconds(self) -> float:
        if self._started_monotonic is None:
            return 0.0
        end = self._finished_monotonic if self._finished_monotonic is not None else time.monotonic()
        return end - self._started_monotonic

    @property
    def seconds_since_finish(self) -> float | None:
        if self._finished_monotonic is None:
            return None
        return time.monotonic() - self._finished_monotonic

    def start(self):
        with self._lock:
            if self._state is SessionState.NOT_STARTED:
                self._state = SessionState.RUNNING
                self._started_at = self._clock()
                self._started_monotonic = time.monotonic()
                logger.info("Session started player=%s board=%s", self.player_name, self.board.letters)

    def submit_word(self, raw: str | None) -> SubmitOutcome:
        with self._lock:
            if self._state is SessionState.FINISHED:
                raise SessionFinishedError("Session already finished")
            self.start()

            validation = self.validator.validate(raw)
            if validation.result is not ValidationResult.OK:
                logger.debug("Rejected %r: %s", raw, validation.result.value)
                return SubmitOutcome(SubmitStatus(validation.result.value), validation.normalized)

            word = validation.normalized
            if word in self._accepted:
                return SubmitOutcome(SubmitStatus.REPEATED, word)

            points = score_word(word)
            self._accepted[word] = None
            self._score += points
            return SubmitOutcome(SubmitStatus.OK, word, points)

    def finish(self):
        with self._lock:
            self.start()
            if self._state is SessionState.RUNNING:
                self._state = SessionState.FINISHED
                self._finished_at = self._clock()
                self._finished_monotonic = time.monotonic()
                logger.info(
                    "Session finished player=%s score=%d words=%d",
                    self.player_name, self._score, len(self._accepted),
                )

    def reconstruct_path(self, raw: str | None) -> list[int] | None:
        return self.solver.reconstruct_path(normalize(raw))

    def remaining_words(self, max_results: int = 0) -> list[str]:
        """Listable board words not yet accepted, longest first."""
        found = self.solver.find_all_words_filtered(self.dictionary, self.min_word_length)
        with self._lock:
            missed = found.difference(self._accepted)
        return rank_words(missed, max_results)

    def summary(self) -> GameSummary:
        with self._lock:
            return GameSummary(
                player_name=self.player_name,
                score=self._score,
                words=list(self._accepted),
                last_played=self._finished_at or self._started_at,
            )
