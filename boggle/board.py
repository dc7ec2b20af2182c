from __future__ import annotations

import logging
import random

logger = logging.getLogger("boggle")

ROWS = 4
COLS = 4

# Weighted Spanish letter distribution without "ñ": each letter repeated by weight
LETTER_WEIGHTS: dict[str, int] = {
    "a": 7, "b": 4, "c": 6, "d": 6, "e": 10, "f": 4, "g": 4, "h": 4,
    "i": 8, "j": 2, "k": 2, "l": 7, "m": 7, "n": 8, "o": 8, "p": 6,
    "q": 1, "r": 8, "s": 8, "t": 8, "u": 6, "v": 2, "w": 2, "x": 1,
    "y": 4, "z": 1,
}

_LETTER_POOL = "".join(letter * weight for letter, weight in LETTER_WEIGHTS.items())

_system_rng = random.SystemRandom()


class InvalidBoardError(ValueError):
    """Raised when a grid is not a ROWS x COLS grid of single letters."""


class Board:
    """Immutable ROWS x COLS grid of single lowercase letters.

    Accepts any nested sequence of letters (rows may be strings); letters are
    lowercased and anything other than ``a``-``z`` raises ``InvalidBoardError``.
    """

    __slots__ = ("_grid", "rows", "cols")

    def __init__(self, grid, rows: int = ROWS, cols: int = COLS):
        try:
            grid = list(grid)
        except TypeError:
            raise InvalidBoardError(f"Board must be {rows}x{cols}") from None
        if len(grid) != rows:
            raise InvalidBoardError(f"Board must be {rows}x{cols}")

        checked = []
        for row in grid:
            if isinstance(row, str):
                row = list(row)
            if not isinstance(row, (list, tuple)) or len(row) != cols:
                raise InvalidBoardError(f"Board must be {rows}x{cols}")
            cells = []
            for cell in row:
                letter = cell.lower() if isinstance(cell, str) else ""
                if len(letter) != 1 or not "a" <= letter <= "z":
                    raise InvalidBoardError(f"Invalid board cell: {cell!r}")
                cells.append(letter)
            checked.append(tuple(cells))

        self._grid = tuple(checked)
        self.rows = rows
        self.cols = cols

    def get(self, row: int, col: int) -> str:
        return self._grid[row][col]

    @property
    def grid(self) -> list[list[str]]:
        """A fresh nested-list copy, safe to hand to callers and JSON encoders."""
        return [list(row) for row in self._grid]

    @property
    def letters(self) -> str:
        return "".join("".join(row) for row in self._grid)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __hash__(self):
        return hash(self._grid)

    def __repr__(self):
        return f"Board({' / '.join(''.join(row) for row in self._grid)})"

    def __str__(self):
        return "\n".join(" ".join(row) for row in self._grid)


def random_letter(rng: random.Random | None = None) -> str:
    return (rng or _system_rng).choice(_LETTER_POOL)


def random_board(rng: random.Random | None = None, rows: int = ROWS, cols: int = COLS) -> Board:
    """Fill a board from the weighted letter pool.

    Pass a seeded ``random.Random`` for reproducible boards; the default source
    is ``random.SystemRandom``.
    """
    source = rng or _system_rng
    grid = tuple(
        tuple(random_letter(source) for _ in range(cols))
        for _ in range(rows)
    )
    board = Board(grid, rows, cols)
    logger.debug("Generated board %r", board)
    return board


def board_from_preset(preset, rows: int = ROWS, cols: int = COLS) -> Board:
    """Build a board from a nested sequence of letters, rejecting any other shape."""
    return Board(preset, rows, cols)
