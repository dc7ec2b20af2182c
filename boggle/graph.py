from __future__ import annotations

from dataclasses import dataclass

from boggle.board import Board

DIRECTIONS: tuple[tuple[int, int], ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    index: int
    letter: str


@dataclass(frozen=True)
class AdjacencyGraph:
    """Fixed king-move connectivity between the cells of one board.

    ``letters[i]`` and ``neighbors[i]`` describe the cell with linear index
    ``i = row * cols + col``.
    """

    rows: int
    cols: int
    cells: tuple[Cell, ...]
    neighbors: tuple[tuple[int, ...], ...]

    @property
    def letters(self) -> tuple[str, ...]:
        return tuple(cell.letter for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)


def build_graph(board: Board) -> AdjacencyGraph:
    rows, cols = board.rows, board.cols
    cells = []
    neighbors: list[tuple[int, ...]] = []
    for idx in range(rows * cols):
        r, c = divmod(idx, cols)
        cells.append(Cell(r, c, idx, board.get(r, c)))
        adj = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols:
                adj.append(nr * cols + nc)
        neighbors.append(tuple(adj))
    return AdjacencyGraph(rows, cols, tuple(cells), tuple(neighbors))
