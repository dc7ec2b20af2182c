import random

import pytest

from boggle.board import COLS, ROWS, Board, InvalidBoardError, board_from_preset, random_board
from boggle.graph import build_graph

SCENARIO = [
    ["c", "a", "n", "n"],
    ["x", "c", "i", "o"],
    ["s", "o", "l", "x"],
    ["m", "a", "d", "e"],
]


def _expected_degree(idx: int) -> int:
    r, c = divmod(idx, COLS)
    on_row_edge = r in (0, ROWS - 1)
    on_col_edge = c in (0, COLS - 1)
    if on_row_edge and on_col_edge:
        return 3
    if on_row_edge or on_col_edge:
        return 5
    return 8


def test_random_board_is_4x4_lowercase_without_enye():
    for seed in range(50):
        board = random_board(random.Random(seed))
        assert board.rows == ROWS and board.cols == COLS
        assert len(board.letters) == 16
        assert all("a" <= ch <= "z" for ch in board.letters)
        assert "ñ" not in board.letters


def test_random_board_is_reproducible_with_seed():
    assert random_board(random.Random(42)) == random_board(random.Random(42))


def test_random_board_default_source():
    board = random_board()
    assert len(board.letters) == 16


def test_preset_board_lowercases_and_copies():
    preset = [row[:] for row in SCENARIO]
    preset[0][0] = "C"
    board = board_from_preset(preset)
    assert board.get(0, 0) == "c"
    preset[1][1] = "z"
    assert board.get(1, 1) == "c"

    grid = board.grid
    grid[2][2] = "q"
    assert board.get(2, 2) == "l"


def test_preset_accepts_row_strings():
    board = board_from_preset(["cann", "xcio", "solx", "made"])
    assert board == board_from_preset(SCENARIO)


@pytest.mark.parametrize("preset", [
    None,
    42,
    ["abcd", 1, "abcd", "abcd"],
    [],
    [["a", "b", "c", "d"]] * 3,
    [["a", "b", "c"]] * 4,
    [["a", "b", "c", "d"]] * 3 + [["a", "b", "c", "d", "e"]],
    [["a", "b", "c", "d"]] * 5,
])
def test_preset_rejects_wrong_shape(preset):
    with pytest.raises(InvalidBoardError):
        board_from_preset(preset)


@pytest.mark.parametrize("cell", ["ñ", "1", "", "ab", None])
def test_preset_rejects_bad_cells(cell):
    preset = [row[:] for row in SCENARIO]
    preset[3][3] = cell
    with pytest.raises(InvalidBoardError):
        board_from_preset(preset)


def test_invalid_board_error_is_value_error():
    assert issubclass(InvalidBoardError, ValueError)


def test_board_str():
    board = board_from_preset(SCENARIO)
    assert str(board).splitlines()[0] == "c a n n"
    assert isinstance(board, Board)


def test_graph_degrees():
    graph = build_graph(board_from_preset(SCENARIO))
    assert len(graph) == 16
    for idx in range(16):
        assert len(graph.neighbors[idx]) == _expected_degree(idx)


def test_graph_degrees_on_random_boards():
    for seed in range(10):
        graph = build_graph(random_board(random.Random(seed)))
        degrees = sorted(len(n) for n in graph.neighbors)
        assert degrees == [3] * 4 + [5] * 8 + [8] * 4


def test_graph_adjacency_is_symmetric_and_irreflexive():
    graph = build_graph(board_from_preset(SCENARIO))
    for i in range(16):
        assert i not in graph.neighbors[i]
        for j in graph.neighbors[i]:
            assert i in graph.neighbors[j]


def test_graph_neighbors_are_king_moves():
    graph = build_graph(board_from_preset(SCENARIO))
    for i in range(16):
        r1, c1 = graph.cells[i].row, graph.cells[i].col
        for j in graph.neighbors[i]:
            r2, c2 = graph.cells[j].row, graph.cells[j].col
            assert max(abs(r1 - r2), abs(c1 - c2)) == 1


def test_graph_cells_carry_letters():
    graph = build_graph(board_from_preset(SCENARIO))
    cell = graph.cells[2 * graph.cols + 1]
    assert (cell.row, cell.col, cell.index, cell.letter) == (2, 1, 9, "o")
    assert "".join(graph.letters) == "cannxciosolxmade"
    assert graph.neighbors[0] == (1, 4, 5)


@pytest.mark.parametrize("grid", [
    (("a", "b", "c"),),
    (("a", "b"), ("c",)),
    tuple(("a", "b", "c", "d") for _ in range(3)),
    None,
    42,
    ["abcd", 1, "abcd", "abcd"],
])
def test_board_constructor_rejects_wrong_shape(grid):
    with pytest.raises(InvalidBoardError):
        Board(grid)


def test_board_constructor_rejects_bad_letters():
    grid = [row[:] for row in SCENARIO]
    grid[0][1] = "ñ"
    with pytest.raises(InvalidBoardError):
        Board(grid)


def test_board_constructor_lowercases():
    board = Board([row.upper() for row in ["cann", "xcio", "solx", "made"]])
    assert board.letters == "cannxciosolxmade"
    assert (board.rows, board.cols) == (4, 4)
