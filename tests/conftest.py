from typing import Callable, Sequence

import pytest

from lasergrid.board import Board
from lasergrid.cell import Cell
from lasergrid.settings import BoardSettings

SYMBOLS = {
    ".": Cell.EMPTY,
    "r": Cell.RED_RING,
    "R": Cell.RED_TOWER,
    "L": Cell.RED_LASER,
    "b": Cell.BLACK_RING,
    "B": Cell.BLACK_TOWER,
    "K": Cell.BLACK_LASER,
}


def parse_board(rows: Sequence[str], **settings) -> Board:
    """
    Build a board from a diagram without firing any area effects.
    Row ``y`` of the diagram is ``rows[y]``; spaces are ignored.
    """
    grid = [row.replace(" ", "") for row in rows]
    size = len(grid)
    assert all(len(row) == size for row in grid), "diagram must be square"
    cells = [SYMBOLS[symbol] for row in grid for symbol in row]
    return Board(settings=BoardSettings(size=size, **settings), cells=cells)


@pytest.fixture
def board_from() -> Callable[..., Board]:
    return parse_board
