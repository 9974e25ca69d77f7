"""
Vectorised legality masks.

Arrays are indexed ``[y, x]`` so they line up with the row-major cell list.
They are used for hint overlays in room payloads and must agree with
``lasergrid.rule_engine`` cell for cell.
"""

from __future__ import annotations

import numpy as np

from lasergrid.board import Board
from lasergrid.cell import Cell, CellType, Color, cell_of


def cells_array(board: Board) -> np.ndarray:
    """``(size, size)`` int8 array of cell codes."""
    return np.array(
        [cell.value for cell in board.cells], dtype=np.int8
    ).reshape(board.size, board.size)


def _own_mask(grid: np.ndarray, color: Color) -> np.ndarray:
    codes = [cell_of(kind, color).value for kind in (CellType.RING, CellType.TOWER, CellType.LASER)]
    return np.isin(grid, codes)


def denial_mask(board: Board, color: Color) -> np.ndarray:
    """True where ``color`` may not stand because of enemy towers or lasers."""
    grid = cells_array(board)
    enemy = color.opponent()
    size = board.size

    towers = grid == cell_of(CellType.TOWER, enemy).value
    padded = np.pad(towers, 1)
    near_tower = np.zeros((size, size), dtype=bool)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            near_tower |= padded[1 + dy:1 + dy + size, 1 + dx:1 + dx + size]

    lasers = grid == cell_of(CellType.LASER, enemy).value
    laser_rows = lasers.any(axis=1)
    laser_cols = lasers.any(axis=0)
    in_laser_line = laser_rows[:, None] | laser_cols[None, :]

    return near_tower | in_laser_line


def placement_mask(board: Board, color: Color) -> np.ndarray:
    """True where ``can_place_ring(board, (x, y), color)`` holds."""
    grid = cells_array(board)
    allowed = (grid == Cell.EMPTY.value) & ~denial_mask(board, color)

    own = _own_mask(grid, color)
    if not own.any():
        return allowed

    size = board.size
    padded = np.pad(own, 1)
    if board.settings.allow_diagonal_placement:
        offsets = [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]
    else:
        offsets = [(-1, 0), (1, 0), (0, -1), (0, 1)]

    touches_own = np.zeros((size, size), dtype=bool)
    for dy, dx in offsets:
        touches_own |= padded[1 + dy:1 + dy + size, 1 + dx:1 + dx + size]

    return allowed & touches_own
