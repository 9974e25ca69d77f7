import logging
from typing import List

from lasergrid.board import Board
from lasergrid.cell import (
    Cell,
    CellType,
    Color,
    cell_color,
    cell_of,
    cell_type,
    next_tier,
)
from lasergrid.errors import InvalidPlacement, InvalidPosition, InvalidUpgrade
from lasergrid.position import Position, adjacent_positions, adjacent_sides

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Cell access
# ---------------------------------------------------------------------------


def get_cell_at(board: Board, position: Position) -> Cell:
    index = board.index(position)
    return Cell.EMPTY if index is None else board.cells[index]


def _line_positions(board: Board, position: Position) -> List[Position]:
    """Every position sharing ``position``'s row or column (itself twice)."""
    positions: List[Position] = []
    for i in range(board.size):
        positions.append(Position(i, position.y))
        positions.append(Position(position.x, i))
    return positions


def set_cell_at(board: Board, position: Position, cell: Cell) -> None:
    """
    Write ``cell`` and fire its area effect.

    A tower clears every differently coloured neighbour, a laser clears every
    differently coloured cell in its row and column. The sweep runs once for
    the written cell only: pieces it removes never fire their own effect.
    """
    index = board.index(position)
    if index is None:
        if cell == Cell.EMPTY:
            return
        raise InvalidPosition(f"Position {tuple(position)} is outside the board")

    board.cells[index] = cell

    color = cell_color(cell)
    if color is None:
        return

    kind = cell_type(cell)
    if kind == CellType.TOWER:
        affected = adjacent_positions(position)
    elif kind == CellType.LASER:
        affected = _line_positions(board, position)
    else:
        return

    cleared = 0
    for affected_position in affected:
        affected_index = board.index(affected_position)
        if affected_index is None:
            continue
        if cell_color(board.cells[affected_index]) != color:
            if board.cells[affected_index] != Cell.EMPTY:
                cleared += 1
            board.cells[affected_index] = Cell.EMPTY

    if cleared:
        logger.debug(
            "%s at %s cleared %d cell(s)", cell.name, tuple(position), cleared
        )


# ---------------------------------------------------------------------------
# Legality
# ---------------------------------------------------------------------------


def has_cells(board: Board, color: Color) -> bool:
    return any(cell_color(cell) == color for cell in board.cells)


def can_occupy(board: Board, position: Position, color: Color) -> bool:
    """
    Area denial: ``color`` may not stand next to an enemy tower or in the row
    or column of an enemy laser. Own towers and lasers never block.
    Emptiness of ``position`` is not considered.
    """
    for adjacent_position in adjacent_positions(position):
        adjacent_cell = get_cell_at(board, adjacent_position)
        if cell_type(adjacent_cell) != CellType.TOWER:
            continue
        if cell_color(adjacent_cell) != color:
            return False

    for laser_position in _line_positions(board, position):
        laser_cell = get_cell_at(board, laser_position)
        if cell_type(laser_cell) != CellType.LASER:
            continue
        if cell_color(laser_cell) != color:
            return False

    return True


def can_place_ring(board: Board, position: Position, color: Color) -> bool:
    if board.index(position) is None:
        return False

    if get_cell_at(board, position) != Cell.EMPTY:
        return False

    if not can_occupy(board, position, color):
        return False

    # 首手不受连通限制
    if not has_cells(board, color):
        return True

    neighbours = (
        adjacent_positions(position)
        if board.settings.allow_diagonal_placement
        else adjacent_sides(position)
    )
    return any(
        cell_color(get_cell_at(board, neighbour)) == color for neighbour in neighbours
    )


def legal_positions(board: Board, color: Color) -> List[Position]:
    return [
        position for position in board.positions() if can_place_ring(board, position, color)
    ]


def can_move(board: Board, color: Color) -> bool:
    return any(can_place_ring(board, position, color) for position in board.positions())


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def place_ring(board: Board, position: Position, color: Color) -> None:
    if not can_place_ring(board, position, color):
        raise InvalidPlacement(
            f"{color.value} cannot place a ring at {tuple(position)}"
        )
    set_cell_at(board, position, cell_of(CellType.RING, color))


def _run(board: Board, position: Position, cell: Cell, dx: int, dy: int) -> List[Position]:
    run: List[Position] = []
    x, y = position.x + dx, position.y + dy
    while 0 <= x < board.size and 0 <= y < board.size:
        candidate = Position(x, y)
        if get_cell_at(board, candidate) != cell:
            break
        run.append(candidate)
        x, y = x + dx, y + dy
    return run


def get_upgrade_positions(board: Board, position: Position) -> List[Position]:
    """
    Positions that combine with the piece at ``position``.

    Counts the contiguous identical run through ``position`` horizontally and
    vertically. Each line reaching ``minimum_combine_length`` contributes its
    cells; ``position`` comes first. Empty, laser or non-qualifying cells give
    an empty list.
    """
    cell = get_cell_at(board, position)
    kind = cell_type(cell)
    if kind in (CellType.EMPTY, CellType.LASER):
        return []

    position = Position(*position)
    minimum = board.settings.minimum_combine_length

    line_x = _run(board, position, cell, 1, 0) + _run(board, position, cell, -1, 0)
    line_y = _run(board, position, cell, 0, 1) + _run(board, position, cell, 0, -1)

    qualifies_x = len(line_x) + 1 >= minimum
    qualifies_y = len(line_y) + 1 >= minimum
    if not qualifies_x and not qualifies_y:
        return []

    upgrade_positions = [position]
    if qualifies_x:
        upgrade_positions.extend(line_x)
    if qualifies_y:
        upgrade_positions.extend(line_y)
    return upgrade_positions


def upgrade(board: Board, origin: Position, target: Position) -> Cell:
    """
    Merge the run through ``origin`` into one next-tier piece at ``target``.

    The run is cleared without any area effect, then the new piece is written
    with ``set_cell_at`` so it fires immediately from ``target``.
    Returns the new piece.
    """
    upgrade_positions = get_upgrade_positions(board, origin)
    if not upgrade_positions:
        raise InvalidUpgrade(f"No combinable run at {tuple(origin)}")

    target = Position(*target)
    if target not in upgrade_positions:
        raise InvalidUpgrade(
            f"Target {tuple(target)} is not part of the run at {tuple(origin)}"
        )

    cell = get_cell_at(board, origin)
    color = cell_color(cell)
    new_cell = cell_of(next_tier(cell_type(cell)), color)

    for upgrade_position in upgrade_positions:
        set_cell_at(board, upgrade_position, Cell.EMPTY)

    set_cell_at(board, target, new_cell)
    logger.debug(
        "Merged %d %s into %s at %s",
        len(upgrade_positions),
        cell.name,
        new_cell.name,
        tuple(target),
    )
    return new_cell
