"""Rule engine for a two-player ring / tower / laser placement game."""

from lasergrid.board import Board, create_board
from lasergrid.cell import Cell, CellType, Color, cell_color, cell_of, cell_type
from lasergrid.errors import CodecError, InvalidPlacement, InvalidPosition, InvalidUpgrade
from lasergrid.game import Game, Outcome, evaluate_outcome
from lasergrid.position import Position
from lasergrid.rule_engine import (
    can_move,
    can_occupy,
    can_place_ring,
    get_cell_at,
    get_upgrade_positions,
    place_ring,
    set_cell_at,
    upgrade,
)
from lasergrid.settings import DEFAULT_SETTINGS, BoardSettings

__all__ = [
    "Board",
    "BoardSettings",
    "Cell",
    "CellType",
    "CodecError",
    "Color",
    "DEFAULT_SETTINGS",
    "Game",
    "InvalidPlacement",
    "InvalidPosition",
    "InvalidUpgrade",
    "Outcome",
    "Position",
    "can_move",
    "can_occupy",
    "can_place_ring",
    "cell_color",
    "cell_of",
    "cell_type",
    "create_board",
    "evaluate_outcome",
    "get_cell_at",
    "get_upgrade_positions",
    "place_ring",
    "set_cell_at",
    "upgrade",
]
