from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np

from lasergrid.board import Board
from lasergrid.cell import Color
from lasergrid.codec import board_to_dict
from lasergrid.game import evaluate_outcome
from lasergrid.masks import placement_mask

from .room_store import GameRoom


def _mask_to_positions(mask: np.ndarray) -> List[List[int]]:
    ys, xs = np.nonzero(mask)
    return [[int(x), int(y)] for y, x in zip(ys, xs)]


def legal_placements(board: Board, color: Optional[Color]) -> List[List[int]]:
    """``[x, y]`` pairs where ``color`` may place a ring; empty for spectators."""
    if color is None:
        return []
    return _mask_to_positions(placement_mask(board, color))


def serialize_room(
    room: GameRoom,
    your_color: Optional[Color],
    poll_interval: float,
) -> Dict[str, Any]:
    """
    Convert a room into a JSON-friendly structure for one participant.
    """
    outcome = evaluate_outcome(room.board)
    winner = outcome.winner
    return {
        "roomId": room.room_id,
        "board": board_to_dict(room.board),
        "activeColor": room.active_color.value,
        "yourColor": None if your_color is None else your_color.value,
        "version": room.version,
        "outcome": outcome.value,
        "winner": None if winner is None else winner.value,
        "legalPlacements": legal_placements(room.board, your_color),
        "pollInterval": poll_interval,
    }
