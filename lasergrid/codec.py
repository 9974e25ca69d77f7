from __future__ import annotations

import json
from dataclasses import fields
from typing import Any, Dict, Mapping, Optional, Tuple

from lasergrid.board import Board
from lasergrid.cell import Cell, Color
from lasergrid.errors import CodecError
from lasergrid.settings import BoardSettings

# BoardSettings field -> wire key
_SETTINGS_KEYS = {
    "size": "size",
    "minimum_combine_length": "minimumCombineLength",
    "allow_diagonal_placement": "allowDiagonalPlacement",
    "fixed_start": "fixedStart",
    "auto_upgrade": "autoUpgrade",
    "ruins": "ruins",
}


def _dumps(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def settings_to_dict(settings: BoardSettings) -> Dict[str, Any]:
    return {
        wire_key: getattr(settings, name) for name, wire_key in _SETTINGS_KEYS.items()
    }


def settings_from_dict(payload: Mapping[str, Any]) -> BoardSettings:
    if not isinstance(payload, Mapping):
        raise CodecError(f"Settings must be an object, received {type(payload).__name__}")
    kwargs: Dict[str, Any] = {}
    for settings_field in fields(BoardSettings):
        wire_key = _SETTINGS_KEYS[settings_field.name]
        if wire_key not in payload:
            continue
        value = payload[wire_key]
        expected = int if settings_field.name in ("size", "minimum_combine_length") else bool
        # bool is an int subclass; reject it where a number is expected
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise CodecError(f"Setting '{wire_key}' has invalid value {value!r}")
        kwargs[settings_field.name] = value
    try:
        return BoardSettings(**kwargs)
    except ValueError as exc:
        raise CodecError(str(exc)) from exc


def board_to_dict(board: Board) -> Dict[str, Any]:
    return {
        "settings": settings_to_dict(board.settings),
        "cells": [cell.value for cell in board.cells],
    }


def board_from_dict(payload: Mapping[str, Any]) -> Board:
    if not isinstance(payload, Mapping):
        raise CodecError(f"Board must be an object, received {type(payload).__name__}")
    if "settings" not in payload or "cells" not in payload:
        raise CodecError("Board payload needs 'settings' and 'cells'")

    settings = settings_from_dict(payload["settings"])
    raw_cells = payload["cells"]
    if not isinstance(raw_cells, list):
        raise CodecError("'cells' must be a list")

    expected = settings.size * settings.size
    if len(raw_cells) != expected:
        raise CodecError(
            f"Board of size {settings.size} needs {expected} cells, got {len(raw_cells)}"
        )

    cells = []
    for raw in raw_cells:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise CodecError(f"Invalid cell value {raw!r}")
        try:
            cells.append(Cell(raw))
        except ValueError as exc:
            raise CodecError(f"Invalid cell value {raw!r}") from exc

    return Board(settings=settings, cells=cells)


def encode_board(board: Board) -> str:
    """Canonical JSON text; equal boards always encode to identical text."""
    return _dumps(board_to_dict(board))


def decode_board(text: str) -> Board:
    try:
        payload = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise CodecError(f"Board is not valid JSON: {exc}") from exc
    return board_from_dict(payload)


def encode_game(board: Board, turn: Color) -> str:
    return _dumps({"board": board_to_dict(board), "turn": turn.value})


def decode_game(text: str) -> Optional[Tuple[Board, Color]]:
    """
    Decode a ``{"board", "turn"}`` snapshot.

    The text ``"null"`` (an empty room slot) decodes to None.
    """
    try:
        payload = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise CodecError(f"Game is not valid JSON: {exc}") from exc

    if payload is None:
        return None
    if not isinstance(payload, dict) or "board" not in payload or "turn" not in payload:
        raise CodecError("Game payload needs 'board' and 'turn'")

    try:
        turn = Color(payload["turn"])
    except ValueError as exc:
        raise CodecError(f"Unknown turn colour: {payload['turn']!r}") from exc

    return board_from_dict(payload["board"]), turn
