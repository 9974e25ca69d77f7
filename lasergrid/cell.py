# file: lasergrid/cell.py

from enum import Enum
from typing import Optional

from lasergrid.errors import InvalidUpgrade


class Color(Enum):
    RED = "red"
    BLACK = "black"

    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.RED else Color.RED


class CellType(Enum):
    EMPTY = "empty"
    RING = "ring"     # 一级：直接落子
    TOWER = "tower"   # 二级：3x3 封锁
    LASER = "laser"   # 三级：整行整列封锁


class Cell(Enum):
    # 数值即序列化编码，不可调整顺序
    EMPTY = 0
    RED_RING = 1
    RED_TOWER = 2
    RED_LASER = 3
    BLACK_RING = 4
    BLACK_TOWER = 5
    BLACK_LASER = 6


_CELL_PARTS = {
    Cell.EMPTY: (CellType.EMPTY, None),
    Cell.RED_RING: (CellType.RING, Color.RED),
    Cell.RED_TOWER: (CellType.TOWER, Color.RED),
    Cell.RED_LASER: (CellType.LASER, Color.RED),
    Cell.BLACK_RING: (CellType.RING, Color.BLACK),
    Cell.BLACK_TOWER: (CellType.TOWER, Color.BLACK),
    Cell.BLACK_LASER: (CellType.LASER, Color.BLACK),
}

_CELLS_BY_PARTS = {
    parts: cell for cell, parts in _CELL_PARTS.items() if cell != Cell.EMPTY
}

_NEXT_TIER = {
    CellType.RING: CellType.TOWER,
    CellType.TOWER: CellType.LASER,
}


def _parts(cell: Cell):
    try:
        return _CELL_PARTS[cell]
    except KeyError as exc:
        raise ValueError(f"Invalid cell: {cell!r}") from exc


def cell_type(cell: Cell) -> CellType:
    return _parts(cell)[0]


def cell_color(cell: Cell) -> Optional[Color]:
    """Colour of the piece in ``cell``; None for an empty cell."""
    return _parts(cell)[1]


def cell_of(kind: CellType, color: Color) -> Cell:
    if kind == CellType.EMPTY:
        return Cell.EMPTY
    try:
        return _CELLS_BY_PARTS[(kind, color)]
    except KeyError as exc:
        raise ValueError(f"Invalid cell type/colour: {kind!r}, {color!r}") from exc


def next_tier(kind: CellType) -> CellType:
    try:
        return _NEXT_TIER[kind]
    except KeyError as exc:
        raise InvalidUpgrade(f"{kind.value} cannot be upgraded") from exc
