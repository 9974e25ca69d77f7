# file: lasergrid/board.py

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from lasergrid.cell import Cell
from lasergrid.position import Position
from lasergrid.settings import BoardSettings

_SYMBOLS = {
    Cell.EMPTY: "·",
    Cell.RED_RING: "r",
    Cell.RED_TOWER: "R",
    Cell.RED_LASER: "L",
    Cell.BLACK_RING: "b",
    Cell.BLACK_TOWER: "B",
    Cell.BLACK_LASER: "K",
}


@dataclass
class Board:
    """
    Fixed-size square grid.

    ``cells`` is row-major: the cell at ``(x, y)`` lives at ``x + y * size``.
    This flat list is the only representation used for equality and
    serialisation.
    """

    settings: BoardSettings
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        expected = self.size * self.size
        if not self.cells:
            self.cells = [Cell.EMPTY] * expected
        elif len(self.cells) != expected:
            raise ValueError(
                f"Board of size {self.size} needs {expected} cells, got {len(self.cells)}"
            )

    @property
    def size(self) -> int:
        return self.settings.size

    def index(self, position: Position) -> Optional[int]:
        x, y = position
        if x < 0 or x >= self.size or y < 0 or y >= self.size:
            return None
        return x + y * self.size

    def positions(self) -> Iterator[Position]:
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def copy(self) -> "Board":
        return Board(settings=self.settings, cells=self.cells[:])

    def __str__(self):
        header = "    " + " ".join(str(x % 10) for x in range(self.size))
        border = "   +" + "-" * (2 * self.size - 1) + "+"
        rows = [header, border]
        for y in range(self.size):
            row = " ".join(
                _SYMBOLS[self.cells[x + y * self.size]] for x in range(self.size)
            )
            rows.append(f"{y:>2} |{row}|")
        rows.append(border)
        return "\n".join(rows)


def create_board(settings: BoardSettings) -> Board:
    return Board(settings=settings)
