from typing import List, NamedTuple


class Position(NamedTuple):
    x: int
    y: int


def up(position: Position) -> Position:
    return Position(position.x, position.y - 1)


def down(position: Position) -> Position:
    return Position(position.x, position.y + 1)


def left(position: Position) -> Position:
    return Position(position.x - 1, position.y)


def right(position: Position) -> Position:
    return Position(position.x + 1, position.y)


def up_left(position: Position) -> Position:
    return up(left(position))


def up_right(position: Position) -> Position:
    return up(right(position))


def down_left(position: Position) -> Position:
    return down(left(position))


def down_right(position: Position) -> Position:
    return down(right(position))


def adjacent_sides(position: Position) -> List[Position]:
    """Orthogonal neighbours (N, S, W, E)."""
    return [up(position), down(position), left(position), right(position)]


def adjacent_corners(position: Position) -> List[Position]:
    return [
        up_left(position),
        up_right(position),
        down_left(position),
        down_right(position),
    ]


def adjacent_positions(position: Position) -> List[Position]:
    """All 8 neighbours, sides first. Results may lie outside any board."""
    return adjacent_sides(position) + adjacent_corners(position)
