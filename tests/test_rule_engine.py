import pytest

from lasergrid.board import create_board
from lasergrid.cell import Cell, Color
from lasergrid.errors import InvalidPlacement, InvalidPosition, InvalidUpgrade
from lasergrid.position import Position, adjacent_positions
from lasergrid.rule_engine import (
    can_occupy,
    can_place_ring,
    get_cell_at,
    get_upgrade_positions,
    place_ring,
    set_cell_at,
    upgrade,
)
from lasergrid.settings import BoardSettings


# ---------------------------------------------------------------------------
# Cell access
# ---------------------------------------------------------------------------


def test_out_of_range_reads_are_empty(board_from) -> None:
    board = board_from(["rr", "rr"])
    for position in [(-1, 0), (0, -1), (2, 0), (0, 2)]:
        assert get_cell_at(board, Position(*position)) == Cell.EMPTY


def test_out_of_range_writes() -> None:
    board = create_board(BoardSettings(size=3))
    set_cell_at(board, Position(3, 0), Cell.EMPTY)
    assert board.cells == [Cell.EMPTY] * 9

    with pytest.raises(InvalidPosition):
        set_cell_at(board, Position(-1, 1), Cell.RED_RING)


def test_cells_are_row_major() -> None:
    board = create_board(BoardSettings(size=4))
    set_cell_at(board, Position(1, 2), Cell.BLACK_RING)
    assert board.cells[1 + 2 * 4] == Cell.BLACK_RING


# ---------------------------------------------------------------------------
# Placement legality
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("color", [Color.RED, Color.BLACK])
def test_first_ring_can_go_anywhere(color: Color) -> None:
    board = create_board(BoardSettings(size=5))
    assert all(can_place_ring(board, position, color) for position in board.positions())


def test_out_of_range_is_never_placeable() -> None:
    board = create_board(BoardSettings(size=5))
    assert not can_place_ring(board, Position(5, 0), Color.RED)
    assert not can_place_ring(board, Position(-1, -1), Color.BLACK)


def test_occupied_cell_is_not_placeable(board_from) -> None:
    board = board_from([".....", ".....", "..b..", ".....", "....."])
    assert not can_place_ring(board, Position(2, 2), Color.RED)
    assert not can_place_ring(board, Position(2, 2), Color.BLACK)


def test_placement_must_touch_own_cluster_orthogonally(board_from) -> None:
    board = board_from([".....", ".....", "..r..", ".....", "....."])
    assert can_place_ring(board, Position(2, 1), Color.RED)
    assert can_place_ring(board, Position(3, 2), Color.RED)
    assert not can_place_ring(board, Position(1, 1), Color.RED)
    assert not can_place_ring(board, Position(4, 4), Color.RED)
    # the other colour is still on its free first move
    assert can_place_ring(board, Position(4, 4), Color.BLACK)


def test_diagonal_growth_when_enabled(board_from) -> None:
    board = board_from(
        [".....", ".....", "..r..", ".....", "....."],
        allow_diagonal_placement=True,
    )
    assert can_place_ring(board, Position(1, 1), Color.RED)
    assert can_place_ring(board, Position(3, 3), Color.RED)
    assert not can_place_ring(board, Position(0, 0), Color.RED)


def test_enemy_pieces_do_not_count_for_adjacency(board_from) -> None:
    board = board_from(["r....", ".....", "..b..", ".....", "....."])
    assert not can_place_ring(board, Position(2, 1), Color.RED)
    assert can_place_ring(board, Position(1, 0), Color.RED)


def test_place_ring_rejects_illegal_cell(board_from) -> None:
    board = board_from(["r....", ".....", ".....", ".....", "....."])
    with pytest.raises(InvalidPlacement):
        place_ring(board, Position(4, 4), Color.RED)
    with pytest.raises(InvalidPlacement):
        place_ring(board, Position(0, 0), Color.BLACK)

    place_ring(board, Position(1, 0), Color.RED)
    assert get_cell_at(board, Position(1, 0)) == Cell.RED_RING


# ---------------------------------------------------------------------------
# Area denial
# ---------------------------------------------------------------------------


def test_tower_denies_its_neighbourhood_to_the_enemy_only() -> None:
    board = create_board(BoardSettings(size=5))
    set_cell_at(board, Position(2, 2), Cell.RED_TOWER)

    for position in adjacent_positions(Position(2, 2)):
        assert not can_occupy(board, position, Color.BLACK)
        assert can_occupy(board, position, Color.RED)

    assert can_occupy(board, Position(0, 0), Color.BLACK)
    assert can_occupy(board, Position(4, 2), Color.BLACK)


def test_laser_denies_whole_row_and_column() -> None:
    board = create_board(BoardSettings(size=6))
    set_cell_at(board, Position(1, 3), Cell.BLACK_LASER)

    for position in board.positions():
        in_line = position.x == 1 or position.y == 3
        assert can_occupy(board, position, Color.RED) is not in_line
        assert can_occupy(board, position, Color.BLACK)


def test_denial_blocks_bootstrap_placement(board_from) -> None:
    board = board_from(["...", ".B.", "..."])
    for position in board.positions():
        if position != (1, 1):
            assert not can_place_ring(board, position, Color.RED)


def test_own_tower_does_not_block_diagonal_growth(board_from) -> None:
    board = board_from(
        [".....", ".R...", "..r..", ".....", "....."],
        allow_diagonal_placement=True,
    )
    assert can_place_ring(board, Position(2, 1), Color.RED)
    assert can_place_ring(board, Position(1, 3), Color.RED)


def test_denial_wins_over_adjacency(board_from) -> None:
    # (1, 1) touches a black ring but also sits next to an enemy tower
    board = board_from(["R....", "..b..", ".....", ".....", "....."])
    assert not can_place_ring(board, Position(1, 1), Color.BLACK)
    assert can_place_ring(board, Position(3, 1), Color.BLACK)


# ---------------------------------------------------------------------------
# Cascades
# ---------------------------------------------------------------------------


def test_tower_clears_differently_coloured_neighbours(board_from) -> None:
    board = board_from(
        [
            "b....",
            ".bb..",
            ".B.b.",
            "...r.",
            ".....",
        ]
    )
    set_cell_at(board, Position(2, 2), Cell.RED_TOWER)

    for position in [(1, 1), (2, 1), (1, 2), (3, 2)]:
        assert get_cell_at(board, Position(*position)) == Cell.EMPTY
    assert get_cell_at(board, Position(3, 3)) == Cell.RED_RING
    assert get_cell_at(board, Position(0, 0)) == Cell.BLACK_RING
    assert get_cell_at(board, Position(2, 2)) == Cell.RED_TOWER


def test_laser_clears_differently_coloured_row_and_column(board_from) -> None:
    board = board_from(
        [
            "..b..",
            ".....",
            "br..b",
            "...B.",
            "..b..",
        ]
    )
    set_cell_at(board, Position(2, 2), Cell.RED_LASER)

    for position in [(2, 0), (0, 2), (4, 2), (2, 4)]:
        assert get_cell_at(board, Position(*position)) == Cell.EMPTY
    assert get_cell_at(board, Position(1, 2)) == Cell.RED_RING
    assert get_cell_at(board, Position(3, 3)) == Cell.BLACK_TOWER


def test_ring_and_empty_writes_never_cascade(board_from) -> None:
    board = board_from(["...", ".b.", "..."])
    set_cell_at(board, Position(0, 1), Cell.RED_RING)
    assert get_cell_at(board, Position(1, 1)) == Cell.BLACK_RING

    set_cell_at(board, Position(0, 1), Cell.EMPTY)
    assert get_cell_at(board, Position(1, 1)) == Cell.BLACK_RING


def test_cascade_is_a_single_sweep(board_from) -> None:
    # Clearing (2, 2) sweeps nothing around it: the black tower at (1, 1)
    # and the ring at (3, 1) both touch (2, 2) and survive.
    board = board_from(
        [
            "r...b",
            ".B.b.",
            "r.b..",
            "....b",
            ".....",
        ]
    )
    set_cell_at(board, Position(3, 3), Cell.RED_TOWER)

    assert get_cell_at(board, Position(2, 2)) == Cell.EMPTY
    assert get_cell_at(board, Position(4, 3)) == Cell.EMPTY
    assert get_cell_at(board, Position(1, 1)) == Cell.BLACK_TOWER
    assert get_cell_at(board, Position(3, 1)) == Cell.BLACK_RING
    assert get_cell_at(board, Position(4, 0)) == Cell.BLACK_RING
    assert get_cell_at(board, Position(0, 0)) == Cell.RED_RING


def test_existing_pieces_do_not_refire(board_from) -> None:
    board = board_from(["R....", ".b...", ".....", ".....", "....r"])
    set_cell_at(board, Position(3, 4), Cell.RED_RING)
    assert get_cell_at(board, Position(1, 1)) == Cell.BLACK_RING


# ---------------------------------------------------------------------------
# Combine detection
# ---------------------------------------------------------------------------


def test_three_in_a_row_combine(board_from) -> None:
    board = board_from(["rrr..", ".....", ".....", ".....", "....."])
    positions = get_upgrade_positions(board, Position(1, 0))
    assert positions[0] == (1, 0)
    assert sorted(positions) == [(0, 0), (1, 0), (2, 0)]


def test_two_in_a_row_do_not_combine(board_from) -> None:
    board = board_from(["rr...", ".....", ".....", ".....", "....."])
    assert get_upgrade_positions(board, Position(0, 0)) == []


def test_run_needs_same_kind_and_colour(board_from) -> None:
    board = board_from(["rRr..", "rbr..", ".....", ".....", "....."])
    assert get_upgrade_positions(board, Position(0, 0)) == []
    assert get_upgrade_positions(board, Position(2, 1)) == []


def test_vertical_run(board_from) -> None:
    board = board_from(["...", ".B.", ".B."])
    assert get_upgrade_positions(board, Position(1, 1)) == []

    board = board_from(["..B..", "..B..", "..B..", "..B..", "....."])
    assert sorted(get_upgrade_positions(board, Position(2, 0))) == [
        (2, 0),
        (2, 1),
        (2, 2),
        (2, 3),
    ]


def test_only_qualifying_lines_are_returned(board_from) -> None:
    board = board_from([".....", ".....", ".rrr.", "..r..", "....."])
    assert sorted(get_upgrade_positions(board, Position(2, 2))) == [(1, 2), (2, 2), (3, 2)]


def test_crossing_lines_are_merged(board_from) -> None:
    board = board_from(["..r..", "..r..", ".rrr.", ".....", "....."])
    assert sorted(get_upgrade_positions(board, Position(2, 2))) == [
        (1, 2),
        (2, 0),
        (2, 1),
        (2, 2),
        (3, 2),
    ]


def test_lasers_and_empty_cells_never_combine(board_from) -> None:
    board = board_from(["LLL", "...", "..."])
    assert get_upgrade_positions(board, Position(1, 0)) == []
    assert get_upgrade_positions(board, Position(1, 1)) == []


def test_minimum_combine_length_is_configurable(board_from) -> None:
    board = board_from(["bbb..", ".....", ".....", ".....", "....."], minimum_combine_length=4)
    assert get_upgrade_positions(board, Position(0, 0)) == []

    board = board_from(["bb...", ".....", ".....", ".....", "....."], minimum_combine_length=2)
    assert len(get_upgrade_positions(board, Position(0, 0))) == 2


# ---------------------------------------------------------------------------
# Upgrades
# ---------------------------------------------------------------------------


def test_upgrade_clears_run_and_fires_from_target(board_from) -> None:
    board = board_from(
        [
            ".....",
            ".....",
            "rrr..",
            ".b.b.",
            ".....",
        ]
    )
    new_cell = upgrade(board, Position(0, 2), Position(1, 2))

    assert new_cell == Cell.RED_TOWER
    assert get_cell_at(board, Position(1, 2)) == Cell.RED_TOWER
    assert get_cell_at(board, Position(0, 2)) == Cell.EMPTY
    assert get_cell_at(board, Position(2, 2)) == Cell.EMPTY
    assert get_cell_at(board, Position(1, 3)) == Cell.EMPTY
    # next to the old (2, 2) but not to the target
    assert get_cell_at(board, Position(3, 3)) == Cell.BLACK_RING
    assert board.cells.count(Cell.RED_TOWER) == 1


def test_towers_upgrade_into_a_laser(board_from) -> None:
    board = board_from(["R....", "R...b", "R....", ".....", "..b.."])
    new_cell = upgrade(board, Position(0, 0), Position(0, 1))

    assert new_cell == Cell.RED_LASER
    assert get_cell_at(board, Position(0, 1)) == Cell.RED_LASER
    assert get_cell_at(board, Position(0, 0)) == Cell.EMPTY
    assert get_cell_at(board, Position(0, 2)) == Cell.EMPTY
    assert get_cell_at(board, Position(4, 1)) == Cell.EMPTY
    assert get_cell_at(board, Position(2, 4)) == Cell.BLACK_RING


def test_upgrade_without_run_fails(board_from) -> None:
    board = board_from(["rr.", "...", "..."])
    with pytest.raises(InvalidUpgrade):
        upgrade(board, Position(0, 0), Position(1, 0))


def test_upgrade_target_must_be_in_run(board_from) -> None:
    board = board_from(["rrr", "...", "..."])
    before = board.copy()
    with pytest.raises(InvalidUpgrade):
        upgrade(board, Position(0, 0), Position(1, 1))
    assert board == before
