from lasergrid.board import create_board
from lasergrid.cell import Color
from lasergrid.game import evaluate_outcome
from lasergrid.position import Position
from lasergrid.rule_engine import get_upgrade_positions, legal_positions, place_ring, upgrade
from lasergrid.settings import BoardSettings


def main():
    board = create_board(BoardSettings(size=6))  # 空盘
    print("红方合法落子数:", len(legal_positions(board, Color.RED)))  # 36

    # 红方连下三子成线, 黑方在旁边落子
    for red, black in [((1, 2), (4, 4)), ((2, 2), (4, 3)), ((3, 2), (4, 2))]:
        place_ring(board, Position(*red), Color.RED)
        place_ring(board, Position(*black), Color.BLACK)

    candidates = get_upgrade_positions(board, Position(3, 2))
    print("可合成位置:", [tuple(p) for p in candidates])

    # 合成塔, 紧邻的黑子被清除
    upgrade(board, Position(3, 2), Position(3, 2))
    print("合成后:\n", board)

    print("局面:", evaluate_outcome(board).value)


if __name__ == "__main__":
    main()
