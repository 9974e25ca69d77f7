# file: lasergrid/game.py

import logging
from enum import Enum
from typing import List, Optional

from lasergrid import rule_engine
from lasergrid.board import Board, create_board
from lasergrid.cell import Cell, Color, cell_color
from lasergrid.codec import decode_game, encode_game
from lasergrid.errors import InvalidUpgrade
from lasergrid.position import Position
from lasergrid.settings import DEFAULT_SETTINGS, BoardSettings

logger = logging.getLogger(__name__)


class Outcome(Enum):
    ONGOING = "ongoing"
    RED_WINS = "red_wins"
    BLACK_WINS = "black_wins"
    DRAW = "draw"

    @property
    def winner(self) -> Optional[Color]:
        if self == Outcome.RED_WINS:
            return Color.RED
        if self == Outcome.BLACK_WINS:
            return Color.BLACK
        return None


def evaluate_outcome(board: Board) -> Outcome:
    """Compare the mobility of both colours with a full board scan."""
    red_can_move = rule_engine.can_move(board, Color.RED)
    black_can_move = rule_engine.can_move(board, Color.BLACK)

    if red_can_move and black_can_move:
        return Outcome.ONGOING
    if not red_can_move and not black_can_move:
        return Outcome.DRAW
    return Outcome.RED_WINS if red_can_move else Outcome.BLACK_WINS


class Game:
    """
    A board seen from one participant's side.

    Tracks the pending upgrade origin across the clicks of a single turn and
    caches both colours' mobility after every change.
    """

    def __init__(
        self,
        color: Color,
        settings: Optional[BoardSettings] = None,
        board: Optional[Board] = None,
    ):
        if board is None:
            board = create_board(settings or DEFAULT_SETTINGS)

        self.board = board
        self.our_color = color
        self.enemy_color = color.opponent()
        self.upgrade_origin: Optional[Position] = None
        self.upgrade_positions: List[Position] = []
        self.turn_finished = False
        self._update_state()

    @property
    def settings(self) -> BoardSettings:
        return self.board.settings

    @property
    def pending_upgrade(self) -> bool:
        return bool(self.upgrade_positions)

    def get_cell(self, position: Position) -> Cell:
        return rule_engine.get_cell_at(self.board, position)

    def can_place_ring(self, position: Position) -> bool:
        return rule_engine.can_place_ring(self.board, position, self.our_color)

    def start_turn(self) -> None:
        self.turn_finished = False
        self._clear_pending()

    def place_ring(self, position: Position) -> List[Position]:
        """
        Place one of our rings and return the upgrade candidates it opens.

        Without ``auto_upgrade`` the turn always ends here; with it, the turn
        ends only when no combinable run was formed.
        """
        if self.pending_upgrade:
            raise InvalidUpgrade("An upgrade must be resolved before placing")

        position = Position(*position)
        rule_engine.place_ring(self.board, position, self.our_color)
        self._update_state()

        if not self.settings.auto_upgrade:
            self._finish_turn()
            return []

        return self._offer_upgrade(position)

    def select_upgrade_origin(self, position: Position) -> List[Position]:
        """
        Manual mode: pick one of our pieces as the origin of an upgrade.
        Returns the candidates, empty when the piece cannot combine.
        """
        if self.settings.auto_upgrade:
            raise InvalidUpgrade("Origins are chosen automatically in auto-upgrade games")

        position = Position(*position)
        if cell_color(self.get_cell(position)) != self.our_color:
            return []

        candidates = rule_engine.get_upgrade_positions(self.board, position)
        if candidates:
            self.upgrade_origin = position
            self.upgrade_positions = candidates
        return candidates

    def upgrade(self, target: Position) -> List[Position]:
        if self.upgrade_origin is None:
            raise InvalidUpgrade("No pending upgrade")

        target = Position(*target)
        if target not in self.upgrade_positions:
            raise InvalidUpgrade(f"{tuple(target)} is not an upgrade candidate")

        rule_engine.upgrade(self.board, self.upgrade_origin, target)
        self._update_state()

        if not self.settings.auto_upgrade:
            self._finish_turn()
            return []

        # 连锁升级：新棋子若再次成线则继续
        return self._offer_upgrade(target)

    def get_winner(self) -> Optional[Color]:
        if self.can_we_move == self.can_enemy_move:
            return None
        return self.our_color if self.can_we_move else self.enemy_color

    def is_draw(self) -> bool:
        return not self.can_we_move and not self.can_enemy_move

    def is_game_over(self) -> bool:
        return not self.can_we_move or not self.can_enemy_move

    def export_game(self, turn: Color) -> str:
        return encode_game(self.board, turn)

    def import_game(self, text: str) -> Color:
        """Replace the board with a received snapshot; returns whose turn it is."""
        decoded = decode_game(text)
        if decoded is None:
            return self.our_color

        self.board, turn = decoded
        self._clear_pending()
        self._update_state()
        return turn

    def _offer_upgrade(self, position: Position) -> List[Position]:
        candidates = rule_engine.get_upgrade_positions(self.board, position)
        if candidates:
            self.upgrade_origin = position
            self.upgrade_positions = candidates
        else:
            self._finish_turn()
        return candidates

    def _finish_turn(self) -> None:
        self._clear_pending()
        self.turn_finished = True

    def _clear_pending(self) -> None:
        self.upgrade_origin = None
        self.upgrade_positions = []

    def _update_state(self) -> None:
        self.can_we_move = rule_engine.can_move(self.board, self.our_color)
        self.can_enemy_move = rule_engine.can_move(self.board, self.enemy_color)
        if self.is_game_over():
            logger.debug("Game over for %s: winner=%s", self.our_color.value, self.get_winner())
