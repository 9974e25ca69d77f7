from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from lasergrid.board import Board, create_board
from lasergrid.cell import Color
from lasergrid.settings import BoardSettings

logger = logging.getLogger(__name__)

NULL_SNAPSHOT = "null"


class UnknownRoom(KeyError):
    """Raised when a room id has never been started."""


class NotParticipant(PermissionError):
    """Raised when someone outside the room tries to change it."""


class NotYourTurn(RuntimeError):
    """Raised when a participant submits a board while the other colour is active."""


@dataclass
class GameRoom:
    room_id: str
    board: Board
    active_color: Color = Color.RED
    participant_ids: List[str] = field(default_factory=list)
    version: int = 0
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)

    def touch(self) -> None:
        self.last_activity = time.time()

    def color_of(self, participant_id: Optional[str]) -> Optional[Color]:
        """First participant plays red, second black, anyone else watches."""
        if participant_id not in self.participant_ids:
            return None
        return Color.RED if self.participant_ids.index(participant_id) == 0 else Color.BLACK


class RoomStore:
    """
    Thread-safe table of rooms keyed by an opaque room id.

    Created once per application and handed to whatever serves requests.
    Rooms live as long as the process; nothing is evicted. Submitted boards
    are trusted and the latest accepted write wins.
    """

    def __init__(self) -> None:
        self._rooms: Dict[str, GameRoom] = {}
        self._snapshots: Dict[str, str] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    def start_game(self, participant_id: str, settings: BoardSettings) -> GameRoom:
        room = GameRoom(
            room_id=uuid4().hex,
            board=create_board(settings),
            participant_ids=[participant_id],
        )
        with self._lock:
            self._rooms[room.room_id] = room
        logger.info("Room %s started (size=%d)", room.room_id, settings.size)
        return room

    def get_room(self, room_id: str) -> GameRoom:
        try:
            room = self._rooms[room_id]
        except KeyError as exc:
            raise UnknownRoom(f"Unknown room id: {room_id}") from exc
        room.touch()
        return room

    def join_game(self, room_id: str, participant_id: str) -> Tuple[GameRoom, Optional[Color]]:
        with self._lock:
            room = self.get_room(room_id)
            if participant_id not in room.participant_ids and len(room.participant_ids) < 2:
                room.participant_ids.append(participant_id)
                logger.info("Participant joined room %s as black", room_id)
            return room, room.color_of(participant_id)

    def restart_game(self, room_id: str, participant_id: str) -> GameRoom:
        with self._lock:
            room = self._require_participant(room_id, participant_id)
            room.board = create_board(room.board.settings)
            room.active_color = Color.RED
            room.participant_ids.reverse()
            room.version += 1
        logger.info("Room %s restarted with colours swapped", room_id)
        return room

    def update_game(self, room_id: str, participant_id: str, board: Board) -> GameRoom:
        with self._lock:
            room = self._require_participant(room_id, participant_id)
            color = room.color_of(participant_id)
            if color != room.active_color:
                logger.warning("Rejected out-of-turn write to room %s", room_id)
                raise NotYourTurn("It's not your turn")
            room.board = board
            room.active_color = color.opponent()
            room.version += 1
            return room

    def get_snapshot(self, room_id: str) -> str:
        return self._snapshots.get(room_id, NULL_SNAPSHOT)

    def set_snapshot(self, room_id: str, game: Optional[str]) -> None:
        with self._lock:
            self._snapshots[room_id] = game if game is not None else NULL_SNAPSHOT

    def _require_participant(self, room_id: str, participant_id: str) -> GameRoom:
        room = self.get_room(room_id)
        if participant_id not in room.participant_ids:
            logger.warning("Rejected write to room %s from a non-participant", room_id)
            raise NotParticipant("You are not a participant in this game")
        return room
