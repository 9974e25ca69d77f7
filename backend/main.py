from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from lasergrid.codec import board_from_dict
from lasergrid.errors import CodecError

from .room_store import GameRoom, NotParticipant, NotYourTurn, RoomStore, UnknownRoom
from .schemas import ParticipantRequest, SnapshotRequest, StartGameRequest, UpdateBoardRequest
from .utils import serialize_room

HOST = os.getenv("LASERGRID_HOST", "0.0.0.0")
PORT = int(os.getenv("LASERGRID_PORT", "8000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "1.0"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lasergrid Web API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

room_store = RoomStore()


def _get_room(room_id: str) -> GameRoom:
    try:
        return room_store.get_room(room_id)
    except UnknownRoom:
        raise HTTPException(status_code=404, detail="Unknown game")


def _payload(room: GameRoom, participant_id: Optional[str]) -> Dict[str, Any]:
    return serialize_room(room, room.color_of(participant_id), POLL_INTERVAL_SECONDS)


@app.post("/api/games")
def start_game(request: StartGameRequest):
    room = room_store.start_game(request.participant_id, request.settings.to_settings())
    return _payload(room, request.participant_id)


@app.post("/api/games/{room_id}/join")
def join_game(room_id: str, request: ParticipantRequest):
    try:
        room, _ = room_store.join_game(room_id, request.participant_id)
    except UnknownRoom:
        raise HTTPException(status_code=404, detail="Unknown game")
    return _payload(room, request.participant_id)


@app.get("/api/games/{room_id}")
def get_game_state(room_id: str, participantId: Optional[str] = None):
    """Read-only; the waiting participant polls this every ``pollInterval`` seconds."""
    room = _get_room(room_id)
    return _payload(room, participantId)


@app.post("/api/games/{room_id}/restart")
def restart_game(room_id: str, request: ParticipantRequest):
    try:
        room = room_store.restart_game(room_id, request.participant_id)
    except UnknownRoom:
        raise HTTPException(status_code=404, detail="Unknown game")
    except NotParticipant as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return _payload(room, request.participant_id)


@app.put("/api/games/{room_id}/board")
def update_game(room_id: str, request: UpdateBoardRequest):
    try:
        board = board_from_dict(request.board)
    except CodecError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid board: {exc}") from exc

    try:
        room = room_store.update_game(room_id, request.participant_id, board)
    except UnknownRoom:
        raise HTTPException(status_code=404, detail="Unknown game")
    except NotParticipant as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except NotYourTurn as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _payload(room, request.participant_id)


@app.post("/get_game")
def get_snapshot(request: SnapshotRequest):
    if not request.uuid:
        raise HTTPException(status_code=400, detail="UUID is required")
    return {"game": room_store.get_snapshot(request.uuid)}


@app.post("/set_game")
def set_snapshot(request: SnapshotRequest):
    if not request.uuid:
        raise HTTPException(status_code=400, detail="UUID is required")
    room_store.set_snapshot(request.uuid, request.game)
    return {"message": "Game set successfully"}


@app.get("/")
def root():
    return {"status": "ok", "rooms": len(room_store)}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host=HOST, port=PORT, reload=True)
