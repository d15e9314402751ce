import asyncio
import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from typing import Callable, List

from .coordinator import TurnCoordinator
from .errors import GameError, GameOverError, InvalidMoveError, SessionNotFoundError
from .models import GameSnapshot, MoveRequest, SessionCreateRequest, SessionInfo
from .store import STORE

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "game", "description": "Start, play, reset and inspect games against the AI"},
    {"name": "ws", "description": "Websocket for live game state"},
]

app = FastAPI(
    title="Tic Tac Toe Backend",
    description="REST and WebSocket API for playing Tic Tac Toe against an unbeatable minimax opponent.",
    version="1.0.0",
    openapi_tags=openapi_tags
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_session(session_id: str) -> TurnCoordinator:
    try:
        return STORE.get_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@app.get("/")
def health_check():
    """Health check endpoint."""
    return {"message": "Healthy"}

# ---------------- Game API ---------------- #

# PUBLIC_INTERFACE
@app.post("/game/create", response_model=SessionInfo, tags=["game"], summary="Start a new game against the AI")
async def create_game(req: SessionCreateRequest):
    """Create a session; the human moves first."""
    config = STORE.config.with_human_side(req.human_side)
    session_id, coordinator = STORE.create_session(config)
    return SessionInfo(session_id=session_id, state=coordinator.current_state())

# PUBLIC_INTERFACE
@app.get("/game/list", response_model=List[str], tags=["game"], summary="List active session ids")
async def list_games():
    return STORE.list_sessions()

# PUBLIC_INTERFACE
@app.get("/game/{session_id}/state", response_model=GameSnapshot, tags=["game"], summary="Get board and phase")
async def get_game_state(session_id: str):
    """Returns the board and phase (for lightweight polling or refresh)."""
    return _get_session(session_id).current_state()

# PUBLIC_INTERFACE
@app.post("/game/{session_id}/move", response_model=GameSnapshot, tags=["game"], summary="Make a move")
def make_a_move(session_id: str, req: MoveRequest):
    """
    Apply the human's move, let the AI answer, and return the updated state.
    Plain def: the search runs in the threadpool, not on the event loop.
    """
    coordinator = _get_session(session_id)
    try:
        return coordinator.submit_human_move(req.row, req.col)
    except GameOverError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidMoveError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# PUBLIC_INTERFACE
@app.post("/game/{session_id}/reset", response_model=GameSnapshot, tags=["game"], summary="Start over")
def reset_game(session_id: str):
    """Clear the board; the human moves first again."""
    return _get_session(session_id).reset()

# PUBLIC_INTERFACE
@app.delete("/game/{session_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["game"], summary="End a session")
async def delete_game(session_id: str):
    try:
        STORE.delete_session(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

# --------------- WebSocket Real-time Game Updates --------------- #

def _state_message(snapshot: GameSnapshot) -> dict:
    return {"type": "game_state", "state": snapshot.model_dump(mode="json")}


async def _push_messages(websocket: WebSocket, queue: asyncio.Queue, unsubscribe: Callable[[], None]):
    """
    Send queued messages to the client until cancelled or the socket breaks.
    A broken socket stops further state updates from being queued.
    """
    while True:
        message = await queue.get()
        try:
            await websocket.send_json(message)
        except Exception:
            logger.warning("Websocket send failed, stopping updates", exc_info=True)
            unsubscribe()
            return

# PUBLIC_INTERFACE
@app.websocket("/ws/game/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """
    Real-time updates for a given game session.

    Pushes the current state on connect and after every state change, and
    accepts move/reset commands. See /ws/docs for the message schema.
    """
    await websocket.accept()
    try:
        coordinator = STORE.get_session(session_id)
    except SessionNotFoundError as e:
        await websocket.send_json({"error": str(e)})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()
    queue.put_nowait(_state_message(coordinator.current_state()))
    # Moves run in the threadpool, so listeners fire off this loop.
    unsubscribe = coordinator.subscribe(
        lambda snapshot: loop.call_soon_threadsafe(queue.put_nowait, _state_message(snapshot))
    )
    sender = asyncio.create_task(_push_messages(websocket, queue, unsubscribe))
    try:
        while True:
            data = await websocket.receive_json()
            # Expects {"action": "move", "row": int, "col": int} or {"action": "reset"}
            action = data.get("action") if isinstance(data, dict) else None
            if action == "move":
                try:
                    move = MoveRequest.model_validate(data)
                    await run_in_threadpool(coordinator.submit_human_move, move.row, move.col)
                except (GameError, ValidationError) as err:
                    queue.put_nowait({"error": str(err)})
            elif action == "reset":
                await run_in_threadpool(coordinator.reset)
            else:
                queue.put_nowait({"error": "Invalid command"})
    except WebSocketDisconnect:
        logger.debug("Websocket for session %s disconnected", session_id)
    finally:
        unsubscribe()
        sender.cancel()
        try:
            await sender
        except asyncio.CancelledError:
            pass

# PUBLIC_INTERFACE
@app.get("/ws/docs", tags=["ws"], summary="Websocket API usage help")
def websocket_usage():
    """
    API docs for websocket:
    - Endpoint: /ws/game/{session_id}
    - Protocol: JSON messages from client must be one of:
        - { "action": "move", "row": 0, "col": 1 }
        - { "action": "reset" }
    - Responses are { "type": "game_state", "state": {...GameSnapshot...}}
    - Errors { "error": "<string>" }
    """
    return {
        "endpoint": "/ws/game/{session_id}",
        "messages": [
            {"action": "move", "row": 0, "col": 1},
            {"action": "reset"},
        ],
        "response": {
            "type": "game_state",
            "state": "GameSnapshot schema"
        }
    }
