import asyncio
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from game.config import GameConfig, load_config
from game.driver import TickDriver
from game.engine import SnakeGame, TickEvent
from game.grid import render_text, to_grid
from game.lifecycle import GameController
from game.state import Direction, GameState
from services.commentary import CommentaryService
from services.storage import JsonFileStore, ScoreStore, load_high_score

# Paths
BASE_DIR = Path(__file__).parent

load_dotenv(BASE_DIR / ".env")

CONFIG: GameConfig = load_config()
STORE: ScoreStore = JsonFileStore(os.environ.get("SNAKE_HIGHSCORE_FILE", BASE_DIR / "highscore.json"))
COMMENTARY = CommentaryService.from_env()

app = FastAPI(title="Neon Snake")


class HighScoreResponse(BaseModel):
    """Model for the high score endpoint."""

    high_score: int


@app.get("/config")
async def get_config() -> GameConfig:
    """Return the active game configuration."""
    return CONFIG


@app.get("/highscore")
async def get_high_score() -> HighScoreResponse:
    """Return the persisted high score."""
    return HighScoreResponse(high_score=load_high_score(STORE))


@app.get("/board")
async def get_board():
    """Return the idle board layout as a cell matrix and as text."""
    game = SnakeGame(CONFIG)
    state = game.get_state()
    state.high_score = load_high_score(STORE)
    return {"cells": to_grid(state).tolist(), "text": render_text(state)}


class GameSession:
    """Manages a single game session."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket
        self.outbox: asyncio.Queue[dict] = asyncio.Queue()
        self.controller = GameController(SnakeGame(CONFIG), STORE, COMMENTARY)
        self.driver = TickDriver(self.controller, on_tick=self._on_tick)
        self.sender_task: Optional[asyncio.Task] = None
        self._awaiting_commentary = False

    def _on_tick(self, state: GameState, event: TickEvent) -> None:
        if event.fatal:
            self.outbox.put_nowait({
                "type": "game_over",
                "state": state.to_dict(),
                "final_score": state.score,
                "reason": event.value,
            })

    def on_change(self, state: GameState) -> None:
        """Controller listener: queue a snapshot for the client."""
        if state.commentary_pending:
            self._awaiting_commentary = True
        elif self._awaiting_commentary and state.commentary is not None:
            self._awaiting_commentary = False
            self.outbox.put_nowait({"type": "commentary", "state": state.to_dict()})
            return
        self.outbox.put_nowait({"type": "state_update", "state": state.to_dict()})

    async def run_sender(self):
        """Forward queued messages to the websocket in order."""
        while True:
            message = await self.outbox.get()
            await self.websocket.send_json(message)

    def handle(self, message: dict) -> None:
        """Apply one client message to the controller."""
        msg_type = message.get("type")
        controller = self.controller

        if msg_type in ("start_game", "reset"):
            if not controller.start():
                self.send_state()
        elif msg_type == "pause":
            controller.toggle_pause()
        elif msg_type == "action":
            action = message.get("action")
            if action in [d.value for d in Direction]:
                controller.request_direction(Direction(action))
        elif msg_type == "key":
            controller.handle_key(str(message.get("key", "")))
        else:
            self.outbox.put_nowait({
                "type": "error",
                "message": f"Unknown message type: {msg_type}",
            })
            return

        self.driver.sync()

    def send_state(self) -> None:
        self.outbox.put_nowait({"type": "state_update", "state": self.controller.snapshot().to_dict()})

    def close(self) -> None:
        self.driver.stop()
        self.controller.close()
        if self.sender_task and not self.sender_task.done():
            self.sender_task.cancel()


@app.websocket("/ws/game")
async def websocket_game(websocket: WebSocket):
    """WebSocket endpoint for real-time game communication."""
    await websocket.accept()

    session = GameSession(websocket)
    session.controller.subscribe(session.on_change)
    session.sender_task = asyncio.create_task(session.run_sender())

    # Initial idle board
    session.send_state()

    try:
        while True:
            message = await websocket.receive_json()
            if not isinstance(message, dict):
                session.outbox.put_nowait({"type": "error", "message": "Expected a JSON object"})
                continue
            session.handle(message)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        print(f"Game session error: {e}")
        try:
            await websocket.send_json({
                "type": "error",
                "message": str(e),
            })
        except Exception:
            pass
    finally:
        session.close()


def find_available_port(start_port: int = 8000, max_attempts: int = 100) -> int:
    """Find an available port starting from start_port.

    Args:
        start_port: Port number to start searching from
        max_attempts: Maximum number of ports to try

    Returns:
        An available port number

    Raises:
        RuntimeError: If no available port is found
    """
    import socket

    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(("0.0.0.0", port))
                return port
        except OSError:
            continue

    raise RuntimeError(f"No available port found in range {start_port}-{start_port + max_attempts - 1}")


if __name__ == "__main__":
    import uvicorn

    default_port = 8000
    port = int(os.environ.get("PORT", 0)) or find_available_port(default_port)

    if port != default_port:
        print(f"Port {default_port} is in use, using port {port} instead")

    if not COMMENTARY.enabled:
        print("GEMINI_API_KEY not set, game-over commentary uses a fixed message")

    print(f"Starting server at http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port)
