from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .schemas import ConfigRequest, CoordinateModel, MoveRequest, ResetRequest
from .session import GameSession


def create_app(session: Optional[GameSession] = None, settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="Checkers Backend", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    session = session or GameSession(settings)
    app.state.session = session

    def get_session() -> GameSession:
        return session

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/board")
    def read_board(session: GameSession = Depends(get_session)):
        return session.serialize()

    @app.get("/valid-moves")
    def read_valid_moves(
        row: int = Query(..., ge=0),
        col: int = Query(..., ge=0),
        session: GameSession = Depends(get_session),
    ):
        try:
            return session.get_valid_moves(row, col)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.post("/select")
    def select_piece(payload: CoordinateModel, session: GameSession = Depends(get_session)):
        try:
            return session.select(payload)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/move")
    def play_move(payload: MoveRequest, session: GameSession = Depends(get_session)):
        try:
            return session.make_move(payload)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/opponent-move")
    def opponent_move(session: GameSession = Depends(get_session)):
        try:
            return session.run_opponent_move()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

    @app.post("/reset")
    def reset_game(payload: Optional[ResetRequest] = None, session: GameSession = Depends(get_session)):
        return session.reset(payload)

    @app.post("/config")
    def configure(payload: ConfigRequest, session: GameSession = Depends(get_session)):
        return session.configure(payload)

    return app
