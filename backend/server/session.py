from __future__ import annotations

import logging
import random
from threading import RLock
from typing import Any, Optional

from opponent.agents import create_greedy_controller
from opponent.scheduler import ThinkingScheduler, ThinkingToken
from opponent.selector import clamp_difficulty
from rules.executor import PlannedTurn
from rules.game import Game
from rules.pieces import Piece, Player
from rules.player import PlayerController

from .config import Settings
from .schemas import ConfigRequest, CoordinateModel, MoveRequest, ResetRequest
from .serializers import serialize_game, serialize_move

logger = logging.getLogger(__name__)


class GameSession:
    """Thread-safe orchestrator around a single Game instance.

    After the human finishes a turn the opponent's reply is computed at once
    and handed to the scheduler; it lands on the board only after the
    thinking delay and only if nothing changed in the meantime.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        scheduler: Optional[ThinkingScheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.lock = RLock()
        self.settings = settings or Settings.from_env()
        self.rng = rng or random.Random(self.settings.random_seed)
        self.scheduler = scheduler or ThinkingScheduler(self.settings.thinking_delay)
        self.difficulty = clamp_difficulty(self.settings.difficulty)
        self.game = Game(self.settings.board_size)
        self._generation = 0
        self._pending: Optional[ThinkingToken] = None
        self._apply_player_controllers()

    # public API ---------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        with self.lock:
            return self._serialize_locked()

    @property
    def pending_opponent_move(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def reset(self, payload: Optional[ResetRequest] = None) -> dict[str, Any]:
        with self.lock:
            self._cancel_pending()
            self._generation += 1
            if payload and payload.difficulty is not None:
                self.difficulty = clamp_difficulty(payload.difficulty)
            self.game.reset()
            self._apply_player_controllers()
            return self._serialize_locked()

    def configure(self, payload: ConfigRequest) -> dict[str, Any]:
        with self.lock:
            if payload.difficulty is not None:
                self.difficulty = clamp_difficulty(payload.difficulty)
                self._apply_player_controllers()
                logger.info("Opponent difficulty set to %d.", self.difficulty)
            if payload.thinkingDelay is not None:
                self.scheduler.delay = payload.thinkingDelay
            return self._serialize_locked()

    def get_valid_moves(self, row: int, col: int) -> dict[str, Any]:
        with self.lock:
            piece = self._require_piece(row, col)
            if piece.owner != self.game.current_player:
                raise ValueError("It is not this piece's turn.")
            moves = self.game.legal_moves_for((row, col))
            return {
                "piece": {"row": row, "col": col},
                "moves": [serialize_move(move) for move in moves],
            }

    def select(self, payload: CoordinateModel) -> dict[str, Any]:
        with self.lock:
            self._require_human_turn()
            if not self.game.select((payload.row, payload.col)):
                raise ValueError(f"Piece at row {payload.row}, col {payload.col} cannot be selected.")
            return self._serialize_locked()

    def make_move(self, payload: MoveRequest) -> dict[str, Any]:
        with self.lock:
            self._require_human_turn()
            start = (payload.start.row, payload.start.col)
            destination = (payload.destination.row, payload.destination.col)
            if self.game.chain_active and start != self.game.selected:
                raise ValueError("Only the capturing piece may continue this turn.")
            if self.game.selected != start and not self.game.select(start):
                raise ValueError("Selected piece cannot move now.")
            if not self.game.move_selected(destination):
                raise ValueError("Requested move is invalid for this piece.")

            if not self.game.chain_active:
                self._generation += 1
                if self.game.isAITurn():
                    self._schedule_opponent_turn()
            return self._serialize_locked()

    def run_opponent_move(self) -> dict[str, Any]:
        """Play the opponent's turn now instead of waiting for the thinking delay."""
        with self.lock:
            if not self.game.isAITurn():
                raise RuntimeError("It is not the opponent's turn.")
            turn = self._pending.payload if self._pending is not None else None
            self._cancel_pending()
            if turn is not None and self._apply_turn(turn):
                return self._serialize_locked()
            if self.game.requestAIMove():
                self._generation += 1
            elif self.game.outcome is None:
                raise RuntimeError("Opponent could not choose a move.")
            return self._serialize_locked()

    def close(self) -> None:
        with self.lock:
            self._cancel_pending()

    # helpers ------------------------------------------------------------

    def _serialize_locked(self) -> dict[str, Any]:
        return serialize_game(self.game, self.difficulty, self.pending_opponent_move)

    def _require_piece(self, row: int, col: int) -> Piece:
        piece = self.game.board.getPiece(row, col)
        if piece is None:
            raise ValueError(f"No piece at row {row}, col {col}.")
        return piece

    def _require_human_turn(self) -> None:
        if self.game.is_over:
            raise RuntimeError("The game is already over.")
        if self.game.current_player != Player.HUMAN:
            raise RuntimeError("It is not the human player's turn.")

    def _schedule_opponent_turn(self) -> None:
        turn = self.game.plan_opponent_turn()
        if turn is None:
            self.game.requestAIMove()
            return
        token = self.scheduler.schedule(self._generation, self._apply_scheduled, payload=turn)
        if not token.fired:
            self._pending = token

    def _apply_scheduled(self, token: ThinkingToken) -> None:
        with self.lock:
            if self._pending is token:
                self._pending = None
            if token.cancelled or token.generation != self._generation:
                logger.debug("Discarding stale opponent move from generation %d.", token.generation)
                return
            self._apply_turn(token.payload)

    def _apply_turn(self, turn: PlannedTurn) -> bool:
        if not self.game.apply_planned_turn(turn):
            return False
        self._generation += 1
        return True

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _apply_player_controllers(self) -> None:
        self.game.setPlayer(Player.HUMAN, PlayerController.human("Human"))
        self.game.setPlayer(
            Player.OPPONENT,
            create_greedy_controller("Computer", difficulty=self.difficulty, rng=self.rng),
        )
