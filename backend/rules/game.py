from __future__ import annotations

import logging
from typing import Optional

from .board import BOARD_SIZE, Board
from .executor import PlannedTurn, apply_move
from .move import Move, Position
from .movegen import forced_capture_positions, legal_moves_for
from .outcome import GameOutcome, evaluate, no_moves_outcome
from .pieces import Player
from .player import PlayerController

logger = logging.getLogger(__name__)


class Game:
    """Turn controller for one human against one scripted opponent.

    The board is replaced, never edited, on every move, so any board handed
    out earlier stays a valid snapshot.
    """

    def __init__(self, rows: int = BOARD_SIZE, cols: Optional[int] = None) -> None:
        self.rows = rows
        self.cols = rows if cols is None else cols
        self.board = Board.initial(self.rows, self.cols)
        self.current_player = Player.HUMAN
        self.selected: Optional[Position] = None
        self.available_moves: tuple[Move, ...] = ()
        self.chain_active = False
        self.outcome: Optional[GameOutcome] = None
        self.turn_number = 0
        self.last_turn: Optional[PlannedTurn] = None
        self.players: dict[Player, PlayerController] = {
            Player.HUMAN: PlayerController.human("Human"),
            Player.OPPONENT: PlayerController.human("Opponent"),
        }

    def reset(self, rows: Optional[int] = None, cols: Optional[int] = None) -> None:
        if rows is not None:
            self.rows = rows
            self.cols = rows if cols is None else cols
        self.board = Board.initial(self.rows, self.cols)
        self.current_player = Player.HUMAN
        self._clear_selection()
        self.outcome = None
        self.turn_number = 0
        self.last_turn = None
        logger.info("New %dx%d game started.", self.rows, self.cols)

    # players ------------------------------------------------------------

    def setPlayer(self, player: Player, controller: PlayerController) -> None:
        self.players[player] = controller

    def getPlayer(self, player: Player) -> PlayerController:
        return self.players[player]

    def currentController(self) -> PlayerController:
        return self.getPlayer(self.current_player)

    def isAITurn(self) -> bool:
        return self.outcome is None and not self.currentController().is_human

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    # queries ------------------------------------------------------------

    def forced_captures(self) -> list[Position]:
        if self.outcome is not None:
            return []
        return forced_capture_positions(self.board, self.current_player)

    def legal_moves_for(self, position: Position) -> list[Move]:
        if self.outcome is not None:
            return []
        piece = self.board.getPiece(*position)
        if piece is None or piece.owner != self.current_player:
            return []
        if self.chain_active:
            return list(self.available_moves) if position == self.selected else []
        return legal_moves_for(self.board, position)

    # human input --------------------------------------------------------

    def select(self, position: Position) -> bool:
        if not self._accepts_input():
            return False
        if self.chain_active:
            return position == self.selected
        moves = self.legal_moves_for(position)
        if not moves:
            return False
        self.selected = position
        self.available_moves = tuple(moves)
        return True

    def move_selected(self, destination: Position) -> bool:
        if not self._accepts_input() or self.selected is None:
            return False
        chosen = next((move for move in self.available_moves if move.destination == destination), None)
        if chosen is None:
            logger.debug("Destination %s is not offered for %s.", destination, self.selected)
            return False

        result = apply_move(self.board, self.selected, chosen, self.rows)
        if result.rejected:
            self._clear_selection()
            return False

        self.board = result.board
        if result.continuation:
            self.selected = result.destination
            self.available_moves = result.continuation
            self.chain_active = True
            return True

        self._clear_selection()
        self._finish_turn()
        return True

    def click(self, position: Position) -> bool:
        """Handle a click on ``position``: pick a piece, drop it, or move the selection."""
        if not self._accepts_input():
            return False

        if self.chain_active:
            if any(move.destination == position for move in self.available_moves):
                return self.move_selected(position)
            return False

        piece = self.board.getPiece(*position)
        if piece is not None and piece.owner == self.current_player:
            if self.selected == position:
                self._clear_selection()
                return True
            return self.select(position)

        if self.selected is not None:
            return self.move_selected(position)
        return False

    # scripted players ---------------------------------------------------

    def plan_opponent_turn(self) -> Optional[PlannedTurn]:
        if not self.isAITurn():
            return None
        return self.currentController().select_turn(self)

    def apply_planned_turn(self, turn: PlannedTurn) -> bool:
        if self.outcome is not None or turn.player != self.current_player:
            logger.debug("Discarding planned turn for %s: not on move.", turn.player.value)
            return False
        if turn.start_board is not self.board:
            logger.debug("Discarding planned turn for %s: board changed.", turn.player.value)
            return False
        self.board = turn.board
        self.last_turn = turn
        self._clear_selection()
        self._finish_turn()
        return True

    def requestAIMove(self) -> bool:
        if not self.isAITurn():
            return False
        turn = self.plan_opponent_turn()
        if turn is None:
            self._declare(evaluate(self.board, self.current_player) or no_moves_outcome(self.current_player))
            return False
        return self.apply_planned_turn(turn)

    # helpers ------------------------------------------------------------

    def _accepts_input(self) -> bool:
        return self.outcome is None and self.currentController().is_human

    def _clear_selection(self) -> None:
        self.selected = None
        self.available_moves = ()
        self.chain_active = False

    def _finish_turn(self) -> None:
        self.turn_number += 1
        self.current_player = self.current_player.other
        outcome = evaluate(self.board, self.current_player)
        if outcome is not None:
            self._declare(outcome)

    def _declare(self, outcome: GameOutcome) -> None:
        self.outcome = outcome
        self._clear_selection()
        logger.info("Game over: %s", outcome.message)
