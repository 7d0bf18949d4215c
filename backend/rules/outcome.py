from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board
from .movegen import collect_moves_for_player
from .pieces import Player


class OutcomeReason(str, Enum):
    NO_PIECES_EITHER_SIDE = "no_pieces_either_side"
    NO_PIECES = "no_pieces"
    NO_MOVES = "no_moves"


@dataclass(frozen=True, slots=True)
class GameOutcome:
    winner: Player
    reason: OutcomeReason
    message: str


def player_label(player: Player) -> str:
    return "the human" if player == Player.HUMAN else "the computer"


def _win(winner: Player, reason: OutcomeReason, detail: str) -> GameOutcome:
    return GameOutcome(
        winner=winner,
        reason=reason,
        message=f"Victory for {player_label(winner)}: {detail}.",
    )


def evaluate(board: Board, player_to_move: Player) -> Optional[GameOutcome]:
    """Decide whether the game is over with ``player_to_move`` about to play.

    A player left without a legal move loses; there is no draw. When both
    sides are empty the side not on move is awarded the win.
    """
    opponent = player_to_move.other
    human_pieces = board.count(Player.HUMAN)
    opponent_pieces = board.count(Player.OPPONENT)

    if human_pieces == 0 and opponent_pieces == 0:
        return _win(opponent, OutcomeReason.NO_PIECES_EITHER_SIDE, "neither side has any pieces left")

    counts = {Player.HUMAN: human_pieces, Player.OPPONENT: opponent_pieces}
    if counts[player_to_move] == 0:
        return _win(opponent, OutcomeReason.NO_PIECES, f"{player_label(player_to_move)} has no pieces left")
    if counts[opponent] == 0:
        return _win(player_to_move, OutcomeReason.NO_PIECES, f"{player_label(opponent)} has no pieces left")

    if not collect_moves_for_player(board, player_to_move):
        return no_moves_outcome(player_to_move)

    return None


def no_moves_outcome(player_to_move: Player) -> GameOutcome:
    return _win(player_to_move.other, OutcomeReason.NO_MOVES, f"{player_label(player_to_move)} has no moves left")
