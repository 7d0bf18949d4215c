from __future__ import annotations

from typing import Any, Optional

from rules.executor import PlannedTurn
from rules.game import Game
from rules.move import CandidateMove, Move, Position
from rules.outcome import GameOutcome
from rules.pieces import Piece, Player
from rules.player import PlayerController


def _coord_tuple_to_dict(coord: Position) -> dict[str, int]:
    row, col = coord
    return {"row": row, "col": col}


def serialize_piece(position: Position, piece: Piece) -> dict[str, Any]:
    row, col = position
    return {
        "row": row,
        "col": col,
        "color": piece.color.value,
        "owner": piece.owner.value,
        "isKing": piece.is_king,
    }


def serialize_move(move: Move) -> dict[str, Any]:
    return {
        "destination": _coord_tuple_to_dict(move.destination),
        "captured": [_coord_tuple_to_dict(capture) for capture in move.captured],
        "isCapture": move.is_capture,
    }


def serialize_candidate(candidate: CandidateMove) -> dict[str, Any]:
    return {
        "origin": _coord_tuple_to_dict(candidate.origin),
        "move": serialize_move(candidate.move),
    }


def serialize_turn(turn: Optional[PlannedTurn]) -> Optional[dict[str, Any]]:
    if turn is None:
        return None
    return {
        "player": turn.player.value,
        "steps": [serialize_candidate(step) for step in turn.steps],
    }


def serialize_outcome(outcome: Optional[GameOutcome]) -> Optional[dict[str, Any]]:
    if outcome is None:
        return None
    return {
        "winner": outcome.winner.value,
        "reason": outcome.reason.value,
        "message": outcome.message,
    }


def serialize_controller(controller: PlayerController) -> dict[str, str]:
    return {"kind": controller.kind.value, "name": controller.name}


def serialize_game(game: Game, difficulty: int, pending_opponent_move: bool = False) -> dict[str, Any]:
    board = game.board
    pieces = [serialize_piece(position, piece) for position, piece in board.iter_pieces()]
    forced = game.forced_captures()

    return {
        "rows": board.rows,
        "cols": board.cols,
        "turn": game.current_player.value,
        "turnNumber": game.turn_number,
        "pieces": pieces,
        "pieceCounts": {
            "human": {
                "total": board.count(Player.HUMAN),
                "kings": sum(1 for piece in board.getAllPieces(Player.HUMAN) if piece.is_king),
            },
            "opponent": {
                "total": board.count(Player.OPPONENT),
                "kings": sum(1 for piece in board.getAllPieces(Player.OPPONENT) if piece.is_king),
            },
        },
        "forcedCaptures": [_coord_tuple_to_dict(position) for position in forced],
        "mandatoryCapture": bool(forced),
        "selected": _coord_tuple_to_dict(game.selected) if game.selected else None,
        "availableMoves": [serialize_move(move) for move in game.available_moves],
        "multiCaptureActive": game.chain_active,
        "lastOpponentTurn": serialize_turn(game.last_turn),
        "outcome": serialize_outcome(game.outcome),
        "difficulty": difficulty,
        "pendingOpponentMove": pending_opponent_move,
        "players": {
            "human": serialize_controller(game.getPlayer(Player.HUMAN)),
            "opponent": serialize_controller(game.getPlayer(Player.OPPONENT)),
        },
    }
