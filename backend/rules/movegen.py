from __future__ import annotations

from .board import Board
from .move import CandidateMove, Move, Position
from .pieces import Piece, Player


MoveList = list[Move]
HORIZONTAL_STEPS = (-1, 1)


def moves_for(board: Board, position: Position, piece: Piece) -> MoveList:
    """Single steps and single jumps for ``piece`` standing on ``position``.

    Longer capture sequences are not expanded here; they come from calling
    this again on the landing square (see ``rules.executor.apply_move``).
    """
    row, col = position
    moves: MoveList = []

    for dr in piece.vertical_directions:
        for dc in HORIZONTAL_STEPS:
            next_r, next_c = row + dr, col + dc
            if not board._is_within_bounds(next_r, next_c):
                continue

            target = board.getPiece(next_r, next_c)
            if target is None:
                moves.append(Move(destination=(next_r, next_c)))
                continue
            if target.owner == piece.owner:
                continue

            jump_r, jump_c = next_r + dr, next_c + dc
            if not board._is_within_bounds(jump_r, jump_c):
                continue
            if board.getPiece(jump_r, jump_c) is not None:
                continue

            moves.append(Move(destination=(jump_r, jump_c), captured=((next_r, next_c),)))

    return moves


def capture_moves_for(board: Board, position: Position, piece: Piece) -> MoveList:
    return [move for move in moves_for(board, position, piece) if move.is_capture]


def forced_capture_positions(board: Board, player: Player) -> list[Position]:
    forced: list[Position] = []
    for position, piece in board.iter_pieces(player):
        if any(move.is_capture for move in moves_for(board, position, piece)):
            forced.append(position)
    return forced


def legal_moves_for(board: Board, position: Position) -> MoveList:
    """Moves the owner of ``position`` may actually play this turn.

    When any piece of that player can capture, only capturing moves are
    legal, so a piece without a capture gets an empty list.
    """
    piece = board.getPiece(*position)
    if piece is None:
        return []
    moves = moves_for(board, position, piece)
    if forced_capture_positions(board, piece.owner):
        return [move for move in moves if move.is_capture]
    return moves


def collect_moves_for_player(board: Board, player: Player) -> list[CandidateMove]:
    candidates: list[CandidateMove] = []
    for position, piece in board.iter_pieces(player):
        for move in moves_for(board, position, piece):
            candidates.append(CandidateMove(origin=position, move=move))

    captures = [candidate for candidate in candidates if candidate.move.is_capture]
    return captures if captures else candidates
