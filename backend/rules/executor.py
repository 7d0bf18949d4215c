from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .board import Board, is_dark_square
from .move import CandidateMove, Move, Position
from .movegen import capture_moves_for
from .pieces import Piece, Player

logger = logging.getLogger(__name__)

ContinuationChooser = Callable[[Sequence[Move]], Move]


@dataclass(frozen=True, slots=True)
class MoveResult:
    board: Board
    moved_piece: Optional[Piece]
    destination: Position
    continuation: tuple[Move, ...] = ()

    @property
    def rejected(self) -> bool:
        return self.moved_piece is None


@dataclass(frozen=True, slots=True)
class PlannedTurn:
    """A whole turn worked out ahead of time: the first move plus every chained capture."""

    player: Player
    start_board: Board
    steps: tuple[CandidateMove, ...]
    board: Board

    @property
    def capture_count(self) -> int:
        return sum(step.capture_count for step in self.steps)

    @property
    def final_position(self) -> Position:
        return self.steps[-1].move.destination


def apply_move(board: Board, origin: Position, move: Move, board_rows: Optional[int] = None) -> MoveResult:
    """Play ``move`` from ``origin`` on a copy of ``board``.

    The input board is never modified. An empty ``origin`` or a destination
    that is off the board or on a light square gives a rejected result
    carrying the very same board. ``continuation`` lists the capture
    moves the same piece must choose from next; it is empty unless this move
    captured something.
    """
    rows = board.rows if board_rows is None else board_rows
    from_piece = board.getPiece(*origin)
    if from_piece is None:
        logger.debug("Rejected move from empty square %s.", origin)
        return MoveResult(board=board, moved_piece=None, destination=origin)

    dest_row, dest_col = move.destination
    if not board._is_within_bounds(dest_row, dest_col) or not is_dark_square(dest_row, dest_col):
        logger.debug("Rejected move from %s to unplayable square %s.", origin, move.destination)
        return MoveResult(board=board, moved_piece=None, destination=origin)

    next_board = board.copy()
    next_board.grid[origin[0]][origin[1]] = None

    moved_piece = from_piece.getCopy()
    if not moved_piece.is_king and dest_row == from_piece.color.promotion_row(rows):
        moved_piece = moved_piece.promote()

    next_board.grid[dest_row][dest_col] = moved_piece
    for cap_row, cap_col in move.captured:
        next_board.grid[cap_row][cap_col] = None

    continuation: tuple[Move, ...] = ()
    if move.is_capture:
        continuation = tuple(capture_moves_for(next_board, move.destination, moved_piece))

    return MoveResult(
        board=next_board,
        moved_piece=moved_piece,
        destination=move.destination,
        continuation=continuation,
    )


def play_chain(
    board: Board,
    candidate: CandidateMove,
    choose_continuation: ContinuationChooser,
) -> Optional[PlannedTurn]:
    """Apply ``candidate`` and keep capturing with the same piece until no capture is left."""
    piece = board.getPiece(*candidate.origin)
    if piece is None:
        return None

    result = apply_move(board, candidate.origin, candidate.move)
    steps = [candidate]
    while result.continuation:
        follow_up = choose_continuation(result.continuation)
        step = CandidateMove(origin=result.destination, move=follow_up)
        result = apply_move(result.board, step.origin, step.move)
        steps.append(step)

    return PlannedTurn(
        player=piece.owner,
        start_board=board,
        steps=tuple(steps),
        board=result.board,
    )
