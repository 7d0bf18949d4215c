from __future__ import annotations

from rules.board import Board
from rules.executor import apply_move
from rules.move import CandidateMove, Position
from rules.movegen import capture_moves_for
from rules.pieces import Piece


_PROMOTION_WEIGHT = 3.0
_PROGRESS_WEIGHT = 0.6
_CENTER_WEIGHT = 0.25
_BACK_ROW_WEIGHT = 0.4
_FOLLOW_UP_WEIGHT = 1.5
_EXPOSURE_PENALTY = 2.5


# Position-aware score of one candidate, from the mover's side. Capture count is
# deliberately left out: callers filter on it before ranking.
def score_candidate(board: Board, candidate: CandidateMove) -> float:
	"""Reward promotion, advancement, central squares, follow-up captures; punish exposed landings and leaving the home row."""
	piece = board.getPiece(*candidate.origin)
	if piece is None:
		return float("-inf")

	result = apply_move(board, candidate.origin, candidate.move)
	moved = result.moved_piece
	if moved is None:
		return float("-inf")
	destination = candidate.move.destination

	score = 0.0
	if moved.is_king and not piece.is_king:
		score += _PROMOTION_WEIGHT
	score += _PROGRESS_WEIGHT * (
		_forward_progress(moved, destination, board.rows) - _forward_progress(piece, candidate.origin, board.rows)
	)
	score += _CENTER_WEIGHT * _center_bias(destination, board.rows, board.cols)
	score -= _BACK_ROW_WEIGHT * _back_rank_guard(piece, candidate.origin, board.rows)
	score += _FOLLOW_UP_WEIGHT * len(result.continuation)
	if not result.continuation and _is_exposed(result.board, destination):
		score -= _EXPOSURE_PENALTY
	return score


# Measures how close a man is to promotion (kings always maxed).
def _forward_progress(piece: Piece, position: Position, rows: int) -> float:
	if piece.is_king or rows <= 1:
		return 1.0
	max_rank = rows - 1
	row = position[0]
	if piece.color.forward > 0:
		return row / max_rank
	return (max_rank - row) / max_rank


# Rewards squares that sit near the middle of the board.
def _center_bias(position: Position, rows: int, cols: int) -> float:
	center_row = (rows - 1) / 2.0
	center_col = (cols - 1) / 2.0
	span = max(center_row + center_col, 1.0)
	offset = abs(position[0] - center_row) + abs(position[1] - center_col)
	return max(0.0, 1.0 - offset / span)


# 1.0 when a man still guards its own home row.
def _back_rank_guard(piece: Piece, position: Position, rows: int) -> float:
	if piece.is_king:
		return 0.0
	home_row = 0 if piece.color.forward > 0 else rows - 1
	return 1.0 if position[0] == home_row else 0.0


def _is_exposed(board: Board, position: Position) -> bool:
	piece = board.getPiece(*position)
	if piece is None:
		return False
	for origin, enemy in board.iter_pieces(piece.owner.other):
		for move in capture_moves_for(board, origin, enemy):
			if position in move.captured:
				return True
	return False
