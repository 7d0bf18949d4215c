from __future__ import annotations

import random
from typing import Callable, Optional, Sequence, TypeVar

from rules.board import Board
from rules.errors import EmptyContinuationError
from rules.move import CandidateMove, Move

from .heuristic import score_candidate

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3

_DEFAULT_RNG = random.Random()
_SCORE_EPSILON = 1e-6

T = TypeVar("T")


def clamp_difficulty(level: float) -> int:
	return min(MAX_DIFFICULTY, max(MIN_DIFFICULTY, round(level)))


def _pick_best(options: Sequence[T], key: Callable[[T], float], rng: random.Random) -> T:
	best = max(key(option) for option in options)
	tied = [option for option in options if key(option) >= best - _SCORE_EPSILON]
	return rng.choice(tied)


def _max_captures(candidates: Sequence[CandidateMove]) -> list[CandidateMove]:
	top = max(candidate.capture_count for candidate in candidates)
	return [candidate for candidate in candidates if candidate.capture_count == top]


def choose_move(
	candidates: Sequence[CandidateMove],
	rng: Optional[random.Random] = None,
) -> Optional[CandidateMove]:
	"""Greedy single-ply pick: most captures first, uniform random among ties."""
	if not candidates:
		return None
	return _pick_best(candidates, lambda candidate: candidate.capture_count, rng or _DEFAULT_RNG)


def choose_continuation(moves: Sequence[Move], rng: Optional[random.Random] = None) -> Move:
	if not moves:
		raise EmptyContinuationError("No moves available for continuation.")
	return _pick_best(moves, lambda move: len(move.captured), rng or _DEFAULT_RNG)


def randomness_for(difficulty: int) -> float:
	"""Chance of skipping the positional ranking at ``difficulty``."""
	return (MAX_DIFFICULTY - clamp_difficulty(difficulty)) / 8.0


def choose_move_with_difficulty(
	candidates: Sequence[CandidateMove],
	board: Board,
	difficulty: int = DEFAULT_DIFFICULTY,
	rng: Optional[random.Random] = None,
) -> Optional[CandidateMove]:
	if not candidates:
		return None
	rng = rng or _DEFAULT_RNG
	level = clamp_difficulty(difficulty)
	best = _max_captures(candidates)
	if level == MIN_DIFFICULTY or rng.random() < randomness_for(level):
		return rng.choice(best)

	scores = {candidate: score_candidate(board, candidate) for candidate in best}
	return _pick_best(best, scores.__getitem__, rng)
