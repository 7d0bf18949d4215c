from __future__ import annotations

import random
from typing import Optional

from rules.executor import PlannedTurn, play_chain
from rules.game import Game
from rules.movegen import collect_moves_for_player
from rules.player import PlayerController, PlayerKind

from .selector import DEFAULT_DIFFICULTY, choose_continuation, choose_move_with_difficulty, clamp_difficulty

__all__ = ["create_greedy_controller", "plan_greedy_turn"]


def plan_greedy_turn(
    game: Game,
    difficulty: int = DEFAULT_DIFFICULTY,
    rng: Optional[random.Random] = None,
) -> Optional[PlannedTurn]:
    board = game.board
    candidates = collect_moves_for_player(board, game.current_player)
    chosen = choose_move_with_difficulty(candidates, board, difficulty, rng)
    if chosen is None:
        return None
    return play_chain(board, chosen, lambda moves: choose_continuation(moves, rng))


def create_greedy_controller(
    name: str,
    difficulty: int = DEFAULT_DIFFICULTY,
    *,
    rng: Optional[random.Random] = None,
) -> PlayerController:
    difficulty = clamp_difficulty(difficulty)

    def _policy(game: Game):
        return plan_greedy_turn(game, difficulty=difficulty, rng=rng)

    return PlayerController(
        kind=PlayerKind.GREEDY,
        name=f"{name} Greedy (level {difficulty})",
        policy=_policy,
    )
