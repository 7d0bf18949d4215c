"""Scripted opponent: greedy move selection and paced application."""

from .agents import create_greedy_controller, plan_greedy_turn
from .scheduler import ThinkingScheduler, ThinkingToken
from .selector import (
    DEFAULT_DIFFICULTY,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    choose_continuation,
    choose_move,
    choose_move_with_difficulty,
    clamp_difficulty,
)

__all__ = [
    "create_greedy_controller",
    "plan_greedy_turn",
    "ThinkingScheduler",
    "ThinkingToken",
    "DEFAULT_DIFFICULTY",
    "MAX_DIFFICULTY",
    "MIN_DIFFICULTY",
    "choose_continuation",
    "choose_move",
    "choose_move_with_difficulty",
    "clamp_difficulty",
]
