from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from opponent.selector import DEFAULT_DIFFICULTY
from rules.board import BOARD_SIZE

T = TypeVar("T")


def _env(name: str, convert: Callable[[str], T], default: T) -> T:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return convert(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {value!r}") from exc


@dataclass
class Settings:
    board_size: int = BOARD_SIZE
    thinking_delay: float = 0.45
    difficulty: int = DEFAULT_DIFFICULTY
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            board_size=_env("CHECKERS_BOARD_SIZE", int, defaults.board_size),
            thinking_delay=_env("CHECKERS_THINKING_DELAY", float, defaults.thinking_delay),
            difficulty=_env("CHECKERS_DIFFICULTY", int, defaults.difficulty),
            random_seed=_env("CHECKERS_RANDOM_SEED", int, defaults.random_seed),
        )
