from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .executor import PlannedTurn
    from .game import Game

MovePolicy = Callable[["Game"], Optional["PlannedTurn"]]


class PlayerKind(str, Enum):
    HUMAN = "human"
    GREEDY = "greedy"


@dataclass
class PlayerController:
    kind: PlayerKind
    name: str
    policy: Optional[MovePolicy] = None

    @property
    def is_human(self) -> bool:
        return self.policy is None or self.kind == PlayerKind.HUMAN

    def select_turn(self, game: "Game") -> Optional["PlannedTurn"]:
        if self.policy is None:
            return None
        return self.policy(game)

    @classmethod
    def human(cls, name: str) -> "PlayerController":
        return cls(kind=PlayerKind.HUMAN, name=name)
