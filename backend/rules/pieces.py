from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Color(Enum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def forward(self) -> int:
        """Row delta a man of this color advances by."""
        return 1 if self is Color.DARK else -1

    def promotion_row(self, rows: int) -> int:
        return rows - 1 if self is Color.DARK else 0


class Player(str, Enum):
    HUMAN = "human"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Player":
        return Player.OPPONENT if self is Player.HUMAN else Player.HUMAN

    @property
    def color(self) -> Color:
        return Color.LIGHT if self is Player.HUMAN else Color.DARK


@dataclass(slots=True)
class Piece:
    color: Color
    owner: Player
    is_king: bool = False

    @classmethod
    def for_player(cls, owner: Player, *, is_king: bool = False) -> "Piece":
        return cls(color=owner.color, owner=owner, is_king=is_king)

    def promote(self) -> "Piece":
        return Piece(self.color, self.owner, is_king=True)

    def getCopy(self) -> "Piece":
        return Piece(self.color, self.owner, is_king=self.is_king)

    @property
    def vertical_directions(self) -> tuple[int, ...]:
        if self.is_king:
            return (1, -1)
        return (self.color.forward,)

    def __repr__(self) -> str:
        piece_type = "K" if self.is_king else "M"
        return f"{piece_type}({self.color.name},{self.owner.value})"
