from __future__ import annotations

from dataclasses import dataclass

Position = tuple[int, int]
CaptureSequence = tuple[Position, ...]


@dataclass(frozen=True, slots=True)
class Move:
    destination: Position
    captured: CaptureSequence = ()

    @property
    def is_capture(self) -> bool:
        return bool(self.captured)

    def __str__(self) -> str:
        row, col = self.destination
        if self.is_capture:
            taken = ", ".join(f"{r},{c}" for r, c in self.captured)
            return f"x {row},{col} ({taken})"
        return f"- {row},{col}"


@dataclass(frozen=True, slots=True)
class CandidateMove:
    origin: Position
    move: Move

    @property
    def capture_count(self) -> int:
        return len(self.move.captured)

    def __str__(self) -> str:
        return f"{self.origin[0]},{self.origin[1]} {self.move}"
