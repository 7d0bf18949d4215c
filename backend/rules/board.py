from __future__ import annotations

from typing import Iterator, Optional

from .errors import BoardConfigurationError
from .move import Position
from .pieces import Color, Piece, Player


BOARD_SIZE = 8
STARTING_ROWS = 3

Cell = Optional[Piece]
BoardStatePiece = tuple[int, int, str, str, bool]
BoardState = tuple[int, int, tuple[BoardStatePiece, ...]]


def is_dark_square(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


class Board:
    def __init__(self, rows: int = BOARD_SIZE, cols: int = BOARD_SIZE) -> None:
        if rows <= 0 or cols <= 0:
            raise BoardConfigurationError(f"Board dimensions must be positive, got {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.grid: list[list[Cell]] = [[None for _ in range(cols)] for _ in range(rows)]

    @classmethod
    def empty(cls, rows: int = BOARD_SIZE, cols: int = BOARD_SIZE) -> "Board":
        return cls(rows, cols)

    @classmethod
    def initial(cls, rows: int = BOARD_SIZE, cols: int = BOARD_SIZE) -> "Board":
        board = cls(rows, cols)
        board._set_start_pieces()
        return board

    def to_state(self) -> BoardState:
        pieces: list[BoardStatePiece] = []
        for (row, col), piece in self.iter_pieces():
            pieces.append((row, col, piece.color.value, piece.owner.value, piece.is_king))
        return (self.rows, self.cols, tuple(pieces))

    @classmethod
    def from_state(cls, state: BoardState) -> "Board":
        rows, cols, pieces = state
        board = cls(rows, cols)
        for row, col, color_value, owner_value, is_king in pieces:
            board.place((row, col), Piece(Color(color_value), Player(owner_value), is_king=is_king))
        return board

    def getPiece(self, row: int, col: int) -> Cell:
        if self._is_within_bounds(row, col):
            return self.grid[row][col]
        return None

    def place(self, position: Position, piece: Cell) -> None:
        """Put ``piece`` (or clear with ``None``) on a square of a board still being built."""
        row, col = position
        if not self._is_within_bounds(row, col):
            raise ValueError(f"Position {position} is outside the {self.rows}x{self.cols} board.")
        if piece is not None and not is_dark_square(row, col):
            raise ValueError(f"Pieces may only stand on dark squares, got {position}.")
        self.grid[row][col] = piece

    def iter_pieces(self, owner: Optional[Player] = None) -> Iterator[tuple[Position, Piece]]:
        for row in range(self.rows):
            for col in range(self.cols):
                piece = self.grid[row][col]
                if piece is None:
                    continue
                if owner is not None and piece.owner != owner:
                    continue
                yield (row, col), piece

    def getAllPieces(self, owner: Optional[Player] = None) -> list[Piece]:
        return [piece for _, piece in self.iter_pieces(owner)]

    def count(self, owner: Player) -> int:
        return sum(1 for _ in self.iter_pieces(owner))

    def copy(self) -> "Board":
        new_board = Board(self.rows, self.cols)
        for r in range(self.rows):
            for c in range(self.cols):
                p = self.grid[r][c]
                if p:
                    new_board.grid[r][c] = p.getCopy()
        return new_board

    def _set_start_pieces(self) -> None:
        for row in range(self.rows):
            for col in range(self.cols):
                if not is_dark_square(row, col):
                    continue
                if row < STARTING_ROWS:
                    self.grid[row][col] = Piece.for_player(Player.OPPONENT)
                elif row >= self.rows - STARTING_ROWS:
                    self.grid[row][col] = Piece.for_player(Player.HUMAN)

    def _is_within_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.to_state() == other.to_state()

    def __repr__(self) -> str:
        lines = []
        for row in self.grid:
            cells = []
            for piece in row:
                if piece is None:
                    cells.append(".")
                    continue
                symbol = "d" if piece.color is Color.DARK else "l"
                cells.append(symbol.upper() if piece.is_king else symbol)
            lines.append(" ".join(cells))
        return "\n".join(lines)


def create_initial_board(rows: int = BOARD_SIZE, cols: int = BOARD_SIZE) -> Board:
    return Board.initial(rows, cols)


def clone_board(board: Board) -> Board:
    return board.copy()
