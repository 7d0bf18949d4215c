"""Checkers rules engine package."""

from .board import BOARD_SIZE, Board, clone_board, create_initial_board
from .errors import BoardConfigurationError, EmptyContinuationError
from .executor import MoveResult, PlannedTurn, apply_move, play_chain
from .game import Game
from .move import CandidateMove, Move, Position
from .movegen import collect_moves_for_player, forced_capture_positions, legal_moves_for, moves_for
from .outcome import GameOutcome, OutcomeReason, evaluate
from .pieces import Color, Piece, Player
from .player import PlayerController, PlayerKind

__all__ = [
	"BOARD_SIZE",
	"Board",
	"create_initial_board",
	"clone_board",
	"BoardConfigurationError",
	"EmptyContinuationError",
	"MoveResult",
	"PlannedTurn",
	"apply_move",
	"play_chain",
	"Game",
	"Move",
	"CandidateMove",
	"Position",
	"moves_for",
	"forced_capture_positions",
	"legal_moves_for",
	"collect_moves_for_player",
	"GameOutcome",
	"OutcomeReason",
	"evaluate",
	"Color",
	"Piece",
	"Player",
	"PlayerController",
	"PlayerKind",
]
