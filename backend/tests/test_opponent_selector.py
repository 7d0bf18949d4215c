from __future__ import annotations

import random
import sys
import unittest
from pathlib import Path


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from opponent.heuristic import score_candidate  # noqa: E402
from opponent.selector import (  # noqa: E402
    choose_continuation,
    choose_move,
    choose_move_with_difficulty,
    clamp_difficulty,
    randomness_for,
)
from rules.board import Board, create_initial_board  # noqa: E402
from rules.errors import EmptyContinuationError  # noqa: E402
from rules.move import CandidateMove, Move  # noqa: E402
from rules.movegen import collect_moves_for_player  # noqa: E402
from rules.pieces import Piece, Player  # noqa: E402


QUIET = CandidateMove(origin=(5, 0), move=Move((4, 1)))
JUMP_LEFT = CandidateMove(origin=(5, 2), move=Move((3, 4), ((4, 3),)))
JUMP_RIGHT = CandidateMove(origin=(5, 6), move=Move((3, 4), ((4, 5),)))


class ChooseMoveTests(unittest.TestCase):
    def test_empty_input_gives_none(self) -> None:
        self.assertIsNone(choose_move([]))
        self.assertIsNone(choose_move_with_difficulty([], Board.empty()))

    def test_most_captures_always_wins(self) -> None:
        picked = {choose_move([QUIET, JUMP_LEFT, JUMP_RIGHT], random.Random(seed)) for seed in range(50)}
        self.assertEqual(picked, {JUMP_LEFT, JUMP_RIGHT})

    def test_seeded_choice_is_reproducible(self) -> None:
        candidates = collect_moves_for_player(create_initial_board(), Player.OPPONENT)
        first = choose_move(candidates, random.Random(7))
        second = choose_move(candidates, random.Random(7))
        self.assertEqual(first, second)


class ChooseContinuationTests(unittest.TestCase):
    def test_empty_continuation_fails_loudly(self) -> None:
        with self.assertRaises(EmptyContinuationError):
            choose_continuation([])

    def test_single_continuation_is_returned(self) -> None:
        move = Move((1, 6), ((2, 5),))
        self.assertEqual(choose_continuation([move], random.Random(0)), move)

    def test_continuation_prefers_captures(self) -> None:
        capture = Move((1, 6), ((2, 5),))
        for seed in range(20):
            self.assertEqual(choose_continuation([Move((2, 3)), capture], random.Random(seed)), capture)


class DifficultyTests(unittest.TestCase):
    def test_clamping(self) -> None:
        self.assertEqual(clamp_difficulty(0), 1)
        self.assertEqual(clamp_difficulty(9), 5)
        self.assertEqual(clamp_difficulty(2.6), 3)
        self.assertEqual(randomness_for(5), 0.0)
        self.assertGreater(randomness_for(1), randomness_for(4))

    def test_lowest_level_matches_plain_greedy_choice(self) -> None:
        board = create_initial_board()
        candidates = collect_moves_for_player(board, Player.OPPONENT)
        for seed in range(20):
            self.assertEqual(
                choose_move(candidates, random.Random(seed)),
                choose_move_with_difficulty(candidates, board, 1, random.Random(seed)),
            )

    def test_capture_count_filter_survives_every_level(self) -> None:
        board = Board.empty()
        board.place((2, 3), Piece.for_player(Player.OPPONENT))
        board.place((2, 1), Piece.for_player(Player.OPPONENT))
        board.place((3, 4), Piece.for_player(Player.HUMAN))
        capture = CandidateMove((2, 3), Move((4, 5), ((3, 4),)))
        quiet = CandidateMove((2, 1), Move((3, 0)))
        for level in range(1, 6):
            for seed in range(10):
                chosen = choose_move_with_difficulty([quiet, capture], board, level, random.Random(seed))
                self.assertEqual(chosen, capture)

    def test_top_level_takes_the_promotion(self) -> None:
        board = Board.empty()
        board.place((6, 1), Piece.for_player(Player.OPPONENT))
        board.place((2, 3), Piece.for_player(Player.OPPONENT))
        board.place((7, 6), Piece.for_player(Player.HUMAN))
        candidates = collect_moves_for_player(board, Player.OPPONENT)
        for seed in range(20):
            chosen = choose_move_with_difficulty(candidates, board, 5, random.Random(seed))
            self.assertEqual(chosen.origin, (6, 1))


class HeuristicTests(unittest.TestCase):
    def test_exposed_landing_scores_lower(self) -> None:
        board = Board.empty()
        board.place((2, 3), Piece.for_player(Player.OPPONENT))
        board.place((4, 5), Piece.for_player(Player.HUMAN))
        safe = score_candidate(board, CandidateMove((2, 3), Move((3, 2))))
        exposed = score_candidate(board, CandidateMove((2, 3), Move((3, 4))))
        self.assertLess(exposed, safe)

    def test_unplayable_destination_scores_negative_infinity(self) -> None:
        board = Board.empty()
        board.place((2, 3), Piece.for_player(Player.OPPONENT))
        self.assertEqual(score_candidate(board, CandidateMove((2, 3), Move((8, 4)))), float("-inf"))

    def test_missing_piece_scores_negative_infinity(self) -> None:
        self.assertEqual(score_candidate(Board.empty(), CandidateMove((2, 3), Move((3, 4)))), float("-inf"))


if __name__ == "__main__":
    unittest.main()
