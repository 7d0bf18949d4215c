from __future__ import annotations

import random
import sys
import unittest
from pathlib import Path


BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))


from fastapi.testclient import TestClient  # noqa: E402

from opponent.scheduler import ThinkingScheduler  # noqa: E402
from rules.board import Board, create_initial_board  # noqa: E402
from rules.pieces import Piece, Player  # noqa: E402
from server.app import create_app  # noqa: E402
from server.config import Settings  # noqa: E402
from server.schemas import ConfigRequest, CoordinateModel, MoveRequest, ResetRequest  # noqa: E402
from server.session import GameSession  # noqa: E402
from test_scheduler import ManualTimerFactory  # noqa: E402


def _move(start: tuple[int, int], destination: tuple[int, int]) -> MoveRequest:
    return MoveRequest(
        start=CoordinateModel(row=start[0], col=start[1]),
        destination=CoordinateModel(row=destination[0], col=destination[1]),
    )


def _session(delay: float = 0.45) -> tuple[GameSession, ManualTimerFactory]:
    factory = ManualTimerFactory()
    session = GameSession(
        Settings(thinking_delay=delay, random_seed=3),
        scheduler=ThinkingScheduler(delay, timer_factory=factory),
        rng=random.Random(3),
    )
    return session, factory


class SessionFlowTests(unittest.TestCase):
    def test_opponent_reply_lands_after_thinking_delay(self) -> None:
        session, factory = _session()
        state = session.make_move(_move((5, 0), (4, 1)))
        self.assertEqual(state["turn"], "opponent")
        self.assertTrue(state["pendingOpponentMove"])
        self.assertEqual(len(factory.timers), 1)

        factory.timers[0].fire()
        state = session.serialize()
        self.assertEqual(state["turn"], "human")
        self.assertEqual(state["turnNumber"], 2)
        self.assertFalse(state["pendingOpponentMove"])
        self.assertEqual(len(state["lastOpponentTurn"]["steps"]), 1)

    def test_reset_cancels_pending_reply(self) -> None:
        session, factory = _session()
        session.make_move(_move((5, 0), (4, 1)))
        state = session.reset(ResetRequest(difficulty=5))
        self.assertTrue(factory.timers[0].cancelled)
        self.assertEqual(state["difficulty"], 5)

        factory.timers[0].fire()
        self.assertEqual(session.game.board, create_initial_board())
        self.assertEqual(session.game.current_player, Player.HUMAN)
        self.assertEqual(session.game.turn_number, 0)

    def test_immediate_opponent_move_supersedes_the_timer(self) -> None:
        session, factory = _session()
        session.make_move(_move((5, 0), (4, 1)))
        state = session.run_opponent_move()
        self.assertEqual(state["turn"], "human")
        self.assertEqual(state["turnNumber"], 2)

        factory.timers[0].fire()
        self.assertEqual(session.game.turn_number, 2)
        self.assertEqual(session.game.current_player, Player.HUMAN)

    def test_zero_delay_replies_inside_the_request(self) -> None:
        session, factory = _session(delay=0)
        state = session.make_move(_move((5, 2), (4, 3)))
        self.assertEqual(state["turn"], "human")
        self.assertEqual(state["turnNumber"], 2)
        self.assertEqual(factory.timers, [])

    def test_invalid_requests(self) -> None:
        session, _ = _session()
        with self.assertRaises(ValueError):
            session.make_move(_move((5, 0), (3, 2)))
        with self.assertRaises(ValueError):
            session.make_move(_move((4, 1), (3, 2)))
        with self.assertRaises(ValueError):
            session.get_valid_moves(3, 2)
        with self.assertRaises(RuntimeError):
            session.run_opponent_move()

        session.make_move(_move((5, 0), (4, 1)))
        with self.assertRaises(RuntimeError):
            session.make_move(_move((5, 2), (4, 3)))

    def test_chain_move_stays_with_human(self) -> None:
        session, factory = _session()
        board = Board.empty()
        for position, owner in (
            ((5, 2), Player.HUMAN),
            ((5, 6), Player.HUMAN),
            ((4, 3), Player.OPPONENT),
            ((2, 5), Player.OPPONENT),
            ((0, 7), Player.OPPONENT),
        ):
            board.place(position, Piece.for_player(owner))
        session.game.board = board

        state = session.make_move(_move((5, 2), (3, 4)))
        self.assertTrue(state["multiCaptureActive"])
        self.assertEqual(state["selected"], {"row": 3, "col": 4})
        self.assertEqual(factory.timers, [])
        with self.assertRaises(ValueError):
            session.make_move(_move((5, 6), (4, 5)))

        state = session.make_move(_move((3, 4), (1, 6)))
        self.assertFalse(state["multiCaptureActive"])
        self.assertEqual(state["turn"], "opponent")
        self.assertEqual(len(factory.timers), 1)

    def test_configure_difficulty(self) -> None:
        session, _ = _session()
        state = session.configure(ConfigRequest(difficulty=5, thinkingDelay=0.1))
        self.assertEqual(state["difficulty"], 5)
        self.assertIn("level 5", state["players"]["opponent"]["name"])
        self.assertEqual(session.scheduler.delay, 0.1)

    def test_select_reports_available_moves(self) -> None:
        session, _ = _session()
        state = session.select(CoordinateModel(row=5, col=2))
        self.assertEqual(state["selected"], {"row": 5, "col": 2})
        self.assertEqual(len(state["availableMoves"]), 2)
        with self.assertRaises(ValueError):
            session.select(CoordinateModel(row=6, col=1))


class AppRoutesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session, self.timers = _session()
        self.client = TestClient(create_app(self.session))

    def test_health_and_board(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})
        board = self.client.get("/board").json()
        self.assertEqual(len(board["pieces"]), 24)
        self.assertEqual(board["rows"], 8)
        self.assertFalse(board["mandatoryCapture"])
        self.assertIsNone(board["outcome"])

    def test_valid_moves(self) -> None:
        response = self.client.get("/valid-moves", params={"row": 5, "col": 0})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["moves"][0]["destination"], {"row": 4, "col": 1})
        self.assertEqual(self.client.get("/valid-moves", params={"row": 4, "col": 1}).status_code, 400)

    def test_move_errors_map_to_status_codes(self) -> None:
        bad = {"start": {"row": 5, "col": 0}, "destination": {"row": 3, "col": 2}}
        self.assertEqual(self.client.post("/move", json=bad).status_code, 400)
        self.assertEqual(self.client.post("/opponent-move").status_code, 409)

    def test_move_then_opponent_move(self) -> None:
        good = {"start": {"row": 5, "col": 0}, "destination": {"row": 4, "col": 1}}
        self.assertEqual(self.client.post("/move", json=good).json()["turn"], "opponent")
        self.assertEqual(self.client.post("/opponent-move").json()["turn"], "human")
        self.assertEqual(self.client.post("/reset").json()["turnNumber"], 0)
        self.assertEqual(self.client.post("/config", json={"difficulty": 2}).json()["difficulty"], 2)
        self.assertEqual(self.client.post("/config", json={"difficulty": 9}).status_code, 422)


if __name__ == "__main__":
    unittest.main()
