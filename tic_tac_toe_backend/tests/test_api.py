import asyncio
import unittest

import httpx
from fastapi.testclient import TestClient

from tictactoe_ai.coordinator import TurnCoordinator
from tictactoe_ai.main import _push_messages, _state_message, app

EMPTY = [["", "", ""], ["", "", ""], ["", "", ""]]


class GameApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)
        response = self.client.post("/game/create", json={})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.session_id = body["session_id"]
        self.initial = body["state"]

    def tearDown(self) -> None:
        self.client.delete(f"/game/{self.session_id}")

    def url(self, suffix: str) -> str:
        return f"/game/{self.session_id}/{suffix}"

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Healthy"})

    def test_create_returns_fresh_game(self) -> None:
        self.assertEqual(self.initial["board"], EMPTY)
        self.assertEqual(self.initial["phase"]["status"], "awaiting_move")
        self.assertEqual(self.initial["phase"]["turn"], "human")
        self.assertEqual(self.initial["human_side"], "O")
        self.assertIn(self.session_id, self.client.get("/game/list").json())

    def test_create_with_human_side(self) -> None:
        body = self.client.post("/game/create", json={"human_side": "X"}).json()
        try:
            self.assertEqual(body["state"]["human_side"], "X")
            self.assertEqual(body["state"]["ai_side"], "O")
        finally:
            self.client.delete(f"/game/{body['session_id']}")

    def test_move_and_state(self) -> None:
        response = self.client.post(self.url("move"), json={"row": 1, "col": 1})
        self.assertEqual(response.status_code, 200)
        state = response.json()
        self.assertEqual(state["board"][1][1], "O")
        self.assertEqual(sum(cell == "X" for line in state["board"] for cell in line), 1)
        self.assertEqual(self.client.get(self.url("state")).json(), state)

    def test_occupied_cell_is_bad_request(self) -> None:
        self.client.post(self.url("move"), json={"row": 0, "col": 0})
        before = self.client.get(self.url("state")).json()
        response = self.client.post(self.url("move"), json={"row": 0, "col": 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.get(self.url("state")).json(), before)

    def test_out_of_range_is_unprocessable(self) -> None:
        response = self.client.post(self.url("move"), json={"row": 3, "col": 0})
        self.assertEqual(response.status_code, 422)

    def test_game_over_is_conflict_until_reset(self) -> None:
        for row, col in [(0, 0), (0, 1), (1, 0)]:
            state = self.client.post(self.url("move"), json={"row": row, "col": col}).json()
        self.assertEqual(state["phase"]["status"], "finished")
        self.assertEqual(state["phase"]["outcome"], {"kind": "win", "winner": "X"})

        response = self.client.post(self.url("move"), json={"row": 2, "col": 2})
        self.assertEqual(response.status_code, 409)

        state = self.client.post(self.url("reset")).json()
        self.assertEqual(state["board"], EMPTY)
        self.assertEqual(state["phase"]["turn"], "human")

    def test_unknown_session(self) -> None:
        self.assertEqual(self.client.get("/game/nope/state").status_code, 404)
        self.assertEqual(self.client.post("/game/nope/move", json={"row": 0, "col": 0}).status_code, 404)
        self.assertEqual(self.client.post("/game/nope/reset").status_code, 404)
        self.assertEqual(self.client.delete("/game/nope").status_code, 404)

    def test_delete(self) -> None:
        self.assertEqual(self.client.delete(f"/game/{self.session_id}").status_code, 204)
        self.assertEqual(self.client.get(self.url("state")).status_code, 404)


class GameWebsocketTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(app)
        self.session_id = self.client.post("/game/create", json={}).json()["session_id"]

    def tearDown(self) -> None:
        self.client.delete(f"/game/{self.session_id}")

    def test_pushes_every_transition(self) -> None:
        with self.client.websocket_connect(f"/ws/game/{self.session_id}") as ws:
            initial = ws.receive_json()
            self.assertEqual(initial["type"], "game_state")
            self.assertEqual(initial["state"]["board"], EMPTY)

            ws.send_json({"action": "move", "row": 1, "col": 1})
            after_human = ws.receive_json()["state"]
            after_ai = ws.receive_json()["state"]
            self.assertEqual(after_human["phase"]["turn"], "ai")
            self.assertEqual(after_human["board"][1][1], "O")
            self.assertEqual(after_ai["phase"]["turn"], "human")
            self.assertEqual(sum(cell == "X" for line in after_ai["board"] for cell in line), 1)

            ws.send_json({"action": "move", "row": 1, "col": 1})
            self.assertIn("error", ws.receive_json())

            ws.send_json({"action": "move", "row": "a", "col": 0})
            self.assertIn("error", ws.receive_json())

            ws.send_json({"action": "jump"})
            self.assertEqual(ws.receive_json(), {"error": "Invalid command"})

            ws.send_json({"action": "reset"})
            reset = ws.receive_json()["state"]
            self.assertEqual(reset["board"], EMPTY)

    def test_unknown_session(self) -> None:
        with self.client.websocket_connect("/ws/game/nope") as ws:
            self.assertIn("error", ws.receive_json())


class ConcurrencyTests(unittest.TestCase):
    def test_search_does_not_block_other_requests(self) -> None:
        asyncio.run(self._health_check_during_move())

    async def _health_check_during_move(self) -> None:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            session_id = (await client.post("/game/create", json={})).json()["session_id"]
            try:
                move = asyncio.create_task(
                    client.post(f"/game/{session_id}/move", json={"row": 1, "col": 1})
                )
                await asyncio.sleep(0.01)
                health = await client.get("/")
                self.assertEqual(health.status_code, 200)
                # The AI reply to an opening move takes far longer than a health check.
                self.assertFalse(move.done())
                self.assertEqual((await move).status_code, 200)
            finally:
                await client.delete(f"/game/{session_id}")

    def test_broken_socket_stops_queueing_updates(self) -> None:
        asyncio.run(self._push_to_broken_socket())

    async def _push_to_broken_socket(self) -> None:
        class ClosedSocket:
            async def send_json(self, message):
                raise RuntimeError("socket closed")

        coordinator = TurnCoordinator()
        queue: asyncio.Queue = asyncio.Queue()
        unsubscribe = coordinator.subscribe(lambda snapshot: queue.put_nowait(_state_message(snapshot)))
        coordinator.reset()

        with self.assertLogs("tictactoe_ai.main", level="WARNING"):
            await asyncio.wait_for(_push_messages(ClosedSocket(), queue, unsubscribe), timeout=1)

        coordinator.reset()
        coordinator.submit_human_move(0, 0)
        self.assertTrue(queue.empty())


if __name__ == "__main__":
    unittest.main()
