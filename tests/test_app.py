import json
import os
import unittest

# Keep command traces out of test output
os.environ["ZERTZ_DEBUG"] = "0"

from app import app as flask_app  # noqa: E402
from app import state_to_json     # noqa: E402
import app as app_mod             # noqa: E402
from game import initial_state    # noqa: E402


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()
        r = self.post("/api/new", {"radius": 3})
        self.assertEqual(r.status_code, 200)

    def post(self, path, payload=None):
        return self.client.post(path, data=json.dumps(payload or {}), content_type="application/json")

    def test_given_new_game_when_get_state_then_initial_snapshot(self):
        r = self.client.get("/api/state")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["historySize"], 1)
        state = data["state"]
        self.assertEqual(state["board"]["size"], 7)
        self.assertEqual(sum(1 for c in state["board"]["cells"] if c["present"]), 37)
        self.assertEqual(len(state["piles"]["table"]["balls"]), 24)
        self.assertEqual(state["piles"]["player1"]["balls"], [])
        self.assertEqual(state["balls"][0], {"id": 0, "color": "white", "pile": "table"})
        self.assertEqual(state, state_to_json(initial_state()))

    def test_given_free_cell_when_move_board_then_ball_on_cell(self):
        r = self.post("/api/move/board", {"ball": 0, "q": 3, "r": 3})
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        self.assertEqual(data["historySize"], 2)
        self.assertEqual(data["state"]["balls"][0]["cell"], {"q": 3, "r": 3})
        self.assertNotIn(0, data["state"]["piles"]["table"]["balls"])

    def test_given_occupied_cell_when_move_board_then_400_and_state_unchanged(self):
        self.post("/api/move/board", {"ball": 0, "q": 3, "r": 3})
        before = self.client.get("/api/state").get_json()
        r = self.post("/api/move/board", {"ball": 1, "q": 3, "r": 3})
        self.assertEqual(r.status_code, 400)
        data = r.get_json()
        self.assertFalse(data["ok"])
        self.assertEqual(data["error"], "Illegal move")
        self.assertEqual(data["state"], before["state"])
        self.assertEqual(data["historySize"], 2)

    def test_given_pile_moves_when_posted_then_accepted_or_rejected(self):
        r = self.post("/api/move/pile", {"ball": 5, "pile": "player2"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["state"]["piles"]["player2"]["balls"], [5])
        r = self.post("/api/move/pile", {"ball": 5, "pile": "PLAYER2"})
        self.assertEqual(r.status_code, 400)

    def test_given_remove_and_undo_when_posted_then_cell_toggles_through_history(self):
        r = self.post("/api/remove", {"q": 3, "r": 3})
        self.assertEqual(r.status_code, 200)
        cells = {(c["q"], c["r"]): c for c in r.get_json()["state"]["board"]["cells"]}
        self.assertFalse(cells[(3, 3)]["present"])
        r = self.post("/api/undo")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["historySize"], 1)
        r = self.post("/api/undo")
        self.assertEqual(r.status_code, 400)

    def test_given_bad_payloads_when_posted_then_400_bad_request(self):
        for path, payload in [
            ("/api/move/board", {"ball": "x", "q": 3, "r": 3}),
            ("/api/move/board", {"ball": 0}),
            ("/api/move/pile", {"ball": 0, "pile": "nowhere"}),
            ("/api/remove", {"q": 3}),
            ("/api/click", {"type": "banana"}),
            ("/api/new", {"radius": 0}),
            ("/api/new", {"radius": 11}),
            ("/api/new", {"radius": 1500}),
            ("/api/new", {"radius": True}),
            ("/api/move/board", {"ball": True, "q": 3, "r": 3}),
            ("/api/move/board", {"ball": 0, "q": True, "r": 3}),
            ("/api/remove", {"q": 3, "r": False}),
            ("/api/click", {"type": "ball", "ball": True}),
        ]:
            r = self.post(path, payload)
            self.assertEqual(r.status_code, 400, path)
            data = r.get_json()
            self.assertFalse(data["ok"])
            self.assertTrue(data["error"].startswith("bad request"))
        self.assertEqual(app_mod.ENGINE.history_size, 1)
        self.assertEqual(app_mod.ENGINE.latest().board.size, 7)
        self.assertIsNone(app_mod.CONTROLLER.action.src)

    def test_given_click_sequence_when_posted_then_controller_drives_engine(self):
        r = self.post("/api/click", {"type": "ball", "ball": 2})
        self.assertEqual(r.get_json()["result"], "selected")
        r = self.post("/api/click", {"type": "cell", "q": 2, "r": 3})
        data = r.get_json()
        self.assertEqual(data["result"], "success")
        self.assertEqual(data["state"]["balls"][2]["cell"], {"q": 2, "r": 3})
        r = self.post("/api/click", {"type": "undo"})
        self.assertEqual(r.get_json()["result"], "success")
        self.assertEqual(r.get_json()["historySize"], 1)

    def test_given_radius_when_new_then_board_resized(self):
        r = self.post("/api/new", {"radius": 2})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.get_json()["state"]["board"]["size"], 5)


if __name__ == "__main__":
    unittest.main()
