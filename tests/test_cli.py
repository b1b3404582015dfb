import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from game import PileId, QR, Zertz
from zertz_core.cli import main, parse_pile, play, render, run_command


class TestCli(unittest.TestCase):
    def test_given_script_lines_when_played_then_engine_follows_commands(self):
        z = Zertz()
        out = io.StringIO()
        play(z, [
            "place 0 3 3",
            "# comments and blank lines are skipped",
            "",
            "pile 7 player1",
            "remove 0 3",
            "undo",
            "quit",
            "place 1 2 2",
        ], out=out)
        state = z.latest()
        self.assertEqual(state.board.cell_at(3, 3).occupant, 0)
        self.assertEqual(state.pile(PileId.PLAYER1).ball_ids, (7,))
        self.assertTrue(state.board.cell_at(0, 3).present)
        # Nothing after quit runs
        self.assertIsNone(state.board.cell_at(2, 2).occupant)
        self.assertEqual(z.history_size, 3)

    def test_given_bad_input_when_played_then_messages_printed(self):
        z = Zertz()
        out = io.StringIO()
        play(z, ["place 0 3", "fly 1 2", "pile 0 table", "undo", "help"], out=out)
        text = out.getvalue()
        self.assertEqual(text.count("Could not parse. Try again."), 2)
        self.assertEqual(text.count("Illegal move."), 2)
        self.assertIn("Commands:", text)
        self.assertEqual(z.history_size, 1)

    def test_given_words_when_run_command_then_verdicts(self):
        z = Zertz()
        self.assertTrue(run_command(z, ["place", "0", "3", "3"]))
        self.assertFalse(run_command(z, ["place", "1", "3", "3"]))
        self.assertIsNone(run_command(z, ["show"]))
        self.assertTrue(run_command(z, ["UNDO"]))
        with self.assertRaises(ValueError):
            run_command(z, ["remove", "a", "b"])
        self.assertEqual(parse_pile(" Table "), PileId.TABLE)
        with self.assertRaises(ValueError):
            parse_pile("hand")

    def test_given_state_when_render_then_board_and_piles_listed(self):
        z = Zertz()
        z.move_ball_to_board(23, QR(3, 3))
        text = render(z.latest())
        self.assertIn(" b", text.split("\n")[3])
        self.assertIn("table: 0w 1w", text)
        self.assertIn("player1:", text)
        self.assertIn("   board: 23b@3,3", text)
        self.assertIn("    free: 36 cell(s)", text)
        table_line = [ln for ln in text.split("\n") if ln.strip().startswith("table:")][0]
        self.assertTrue(table_line.endswith("22b"))

    def test_given_script_file_when_main_then_commands_applied(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "moves.txt")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("place 0 1 1\nremove 0 1\n")
            buf = io.StringIO()
            with redirect_stdout(buf):
                main(["--radius", "1", "--script", path])
        text = buf.getvalue()
        self.assertIn("w", text)
        self.assertNotIn("Illegal move.", text)

    def test_given_radius_out_of_range_when_main_then_usage_error(self):
        for radius in ("0", "11", "1500"):
            err = io.StringIO()
            with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
                main(["--radius", radius])
            self.assertEqual(ctx.exception.code, 2)
            self.assertIn("--radius must be between 1 and 10", err.getvalue())


if __name__ == "__main__":
    unittest.main()
