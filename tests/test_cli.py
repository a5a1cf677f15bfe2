import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from chess_vault import cli


def _run(*argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = cli.main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path

    def test_show(self):
        code, out, _ = _run("show")
        self.assertEqual(code, 0)
        self.assertIn("r n b q k b n r", out)
        self.assertIn("ongoing", out)

    def test_show_bad_fen(self):
        code, _, err = _run("show", "--fen", "8/8/8 w - - 0 1")
        self.assertEqual(code, 1)
        self.assertIn("error:", err)

    def test_perft(self):
        code, out, _ = _run("perft", "--depth", "2")
        self.assertEqual((code, out.strip()), (0, "400"))

        code, out, _ = _run("perft", "--depth", "1", "--divide")
        self.assertEqual(code, 0)
        self.assertIn("e2e4: 1", out)
        self.assertIn("Total: 20", out)

    def test_replay_formats(self):
        path = self._write("game.pgn", '[Event "Club"]\n\n1. e4 e5 2. Nf3 Nc6 *\n')

        code, out, _ = _run("replay", path)
        self.assertEqual(code, 0)
        doc = json.loads(out)
        self.assertEqual([m["san"] for m in doc["moves"]], ["e4", "e5", "Nf3", "Nc6"])
        self.assertEqual(doc["header"]["title"], "Club")

        code, out, _ = _run("replay", path, "--format", "pgn")
        self.assertEqual(code, 0)
        self.assertIn("1. e4 e5 2. Nf3 Nc6 *", out)

        code, out, _ = _run("replay", path, "--format", "table")
        self.assertEqual(code, 0)
        self.assertEqual(len(out.strip().splitlines()), 4)

    def test_replay_reports_first_bad_move(self):
        path = self._write("bad.pgn", "1. e4 e5 2. Qh6 Nc6 *\n")
        code, out, err = _run("replay", path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("move 3 (Qh6)", err)

    def test_replay_honours_move_id_length(self):
        path = self._write("game.pgn", "1. e4 *\n")
        with mock.patch.dict(os.environ, {"CHESS_VAULT_MOVE_ID_LENGTH": "10"}):
            code, out, _ = _run("replay", path)
        self.assertEqual(code, 0)
        self.assertEqual(len(json.loads(out)["moves"][0]["moveId"]), 10)

    def test_tournament(self):
        records = [
            {"tournament": "[[Spring Open]]", "result": "1-0", "my_color": "White", "opponent_rating": 1800},
            {"tournament": "[[Spring Open]]", "result": "1/2-1/2", "my_color": "Black", "opponent_rating": 1900},
            {"tournament": "[[Spring Open]]", "result": "1-0", "my_color": "Black", "opponent_rating": 2000},
        ]
        path = self._write("records.json", json.dumps(records))
        code, out, _ = _run("tournament", path, "--name", "Spring Open", "--start-rating", "1850")
        self.assertEqual(code, 0)
        fields = json.loads(out)
        self.assertEqual(fields["score"], "1.5/3")
        self.assertEqual(fields["performance_rating"], 1900)
        self.assertEqual(fields["games"], 3)

    def test_tournament_without_games(self):
        path = self._write("records.json", "[]")
        code, _, err = _run("tournament", path, "--name", "Spring Open", "--start-rating", "1850")
        self.assertEqual(code, 1)
        self.assertIn("No games found", err)

    def test_performance(self):
        code, out, _ = _run("performance", "--score", "3", "2000", "2000", "2000")
        self.assertEqual((code, out.strip()), (0, "2800"))

    def test_missing_file(self):
        code, _, err = _run("replay", os.path.join(self.tmp.name, "nope.pgn"))
        self.assertEqual(code, 1)
        self.assertIn("error:", err)


if __name__ == "__main__":
    unittest.main()
