import unittest

from chess_vault.core import generate_legal
from chess_vault.errors import AmbiguousMoveError, IllegalMoveError, MoveError
from chess_vault.fen import parse_fen, default_start
from chess_vault.san import move_to_lan, parse_san, strip_annotations, to_san


class TestParseSan(unittest.TestCase):
    def test_pawn_and_piece_tokens(self):
        p = default_start()
        self.assertEqual(move_to_lan(parse_san(p, "e4")), "e2e4")
        self.assertEqual(move_to_lan(parse_san(p, "Nc3")), "b1c3")
        self.assertEqual(move_to_lan(parse_san(p, "Nf3!?")), "g1f3")

    def test_file_disambiguation(self):
        p = parse_fen("4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1")
        with self.assertRaises(AmbiguousMoveError) as ctx:
            parse_san(p, "Nd2")
        self.assertIn("b1", ctx.exception.reason)
        self.assertIn("f1", ctx.exception.reason)
        self.assertEqual(move_to_lan(parse_san(p, "Nbd2")), "b1d2")
        self.assertEqual(move_to_lan(parse_san(p, "Nfd2")), "f1d2")

    def test_rank_disambiguation(self):
        p = parse_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1")
        with self.assertRaises(AmbiguousMoveError):
            parse_san(p, "Ra3")
        self.assertEqual(move_to_lan(parse_san(p, "R1a3")), "a1a3")
        self.assertEqual(move_to_lan(parse_san(p, "R5a3")), "a5a3")

    def test_rejections(self):
        p = default_start()
        cases = (
            "Ke2",  # blocked
            "e5",  # pawn cannot reach
            "xe3",  # capture without origin file
            "dxe3",  # nothing to capture
            "Nxf3",  # x on a non-capture
            "O-O",  # path not clear
            "Qe4=Q",  # only pawns promote
            "hello",
            "",
        )
        for tok in cases:
            with self.subTest(token=tok):
                with self.assertRaises(IllegalMoveError) as ctx:
                    parse_san(p, tok)
                self.assertEqual(ctx.exception.token, tok)

    def test_errors_share_a_base(self):
        self.assertTrue(issubclass(IllegalMoveError, MoveError))
        self.assertTrue(issubclass(AmbiguousMoveError, MoveError))
        self.assertTrue(issubclass(MoveError, ValueError))

    def test_strip_annotations(self):
        self.assertEqual(strip_annotations(" Qh4#"), "Qh4")
        self.assertEqual(strip_annotations("e4!!"), "e4")
        self.assertEqual(strip_annotations("Nf3?!"), "Nf3")


class TestToSan(unittest.TestCase):
    def _san_by_lan(self, p):
        return {move_to_lan(m): to_san(p, m) for m in generate_legal(p)}

    def test_minimal_disambiguation(self):
        sans = self._san_by_lan(parse_fen("4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1"))
        self.assertEqual(sans["b1d2"], "Nbd2")
        self.assertEqual(sans["f1d2"], "Nfd2")
        self.assertEqual(sans["b1a3"], "Na3")

        sans = self._san_by_lan(parse_fen("4k3/8/8/R7/8/8/8/R3K3 w - - 0 1"))
        self.assertEqual(sans["a1a3"], "R1a3")
        self.assertEqual(sans["a5a3"], "R5a3")
        self.assertEqual(sans["a5b5"], "Rb5")

    def test_square_disambiguation(self):
        # three queens can reach e4; two share a file, two share a rank
        p = parse_fen("1k6/8/8/8/Q6Q/8/8/4K2Q w - - 0 1")
        sans = self._san_by_lan(p)
        self.assertEqual(sans["h4e4"], "Qh4e4")
        self.assertEqual(move_to_lan(parse_san(p, "Qh4e4")), "h4e4")

    def test_roundtrip_every_legal_move(self):
        fens = (
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
            "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
        )
        for fen in fens:
            p = parse_fen(fen)
            legal = generate_legal(p)
            for m in legal:
                san = to_san(p, m, legal)
                with self.subTest(fen=fen, san=san):
                    self.assertEqual(parse_san(p, san, legal), m)


if __name__ == "__main__":
    unittest.main()
