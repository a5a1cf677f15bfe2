import unittest

from chess_vault.fen import parse_fen, STARTPOS_FEN
from chess_vault.perft import perft, perft_divide


class TestPerft(unittest.TestCase):
    def test_startpos(self):
        p = parse_fen(STARTPOS_FEN)
        self.assertEqual(perft(p, 0), 1)
        self.assertEqual(perft(p, 1), 20)
        self.assertEqual(perft(p, 2), 400)
        self.assertEqual(perft(p, 3), 8902)

    def test_kiwipete(self):
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        p = parse_fen(fen)
        self.assertEqual(perft(p, 1), 48)
        self.assertEqual(perft(p, 2), 2039)

    def test_endgame_with_en_passant_pins(self):
        p = parse_fen("8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1")
        self.assertEqual(perft(p, 1), 14)
        self.assertEqual(perft(p, 2), 191)
        self.assertEqual(perft(p, 3), 2812)

    def test_promotions_and_castling_under_attack(self):
        p = parse_fen("r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1")
        self.assertEqual(perft(p, 1), 6)
        self.assertEqual(perft(p, 2), 264)

    def test_promotion_with_capture(self):
        p = parse_fen("rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8")
        self.assertEqual(perft(p, 1), 44)
        self.assertEqual(perft(p, 2), 1486)

    def test_divide_sums_to_perft(self):
        p = parse_fen(STARTPOS_FEN)
        out = perft_divide(p, 2)
        self.assertEqual(len(out), 20)
        self.assertEqual(out["e2e4"], 20)
        self.assertEqual(sum(out.values()), 400)


if __name__ == "__main__":
    unittest.main()
