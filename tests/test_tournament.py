import unittest

from chess_vault.core import Color
from chess_vault.errors import EmptyInputError
from chess_vault.rating import rating_delta
from chess_vault.tournament import (
    GameOutcomeRecord,
    TournamentSummary,
    aggregate_tournament,
    format_score,
    matches_tournament,
)


def _records():
    return [
        GameOutcomeRecord("[[Spring Open]]", "1-0", "White", 1800),
        GameOutcomeRecord("[[Spring Open]]", "1/2-1/2", "Black", 1900),
        GameOutcomeRecord("[[Spring Open]]", "1-0", "Black", 2000),
        GameOutcomeRecord("[[Autumn Cup]]", "0-1", "Black", 2400),
    ]


class TestAggregateTournament(unittest.TestCase):
    def test_three_game_scenario(self):
        summary = aggregate_tournament("Spring Open", 1850, _records())
        self.assertEqual(summary.games, 3)
        self.assertEqual(summary.total_score, 1.5)
        self.assertEqual(summary.score_text, "1.5/3")
        self.assertEqual(summary.performance_rating, 1900)
        self.assertEqual(summary.opponent_ratings, (1800, 1900, 2000))

        expected = (
            rating_delta(1850, 1800, 1.0)
            + rating_delta(1850, 1900, 0.5)
            + rating_delta(1850, 2000, 0.0)
        )
        self.assertAlmostEqual(summary.rating_change, expected)
        self.assertEqual(summary.end_rating, round(1850 + expected))

    def test_aggregation_is_idempotent(self):
        records = _records()
        self.assertEqual(
            aggregate_tournament("Spring Open", 1850, records),
            aggregate_tournament("Spring Open", 1850, records),
        )

    def test_k_factor_scales_change(self):
        base = aggregate_tournament("Spring Open", 1850, _records())
        doubled = aggregate_tournament("Spring Open", 1850, _records(), k_factor=40)
        self.assertAlmostEqual(doubled.rating_change, 2 * base.rating_change)

    def test_unrated_opponents_count_for_score_only(self):
        records = [
            GameOutcomeRecord("Club Night", "1-0", "white", 0),
            GameOutcomeRecord("Club Night", "1-0", "white", 1600),
        ]
        summary = aggregate_tournament("Club Night", 1500, records)
        self.assertEqual(summary.score_text, "2/2")
        self.assertEqual(summary.opponent_ratings, (1600,))
        self.assertEqual(summary.performance_rating, 2400)
        self.assertAlmostEqual(summary.rating_change, rating_delta(1500, 1600, 1.0))

    def test_no_matching_games_yields_zero_summary(self):
        summary = aggregate_tournament("Winter Blitz", 1700, _records())
        self.assertEqual(summary.games, 0)
        self.assertEqual(summary.score_text, "0/0")
        self.assertEqual(summary.performance_rating, 0)
        self.assertEqual(summary.rating_change, 0.0)
        self.assertEqual(summary.end_rating, 1700)

    def test_no_matching_games_can_be_required(self):
        with self.assertRaises(EmptyInputError):
            aggregate_tournament("Winter Blitz", 1700, _records(), require_games=True)

    def test_to_fields(self):
        fields = aggregate_tournament("Spring Open", 1850, _records()).to_fields()
        self.assertEqual(fields["status"], "completed")
        self.assertEqual(fields["score"], "1.5/3")
        self.assertEqual(fields["performance_rating"], 1900)
        self.assertEqual(fields["rating_change"], round(fields["rating_change"], 2))
        self.assertIsInstance(fields["end_rating"], int)


class TestMatching(unittest.TestCase):
    def test_reference_forms(self):
        for ref in ("Spring Open", "[[Spring Open]]", "[[Events/Spring Open]]", "[[Spring Open|SO]]"):
            with self.subTest(ref=ref):
                self.assertTrue(matches_tournament(ref, "Spring Open"))

    def test_non_matches(self):
        self.assertFalse(matches_tournament("[[Autumn Cup]]", "Spring Open"))
        self.assertFalse(matches_tournament("", "Spring Open"))
        self.assertFalse(matches_tournament("[[Spring Open]]", ""))

    def test_substring_names_also_match(self):
        self.assertTrue(matches_tournament("[[Spring Open 2024]]", "Spring Open"))


class TestRecords(unittest.TestCase):
    def test_from_mapping(self):
        rec = GameOutcomeRecord.from_mapping(
            {"tournament": "[[Spring Open]]", "result": "1-0", "my_color": "White", "opponent_rating": "1875"}
        )
        self.assertEqual(rec.opponent_rating, 1875.0)
        self.assertEqual(rec.subject_color, "White")

    def test_from_mapping_defaults(self):
        with self.assertLogs("chess_vault.tournament", level="WARNING"):
            rec = GameOutcomeRecord.from_mapping({"opponent_rating": "strong"})
        self.assertEqual(rec.opponent_rating, 0)
        self.assertEqual(rec.result, "*")
        self.assertEqual(rec.tournament, "")

    def test_non_finite_ratings_treated_as_unknown(self):
        for raw in ("inf", "-inf", "nan", float("inf")):
            with self.subTest(raw=raw):
                with self.assertLogs("chess_vault.tournament", level="WARNING"):
                    rec = GameOutcomeRecord.from_mapping(
                        {"tournament": "Cup", "result": "1-0", "my_color": "white", "opponent_rating": raw}
                    )
                self.assertEqual(rec.opponent_rating, 0)
                summary = aggregate_tournament("Cup", 1500, [rec])
                self.assertEqual(summary.score_text, "1/1")
                self.assertEqual(summary.end_rating, 1500)
                self.assertEqual(summary.performance_rating, 0)

    def test_color_enum_accepted(self):
        records = [GameOutcomeRecord("Cup", "0-1", Color.BLACK, 2000)]
        self.assertEqual(aggregate_tournament("Cup", 2000, records).total_score, 1.0)

    def test_format_score(self):
        self.assertEqual(format_score(2.0), "2")
        self.assertEqual(format_score(2.5), "2.5")
        self.assertEqual(TournamentSummary("x", 1500).score_text, "0/0")


if __name__ == "__main__":
    unittest.main()
