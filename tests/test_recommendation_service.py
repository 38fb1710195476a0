import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import ExerciseHistoryEntry
from recommendation_service import WeightRecommender
from settings_schema import AnalyticsSettings


def entry(day, session, weight, rpe=None):
    return ExerciseHistoryEntry(
        exercise_id="bench",
        date=day,
        session_id=session,
        weight=weight,
        rpe=rpe,
        volume=weight * 5,
    )


class WeightRecommenderTest(unittest.TestCase):
    def setUp(self) -> None:
        self.rec = WeightRecommender()

    def test_no_history(self) -> None:
        self.assertIsNone(self.rec.recommend_weight("bench", 8, 90, []))
        self.assertIsNone(self.rec.adjustment_factors([], 8, 90))

    def test_harder_than_target(self) -> None:
        history = [entry("2026-10-10", "s1", 200, rpe=9)]
        self.assertEqual(self.rec.recommend_weight("bench", 7, None, history), 190.0)

    def test_easier_than_target_with_high_recovery(self) -> None:
        history = [entry("2026-10-10", "s1", 100, rpe=6)]
        self.assertEqual(self.rec.recommend_weight("bench", 9, 90, history), 107.5)

    def test_dead_band(self) -> None:
        history = [entry("2026-10-10", "s1", 100, rpe=8)]
        self.assertEqual(self.rec.recommend_weight("bench", 9, None, history), 100.0)
        self.assertEqual(self.rec.recommend_weight("bench", 7, None, history), 100.0)
        self.assertEqual(self.rec.recommend_weight("bench", 6.5, None, history), 95.0)

    def test_missing_target_or_rpe(self) -> None:
        history = [entry("2026-10-10", "s1", 100, rpe=None)]
        self.assertEqual(self.rec.recommend_weight("bench", 9, None, history), 100.0)
        history = [entry("2026-10-10", "s1", 100, rpe=5)]
        self.assertEqual(self.rec.recommend_weight("bench", None, None, history), 100.0)

    def test_recovery_bands(self) -> None:
        history = [entry("2026-10-10", "s1", 200, rpe=8)]
        self.assertEqual(self.rec.recommend_weight("bench", 8, 39, history), 190.0)
        self.assertEqual(self.rec.recommend_weight("bench", 8, 40, history), 200.0)
        self.assertEqual(self.rec.recommend_weight("bench", 8, 85, history), 200.0)
        self.assertEqual(self.rec.recommend_weight("bench", 8, 86, history), 205.0)

    def test_uses_most_recent_entry(self) -> None:
        history = [
            entry("2026-10-01", "s1", 150, rpe=8),
            entry("2026-10-08", "a", 120, rpe=8),
            entry("2026-10-08", "b", 135, rpe=8),
            entry("2026-10-03", "s2", 160, rpe=8),
        ]
        self.assertEqual(self.rec.recommend_weight("bench", None, None, history), 135.0)

    def test_floor_applied_after_adjustments(self) -> None:
        history = [entry("2026-10-10", "s1", 20, rpe=9)]
        self.assertEqual(self.rec.recommend_weight("bench", 6, 20, history), 45.0)
        history = [entry("2026-10-10", "s1", 0, rpe=None)]
        self.assertEqual(self.rec.recommend_weight("bench", None, None, history), 45.0)

    def test_rounds_to_load_increment(self) -> None:
        history = [entry("2026-10-10", "s1", 101.2)]
        self.assertEqual(self.rec.recommend_weight("bench", None, None, history), 100.0)
        history = [entry("2026-10-10", "s1", 103.75)]
        self.assertEqual(self.rec.recommend_weight("bench", None, None, history), 105.0)

    def test_kg_floor(self) -> None:
        rec = WeightRecommender(AnalyticsSettings(weight_unit="kg"))
        history = [entry("2026-10-10", "s1", 10)]
        self.assertEqual(rec.min_weight, 20.41)
        self.assertEqual(rec.recommend_weight("bench", None, None, history), 20.0)

    def test_adjustment_factors(self) -> None:
        history = [entry("2026-10-10", "s1", 100, rpe=6)]
        self.assertEqual(
            self.rec.adjustment_factors(history, 9, 30),
            {"base_weight": 100.0, "effort": 1.05, "recovery": 0.95},
        )

    def test_history_not_mutated(self) -> None:
        history = [entry("2026-10-01", "a", 100), entry("2026-10-08", "b", 110)]
        snapshot = list(history)
        self.rec.recommend_weight("bench", 8, 50, history)
        self.assertEqual(history, snapshot)


if __name__ == "__main__":
    unittest.main()
