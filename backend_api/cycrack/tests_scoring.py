import itertools

from django.test import SimpleTestCase

from cycrack.challenges import ENDLESS, ScoreContext, calculate_score, score_breakdown
from cycrack.challenges.scoring import round_half_up, score_context


class CalculateScoreTests(SimpleTestCase):
    def test_first_try_with_full_time_bonus(self):
        # 100 base + 50 time bonus, x1.5 for a first-attempt solve
        self.assertEqual(calculate_score(1, time_elapsed=0, hints_used=0, attempts=1, streak=0), 225)

    def test_time_bonus_decays_to_zero(self):
        self.assertEqual(calculate_score(1, 10, 0, 1, 0), 195)
        self.assertEqual(calculate_score(1, 25, 0, 1, 0), 150)
        self.assertEqual(calculate_score(1, 500, 0, 1, 0), 150)

    def test_half_points_round_up(self):
        # 150 x 0.9 x 1.5 = 202.5
        self.assertEqual(calculate_score(1, 0, 1, 1, 0), 203)
        self.assertEqual(calculate_score(6, 0, 0, 1, 0), 1688)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.4999), 2)

    def test_attempt_multiplier_floor(self):
        self.assertEqual(calculate_score(1, 0, 0, 5, 0), calculate_score(1, 0, 0, 12, 0))
        self.assertEqual(calculate_score(1, 0, 0, 0, 0), calculate_score(1, 0, 0, 1, 0))

    def test_hint_count_is_capped(self):
        self.assertEqual(calculate_score(2, 3, 3, 2, 1), calculate_score(2, 3, 7, 2, 1))

    def test_streak_bonus_caps_at_five(self):
        self.assertEqual(calculate_score(3, 0, 0, 1, 5), calculate_score(3, 0, 0, 1, 50))
        self.assertGreater(calculate_score(3, 0, 0, 1, 5), calculate_score(3, 0, 0, 1, 4))

    def test_unknown_level_scores_zero(self):
        self.assertEqual(calculate_score(12, 0, 0, 1, 0), 0)
        self.assertEqual(score_breakdown("bonus", 0)["points"], 0)

    def test_endless_base_points_rise_per_round(self):
        self.assertEqual(calculate_score(ENDLESS, 0, 0, 1, 0), 225)
        # (150 + 75) x 1.5 = 337.5
        self.assertEqual(calculate_score(ENDLESS, 0, 0, 1, 0, round_number=3), 338)

    def test_never_below_minimum(self):
        for level_id in (1, 2, 3, 4, 5, 6, ENDLESS):
            for elapsed, hints, attempts in itertools.product((0, 60, 10_000), (0, 3), (1, 9)):
                with self.subTest(level=level_id, elapsed=elapsed, hints=hints, attempts=attempts):
                    self.assertGreaterEqual(calculate_score(level_id, elapsed, hints, attempts, 0), 10)

    def test_monotonic_in_time_hints_and_streak(self):
        for level_id in (1, 4, 6):
            times = [calculate_score(level_id, t, 1, 2, 1) for t in range(0, 400, 7)]
            hints = [calculate_score(level_id, 20, h, 2, 1) for h in range(0, 5)]
            streaks = [calculate_score(level_id, 20, 1, 2, s) for s in range(0, 8)]
            with self.subTest(level=level_id):
                self.assertEqual(times, sorted(times, reverse=True))
                self.assertEqual(hints, sorted(hints, reverse=True))
                self.assertEqual(streaks, sorted(streaks))

    def test_breakdown_exposes_every_factor(self):
        breakdown = score_breakdown(2, time_elapsed=10, hints_used=2, attempts=3, streak=1)
        self.assertEqual(breakdown["base_points"], 150)
        self.assertEqual(breakdown["time_bonus"], 55)
        self.assertEqual(breakdown["hint_multiplier"], 0.7)
        self.assertEqual(breakdown["attempt_multiplier"], 1.1)
        self.assertAlmostEqual(breakdown["streak_multiplier"], 1.15)
        self.assertEqual(breakdown["points"], calculate_score(2, 10, 2, 3, 1))

    def test_score_context(self):
        context = ScoreContext(level_id=1, time_elapsed=0)
        self.assertEqual(score_context(context), 225)
        self.assertEqual(context.as_dict()["attempts"], 1)
