import unittest
from datetime import date, datetime, timedelta, timezone

from adaptfit.schemas.plan import PersonalizedPlan
from adaptfit.schemas.progress import ProgressEntry
from adaptfit.services import metrics_service
from adaptfit.services.plan_service import generate_personalized_plan
from tests.factories import NOW, make_activity, make_baseline, make_targets


def make_entry(entry_date: date, **fields) -> ProgressEntry:
    return ProgressEntry(id=entry_date.isoformat(), user_id="u1", entry_date=entry_date, created_at=NOW, **fields)


class TestBMI(unittest.TestCase):

    def test_category_boundaries_are_closed_open(self):
        self.assertEqual(metrics_service.bmi_category(18.4), "Underweight")
        self.assertEqual(metrics_service.bmi_category(18.5), "Normal weight")
        self.assertEqual(metrics_service.bmi_category(24.99), "Normal weight")
        self.assertEqual(metrics_service.bmi_category(25.0), "Overweight")
        self.assertEqual(metrics_service.bmi_category(30.0), "Obese")

    def test_health_metrics(self):
        # 70 / 1.75^2 = 22.857
        metrics = metrics_service.calculate_health_metrics(make_baseline(weight_kg=70))
        self.assertEqual(metrics.bmi, 22.9)
        self.assertEqual(metrics.bmi_category, "Normal weight")
        self.assertEqual(metrics.insights, [])

    def test_health_insights_from_baseline(self):
        baseline = make_baseline(pain_level=7, energy_level=3, mobility_level="limited")
        insights = metrics_service.calculate_health_metrics(baseline).insights
        self.assertEqual(len(insights), 3)
        self.assertIn("gentle, low-impact", insights[0])
        self.assertIn("shorter, more frequent", insights[1])
        self.assertIn("range-of-motion", insights[2])


class TestStreak(unittest.TestCase):

    def test_consecutive_days_from_today(self):
        activities = [make_activity(NOW - timedelta(days=d)) for d in range(4)]
        streak = metrics_service.calculate_streak(activities, NOW)
        self.assertEqual(streak.current_streak, 4)
        self.assertEqual(streak.total_activities, 4)
        self.assertEqual(streak.last_activity_date, NOW)

    def test_tolerated_gap_grows_with_streak(self):
        # Third activity is 3 days after the second but streak is already 2
        activities = [make_activity(NOW), make_activity(NOW - timedelta(days=1)), make_activity(NOW - timedelta(days=4))]
        self.assertEqual(metrics_service.calculate_streak(activities, NOW).current_streak, 3)

    def test_unsorted_input(self):
        activities = [make_activity(NOW - timedelta(days=2)), make_activity(NOW), make_activity(NOW - timedelta(days=1))]
        self.assertEqual(metrics_service.calculate_streak(activities, NOW).current_streak, 3)

    def test_old_activity_breaks_streak(self):
        streak = metrics_service.calculate_streak([make_activity(NOW - timedelta(days=3))], NOW)
        self.assertEqual(streak.current_streak, 0)
        self.assertEqual(streak.longest_streak, 0)

    def test_longest_streak_estimate(self):
        activities = [make_activity(NOW - timedelta(days=10)) for _ in range(6)]
        streak = metrics_service.calculate_streak(activities, NOW)
        self.assertEqual(streak.current_streak, 0)
        self.assertEqual(streak.longest_streak, 2)

    def test_no_activities(self):
        streak = metrics_service.calculate_streak([], NOW)
        self.assertEqual(streak.current_streak, 0)
        self.assertIsNone(streak.last_activity_date)


class TestMood(unittest.TestCase):

    def test_average_and_emoji(self):
        mood = metrics_service.average_mood([make_activity(NOW, "good"), make_activity(NOW, "okay")])
        self.assertEqual(mood, 3.5)
        self.assertEqual(metrics_service.mood_emoji(mood), "🙂")

        mood = metrics_service.average_mood([make_activity(NOW, "okay"), make_activity(NOW, "tired")])
        self.assertEqual(mood, 2.5)
        self.assertEqual(metrics_service.mood_emoji(mood), "😐")

    def test_emoji_extremes(self):
        self.assertEqual(metrics_service.mood_emoji(5), "😊")
        self.assertEqual(metrics_service.mood_emoji(1.5), "😔")
        self.assertEqual(metrics_service.mood_emoji(metrics_service.average_mood([])), "😞")


class TestActivityWindows(unittest.TestCase):

    def test_days_since_last_activity(self):
        self.assertEqual(metrics_service.days_since_last_activity([], NOW), 7)
        activities = [make_activity(NOW - timedelta(days=2, hours=12)), make_activity(NOW - timedelta(days=5))]
        self.assertEqual(metrics_service.days_since_last_activity(activities, NOW), 2)

    def test_week_starts_sunday_midnight_utc(self):
        activities = [
            make_activity(datetime(2026, 10, 18, 1, 0, tzinfo=timezone.utc)),
            make_activity(datetime(2026, 10, 17, 23, 0, tzinfo=timezone.utc)),
            make_activity(NOW),
        ]
        self.assertEqual(len(metrics_service.activities_this_week(activities, NOW, "UTC")), 2)

    def test_week_start_follows_user_timezone(self):
        # Sunday 00:00 in New York is 04:00 UTC in October
        activities = [
            make_activity(datetime(2026, 10, 18, 1, 0, tzinfo=timezone.utc)),
            make_activity(NOW),
        ]
        self.assertEqual(len(metrics_service.activities_this_week(activities, NOW, "America/New_York")), 1)


class TestProgress(unittest.TestCase):

    def test_progress_change(self):
        self.assertIsNone(metrics_service.progress_change(None, 70))
        change = metrics_service.progress_change(68, 80)
        self.assertEqual(change.value, -12)
        self.assertAlmostEqual(change.percentage, -15.0)
        self.assertFalse(change.is_positive)

    def test_sort_is_newest_first(self):
        entries = [make_entry(date(2026, 10, 1)), make_entry(date(2026, 10, 10)), make_entry(date(2026, 10, 5))]
        ordered = metrics_service.sort_progress_entries(entries)
        self.assertEqual([e.entry_date.day for e in ordered], [10, 5, 1])

    def test_insights_against_baseline(self):
        baseline = make_baseline(weight_kg=80, pain_level=7, energy_level=3, mobility_level="limited")
        entries = [
            make_entry(date(2026, 10, 1), weight_kg=90),
            make_entry(date(2026, 10, 10), weight_kg=78, pain_level=4, energy_level=6, mobility_score=5),
        ]
        insights = metrics_service.generate_progress_insights(baseline, entries)
        self.assertEqual(insights, [
            "You've lost 2.0kg since starting your journey",
            "Great news! Your pain level has decreased by 3 points",
            "Your energy levels have improved by 3 points - keep it up!",
            "Your mobility has improved! Current score: 5/10",
        ])

    def test_pain_increase_warning(self):
        baseline = make_baseline(pain_level=3)
        insights = metrics_service.generate_progress_insights(baseline, [make_entry(date(2026, 10, 1), pain_level=6)])
        self.assertEqual(insights, ["Your pain level has increased. Consider adjusting your activity intensity"])

    def test_insight_fallbacks(self):
        baseline = make_baseline()
        self.assertIn("Start logging", metrics_service.generate_progress_insights(baseline, [])[0])
        insights = metrics_service.generate_progress_insights(baseline, [make_entry(date(2026, 10, 1), weight_kg=80.3)])
        self.assertEqual(insights, ["Keep logging your progress to track improvements over time"])


class TestPlanProgress(unittest.TestCase):

    def _plan(self, created_at: datetime) -> PersonalizedPlan:
        return generate_personalized_plan(make_baseline(), make_targets(timeline_weeks=12), now=created_at)

    def test_current_week(self):
        self.assertEqual(metrics_service.current_plan_week(self._plan(NOW), NOW), 0)
        self.assertEqual(metrics_service.current_plan_week(self._plan(NOW - timedelta(days=10)), NOW), 2)
        self.assertEqual(metrics_service.current_plan_week(self._plan(NOW - timedelta(weeks=100)), NOW), 12)

    def test_progress_against_expected(self):
        plan = self._plan(NOW - timedelta(weeks=6))
        plan.milestones[0].completed = True
        progress = metrics_service.plan_progress(plan, NOW)
        self.assertEqual(progress.current_week, 6)
        self.assertEqual(progress.completed_milestones, 1)
        self.assertEqual(progress.total_milestones, 4)
        self.assertEqual(progress.percentage, 25.0)
        self.assertEqual(progress.expected_percentage, 50.0)
        self.assertFalse(progress.is_ahead)


if __name__ == '__main__':
    unittest.main()
