import math
from datetime import datetime
from typing import List, Optional, Sequence

from adaptfit.schemas.activity import Activity
from adaptfit.schemas.baseline import BaselineData, HealthMetrics
from adaptfit.schemas.dashboard import StreakData
from adaptfit.schemas.plan import PersonalizedPlan, PlanProgress
from adaptfit.schemas.progress import ProgressEntry, ProgressChange
from adaptfit.utils.time_utils import utc_now, ensure_aware, start_of_week

"""
Metrics Service
---------------
Derived state computed from stored records: BMI, streaks, mood averages,
progress deltas and insights, plan week/progress.
Pure functions; nothing here reads or writes storage.
"""

SECONDS_PER_DAY = 86400
SECONDS_PER_WEEK = 7 * SECONDS_PER_DAY

# Upper bounds are exclusive; anything at or above the last bound is "Obese"
BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (25.0, "Normal weight"),
    (30.0, "Overweight"),
]

MOOD_SCORES = {
    "struggling": 1,
    "tired": 2,
    "okay": 3,
    "good": 4,
    "great": 5,
}

# (minimum score, emoji), checked top-down
MOOD_EMOJIS = [
    (4.5, "😊"),
    (3.5, "🙂"),
    (2.5, "😐"),
    (1.5, "😔"),
]
LOWEST_MOOD_EMOJI = "😞"

# Baseline mobility_level expressed on the 1-10 progress scale
MOBILITY_LEVEL_SCORES = {
    "limited": 3,
    "moderate": 5,
    "good": 7,
    "excellent": 9,
}

# Reported when there is no activity at all
NO_ACTIVITY_DAYS = 7


# --- BMI & health ---

def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return weight_kg / (height_m ** 2)


def bmi_category(bmi: float) -> str:
    for upper_bound, label in BMI_CATEGORIES:
        if bmi < upper_bound:
            return label
    return "Obese"


def calculate_health_metrics(baseline: BaselineData) -> HealthMetrics:
    """
    BMI (rounded to one decimal), its category and baseline-driven insights.
    The category is taken from the unrounded BMI.
    """
    bmi = calculate_bmi(baseline.weight_kg, baseline.height_cm)

    insights = []
    if baseline.pain_level > 6:
        insights.append("Consider focusing on gentle, low-impact activities to manage pain levels")
    if baseline.energy_level < 4:
        insights.append("Start with shorter, more frequent activity sessions to build energy")
    if baseline.mobility_level == "limited":
        insights.append("Prioritize range-of-motion and flexibility exercises")

    return HealthMetrics(
        bmi=round(bmi, 1),
        bmi_category=bmi_category(bmi),
        insights=insights,
    )


# --- Activity derived state ---

def _days_between(later: datetime, earlier: datetime) -> int:
    return math.floor((ensure_aware(later) - ensure_aware(earlier)).total_seconds() / SECONDS_PER_DAY)


def sort_activities(activities: Sequence[Activity]) -> List[Activity]:
    """Newest first."""
    return sorted(activities, key=lambda a: ensure_aware(a.created_at), reverse=True)


def calculate_streak(activities: Sequence[Activity], now: datetime = None) -> StreakData:
    """
    Walks activities newest first. An activity extends the streak while its
    whole-day distance from the previously counted one (or from now) is at most
    current_streak + 1, so the tolerated gap grows with the streak.
    """
    now = ensure_aware(now) if now else utc_now()
    ordered = sort_activities(activities)

    current_streak = 0
    check_date = now
    for activity in ordered:
        activity_date = ensure_aware(activity.created_at)
        if _days_between(check_date, activity_date) <= current_streak + 1:
            current_streak += 1
            check_date = activity_date
        else:
            break

    return StreakData(
        current_streak=current_streak,
        longest_streak=max(current_streak, len(ordered) // 3),
        total_activities=len(ordered),
        last_activity_date=ordered[0].created_at if ordered else None,
    )


def average_mood(activities: Sequence[Activity]) -> float:
    if not activities:
        return 0.0
    return sum(MOOD_SCORES[a.mood] for a in activities) / len(activities)


def mood_emoji(score: float) -> str:
    for threshold, emoji in MOOD_EMOJIS:
        if score >= threshold:
            return emoji
    return LOWEST_MOOD_EMOJI


def days_since_last_activity(activities: Sequence[Activity], now: datetime = None) -> int:
    if not activities:
        return NO_ACTIVITY_DAYS
    now = ensure_aware(now) if now else utc_now()
    return _days_between(now, sort_activities(activities)[0].created_at)


def activities_this_week(activities: Sequence[Activity], now: datetime = None, tz_name: str = None) -> List[Activity]:
    week_start = start_of_week(tz_name, now)
    return [a for a in activities if ensure_aware(a.created_at) >= week_start]


# --- Progress ---

def progress_change(current: Optional[float], baseline: Optional[float]) -> Optional[ProgressChange]:
    if current is None or baseline is None:
        return None
    change = current - baseline
    percentage = (change / baseline) * 100 if baseline else 0.0
    return ProgressChange(value=change, percentage=percentage, is_positive=change > 0)


def sort_progress_entries(entries: Sequence[ProgressEntry]) -> List[ProgressEntry]:
    """Newest entry_date first; entries sharing a date keep their order."""
    return sorted(entries, key=lambda e: e.entry_date, reverse=True)


def generate_progress_insights(baseline: BaselineData, entries: Sequence[ProgressEntry]) -> List[str]:
    """Compares the newest progress entry against the baseline assessment."""
    if not entries:
        return ["Start logging your progress to see personalized insights!"]

    latest = sort_progress_entries(entries)[0]
    insights = []

    if latest.weight_kg is not None:
        weight_change = latest.weight_kg - baseline.weight_kg
        if abs(weight_change) > 0.5:
            direction = "gained" if weight_change > 0 else "lost"
            insights.append(f"You've {direction} {abs(weight_change):.1f}kg since starting your journey")

    if latest.pain_level is not None:
        pain_change = baseline.pain_level - latest.pain_level
        if pain_change > 1:
            insights.append(f"Great news! Your pain level has decreased by {pain_change} points")
        elif pain_change < -1:
            insights.append("Your pain level has increased. Consider adjusting your activity intensity")

    if latest.energy_level is not None:
        energy_change = latest.energy_level - baseline.energy_level
        if energy_change > 1:
            insights.append(f"Your energy levels have improved by {energy_change} points - keep it up!")

    if latest.mobility_score is not None:
        if latest.mobility_score > MOBILITY_LEVEL_SCORES[baseline.mobility_level]:
            insights.append(f"Your mobility has improved! Current score: {latest.mobility_score}/10")

    if not insights:
        insights.append("Keep logging your progress to track improvements over time")

    return insights


# --- Plan ---

def current_plan_week(plan: PersonalizedPlan, now: datetime = None) -> int:
    now = ensure_aware(now) if now else utc_now()
    elapsed = abs((now - ensure_aware(plan.created_at)).total_seconds())
    return min(math.ceil(elapsed / SECONDS_PER_WEEK), plan.timeline_weeks)


def plan_progress(plan: PersonalizedPlan, now: datetime = None) -> PlanProgress:
    week = current_plan_week(plan, now)
    completed = sum(1 for m in plan.milestones if m.completed)
    total = len(plan.milestones)
    percentage = (completed / total) * 100 if total else 0.0
    expected = (min(week, plan.timeline_weeks) / plan.timeline_weeks) * 100

    return PlanProgress(
        current_week=week,
        completed_milestones=completed,
        total_milestones=total,
        percentage=percentage,
        expected_percentage=expected,
        is_ahead=percentage > expected,
    )
