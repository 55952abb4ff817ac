import logging
import math
import uuid
from datetime import datetime
from typing import Optional

from adaptfit.schemas.baseline import BaselineData
from adaptfit.schemas.targets import FitnessTargets
from adaptfit.schemas.plan import (
    PersonalizedPlan, PlanMilestone, MilestoneMetrics, WeeklyTargets, IntensityDistribution,
)
from adaptfit.utils.time_utils import utc_now, ensure_aware

logger = logging.getLogger(__name__)

"""
Plan Service
------------
Builds a PersonalizedPlan from baseline + targets + disability type.
1. Adjusts the requested timeline by disability type.
2. Picks the goal template (name, description, weekly targets, recommendations).
3. Lays out four milestones at 25/50/75/100% of the adjusted timeline.
Everything is table driven; the only inputs that vary the output are the three
arguments (plus id/timestamps).
"""

# Unlisted disability types use 1.0
TIMELINE_MULTIPLIERS = {
    "chronic_pain": 1.5,
    "wheelchair": 1.2,
}

DEFAULT_WEEKLY_TARGETS = {
    "activity_sessions": 3,
    "total_minutes": 150,
    "intensity_distribution": {"low": 60, "moderate": 30, "high": 10},
}

# "session_cap" means sessions = min(session_cap, targets.weekly_activity_target)
PLAN_TEMPLATES = {
    "weight_loss": {
        "plan_name": "Adaptive Weight Loss Journey",
        "description": "A {weeks}-week plan designed to help you lose weight safely while accommodating your mobility needs.",
        "weekly_targets": {
            "session_cap": 5,
            "total_minutes": 200,
            "intensity_distribution": {"low": 40, "moderate": 50, "high": 10},
        },
        "recommendations": [
            "Focus on low-impact cardio exercises adapted to your abilities",
            "Combine movement with gentle strength training",
            "Monitor portion sizes and stay hydrated",
            "Track your mood and energy levels alongside weight",
            "Celebrate non-scale victories like improved mobility",
        ],
    },
    "muscle_gain": {
        "plan_name": "Adaptive Strength Building Program",
        "description": "Build lean muscle mass over {weeks} weeks with exercises tailored to your physical capabilities.",
        "weekly_targets": {
            "activity_sessions": 4,
            "total_minutes": 180,
            "intensity_distribution": {"low": 30, "moderate": 50, "high": 20},
        },
        "recommendations": [
            "Progressive resistance training using adaptive equipment",
            "Focus on compound movements when possible",
            "Ensure adequate protein intake for muscle recovery",
            "Allow proper rest between strength sessions",
            "Track strength improvements alongside muscle measurements",
        ],
    },
    "mobility_improvement": {
        "plan_name": "Enhanced Mobility & Flexibility Plan",
        "description": "Improve your range of motion and functional mobility over {weeks} weeks.",
        "weekly_targets": {
            "activity_sessions": 5,
            "total_minutes": 175,
            "intensity_distribution": {"low": 70, "moderate": 25, "high": 5},
        },
        "recommendations": [
            "Daily gentle stretching and range-of-motion exercises",
            "Focus on functional movements for daily activities",
            "Use heat therapy before exercises when appropriate",
            "Track pain levels and adjust intensity accordingly",
            "Celebrate small improvements in daily tasks",
        ],
    },
    "pain_management": {
        "plan_name": "Gentle Movement for Pain Relief",
        "description": "A gentle {weeks}-week approach to managing pain through therapeutic movement.",
        "weekly_targets": {
            "activity_sessions": 4,
            "total_minutes": 120,
            "intensity_distribution": {"low": 80, "moderate": 15, "high": 5},
        },
        "recommendations": [
            "Start with very gentle movements and progress slowly",
            "Focus on breathing and relaxation techniques",
            "Use warm water exercises when possible",
            "Track pain levels before and after activities",
            "Work with healthcare providers to adjust the plan",
        ],
    },
}

DEFAULT_TEMPLATE = {
    "plan_name": "Personalized Wellness Journey",
    "description": "A comprehensive {weeks}-week plan for overall health and wellness.",
    "weekly_targets": DEFAULT_WEEKLY_TARGETS,
    "recommendations": [
        "Balance different types of activities throughout the week",
        "Listen to your body and adjust intensity as needed",
        "Focus on consistency over intensity",
        "Track multiple health metrics for a complete picture",
        "Celebrate all forms of progress, big and small",
    ],
}

# (fraction of the adjusted timeline, title)
MILESTONE_SCHEDULE = [
    (0.25, "First Quarter Check-in"),
    (0.5, "Halfway Point"),
    (0.75, "Three-Quarter Mark"),
    (1.0, "Goal Achievement"),
]


def timeline_multiplier(disability_type: Optional[str]) -> float:
    return TIMELINE_MULTIPLIERS.get(disability_type, 1.0)


def adjust_timeline(timeline_weeks: int, disability_type: Optional[str] = None) -> int:
    # Rounded before ceil so float noise (e.g. 3 * 1.2) cannot add a week
    return math.ceil(round(timeline_weeks * timeline_multiplier(disability_type), 6))


def get_plan_template(primary_goal: str) -> dict:
    return PLAN_TEMPLATES.get(primary_goal, DEFAULT_TEMPLATE)


def build_weekly_targets(template: dict, targets: FitnessTargets) -> WeeklyTargets:
    weekly = template["weekly_targets"]
    if "session_cap" in weekly:
        sessions = min(weekly["session_cap"], targets.weekly_activity_target)
    else:
        sessions = weekly["activity_sessions"]

    return WeeklyTargets(
        activity_sessions=sessions,
        total_minutes=weekly["total_minutes"],
        intensity_distribution=IntensityDistribution(**weekly["intensity_distribution"]),
    )


def milestone_weeks(total_weeks: int) -> list:
    return [math.floor(total_weeks * fraction) for fraction, _ in MILESTONE_SCHEDULE[:-1]] + [total_weeks]


def build_milestones(
    baseline: BaselineData,
    targets: FitnessTargets,
    weekly_targets: WeeklyTargets,
    total_weeks: int,
) -> list:
    milestones = []
    for week, (_, title) in zip(milestone_weeks(total_weeks), MILESTONE_SCHEDULE):
        share = week / total_weeks

        weight_change = None
        if targets.target_weight_kg is not None:
            weight_change = (targets.target_weight_kg - baseline.weight_kg) * share

        mobility_improvement = None
        if targets.primary_goal == "mobility_improvement":
            mobility_improvement = f"{math.floor(share * 100)}% improvement target"

        milestones.append(PlanMilestone(
            week=week,
            title=title,
            description=f"Review progress and adjust plan as needed at week {week}",
            target_metrics=MilestoneMetrics(
                weight_change_kg=weight_change,
                activity_minutes=weekly_targets.total_minutes * week,
                mobility_improvement=mobility_improvement,
            ),
            completed=False,
        ))
    return milestones


def generate_personalized_plan(
    baseline: BaselineData,
    targets: FitnessTargets,
    disability_type: Optional[str] = None,
    user_id: str = "current_user",
    now: datetime = None,
) -> PersonalizedPlan:
    """
    Main entry point for plan generation. Total over its inputs: unknown goals
    get the wellness template, unknown disability types no timeline change.
    """
    now = ensure_aware(now) if now else utc_now()
    total_weeks = adjust_timeline(targets.timeline_weeks, disability_type)
    template = get_plan_template(targets.primary_goal)
    weekly_targets = build_weekly_targets(template, targets)

    logger.info(
        f"Generating '{targets.primary_goal}' plan for user {user_id}: "
        f"{targets.timeline_weeks} weeks requested, {total_weeks} after adjustment ({disability_type or 'none'})"
    )

    return PersonalizedPlan(
        id=uuid.uuid4().hex,
        user_id=user_id,
        plan_name=template["plan_name"],
        description=template["description"].format(weeks=total_weeks),
        primary_goal=targets.primary_goal,
        timeline_weeks=total_weeks,
        weekly_targets=weekly_targets,
        milestones=build_milestones(baseline, targets, weekly_targets, total_weeks),
        recommendations=list(template["recommendations"]),
        created_at=now,
        updated_at=now,
    )


def update_milestone(
    plan: PersonalizedPlan,
    index: int,
    completed: bool,
    current_week: int,
    now: datetime = None,
) -> PersonalizedPlan:
    """
    Marks milestone `index` completed (stamping completed_at) or reopens it.
    A milestone is locked (either way) until its week has been reached.
    Returns an updated copy; the input plan is left untouched.
    """
    if index < 0 or index >= len(plan.milestones):
        raise ValueError(f"Milestone {index} does not exist. Plan has {len(plan.milestones)} milestones.")

    milestone = plan.milestones[index]
    if current_week < milestone.week:
        logger.warning(f"Milestone {index} update rejected: week {current_week} < {milestone.week}")
        raise ValueError(f"Milestone '{milestone.title}' unlocks at week {milestone.week} (currently week {current_week}).")

    now = ensure_aware(now) if now else utc_now()
    updated = plan.model_copy(deep=True)
    updated.milestones[index].completed = completed
    updated.milestones[index].completed_at = now if completed else None
    updated.updated_at = now
    return updated
