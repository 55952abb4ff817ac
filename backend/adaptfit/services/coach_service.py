import random
from typing import List, Optional, Sequence

from adaptfit.schemas.activity import Activity
from adaptfit.schemas.workout import Workout

"""
Coach Service
-------------
Canned motivational text and rule-based adaptive workout suggestions.
Message choice is random; pass a seeded random.Random for repeatable output.
"""

MOTIVATIONAL_TEMPLATES = [
    "🌟 {streak} days strong! Your consistency is building real strength and resilience.",
    "💪 You've logged {count} activities this week. Every movement counts!",
    "🎉 Your dedication to your health journey is truly inspiring. Keep moving forward!",
    "✨ Progress isn't always linear, but you're showing up for yourself. That's what matters.",
    "🏆 {streak}-day streak! You're proving that adaptive fitness is powerful fitness.",
]

GENTLE_NUDGES = [
    "💙 No pressure, but a gentle movement session might feel good today.",
    "🌱 Small steps lead to big changes. Even 5 minutes counts!",
    "☀️ Your body might be ready for some gentle activity. Listen to what feels right.",
    "🎯 Remember, consistency over intensity. A short session is still a win!",
    "💜 Taking care of yourself includes movement that feels good for you.",
]

DEFAULT_WORKOUT_CATEGORY = "mobility_aid"

ADAPTIVE_WORKOUTS = {
    "wheelchair": [
        {
            "id": "1",
            "title": "Upper Body Power Session",
            "description": "Build strength in shoulders, arms, and core with wheelchair-friendly exercises.",
            "difficulty_level": "intermediate",
            "duration_minutes": 30,
            "disability_adaptations": [
                "All exercises designed for seated position",
                "Focus on unilateral movements",
                "Core stability emphasis",
            ],
            "equipment_needed": ["Resistance bands", "Light dumbbells"],
            "exercises": [
                {
                    "name": "Seated Shoulder Press",
                    "description": "Press resistance band or weights overhead while maintaining proper posture.",
                    "duration_or_reps": "3 sets of 12 reps",
                    "modifications": ["Use lighter resistance for beginners", "Unilateral option available"],
                    "safety_notes": ["Keep core engaged", "Don't arch back excessively"],
                },
                {
                    "name": "Wheelchair Boxing",
                    "description": "Shadow boxing movements to build cardio and coordination.",
                    "duration_or_reps": "3 minutes with 30-second breaks",
                    "modifications": ["Start with 1 minute intervals", "Add resistance bands for extra challenge"],
                    "safety_notes": ["Stay hydrated", "Watch for shoulder fatigue"],
                },
            ],
        },
    ],
    "mobility_aid": [
        {
            "id": "2",
            "title": "Gentle Strength & Balance",
            "description": "Low-impact exercises focusing on stability and functional strength.",
            "difficulty_level": "beginner",
            "duration_minutes": 20,
            "disability_adaptations": [
                "Chair support available for all exercises",
                "No jumping or high impact",
                "Balance assistance",
            ],
            "equipment_needed": ["Sturdy chair", "Light resistance bands"],
            "exercises": [
                {
                    "name": "Assisted Squats",
                    "description": "Squats with chair support for safety and stability.",
                    "duration_or_reps": "2 sets of 8-10 reps",
                    "modifications": ["Full chair sitting if needed", "Hold chair back for support"],
                    "safety_notes": ["Move slowly", "Keep feet flat on ground"],
                },
            ],
        },
    ],
    "chronic_pain": [
        {
            "id": "3",
            "title": "Gentle Movement Therapy",
            "description": "Low-intensity exercises designed to manage pain and improve mobility.",
            "difficulty_level": "beginner",
            "duration_minutes": 15,
            "disability_adaptations": [
                "All movements optional",
                "Pain-responsive modifications",
                "Gentle stretching focus",
            ],
            "equipment_needed": ["Yoga mat", "Pillow for support"],
            "exercises": [
                {
                    "name": "Gentle Neck Rolls",
                    "description": "Slow, controlled neck movements to release tension.",
                    "duration_or_reps": "5 rolls each direction",
                    "modifications": ["Stop if any pain occurs", "Smaller range of motion"],
                    "safety_notes": ["Never force movement", "Breathe deeply throughout"],
                },
            ],
        },
    ],
}


def generate_motivational_message(
    activities: Sequence[Activity],
    streak: int,
    rng: Optional[random.Random] = None,
) -> str:
    rng = rng or random
    template = rng.choice(MOTIVATIONAL_TEMPLATES)
    return template.format(streak=streak, count=len(activities))


def generate_gentle_nudge(days_since_last_activity: int, rng: Optional[random.Random] = None) -> str:
    """Empty when the user was active today or yesterday."""
    if days_since_last_activity <= 1:
        return ""
    rng = rng or random
    return rng.choice(GENTLE_NUDGES)


def generate_adaptive_workouts(disability_type: Optional[str] = None) -> List[Workout]:
    workouts = ADAPTIVE_WORKOUTS.get(disability_type or DEFAULT_WORKOUT_CATEGORY)
    if workouts is None:
        workouts = ADAPTIVE_WORKOUTS[DEFAULT_WORKOUT_CATEGORY]
    return [Workout(**w) for w in workouts]
