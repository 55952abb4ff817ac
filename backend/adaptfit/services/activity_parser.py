import re
import logging

from adaptfit.schemas.activity import ParsedActivity

logger = logging.getLogger(__name__)

"""
Activity Parser
---------------
Turns a free-text description ("Did 20 minutes of wheelchair cardio, felt great")
into activity fields by keyword lookup. Every table is checked top-down and the
first row with a keyword present in the text wins.
"""

DEFAULT_DURATION_MIN = 15
DEFAULT_EXERCISE_TYPE = "general activity"
DEFAULT_INTENSITY = "moderate"
DEFAULT_MOOD = "okay"

DURATION_PATTERN = re.compile(r"(\d+)\s*(min|minute|minutes|hour|hours)")

EXERCISE_KEYWORDS = [
    ("wheelchair mobility", ("wheelchair", "rolling")),
    ("swimming", ("swim", "pool")),
    ("physical therapy", ("physical therapy", "pt")),
    ("stretching", ("stretch", "yoga")),
    ("walking", ("walk",)),
    ("cardio", ("cardio", "bike", "cycling")),
    ("strength training", ("strength", "weight", "resistance")),
]

# Low is checked first, so "gentle ... intense" reads as low
INTENSITY_KEYWORDS = [
    ("low", ("easy", "gentle", "light")),
    ("high", ("hard", "intense", "challenging")),
]

MOOD_KEYWORDS = [
    ("great", ("great", "amazing", "fantastic")),
    ("good", ("good", "nice", "solid")),
    ("tired", ("tired", "exhausted", "worn out")),
    ("struggling", ("struggling", "difficult", "tough")),
]


def _first_match(text: str, table, default: str) -> str:
    for label, keywords in table:
        if any(keyword in text for keyword in keywords):
            return label
    return default


def extract_duration(text: str) -> int:
    """Minutes from the first "<n> min/hour" phrase; hours are scaled to minutes."""
    match = DURATION_PATTERN.search(text.lower())
    if not match:
        return DEFAULT_DURATION_MIN

    duration = int(match.group(1))
    if "hour" in match.group(2):
        duration *= 60
    return duration or DEFAULT_DURATION_MIN


def parse_activity_text(text: str) -> ParsedActivity:
    lowered = text.lower()

    parsed = ParsedActivity(
        exercise_type=_first_match(lowered, EXERCISE_KEYWORDS, DEFAULT_EXERCISE_TYPE),
        duration=extract_duration(lowered),
        intensity=_first_match(lowered, INTENSITY_KEYWORDS, DEFAULT_INTENSITY),
        mood=_first_match(lowered, MOOD_KEYWORDS, DEFAULT_MOOD),
        notes=text,
    )
    logger.debug(f"Parsed activity text into {parsed.exercise_type}/{parsed.duration}min/{parsed.intensity}/{parsed.mood}")
    return parsed
