# adaptfit/schemas/profile.py
from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

DisabilityType = Literal[
    "wheelchair", "mobility_aid", "chronic_pain", "limb_difference",
    "visual_impairment", "neurological", "other",
]


class AccessibilityPreferences(BaseModel):
    high_contrast: bool = False
    large_text: bool = False
    voice_enabled: bool = False


class UserProfileCreate(BaseModel):
    full_name: str = Field(..., min_length=1)
    disability_type: Optional[DisabilityType] = None
    mobility_notes: Optional[str] = None
    fitness_goals: Optional[str] = None
    accessibility_preferences: AccessibilityPreferences = Field(default_factory=AccessibilityPreferences)

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Alex Rivera",
                "disability_type": "wheelchair",
                "mobility_notes": "Full-time manual chair user",
                "fitness_goals": "Build strength and endurance",
                "accessibility_preferences": {"high_contrast": False, "large_text": True, "voice_enabled": True}
            }
        }


class UserProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    disability_type: Optional[DisabilityType] = None
    mobility_notes: Optional[str] = None
    fitness_goals: Optional[str] = None
    accessibility_preferences: Optional[AccessibilityPreferences] = None


class UserProfile(UserProfileCreate):
    """Stored profile, keyed profile_<id>."""
    id: str
    email: str
    timezone: str = "UTC"  # e.g. "Europe/Berlin"
    created_at: datetime


class TimezoneUpdate(BaseModel):
    timezone: str
