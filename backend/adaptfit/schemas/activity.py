from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime

Intensity = Literal["low", "moderate", "high"]
Mood = Literal["great", "good", "okay", "tired", "struggling"]


class ActivityCreate(BaseModel):
    exercise_type: str = Field(..., min_length=1)
    duration: int = Field(..., ge=1, description="Minutes")
    intensity: Intensity = "moderate"
    mood: Mood = "okay"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class Activity(ActivityCreate):
    id: str
    user_id: str
    created_at: datetime


class ActivityParseRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ParsedActivity(BaseModel):
    exercise_type: str
    duration: int
    intensity: Intensity
    mood: Mood
    notes: str


class ActivityDay(BaseModel):
    date: date
    activities: List[Activity]
