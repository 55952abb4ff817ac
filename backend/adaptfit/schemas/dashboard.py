from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class StreakData(BaseModel):
    current_streak: int
    longest_streak: int
    total_activities: int
    last_activity_date: Optional[datetime] = None


class DashboardResponse(BaseModel):
    streak: StreakData
    activities_this_week: int
    average_mood: float
    mood_emoji: str
    days_since_last_activity: int
    motivational_message: str
    gentle_nudge: str
