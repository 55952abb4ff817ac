from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime


class Measurements(BaseModel):
    chest_cm: Optional[float] = Field(None, gt=0)
    waist_cm: Optional[float] = Field(None, gt=0)
    hips_cm: Optional[float] = Field(None, gt=0)
    arms_cm: Optional[float] = Field(None, gt=0)
    thighs_cm: Optional[float] = Field(None, gt=0)


class ProgressEntryCreate(BaseModel):
    entry_date: Optional[date] = None  # Defaults to today in the user's timezone
    weight_kg: Optional[float] = Field(None, ge=30, le=300)
    body_fat_percentage: Optional[float] = Field(None, ge=5, le=50)
    muscle_mass_kg: Optional[float] = Field(None, gt=0)
    mobility_score: Optional[int] = Field(None, ge=1, le=10)
    pain_level: Optional[int] = Field(None, ge=1, le=10)
    energy_level: Optional[int] = Field(None, ge=1, le=10)
    measurements: Optional[Measurements] = None
    notes: Optional[str] = None
    photos: List[str] = Field(default_factory=list)


class ProgressEntry(ProgressEntryCreate):
    id: str
    user_id: str
    entry_date: date
    created_at: datetime


class ProgressChange(BaseModel):
    value: float
    percentage: float
    is_positive: bool


class ProgressInsights(BaseModel):
    insights: List[str]
    weight_change: Optional[ProgressChange] = None
    pain_change: Optional[ProgressChange] = None
    energy_change: Optional[ProgressChange] = None
