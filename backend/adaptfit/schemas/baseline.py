from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

MobilityLevel = Literal["limited", "moderate", "good", "excellent"]


class BaselineInput(BaseModel):
    height_cm: float = Field(..., ge=100, le=250, description="Height in cm")
    weight_kg: float = Field(..., ge=30, le=300, description="Current weight in kg")
    age: int = Field(..., ge=13, le=120)
    sex: Literal["male", "female", "other", "prefer_not_to_say"]

    body_fat_percentage: Optional[float] = Field(None, ge=5, le=50)
    muscle_mass_kg: Optional[float] = Field(None, gt=0)
    resting_heart_rate: Optional[int] = Field(None, ge=40, le=120)
    blood_pressure_systolic: Optional[int] = Field(None, gt=0)
    blood_pressure_diastolic: Optional[int] = Field(None, gt=0)

    mobility_level: MobilityLevel
    pain_level: int = Field(..., ge=1, le=10, description="1-10 scale")
    energy_level: int = Field(..., ge=1, le=10, description="1-10 scale")

    current_medications: Optional[str] = None
    medical_conditions: Optional[str] = None
    previous_injuries: Optional[str] = None
    activity_limitations: Optional[str] = None


class BaselineData(BaselineInput):
    created_at: datetime
    updated_at: datetime


class HealthMetrics(BaseModel):
    bmi: float
    bmi_category: str
    insights: List[str]
