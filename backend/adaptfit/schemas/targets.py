from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from adaptfit.schemas.plan import PersonalizedPlan

PrimaryGoal = Literal[
    "weight_loss", "weight_gain", "muscle_gain", "fat_loss", "mobility_improvement",
    "pain_management", "endurance_building", "strength_building", "general_wellness",
]


class FitnessTargetsInput(BaseModel):
    primary_goal: PrimaryGoal = "general_wellness"
    target_weight_kg: Optional[float] = Field(None, ge=30, le=300)
    target_body_fat_percentage: Optional[float] = Field(None, ge=5, le=50)
    target_muscle_mass_kg: Optional[float] = Field(None, gt=0)
    mobility_goals: Optional[str] = None
    timeline_weeks: int = Field(12, ge=1, le=104)
    weekly_activity_target: int = Field(3, ge=1, le=7, description="Sessions per week")
    specific_goals: Optional[str] = None


class FitnessTargets(FitnessTargetsInput):
    created_at: datetime
    updated_at: datetime


class TargetsSaveResponse(BaseModel):
    targets: FitnessTargets
    # Only present when a baseline exists to generate from
    plan: Optional[PersonalizedPlan] = None
