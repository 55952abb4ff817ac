from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class IntensityDistribution(BaseModel):
    low: int
    moderate: int
    high: int


class WeeklyTargets(BaseModel):
    activity_sessions: int
    total_minutes: int
    intensity_distribution: IntensityDistribution


class MilestoneMetrics(BaseModel):
    weight_change_kg: Optional[float] = None
    activity_minutes: Optional[int] = None
    mobility_improvement: Optional[str] = None


class PlanMilestone(BaseModel):
    week: int
    title: str
    description: str
    target_metrics: MilestoneMetrics
    completed: bool = False
    completed_at: Optional[datetime] = None


class PersonalizedPlan(BaseModel):
    id: str
    user_id: str
    plan_name: str
    description: str
    primary_goal: str
    timeline_weeks: int
    weekly_targets: WeeklyTargets
    milestones: List[PlanMilestone]
    recommendations: List[str]
    created_at: datetime
    updated_at: datetime


class MilestoneUpdate(BaseModel):
    completed: bool


class PlanProgress(BaseModel):
    current_week: int
    completed_milestones: int
    total_milestones: int
    percentage: float
    expected_percentage: float
    is_ahead: bool
