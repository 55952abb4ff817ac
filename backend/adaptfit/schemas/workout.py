from pydantic import BaseModel
from typing import List, Literal


class ExerciseDetail(BaseModel):
    name: str
    description: str
    duration_or_reps: str
    modifications: List[str]
    safety_notes: List[str]


class Workout(BaseModel):
    id: str
    title: str
    description: str
    exercises: List[ExerciseDetail]
    difficulty_level: Literal["beginner", "intermediate", "advanced"]
    disability_adaptations: List[str]
    duration_minutes: int
    equipment_needed: List[str]
