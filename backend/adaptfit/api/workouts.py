from fastapi import APIRouter, Depends
from typing import List

from adaptfit.schemas.workout import Workout
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.coach_service import generate_adaptive_workouts
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("/recommendations", response_model=List[Workout])
def read_workout_recommendations(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """Adaptive workouts for the disability type on the user's profile."""
    profile = crud_user_data.get_profile(store, current_user.user_id)
    return generate_adaptive_workouts(profile.disability_type if profile else None)
