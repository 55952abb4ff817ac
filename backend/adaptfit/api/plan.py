from fastapi import APIRouter, Depends, HTTPException, status

from adaptfit.schemas.plan import PersonalizedPlan, PlanProgress, MilestoneUpdate
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.metrics_service import current_plan_week, plan_progress
from adaptfit.services.plan_service import update_milestone
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/plan", tags=["plan"])


def _get_plan_or_404(store: KeyValueStore, user_id: str) -> PersonalizedPlan:
    plan = crud_user_data.get_plan(store, user_id)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No personalized plan yet. Complete your baseline and set your targets first."
        )
    return plan


@router.get("", response_model=PersonalizedPlan)
def read_my_plan(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return _get_plan_or_404(store, current_user.user_id)

@router.get("/progress", response_model=PlanProgress)
def read_my_plan_progress(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return plan_progress(_get_plan_or_404(store, current_user.user_id))

@router.patch("/milestones/{index}", response_model=PersonalizedPlan)
def set_milestone_completion(
    index: int,
    milestone_update: MilestoneUpdate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    plan = _get_plan_or_404(store, current_user.user_id)
    try:
        updated = update_milestone(plan, index, milestone_update.completed, current_plan_week(plan))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return crud_user_data.save_plan(store, updated)
