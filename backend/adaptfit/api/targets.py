import logging
from fastapi import APIRouter, Depends, HTTPException, status

from adaptfit.schemas.targets import FitnessTargetsInput, FitnessTargets, TargetsSaveResponse
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.plan_service import generate_personalized_plan
from adaptfit.api.auth import get_current_user, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/targets", tags=["targets"])


@router.put("", response_model=TargetsSaveResponse)
def save_my_targets(
    targets_in: FitnessTargetsInput,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """
    Replace the active targets. When a baseline exists the personalized plan is
    regenerated from scratch (milestone completion is not carried over).
    """
    user_id = current_user.user_id
    targets = crud_user_data.save_targets(store, user_id, targets_in)

    baseline = crud_user_data.get_baseline(store, user_id)
    if baseline is None:
        logger.info(f"Targets saved for user {user_id} without a baseline; plan not generated")
        return {"targets": targets, "plan": None}

    profile = crud_user_data.get_profile(store, user_id)
    disability_type = profile.disability_type if profile else None
    plan = generate_personalized_plan(baseline, targets, disability_type, user_id=user_id)
    crud_user_data.save_plan(store, plan)
    return {"targets": targets, "plan": plan}

@router.get("", response_model=FitnessTargets)
def read_my_targets(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    targets = crud_user_data.get_targets(store, current_user.user_id)
    if targets is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fitness targets not found"
        )
    return targets
