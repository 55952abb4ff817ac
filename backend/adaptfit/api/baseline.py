from fastapi import APIRouter, Depends, HTTPException, status

from adaptfit.schemas.baseline import BaselineInput, BaselineData, HealthMetrics
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.metrics_service import calculate_health_metrics
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/baseline", tags=["baseline"])


def _get_baseline_or_404(store: KeyValueStore, user_id: str) -> BaselineData:
    baseline = crud_user_data.get_baseline(store, user_id)
    if baseline is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Baseline assessment not found. Please complete your baseline first."
        )
    return baseline


@router.put("", response_model=BaselineData)
def save_my_baseline(
    baseline_in: BaselineInput,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return crud_user_data.save_baseline(store, current_user.user_id, baseline_in)

@router.get("", response_model=BaselineData)
def read_my_baseline(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return _get_baseline_or_404(store, current_user.user_id)

@router.get("/health-metrics", response_model=HealthMetrics)
def read_my_health_metrics(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """BMI, BMI category and insights derived from the baseline assessment."""
    return calculate_health_metrics(_get_baseline_or_404(store, current_user.user_id))
