from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from adaptfit.schemas.progress import ProgressEntryCreate, ProgressEntry, ProgressInsights
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.metrics_service import generate_progress_insights, progress_change
from adaptfit.utils.time_utils import get_user_local_time
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/progress", tags=["progress"])


@router.post("", response_model=ProgressEntry, status_code=status.HTTP_201_CREATED)
def log_progress(
    entry_in: ProgressEntryCreate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """
    Append a progress entry. entry_date defaults to today in the user's timezone.
    """
    tz_name = crud_user_data.get_timezone(store, current_user.user_id)
    today = get_user_local_time(tz_name).date()
    return crud_user_data.add_progress_entry(store, current_user.user_id, entry_in, today=today)

@router.get("", response_model=List[ProgressEntry])
def read_my_progress(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """Newest entry_date first."""
    return crud_user_data.get_progress_entries(store, current_user.user_id)

@router.get("/insights", response_model=ProgressInsights)
def read_my_progress_insights(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    baseline = crud_user_data.get_baseline(store, current_user.user_id)
    if baseline is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Baseline assessment not found. Please complete your baseline first."
        )

    entries = crud_user_data.get_progress_entries(store, current_user.user_id)
    latest = entries[0] if entries else None

    return ProgressInsights(
        insights=generate_progress_insights(baseline, entries),
        weight_change=progress_change(latest.weight_kg, baseline.weight_kg) if latest else None,
        pain_change=progress_change(latest.pain_level, baseline.pain_level) if latest else None,
        energy_change=progress_change(latest.energy_level, baseline.energy_level) if latest else None,
    )
