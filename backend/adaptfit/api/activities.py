from collections import OrderedDict
from fastapi import APIRouter, Depends, status
from typing import List

from adaptfit.schemas.activity import Activity, ActivityCreate, ActivityParseRequest, ParsedActivity, ActivityDay
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.activity_parser import parse_activity_text
from adaptfit.services.metrics_service import sort_activities
from adaptfit.utils.time_utils import get_user_local_time
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=Activity, status_code=status.HTTP_201_CREATED)
def log_activity(
    activity_in: ActivityCreate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return crud_user_data.add_activity(store, current_user.user_id, activity_in)

@router.post("/parse", response_model=ParsedActivity)
def parse_activity(
    request: ActivityParseRequest,
    current_user: AuthResult = Depends(get_current_user)
):
    """
    Fill activity fields from a free-text description. Nothing is saved;
    the client reviews the result and posts it to /activities.
    """
    return parse_activity_text(request.text)

@router.get("", response_model=List[Activity])
def read_my_activities(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    return sort_activities(crud_user_data.get_activities(store, current_user.user_id))

@router.get("/grouped", response_model=List[ActivityDay])
def read_my_activities_by_day(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """Activity log grouped by calendar day in the user's timezone, newest day first."""
    tz_name = crud_user_data.get_timezone(store, current_user.user_id)
    days = OrderedDict()
    for activity in sort_activities(crud_user_data.get_activities(store, current_user.user_id)):
        day = get_user_local_time(tz_name, activity.created_at).date()
        days.setdefault(day, []).append(activity)

    return [{"date": day, "activities": activities} for day, activities in days.items()]
