from fastapi import APIRouter, Depends

from adaptfit.schemas.dashboard import DashboardResponse
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services import metrics_service
from adaptfit.services.coach_service import generate_motivational_message, generate_gentle_nudge
from adaptfit.utils.time_utils import utc_now
from adaptfit.api.auth import get_current_user, get_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def read_my_dashboard(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    user_id = current_user.user_id
    now = utc_now()
    activities = crud_user_data.get_activities(store, user_id)
    tz_name = crud_user_data.get_timezone(store, user_id)

    streak = metrics_service.calculate_streak(activities, now)
    this_week = metrics_service.activities_this_week(activities, now, tz_name)
    mood = metrics_service.average_mood(activities)
    idle_days = metrics_service.days_since_last_activity(activities, now)

    return DashboardResponse(
        streak=streak,
        activities_this_week=len(this_week),
        average_mood=mood,
        mood_emoji=metrics_service.mood_emoji(mood),
        days_since_last_activity=idle_days,
        motivational_message=generate_motivational_message(this_week, streak.current_streak),
        gentle_nudge=generate_gentle_nudge(idle_days),
    )
