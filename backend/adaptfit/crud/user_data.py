# adaptfit/crud/user_data.py
import logging
import uuid
from datetime import date, datetime
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter

from adaptfit.services.kv_store import KeyValueStore
from adaptfit.services.metrics_service import sort_activities, sort_progress_entries
from adaptfit.schemas.profile import UserProfile, UserProfileCreate, UserProfileUpdate
from adaptfit.schemas.baseline import BaselineData, BaselineInput
from adaptfit.schemas.targets import FitnessTargets, FitnessTargetsInput
from adaptfit.schemas.plan import PersonalizedPlan
from adaptfit.schemas.activity import Activity, ActivityCreate
from adaptfit.schemas.progress import ProgressEntry, ProgressEntryCreate
from adaptfit.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

"""
User Data CRUD
--------------
Per-user records in the key-value store under "<kind>_<user_id>".
Each value is the JSON dump of one entity (or a list of them) and reads
back to exactly what was written.
"""

PROFILE = "profile"
ACTIVITIES = "activities"
BASELINE = "baseline"
TARGETS = "targets"
PLAN = "plan"
PROGRESS = "progress"

ModelT = TypeVar("ModelT", bound=BaseModel)

_activity_list = TypeAdapter(List[Activity])
_progress_list = TypeAdapter(List[ProgressEntry])


def make_key(kind: str, user_id: str) -> str:
    return f"{kind}_{user_id}"

def _read(store: KeyValueStore, key: str, model: Type[ModelT]) -> Optional[ModelT]:
    raw = store.get(key)
    if raw is None:
        return None
    return model.model_validate_json(raw)

def _write(store: KeyValueStore, key: str, obj: BaseModel) -> None:
    store.set(key, obj.model_dump_json())
    logger.info(f"Saved {key}")


# --- Profile ---

def get_profile(store: KeyValueStore, user_id: str) -> Optional[UserProfile]:
    return _read(store, make_key(PROFILE, user_id), UserProfile)

def create_profile(store: KeyValueStore, user_id: str, email: str, profile_in: UserProfileCreate, now: datetime = None) -> UserProfile:
    if get_profile(store, user_id):
        raise ValueError(f"User {user_id} already has a profile. Use update instead.")

    profile = UserProfile(
        **profile_in.model_dump(),
        id=user_id,
        email=email,
        created_at=now or utc_now(),
    )
    _write(store, make_key(PROFILE, user_id), profile)
    return profile

def update_profile(store: KeyValueStore, user_id: str, profile_update: UserProfileUpdate) -> Optional[UserProfile]:
    profile = get_profile(store, user_id)
    if not profile:
        return None

    update_data = profile_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(profile, field, getattr(profile_update, field))

    _write(store, make_key(PROFILE, user_id), profile)
    return profile

def update_timezone(store: KeyValueStore, user_id: str, timezone: str) -> Optional[UserProfile]:
    profile = get_profile(store, user_id)
    if not profile:
        return None
    profile.timezone = timezone
    _write(store, make_key(PROFILE, user_id), profile)
    return profile


# --- Baseline ---

def get_baseline(store: KeyValueStore, user_id: str) -> Optional[BaselineData]:
    return _read(store, make_key(BASELINE, user_id), BaselineData)

def save_baseline(store: KeyValueStore, user_id: str, baseline_in: BaselineInput, now: datetime = None) -> BaselineData:
    """Replaces the baseline; the first created_at is kept across re-submissions."""
    now = now or utc_now()
    existing = get_baseline(store, user_id)

    baseline = BaselineData(
        **baseline_in.model_dump(),
        created_at=existing.created_at if existing else now,
        updated_at=now,
    )
    _write(store, make_key(BASELINE, user_id), baseline)
    return baseline


# --- Targets ---

def get_targets(store: KeyValueStore, user_id: str) -> Optional[FitnessTargets]:
    return _read(store, make_key(TARGETS, user_id), FitnessTargets)

def save_targets(store: KeyValueStore, user_id: str, targets_in: FitnessTargetsInput, now: datetime = None) -> FitnessTargets:
    """Replaces the active targets wholesale."""
    now = now or utc_now()
    existing = get_targets(store, user_id)

    targets = FitnessTargets(
        **targets_in.model_dump(),
        created_at=existing.created_at if existing else now,
        updated_at=now,
    )
    _write(store, make_key(TARGETS, user_id), targets)
    return targets


# --- Plan ---

def get_plan(store: KeyValueStore, user_id: str) -> Optional[PersonalizedPlan]:
    return _read(store, make_key(PLAN, user_id), PersonalizedPlan)

def save_plan(store: KeyValueStore, plan: PersonalizedPlan) -> PersonalizedPlan:
    _write(store, make_key(PLAN, plan.user_id), plan)
    return plan


# --- Activities ---

def get_activities(store: KeyValueStore, user_id: str) -> List[Activity]:
    raw = store.get(make_key(ACTIVITIES, user_id))
    if raw is None:
        return []
    return _activity_list.validate_json(raw)

def add_activity(store: KeyValueStore, user_id: str, activity_in: ActivityCreate, now: datetime = None) -> Activity:
    """Appends to the log; the stored list stays sorted by created_at, newest first."""
    data = activity_in.model_dump()
    data["created_at"] = data["created_at"] or now or utc_now()
    activity = Activity(**data, id=uuid.uuid4().hex, user_id=user_id)

    activities = sort_activities([activity] + get_activities(store, user_id))
    store.set(make_key(ACTIVITIES, user_id), _activity_list.dump_json(activities).decode("utf-8"))
    logger.info(f"Logged activity '{activity.exercise_type}' for user {user_id} ({len(activities)} total)")
    return activity


# --- Progress ---

def get_progress_entries(store: KeyValueStore, user_id: str) -> List[ProgressEntry]:
    raw = store.get(make_key(PROGRESS, user_id))
    if raw is None:
        return []
    return _progress_list.validate_json(raw)

def add_progress_entry(
    store: KeyValueStore,
    user_id: str,
    entry_in: ProgressEntryCreate,
    today: date = None,
    now: datetime = None,
) -> ProgressEntry:
    """Appends an entry; the stored list stays sorted by entry_date, newest first."""
    now = now or utc_now()
    data = entry_in.model_dump()
    data["entry_date"] = data["entry_date"] or today or now.date()
    entry = ProgressEntry(**data, id=uuid.uuid4().hex, user_id=user_id, created_at=now)

    entries = sort_progress_entries([entry] + get_progress_entries(store, user_id))
    store.set(make_key(PROGRESS, user_id), _progress_list.dump_json(entries).decode("utf-8"))
    return entry


def get_timezone(store: KeyValueStore, user_id: str) -> str:
    profile = get_profile(store, user_id)
    return profile.timezone if profile else "UTC"
