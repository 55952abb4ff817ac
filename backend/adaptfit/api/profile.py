# adaptfit/api/profile.py
from fastapi import APIRouter, Depends, HTTPException, status

from adaptfit.schemas.profile import UserProfile, UserProfileCreate, UserProfileUpdate, TimezoneUpdate
from adaptfit.crud import user_data as crud_user_data
from adaptfit.services.auth_service import AuthResult
from adaptfit.services.kv_store import KeyValueStore
from adaptfit.utils.time_utils import is_valid_timezone
from adaptfit.api.auth import get_current_user, get_store


router = APIRouter(prefix="/profile", tags=["profile"])

# POST - Onboarding: create the profile for the current user
@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
def create_profile(
    profile: UserProfileCreate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    """
    Create the profile for the authenticated user (end of onboarding).
    """
    try:
        return crud_user_data.create_profile(store, current_user.user_id, current_user.email, profile)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


# GET - Get profile for current user
@router.get("/me", response_model=UserProfile)
def read_my_profile(
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    profile = crud_user_data.get_profile(store, current_user.user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile


# PUT - Update profile for current user
@router.put("/me", response_model=UserProfile)
def update_my_profile(
    profile_update: UserProfileUpdate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    profile = crud_user_data.update_profile(store, current_user.user_id, profile_update)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile


@router.patch("/timezone", response_model=UserProfile)
def update_my_timezone(
    tz_update: TimezoneUpdate,
    store: KeyValueStore = Depends(get_store),
    current_user: AuthResult = Depends(get_current_user)
):
    if not is_valid_timezone(tz_update.timezone):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown timezone '{tz_update.timezone}'"
        )

    profile = crud_user_data.update_timezone(store, current_user.user_id, tz_update.timezone)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile
