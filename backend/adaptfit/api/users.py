from fastapi import APIRouter, Depends, HTTPException, status, Response

from adaptfit.schemas.user import UserCreate, UserResponse, UserSignupResponse
from adaptfit.services.auth_service import AuthProvider, AuthResult, AuthError, translate_auth_error
from adaptfit.api.auth import get_auth, get_current_user
from adaptfit.api.login import set_session_cookie

router = APIRouter(prefix="/users", tags=["users"])

# POST - Signup (Create new user + Login when the provider opens a session)
@router.post("/signup", response_model=UserSignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    response: Response,
    user: UserCreate,
    auth: AuthProvider = Depends(get_auth)
):
    try:
        session = auth.sign_up(user.email, user.password)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=translate_auth_error(str(e))
        )

    if session.access_token:
        set_session_cookie(response, session.access_token)

    return {
        "user": {"id": session.user_id, "email": session.email},
        "access_token": session.access_token,
        "token_type": "bearer"
    }

# GET - Get current user
@router.get("/me", response_model=UserResponse)
def read_me(current_user: AuthResult = Depends(get_current_user)):
    return {"id": current_user.user_id, "email": current_user.email}
