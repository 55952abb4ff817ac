from fastapi import APIRouter, Depends, HTTPException, status, Response
from typing import Optional

from adaptfit.config import ACCESS_TOKEN_EXPIRE_MINUTES
from adaptfit.schemas.user import UserLogin, LoginResponse
from adaptfit.services.auth_service import AuthProvider, AuthError, translate_auth_error
from adaptfit.api.auth import get_auth, get_session_token

router = APIRouter(tags=["login"])


def set_session_cookie(response: Response, access_token: str):
    # Set cookie for browser-based access
    response.set_cookie(
        key="access_token",
        value=f"{access_token}",
        httponly=True,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=False  # Set to True in production (HTTPS)
    )

@router.post("/login/json", response_model=LoginResponse)
def login_json(
    response: Response,
    login_data: UserLogin,
    auth: AuthProvider = Depends(get_auth)
):
    """
    JSON-based login. Returns the session token and also sets it as a cookie.
    """
    try:
        session = auth.sign_in(login_data.email, login_data.password)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=translate_auth_error(str(e)),
            headers={"WWW-Authenticate": "Bearer"},
        )

    set_session_cookie(response, session.access_token)
    return {"access_token": session.access_token, "token_type": "bearer", "user_id": session.user_id}

@router.post("/login/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth: AuthProvider = Depends(get_auth)
):
    """
    Logout the user by ending the session and clearing the access_token cookie.
    """
    auth.sign_out(token)
    response.delete_cookie("access_token")
    return {"message": "Logged out successfully"}
