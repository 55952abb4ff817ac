from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie, HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from adaptfit.database import get_db
from adaptfit.services.auth_service import AuthProvider, AuthResult, get_auth_provider
from adaptfit.services.kv_store import KeyValueStore, build_store

cookie_scheme = APIKeyCookie(name="access_token", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth(db: Session = Depends(get_db)) -> AuthProvider:
    return get_auth_provider(db)

def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return build_store(db)

def get_session_token(
    cookie_token: Optional[str] = Depends(cookie_scheme),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if cookie_token:
        return cookie_token
    return bearer.credentials if bearer else None

def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthProvider = Depends(get_auth),
) -> AuthResult:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Session expired. Please re-login.",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception

    # Also covers expired/invalid tokens and users that no longer exist
    user = auth.resolve(token)
    if user is None:
        raise credentials_exception
    return user
