import base64
import binascii
import logging
import re
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from adaptfit.config import (
    AUTH_PROVIDER, SECRET_KEY, AUTH_MAX_FAILED_ATTEMPTS, AUTH_LOCKOUT_SECONDS,
)
from adaptfit.crud import user as crud_user
from adaptfit.utils.utils import verify_password, create_access_token, decode_access_token

logger = logging.getLogger(__name__)

"""
Auth Service
------------
Email/password sign-up, sign-in and sign-out behind one provider interface.
- LocalAuthProvider: users table, argon2 hashes, signed JWT sessions.
- MockAuthProvider: no storage; ids derived from the email. Used when no
  SECRET_KEY is configured.
"""

RATE_LIMIT_PHRASES = ("over_email_send_rate_limit", "rate limit", "50 seconds")
UNCONFIRMED_EMAIL_PHRASES = ("email_not_confirmed", "Email not confirmed")

RATE_LIMIT_MESSAGE = "Too many requests. Please wait 50 seconds before trying again for security purposes."
UNCONFIRMED_EMAIL_MESSAGE = (
    "Please check your email and click the confirmation link before signing in. "
    "Check your spam folder if you don't see it."
)

MOCK_TOKEN_PREFIX = "mock-token:"


class AuthError(Exception):
    """Raised by providers; str(error) is the provider's raw message."""


class AuthResult(BaseModel):
    user_id: str
    email: str
    access_token: Optional[str] = None


def translate_auth_error(message: str) -> str:
    """Maps known provider failures to user-facing text; anything else is shown as-is."""
    if any(phrase in message for phrase in RATE_LIMIT_PHRASES):
        return RATE_LIMIT_MESSAGE
    if any(phrase in message for phrase in UNCONFIRMED_EMAIL_PHRASES):
        return UNCONFIRMED_EMAIL_MESSAGE
    return message


class LoginThrottle:
    """Counts failed sign-ins per email inside a sliding window."""

    def __init__(self, max_attempts: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.clock = clock
        self._failures: Dict[str, List[float]] = {}
        # Sync handlers run on FastAPI's threadpool
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        """Drops expired timestamps and emails left with none. Caller holds the lock."""
        cutoff = now - self.window_seconds
        for email in list(self._failures):
            recent = [t for t in self._failures[email] if t > cutoff]
            if recent:
                self._failures[email] = recent
            else:
                del self._failures[email]

    def is_locked(self, email: str) -> bool:
        cutoff = self.clock() - self.window_seconds
        with self._lock:
            failures = self._failures.get(email, ())
            return sum(1 for t in failures if t > cutoff) >= self.max_attempts

    def record_failure(self, email: str) -> None:
        now = self.clock()
        with self._lock:
            self._prune(now)
            self._failures.setdefault(email, []).append(now)

    def reset(self, email: str) -> None:
        with self._lock:
            self._failures.pop(email, None)

    def tracked_emails(self) -> int:
        with self._lock:
            self._prune(self.clock())
            return len(self._failures)


login_throttle = LoginThrottle(AUTH_MAX_FAILED_ATTEMPTS, AUTH_LOCKOUT_SECONDS)


class AuthProvider(ABC):

    @abstractmethod
    def sign_up(self, email: str, password: str) -> AuthResult:
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthResult:
        ...

    @abstractmethod
    def sign_out(self, token: Optional[str]) -> None:
        ...

    @abstractmethod
    def resolve(self, token: str) -> Optional[AuthResult]:
        """The signed-in user for a session token, or None."""


class LocalAuthProvider(AuthProvider):

    def __init__(self, db: Session, secret_key: str, throttle: LoginThrottle = login_throttle):
        self.db = db
        self.secret_key = secret_key
        self.throttle = throttle

    @staticmethod
    def _normalize(email: str) -> str:
        return email.strip().lower()

    def _issue(self, user) -> AuthResult:
        token = create_access_token({"sub": user.id}, secret_key=self.secret_key)
        return AuthResult(user_id=user.id, email=user.email, access_token=token)

    def sign_up(self, email: str, password: str) -> AuthResult:
        email = self._normalize(email)
        if crud_user.get_user_by_email(self.db, email=email):
            raise AuthError("User already registered")

        user = crud_user.create_user(self.db, email=email, password=password)
        logger.info(f"Registered user {user.id}")
        return self._issue(user)

    def sign_in(self, email: str, password: str) -> AuthResult:
        email = self._normalize(email)
        if self.throttle.is_locked(email):
            logger.warning(f"Sign-in locked for {email} after repeated failures")
            raise AuthError(f"over_email_send_rate_limit: For security purposes, you can only request this after {self.throttle.window_seconds} seconds.")

        user = crud_user.get_user_by_email(self.db, email=email)
        if not user or not verify_password(password, user.password):
            self.throttle.record_failure(email)
            raise AuthError("Invalid login credentials")

        self.throttle.reset(email)
        return self._issue(user)

    def sign_out(self, token: Optional[str]) -> None:
        # Sessions are stateless JWTs; clearing the cookie ends them client-side
        return None

    def resolve(self, token: str) -> Optional[AuthResult]:
        claims = decode_access_token(token, secret_key=self.secret_key)
        if not claims or not claims.get("sub"):
            return None
        user = crud_user.get_user(self.db, user_id=claims["sub"])
        if user is None:
            return None
        return AuthResult(user_id=user.id, email=user.email, access_token=token)


def mock_user_id(email: str) -> str:
    encoded = base64.b64encode(email.encode("utf-8")).decode("ascii")
    return "user_" + re.sub(r"[^a-zA-Z0-9]", "", encoded)[:10]


class MockAuthProvider(AuthProvider):
    """
    Development fallback. Any password is accepted; the same email always maps
    to the same user id. Sign-up does not open a session.
    """

    def sign_up(self, email: str, password: str) -> AuthResult:
        return AuthResult(user_id=mock_user_id(email), email=email, access_token=None)

    def sign_in(self, email: str, password: str) -> AuthResult:
        token = MOCK_TOKEN_PREFIX + base64.urlsafe_b64encode(email.encode("utf-8")).decode("ascii")
        return AuthResult(user_id=mock_user_id(email), email=email, access_token=token)

    def sign_out(self, token: Optional[str]) -> None:
        return None

    def resolve(self, token: str) -> Optional[AuthResult]:
        if not token or not token.startswith(MOCK_TOKEN_PREFIX):
            return None
        try:
            email = base64.urlsafe_b64decode(token[len(MOCK_TOKEN_PREFIX):].encode("ascii")).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return None
        if not email:
            return None
        return AuthResult(user_id=mock_user_id(email), email=email, access_token=token)


def get_auth_provider(db: Session, provider: str = AUTH_PROVIDER, secret_key: str = SECRET_KEY) -> AuthProvider:
    if provider == "local":
        if secret_key:
            return LocalAuthProvider(db, secret_key)
        logger.warning("AUTH_PROVIDER=local but SECRET_KEY is not set. Falling back to mock auth.")
    return MockAuthProvider()
