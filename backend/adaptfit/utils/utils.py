from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, InvalidHashError
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

from adaptfit.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

# Argon2 password hasher (OWASP recommended)
pwd_hasher = PasswordHasher(
    time_cost=2,
    memory_cost=102400,  # 100 MB
    parallelism=8,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    return pwd_hasher.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_hasher.verify(hashed_password, plain_password)
    except (VerifyMismatchError, InvalidHashError):
        return False

# Token Logic
def create_access_token(data: dict, secret_key: str = None, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({'exp': expire})
    return jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: str, secret_key: str = None) -> Optional[dict]:
    """Returns the token claims, or None when the token is invalid or expired."""
    try:
        return jwt.decode(token, secret_key or SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
