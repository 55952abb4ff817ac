import os
from dotenv import load_dotenv

load_dotenv(override=False)

SQLALCHEMY_DATABASE_URL = os.getenv("SQLALCHEMY_DATABASE_URL", "sqlite:///./adaptfit.db")

# Auth. Without a SECRET_KEY the mock provider is used (local development only).
SECRET_KEY = os.getenv("SECRET_KEY")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
AUTH_PROVIDER = os.getenv("AUTH_PROVIDER", "local" if SECRET_KEY else "mock").lower()  # Options: local, mock
AUTH_MAX_FAILED_ATTEMPTS = int(os.getenv("AUTH_MAX_FAILED_ATTEMPTS", "5"))
AUTH_LOCKOUT_SECONDS = int(os.getenv("AUTH_LOCKOUT_SECONDS", "50"))

# Per-user record storage
KV_BACKEND = os.getenv("KV_BACKEND", "sql").lower()  # Options: sql, redis, memory
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_KEY_PREFIX = os.getenv("REDIS_KEY_PREFIX", "adaptfit:")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
