from sqlalchemy import Column, String, DateTime
from datetime import datetime
from adaptfit.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(200), nullable=False)  # argon2 hash

    created_at = Column(DateTime, default=datetime.utcnow)
