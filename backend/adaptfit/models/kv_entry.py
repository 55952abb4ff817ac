from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from adaptfit.database import Base


class KVEntry(Base):
    """One namespaced record, e.g. key "activities_<user_id>" holding a JSON list."""
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
