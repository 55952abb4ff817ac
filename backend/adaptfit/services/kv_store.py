import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis
from sqlalchemy.orm import Session

from adaptfit.config import KV_BACKEND, REDIS_URL, REDIS_KEY_PREFIX
from adaptfit.models.kv_entry import KVEntry

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    String values under namespaced keys ("plan_<user_id>", ...).
    Callers own serialization; the store never inspects values.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Data is lost on restart."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """Backed by the kv_entries table through the request's session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        entry = self.db.query(KVEntry).filter(KVEntry.key == key).first()
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self.db.query(KVEntry).filter(KVEntry.key == key).first()
        if entry:
            entry.value = value
        else:
            self.db.add(KVEntry(key=key, value=value))
        self.db.commit()

    def delete(self, key: str) -> None:
        entry = self.db.query(KVEntry).filter(KVEntry.key == key).first()
        if entry:
            self.db.delete(entry)
            self.db.commit()


class RedisKeyValueStore(KeyValueStore):
    """Backed by Redis; every key gets `prefix` prepended."""

    def __init__(self, client, prefix: str = ""):
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else raw

    def set(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))


_memory_store = InMemoryKeyValueStore()
_redis_client = None


def _get_redis_client():
    global _redis_client
    if _redis_client is None:
        logger.info(f"Connecting key-value store to Redis at {REDIS_URL}")
        _redis_client = redis.from_url(REDIS_URL)
    return _redis_client


def build_store(db: Session, backend: str = KV_BACKEND) -> KeyValueStore:
    """Store for the configured backend: sql (default), redis or memory."""
    if backend == "sql":
        return SqlKeyValueStore(db)
    if backend == "redis":
        return RedisKeyValueStore(_get_redis_client(), prefix=REDIS_KEY_PREFIX)
    if backend == "memory":
        return _memory_store
    raise ValueError(f"Unknown KV_BACKEND '{backend}'. Options: sql, redis, memory")
