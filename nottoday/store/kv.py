from typing import Dict, Optional, Protocol

from nottoday.settings import settings


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set_many(self, mapping: Dict[str, str]) -> None: ...


class RedisStore:
    def __init__(self, redis=None):
        if redis is None:
            from nottoday.store.redis_conn import get_redis
            redis = get_redis()
        self._r = redis

    def get(self, key: str) -> Optional[str]:
        return self._r.get(key)

    def set_many(self, mapping: Dict[str, str]) -> None:
        # MSET is atomic: readers never see a new depth with an old pullCount
        self._r.mset(mapping)


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set_many(self, mapping: Dict[str, str]) -> None:
        self.data.update(mapping)


def get_store() -> KeyValueStore:
    if settings.STORE_BACKEND == "memory":
        return MemoryStore()
    return RedisStore()
