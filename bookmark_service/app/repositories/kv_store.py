from __future__ import annotations

import threading
from datetime import datetime, timezone

from pymongo.database import Database

from common.mongo.client import get_database

from ..config import get_settings
from .interfaces import KVStoreInterface


DEFAULT_KV_COLLECTION = "kv_store"


class MongoKVStore(KVStoreInterface):
    """MongoDB 컬렉션 하나를 키-값 저장소로 사용하는 영속화 어댑터.

    - 키 하나당 도큐먼트 하나: {_id: key, value: <bytes>, updated_at}
    - set 은 upsert 로 동작하며, 쓰기 충돌 제어는 하지 않는다 (last write wins).
    """

    def __init__(self, database: Database, collection: str = DEFAULT_KV_COLLECTION) -> None:
        self._db = database
        self._col = database[collection]

    def get(self, key: str) -> bytes | None:
        raw = self._col.find_one({"_id": key}, {"value": 1})
        if raw is None:
            return None
        value = raw.get("value")
        if value is None:
            return None
        return bytes(value)

    def set(self, key: str, value: bytes) -> None:
        self._col.update_one(
            {"_id": key},
            {"$set": {"value": value, "updated_at": datetime.now(timezone.utc)}},
            upsert=True,
        )


class InMemoryKVStore(KVStoreInterface):
    """프로세스 메모리에 값을 보관하는 KV 저장소 (로컬 실행/테스트용)."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._data[key] = bytes(value)


_memory_store: InMemoryKVStore | None = None
_memory_lock = threading.Lock()


def get_kv_store() -> KVStoreInterface:
    """KV_STORE_BACKEND 설정에 따라 전역 KV 저장소를 반환한다.

    - mongo: 전역 MongoDB Database 위의 MongoKVStore
    - memory: 프로세스 단위 InMemoryKVStore 싱글톤
    """

    global _memory_store

    settings = get_settings()
    if settings.kv_store_backend == "memory":
        if _memory_store is None:
            with _memory_lock:
                if _memory_store is None:
                    _memory_store = InMemoryKVStore()
        return _memory_store

    return MongoKVStore(get_database(), settings.kv_store_collection)
