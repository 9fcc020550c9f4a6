"""
Lazy key-value client.

Wraps whichever backing store the settings select and makes exactly one attempt
to build it, on first use. If that attempt fails the client stays "unavailable"
for the rest of the process: reads return None and writes return False, nothing
is raised to callers. Errors from an individual call against a live store are
logged and degraded the same way, without dropping the cached store.
"""

import functools
import logging
import threading
from typing import Any, Callable, Optional

from config import Settings, get_settings
from repositories import FileStore, KVStoreProtocol, KVUnavailable, MemoryStore, VercelKV

logger = logging.getLogger(__name__)

_UNRESOLVED = object()


def build_kv_store(settings: Optional[Settings] = None) -> KVStoreProtocol:
    """Construct the configured store. Raises KVUnavailable when there is none."""
    s = settings or get_settings()
    backend = s.SHOWCASE_KV_BACKEND
    if backend == "disabled":
        raise KVUnavailable("KV disabled by SHOWCASE_KV_BACKEND", code="kv_disabled")
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return FileStore(s.SHOWCASE_DATA_DIR)
    if not s.kv_configured:
        raise KVUnavailable("KV_REST_API_URL / KV_REST_API_TOKEN not set", code="kv_not_configured")
    return VercelKV(s.KV_REST_API_URL, s.KV_REST_API_TOKEN, timeout=s.KV_TIMEOUT_SECONDS)


class LazyKVClient:
    """get / set / delete over a store that is resolved at most once."""

    def __init__(self, factory: Callable[[], KVStoreProtocol]):
        self._factory = factory
        self._store: Any = _UNRESOLVED
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LazyKVClient":
        return cls(functools.partial(build_kv_store, settings))

    @property
    def resolved(self) -> bool:
        return self._store is not _UNRESOLVED

    @property
    def available(self) -> bool:
        return self.resolve() is not None

    def resolve(self) -> Optional[KVStoreProtocol]:
        """Return the live store, or None once the store is known to be unavailable."""
        if self._store is not _UNRESOLVED:
            return self._store
        with self._lock:
            if self._store is _UNRESOLVED:
                try:
                    store = self._factory()
                    logger.info("[KV] using %s", type(store).__name__)
                except KVUnavailable as e:
                    logger.warning("[KV] %s - storage disabled", e.message)
                    store = None
                except Exception as e:
                    logger.warning("[KV] store initialization failed: %s - storage disabled", e, exc_info=True)
                    store = None
                self._store = store
        return self._store

    async def get(self, key: str) -> Optional[Any]:
        store = self.resolve()
        if store is None:
            return None
        try:
            return await store.get(key)
        except Exception as e:
            logger.error("[KV] get %s failed: %s", key, e, exc_info=True)
            return None

    async def set(self, key: str, value: Any) -> bool:
        store = self.resolve()
        if store is None:
            return False
        try:
            return bool(await store.set(key, value))
        except Exception as e:
            logger.error("[KV] set %s failed: %s", key, e, exc_info=True)
            return False

    async def delete(self, key: str) -> bool:
        store = self.resolve()
        if store is None:
            return False
        try:
            return bool(await store.delete(key))
        except Exception as e:
            logger.error("[KV] delete %s failed: %s", key, e, exc_info=True)
            return False
