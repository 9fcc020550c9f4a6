"""In-process implementation of KVStoreProtocol for development and tests."""

import copy
from typing import Any, Optional


class MemoryStore:
    """
    Dict-backed key-value store.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store, the same as with a remote database.
    Data is lost when the process exits.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Optional[Any]:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    async def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True

    async def delete(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def keys(self) -> list[str]:
        return sorted(self._data)
