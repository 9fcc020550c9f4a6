"""Backing key-value store capability shared by every implementation."""

from typing import Any, Optional, Protocol, runtime_checkable


class KVUnavailable(Exception):
    """The configured store cannot be reached or is not configured."""
    def __init__(self, message: str, code: str = "kv_unavailable"):
        self.message = message
        self.code = code
        super().__init__(message)


@runtime_checkable
class KVStoreProtocol(Protocol):
    """
    Minimal async key-value contract.

    Values are JSON-serializable objects. `get` returns None for a missing key;
    `set` and `delete` return True once the store acknowledged the write.
    No ordering or transactional guarantee is assumed across keys.
    """

    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any) -> bool: ...

    async def delete(self, key: str) -> bool: ...
