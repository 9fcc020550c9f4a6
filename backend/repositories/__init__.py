"""Persistence layer: key-value store interface and implementations."""

from .base import KVStoreProtocol, KVUnavailable
from .file_store import FileStore
from .memory_store import MemoryStore
from .vercel_kv import VercelKV, VercelKVError

__all__ = [
    "KVStoreProtocol",
    "KVUnavailable",
    "FileStore",
    "MemoryStore",
    "VercelKV",
    "VercelKVError",
]
