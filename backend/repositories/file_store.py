"""
File-based implementation of KVStoreProtocol.
One JSON file per key under a configurable data directory. Meant for local runs
where no Vercel KV database is configured.
"""

import asyncio
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

logger = logging.getLogger(__name__)


class FileStore:
    """File-based key-value store: data/kv/{key}.json."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.kv_dir = self.data_dir / "kv"
        self.kv_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        # Percent-encoded, one file per distinct key: "entitlement:42" -> entitlement%3A42.json
        return self.kv_dir / f"{quote(key, safe='')}.json"

    def _read(self, path: Path) -> Optional[Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError:
            logger.warning("Corrupt KV file ignored: %s", path)
            return None

    def _write(self, path: Path, data: Any) -> None:
        with self._lock:
            tmp = path.with_suffix(".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp.replace(path)

    def _unlink(self, path: Path) -> None:
        with self._lock:
            path.unlink(missing_ok=True)

    async def get(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, value: Any) -> bool:
        await asyncio.to_thread(self._write, self._path(key), value)
        return True

    async def delete(self, key: str) -> bool:
        await asyncio.to_thread(self._unlink, self._path(key))
        return True
