"""
Vercel KV (Upstash Redis) over its REST API.

Each command is POSTed as a JSON array, e.g. ["SET", "preferences:42", "{...}"],
and answered with {"result": ...} or {"error": "..."}. Values are stored as JSON
strings, the same encoding the @vercel/kv SDK uses, so records written by either
side stay readable by the other.
"""

import asyncio
import json
import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class VercelKVError(Exception):
    """A single REST command failed. The client itself stays usable."""
    def __init__(self, message: str, code: str = "kv_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class VercelKV:
    """KVStoreProtocol implementation backed by the Vercel KV REST endpoint."""

    def __init__(
        self,
        url: str,
        token: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {token}"})

    def _command(self, *args: str) -> Any:
        """Run one Redis command synchronously and return its `result`."""
        try:
            resp = self._session.post(self.url, json=list(args), timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise VercelKVError(f"KV {args[0]} timed out", code="kv_timeout")
        except requests.exceptions.ConnectionError as e:
            raise VercelKVError(f"Could not reach KV: {e}", code="kv_network")

        if resp.status_code == 401:
            raise VercelKVError("KV authentication failed. Check KV_REST_API_TOKEN.", code="kv_unauthorized")

        try:
            payload = resp.json()
        except ValueError:
            raise VercelKVError(f"KV returned non-JSON response (HTTP {resp.status_code})")

        if not isinstance(payload, dict):
            raise VercelKVError(f"Unexpected KV payload: {payload!r}")
        if payload.get("error"):
            raise VercelKVError(f"KV {args[0]} failed: {payload['error']}")
        if resp.status_code >= 400:
            raise VercelKVError(f"KV {args[0]} failed with HTTP {resp.status_code}")
        logger.debug("KV %s %s -> HTTP %s", args[0], args[1] if len(args) > 1 else "", resp.status_code)
        return payload.get("result")

    async def get(self, key: str) -> Optional[Any]:
        raw = await asyncio.to_thread(self._command, "GET", key)
        if raw is None:
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except ValueError:
            # Plain strings written by other clients are returned as-is
            return raw

    async def set(self, key: str, value: Any) -> bool:
        encoded = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        result = await asyncio.to_thread(self._command, "SET", key, encoded)
        return result == "OK"

    async def delete(self, key: str) -> bool:
        await asyncio.to_thread(self._command, "DEL", key)
        return True
