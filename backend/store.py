"""
Showcase Persistence Layer
Entitlement and preference records on top of the lazy KV client.

Key layout (the whole persisted schema; keep verbatim for existing data):
  entitlement:{fid}   EntitlementRecord, present once the profile was minted
  preferences:{fid}   Preferences record for that fid

Every operation returns a bool or an optional record and never raises for store
problems. A missing record and an unreachable store look the same to callers.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from kv import LazyKVClient
from schemas.records import UPDATED_AT, EntitlementRecord

logger = logging.getLogger(__name__)

ENTITLEMENT_PREFIX = "entitlement:"
PREFERENCES_PREFIX = "preferences:"


def iso_now() -> str:
    """UTC timestamp in JavaScript toISOString() form: 2024-05-01T12:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _check_fid(fid: int) -> int:
    # bool is an int subclass but never a valid identity
    if isinstance(fid, bool) or not isinstance(fid, int):
        raise TypeError(f"fid must be an int, got {type(fid).__name__}")
    return fid


def entitlement_key(fid: int) -> str:
    return f"{ENTITLEMENT_PREFIX}{_check_fid(fid)}"


def preferences_key(fid: int) -> str:
    return f"{PREFERENCES_PREFIX}{_check_fid(fid)}"


class PreferencesStore:
    """Domain operations for entitlement and preference records."""

    def __init__(self, kv: LazyKVClient, clock: Callable[[], str] = iso_now):
        self.kv = kv
        self._clock = clock

    # ── Entitlement ────────────────────────────────────────────────────

    async def get_entitlement(self, fid: int) -> Optional[dict]:
        return await self.kv.get(entitlement_key(fid))

    async def grant_entitlement(self, fid: int, proof: Optional[str] = None) -> bool:
        """Write a fresh entitlement record. Re-granting overwrites the old one."""
        key = entitlement_key(fid)
        record = EntitlementRecord(identity=fid, granted_at=self._clock(), proof=proof)
        ok = await self.kv.set(key, record.to_record())
        if ok:
            logger.info("Entitlement granted for fid %s", fid)
        return ok

    async def is_entitled(self, fid: int) -> bool:
        return await self.get_entitlement(fid) is not None

    # ── Preferences ────────────────────────────────────────────────────

    async def get_preferences(self, fid: int) -> Optional[dict]:
        return await self.kv.get(preferences_key(fid))

    async def set_preferences(self, fid: int, record: dict[str, Any]) -> bool:
        """Replace the whole record. updatedAt is always stamped here."""
        data = {k: v for k, v in record.items() if k != UPDATED_AT}
        data[UPDATED_AT] = self._clock()
        return await self.kv.set(preferences_key(fid), data)

    async def merge_preferences(self, fid: int, partial: dict[str, Any]) -> bool:
        """
        Shallow-merge `partial` over the stored record (or an empty one).

        Fields in `partial` replace the stored value wholesale, other stored
        fields are kept. The read and the write are separate store calls with
        no lock in between: two concurrent merges for the same fid race and the
        later write wins.
        """
        existing = await self.get_preferences(fid)
        if not isinstance(existing, dict):
            existing = {}
        merged = {**existing, **{k: v for k, v in partial.items() if k != UPDATED_AT}}
        merged[UPDATED_AT] = self._clock()
        return await self.kv.set(preferences_key(fid), merged)

    async def delete_preferences(self, fid: int) -> bool:
        return await self.kv.delete(preferences_key(fid))
