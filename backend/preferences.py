"""
Entitlement-gated preference actions.

This is what the routes call. Only identities with an entitlement record (users
who minted their profile) may load or write preferences; the entitlement check
always runs before any preferences key is touched. Results are plain
dataclasses, so expected failures never surface as exceptions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from schemas.records import field_key, normalize_fields
from store import PreferencesStore

logger = logging.getLogger(__name__)

MINT_REQUIRED = "Only minted users can save preferences"


@dataclass
class LoadResult:
    preferences: Optional[dict]
    entitled: bool

    def to_dict(self) -> dict:
        return {"preferences": self.preferences, "entitled": self.entitled}


@dataclass
class WriteResult:
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"success": self.success}
        if self.error:
            out["error"] = self.error
        return out


@dataclass
class EntitlementStatus:
    entitled: bool
    record: Optional[dict]

    def to_dict(self) -> dict:
        return {"entitled": self.entitled, "record": self.record}


class PreferencesGate:
    def __init__(self, store: PreferencesStore):
        self.store = store

    async def _denied(self, fid: int) -> Optional[WriteResult]:
        if await self.store.is_entitled(fid):
            return None
        logger.info("Preferences write refused for fid %s: not minted", fid)
        return WriteResult(success=False, error=MINT_REQUIRED)

    # Entitlement (not gated)

    async def check_entitlement(self, fid: int) -> EntitlementStatus:
        record = await self.store.get_entitlement(fid)
        return EntitlementStatus(entitled=record is not None, record=record)

    async def record_entitlement(self, fid: int, proof: Optional[str] = None) -> WriteResult:
        return WriteResult(success=await self.store.grant_entitlement(fid, proof))

    # Preferences (gated)

    async def load_preferences(self, fid: int) -> LoadResult:
        """Non-entitled identities have no preferences; the store is not read for them."""
        if not await self.store.is_entitled(fid):
            return LoadResult(preferences=None, entitled=False)
        return LoadResult(preferences=await self.store.get_preferences(fid), entitled=True)

    async def save_preferences(self, fid: int, record: dict[str, Any]) -> WriteResult:
        record = normalize_fields(record)
        denied = await self._denied(fid)
        if denied:
            return denied
        return WriteResult(success=await self.store.set_preferences(fid, record))

    async def update_one_field(self, fid: int, field: str, value: Any) -> WriteResult:
        key = field_key(field)
        return await self._merge(fid, {key: value})

    async def update_fields(self, fid: int, partial: dict[str, Any]) -> WriteResult:
        return await self._merge(fid, normalize_fields(partial))

    async def clear_preferences(self, fid: int) -> WriteResult:
        denied = await self._denied(fid)
        if denied:
            return denied
        return WriteResult(success=await self.store.delete_preferences(fid))

    async def _merge(self, fid: int, partial: dict[str, Any]) -> WriteResult:
        denied = await self._denied(fid)
        if denied:
            return denied
        return WriteResult(success=await self.store.merge_preferences(fid, partial))
