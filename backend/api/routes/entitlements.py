"""Mint status: check and record."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.deps import Fid, get_gate
from preferences import PreferencesGate
from schemas.requests import EntitlementGrant

router = APIRouter(prefix="/api/entitlements", tags=["entitlements"])


@router.get("/{fid}")
async def check_entitlement(fid: Fid, gate: Annotated[PreferencesGate, Depends(get_gate)]):
    status = await gate.check_entitlement(fid)
    return JSONResponse(status.to_dict())


@router.post("/{fid}")
async def record_entitlement(
    fid: Fid,
    gate: Annotated[PreferencesGate, Depends(get_gate)],
    body: Optional[EntitlementGrant] = None,
):
    """Called after a successful mint payment. Not gated: this is what grants access."""
    result = await gate.record_entitlement(fid, body.proof if body else None)
    return JSONResponse(result.to_dict())
