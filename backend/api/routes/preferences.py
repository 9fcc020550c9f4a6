"""Profile preferences: load, save, partial update, clear. Minted users only."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.deps import Fid, get_gate
from api.helpers import resolve_preferences, write_response
from preferences import PreferencesGate
from schemas.records import UPDATED_AT, Preferences, field_key
from schemas.requests import FieldUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/preferences", tags=["preferences"])

Gate = Annotated[PreferencesGate, Depends(get_gate)]


@router.get("/{fid}")
async def load_preferences(fid: Fid, gate: Gate):
    result = await gate.load_preferences(fid)
    out = result.to_dict()
    out["resolved"] = resolve_preferences(result.preferences)
    return JSONResponse(out)


@router.put("/{fid}")
async def save_preferences(fid: Fid, body: Preferences, gate: Gate):
    """Replace the whole record."""
    return write_response(await gate.save_preferences(fid, body.to_record()))


@router.patch("/{fid}")
async def update_preferences(fid: Fid, body: Preferences, gate: Gate):
    """Merge the provided fields over the stored record."""
    return write_response(await gate.update_fields(fid, body.to_record()))


@router.patch("/{fid}/{field}")
async def update_preference(fid: Fid, field: str, body: FieldUpdate, gate: Gate):
    try:
        key = field_key(field)
    except ValueError as e:
        raise HTTPException(422, str(e))
    if key == UPDATED_AT:
        raise HTTPException(422, "updatedAt is set by the server")
    try:
        value = Preferences.model_validate({key: body.value}).to_record()[key]
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    return write_response(await gate.update_one_field(fid, key, value))


@router.delete("/{fid}")
async def clear_preferences(fid: Fid, gate: Gate):
    return write_response(await gate.clear_preferences(fid))
