from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from api.deps import get_gate
from config import get_settings
from preferences import PreferencesGate

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(gate: Annotated[PreferencesGate, Depends(get_gate)]):
    settings = get_settings()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
        "kv": "ok" if gate.store.kv.available else "unavailable",
    }
