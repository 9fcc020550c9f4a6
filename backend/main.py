"""
Showcase Backend API
Mint status and profile preferences for the gallery mini app.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import entitlements_router, health_router, preferences_router
from config import Settings, get_settings
from kv import LazyKVClient
from preferences import PreferencesGate
from store import PreferencesStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_gate(settings: Optional[Settings] = None) -> PreferencesGate:
    """Wire KV client -> store -> gate. The KV backend is resolved on first request."""
    return PreferencesGate(PreferencesStore(LazyKVClient.from_settings(settings)))


def create_app(gate: Optional[PreferencesGate] = None) -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.gate = gate or build_gate(settings)
    app.include_router(health_router)
    app.include_router(entitlements_router)
    app.include_router(preferences_router)
    logger.info("%s %s ready (KV backend: %s)", settings.APP_TITLE, settings.APP_VERSION, settings.SHOWCASE_KV_BACKEND)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
