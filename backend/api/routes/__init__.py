"""API route modules."""

from .health import router as health_router
from .entitlements import router as entitlements_router
from .preferences import router as preferences_router

__all__ = [
    "health_router",
    "entitlements_router",
    "preferences_router",
]
