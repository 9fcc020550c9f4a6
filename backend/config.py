"""
Showcase backend configuration.
Single source of truth for environment and app settings.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "Showcase API"
    APP_VERSION: str = "1.0.0"
    ALLOWED_ORIGINS: list[str]

    # Key-value backend: "vercel" | "file" | "memory" | "disabled"
    SHOWCASE_KV_BACKEND: Literal["vercel", "file", "memory", "disabled"] = "vercel"
    SHOWCASE_DATA_DIR: Path

    # Vercel KV (Upstash Redis REST). Missing values leave storage disabled.
    KV_REST_API_URL: str = ""
    KV_REST_API_TOKEN: str = ""
    KV_TIMEOUT_SECONDS: float = 10.0

    def __init__(self):
        origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000")
        self.ALLOWED_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        backend = (os.environ.get("SHOWCASE_KV_BACKEND") or "vercel").strip().lower()
        if backend not in ("vercel", "file", "memory", "disabled"):
            backend = "vercel"
        self.SHOWCASE_KV_BACKEND = backend
        self.SHOWCASE_DATA_DIR = Path(os.environ.get("SHOWCASE_DATA_DIR", "data"))
        self.KV_REST_API_URL = (os.environ.get("KV_REST_API_URL") or "").strip().rstrip("/")
        self.KV_REST_API_TOKEN = (os.environ.get("KV_REST_API_TOKEN") or "").strip()
        try:
            self.KV_TIMEOUT_SECONDS = float(os.environ.get("KV_TIMEOUT_SECONDS") or 10)
        except ValueError:
            self.KV_TIMEOUT_SECONDS = 10.0

    @property
    def kv_configured(self) -> bool:
        """True when Vercel KV REST credentials are present."""
        return bool(self.KV_REST_API_URL and self.KV_REST_API_TOKEN)
