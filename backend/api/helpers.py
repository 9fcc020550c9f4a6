"""Shared helpers for API routes (defaults, result responses)."""

from typing import Optional

from fastapi.responses import JSONResponse

from preferences import WriteResult
from schemas.records import SECTION_IDS

DEFAULT_PREFERENCES = {
    "colorTheme": "ocean",
    "font": "default",
    "displayMode": "dark",
    "language": "en",
    "extendedBio": "",
    "featuredNftIds": [],
    "featuredCastHash": None,
    "projects": [],
    "sectionOrder": list(SECTION_IDS),
    "updatedAt": "",
}


def resolve_preferences(stored: Optional[dict]) -> dict:
    """Overlay a stored record on the defaults, as the profile page renders it."""
    resolved = {**DEFAULT_PREFERENCES, **(stored or {})}
    order = [s for s in (resolved.get("sectionOrder") or []) if s in SECTION_IDS]
    # Sections missing from a saved order are appended in default order
    order += [s for s in SECTION_IDS if s not in order]
    resolved["sectionOrder"] = list(dict.fromkeys(order))
    return resolved


def write_response(result: WriteResult) -> JSONResponse:
    """403 for an entitlement refusal, 200 otherwise (success may still be false)."""
    return JSONResponse(result.to_dict(), status_code=403 if result.error else 200)
