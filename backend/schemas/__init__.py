"""Pydantic schemas for stored records and API request bodies."""

from .records import (
    MAX_FEATURED_NFTS,
    MAX_PROJECTS,
    SECTION_IDS,
    UPDATED_AT,
    EntitlementRecord,
    Preferences,
    Project,
    field_key,
    normalize_fields,
)
from .requests import EntitlementGrant, FieldUpdate

__all__ = [
    "MAX_FEATURED_NFTS",
    "MAX_PROJECTS",
    "SECTION_IDS",
    "UPDATED_AT",
    "EntitlementRecord",
    "Preferences",
    "Project",
    "field_key",
    "normalize_fields",
    "EntitlementGrant",
    "FieldUpdate",
]
