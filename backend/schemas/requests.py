"""Request body models for Showcase API."""

from typing import Any, Optional

from pydantic import BaseModel


class EntitlementGrant(BaseModel):
    # Opaque external reference such as a mint transaction hash
    proof: Optional[str] = None


class FieldUpdate(BaseModel):
    value: Any = None
