"""
Stored record shapes.

Records live in the KV store as plain JSON objects with camelCase keys. Every
preference field is optional and unset fields are omitted from the stored
object; an explicit null (e.g. featuredCastHash) is kept.
"""

from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SECTION_IDS = ("about", "nfts", "holdings", "cast", "projects")
MAX_PROJECTS = 5
MAX_FEATURED_NFTS = 6

SectionId = Literal["about", "nfts", "holdings", "cast", "projects"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class EntitlementRecord(CamelModel):
    """Proof that an identity minted its profile. Presence is what matters."""

    identity: int
    granted_at: str
    proof: Optional[str] = None

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Project(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    url: str
    type: Literal["website", "miniapp", "channel", "other"]
    image_url: Optional[str] = None


class Preferences(CamelModel):
    # Theme
    color_theme: Optional[str] = None
    font: Optional[str] = None
    display_mode: Optional[Literal["dark", "light"]] = None

    language: Optional[str] = None
    extended_bio: Optional[str] = None

    # Featured content
    featured_nft_ids: Optional[Annotated[list[str], Field(max_length=MAX_FEATURED_NFTS)]] = None
    featured_cast_hash: Optional[str] = None

    projects: Optional[Annotated[list[Project], Field(max_length=MAX_PROJECTS)]] = None
    section_order: Optional[list[SectionId]] = None

    # Set by the store on every write; anything sent by a client is discarded.
    updated_at: Optional[str] = None

    def to_record(self) -> dict:
        """Only the fields that were actually provided, under their stored names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# Stored (camelCase) name for every preference field, keyed by both spellings.
_FIELD_NAMES: dict[str, str] = {}
for _name in Preferences.model_fields:
    _FIELD_NAMES[_name] = _FIELD_NAMES[to_camel(_name)] = to_camel(_name)

UPDATED_AT = "updatedAt"


def field_key(name: str) -> str:
    """Map a preference field name (camelCase or snake_case) to its stored key."""
    key = _FIELD_NAMES.get(name)
    if key is None:
        raise ValueError(f"Unknown preference field: {name!r}")
    return key


def normalize_fields(values: dict[str, Any]) -> dict[str, Any]:
    """Rename keys to their stored names. Unknown keys are a caller bug."""
    return {field_key(k): v for k, v in values.items()}
