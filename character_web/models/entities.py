"""Pydantic schemas for campaign entities and the relationships between them."""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class EntityType(StrEnum):
    """The two kinds of node that can appear on the character web."""

    character = "character"
    organisation = "organisation"


class CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase names used by the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

class Entity(CamelModel):
    """A character or an organisation.

    Everything except ``id``, ``entity_type`` and ``name`` is opaque payload,
    only inspected by the graph filters (faction, location, status, tags and
    the searchable text fields).
    """

    id: str = Field(..., description="Identifier, unique across both entity kinds")
    entity_type: EntityType = Field(..., description="character | organisation")
    name: str = Field(..., min_length=1, description="Display name")
    title: str | None = Field(default=None, description="Epithet or rank")
    description: str | None = None
    image_url: str | None = None
    faction: str | None = None
    location: str | None = None
    status: str | None = Field(default=None, description="alive | dead | unknown")
    tags: list[str] = Field(default_factory=list, description="Free-text tags")
    organisations: list[str] = Field(
        default_factory=list,
        description="IDs of the organisations a character belongs to",
    )
    x: float | None = None
    y: float | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        # Tags are stored as a single comma-separated column.
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

class Relationship(CamelModel):
    """A directed, typed edge between two entities.

    ``type`` is an open string: which values mean something is decided by the
    active relationship vocabulary, not by this schema.  ``strength`` is kept
    exactly as supplied; consumers clamp it to 1..5.
    """

    id: str
    source_entity_id: str
    source_entity_type: EntityType
    target_entity_id: str
    target_entity_type: EntityType
    type: str = Field(..., description="Relationship category, e.g. friendly")
    strength: int = Field(default=1, description="Intensity, nominally 1-5")
    description: str | None = None

    @field_validator("strength", mode="before")
    @classmethod
    def _coerce_strength(cls, value: Any) -> Any:
        if isinstance(value, float):
            if math.isnan(value):
                return 1
            if math.isinf(value):
                return 5 if value > 0 else 1
            return math.floor(value + 0.5)
        return value

    @property
    def endpoints(self) -> tuple[str, str]:
        return self.source_entity_id, self.target_entity_id
