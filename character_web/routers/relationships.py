"""Relationship classification endpoints: labels, colours, legend."""

from __future__ import annotations

from fastapi import APIRouter, Query

from character_web.config import get_settings
from character_web.models.entities import EntityType
from character_web.models.graph import LegendEntry, RelationshipDescription
from character_web.services.classifier import (
    clamp_strength,
    color_for,
    describe_relationship,
    legend,
)

router = APIRouter(prefix="/relationships", tags=["relationships"])


# ---------------------------------------------------------------------------
# GET /relationships/describe — label and colour for one relationship
# ---------------------------------------------------------------------------

@router.get("/describe", response_model=RelationshipDescription)
async def describe(
    type: str = Query(..., description="Relationship type, e.g. friendly"),
    strength: int = Query(default=3, description="Intensity; clamped to 1-5"),
    source_type: EntityType = Query(default=EntityType.character),
    target_type: EntityType = Query(default=EntityType.character),
) -> RelationshipDescription:
    """Describe a relationship without needing a stored record.

    Out-of-range strengths are clamped, never rejected.  Unknown types come
    back with a fallback label and the default colour.
    """
    vocabulary = get_settings().vocabulary
    category = vocabulary.category_of(type)
    return RelationshipDescription(
        label=describe_relationship(type, strength, source_type, target_type, vocabulary),
        color=color_for(type, strength, vocabulary),
        strength=clamp_strength(strength),
        category=category.value if category else None,
    )


# ---------------------------------------------------------------------------
# GET /relationships/legend and /relationships/types
# ---------------------------------------------------------------------------

@router.get("/legend", response_model=list[LegendEntry])
async def relationship_legend() -> list[LegendEntry]:
    """Legend rows for the active vocabulary."""
    return legend(get_settings().vocabulary)


@router.get("/types")
async def relationship_types() -> dict[str, str | list[str]]:
    """The relationship types the active vocabulary knows about."""
    vocabulary = get_settings().vocabulary
    return {"vocabulary": vocabulary.name, "types": vocabulary.types}
