"""Graph view endpoints: filtered character web, focus expansion, detail panels."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from character_web.config import get_settings
from character_web.models.entities import Relationship
from character_web.models.graph import (
    EntityRelationshipsResponse,
    FocusResponse,
    GraphSnapshot,
    GraphViewRequest,
    GraphViewResponse,
    StyledLink,
)
from character_web.services.classifier import RelationshipVocabulary, classify
from character_web.services.graph import (
    build_graph_view,
    entity_relationships,
    expand_focus,
)

router = APIRouter(prefix="/graph", tags=["graph"])


def _check_size(snapshot: GraphSnapshot) -> None:
    limit = get_settings().max_snapshot_entities
    if len(snapshot.entities) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Snapshot holds {len(snapshot.entities)} entities; the limit is {limit}",
        )


def _styled(links: list[Relationship], vocabulary: RelationshipVocabulary) -> list[StyledLink]:
    styled: list[StyledLink] = []
    for rel in links:
        description = classify(rel, vocabulary)
        styled.append(
            StyledLink(
                **rel.model_dump(),
                label=description.label,
                color=description.color,
            )
        )
    return styled


# ---------------------------------------------------------------------------
# POST /graph/view — filtered nodes and links
# ---------------------------------------------------------------------------

@router.post("/view", response_model=GraphViewResponse)
async def graph_view(request: GraphViewRequest) -> GraphViewResponse:
    """Apply the viewer's filters to a campaign snapshot.

    Every returned link carries its descriptive ``label`` and ``color`` so the
    renderer can style edges without a second round-trip.
    """
    _check_size(request)
    result = build_graph_view(request.entities, request.relationships, request.filters)
    return GraphViewResponse(
        nodes=result.nodes,
        links=_styled(result.links, get_settings().vocabulary),
        groups=result.groups,
    )


# ---------------------------------------------------------------------------
# POST /graph/focus/{entity_id} — entity plus direct neighbours
# ---------------------------------------------------------------------------

@router.post("/focus/{entity_id}", response_model=FocusResponse)
async def graph_focus(entity_id: str, snapshot: GraphSnapshot) -> FocusResponse:
    """IDs of an entity and everything directly connected to it.

    The renderer dims every other node rather than removing it.
    """
    _check_size(snapshot)
    ids = expand_focus(entity_id, snapshot.entities, snapshot.relationships)
    if not ids:
        raise HTTPException(status_code=404, detail=f"Entity {entity_id} not in snapshot")
    return FocusResponse(entity_id=entity_id, ids=sorted(ids))


# ---------------------------------------------------------------------------
# POST /graph/relationships/{entity_id} — detail-panel relationship list
# ---------------------------------------------------------------------------

@router.post("/relationships/{entity_id}", response_model=EntityRelationshipsResponse)
async def graph_entity_relationships(
    entity_id: str,
    request: GraphViewRequest,
) -> EntityRelationshipsResponse:
    """Outgoing and incoming relationships of one entity, labelled and coloured."""
    _check_size(request)
    if not any(entity.id == entity_id for entity in request.entities):
        raise HTTPException(status_code=404, detail=f"Entity {entity_id} not in snapshot")

    split = entity_relationships(
        entity_id,
        request.relationships,
        request.filters.relationship_types,
    )
    vocabulary = get_settings().vocabulary
    return EntityRelationshipsResponse(
        entity_id=entity_id,
        outgoing=_styled(split.outgoing, vocabulary),
        incoming=_styled(split.incoming, vocabulary),
    )
