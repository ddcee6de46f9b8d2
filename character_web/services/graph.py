"""Graph view building: turns a campaign snapshot into the nodes and links to draw.

Every function here is pure.  Inputs are treated as a read-only snapshot that
callers may share between evaluations; results are new lists.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from character_web.models.entities import Entity, EntityType, Relationship
from character_web.models.graph import (
    EntityRelationships,
    FilterState,
    GraphViewResult,
    Grouping,
    ViewMode,
)

logger = logging.getLogger(__name__)

_VIEW_MODE_TYPES: dict[ViewMode, EntityType | None] = {
    ViewMode.characters: EntityType.character,
    ViewMode.organisations: EntityType.organisation,
    ViewMode.all: None,
}


# ------------------------------------------------------------------
# Entity filters
# ------------------------------------------------------------------

def _matches_search(entity: Entity, query: str) -> bool:
    if query in entity.name.lower():
        return True
    if entity.title and query in entity.title.lower():
        return True
    return any(query in tag.lower() for tag in entity.tags)


def _allowed(value: str | None, allow: frozenset[str]) -> bool:
    """Allow-set check; an empty set or an entity without the attribute passes."""
    return not allow or not value or value in allow


def _passes_attribute_filters(entity: Entity, filters: FilterState, query: str) -> bool:
    if query and not _matches_search(entity, query):
        return False
    return (
        _allowed(entity.faction, filters.factions)
        and _allowed(entity.location, filters.locations)
        and _allowed(entity.status, filters.statuses)
    )


def filter_entities(entities: Iterable[Entity], filters: FilterState) -> list[Entity]:
    """Apply the view-mode partition and attribute filters to *entities*."""
    wanted_type = _VIEW_MODE_TYPES[filters.view_mode]
    query = filters.search_query.strip().lower()
    return [
        entity
        for entity in entities
        if (wanted_type is None or entity.entity_type == wanted_type)
        and _passes_attribute_filters(entity, filters, query)
    ]


def surviving_links(
    relationships: Iterable[Relationship],
    node_ids: set[str] | frozenset[str],
    relationship_types: frozenset[str] = frozenset(),
) -> list[Relationship]:
    """Relationships with both endpoints in *node_ids* and an allowed type."""
    links: list[Relationship] = []
    dropped = 0
    for rel in relationships:
        if rel.source_entity_id not in node_ids or rel.target_entity_id not in node_ids:
            dropped += 1
            continue
        if relationship_types and rel.type not in relationship_types:
            continue
        links.append(rel)
    if dropped:
        logger.debug("Dropped %d relationships with an endpoint outside the view", dropped)
    return links


# ------------------------------------------------------------------
# Graph view
# ------------------------------------------------------------------

def build_graph_view(
    entities: Sequence[Entity],
    relationships: Sequence[Relationship],
    filters: FilterState | None = None,
) -> GraphViewResult:
    """Compute the visible nodes and links for a snapshot under *filters*.

    The stages narrow the candidate set in order: entity-kind partition,
    attribute filters, relationship survival (with the relationship-type
    allow-set), then multi-select.  When two or more known entities are
    selected, the view shows exactly those entities and the surviving links
    running between them.  Unknown selected IDs are ignored.
    """
    filters = filters or FilterState()

    nodes = filter_entities(entities, filters)
    node_ids = {entity.id for entity in nodes}
    links = surviving_links(relationships, node_ids, filters.relationship_types)

    known_ids = {entity.id for entity in entities}
    selected = filters.selected_entity_ids & known_ids
    if len(selected) >= 2:
        nodes = [entity for entity in nodes if entity.id in selected]
        links = [
            rel
            for rel in links
            if rel.source_entity_id in selected and rel.target_entity_id in selected
        ]

    groups = _member_groups(nodes) if filters.grouping == Grouping.expanded else {}

    logger.debug(
        "Graph view: %d/%d nodes, %d/%d links (mode=%s, selected=%d)",
        len(nodes),
        len(entities),
        len(links),
        len(relationships),
        filters.view_mode,
        len(selected),
    )
    return GraphViewResult(nodes=nodes, links=links, groups=groups)


def _member_groups(nodes: Sequence[Entity]) -> dict[str, list[str]]:
    """Visible organisation ID -> visible member character IDs."""
    groups: dict[str, list[str]] = {
        node.id: [] for node in nodes if node.entity_type == EntityType.organisation
    }
    for node in nodes:
        if node.entity_type != EntityType.character:
            continue
        for org_id in dict.fromkeys(node.organisations):
            if org_id in groups:
                groups[org_id].append(node.id)
    return groups


# ------------------------------------------------------------------
# Focus / detail-panel queries
# ------------------------------------------------------------------

def expand_focus(
    entity_id: str,
    nodes: Sequence[Entity],
    links: Sequence[Relationship],
) -> set[str]:
    """Return *entity_id* plus every entity one link away from it.

    Only links between two of *nodes* count.  An *entity_id* that is not among
    *nodes* yields an empty set.
    """
    node_ids = {node.id for node in nodes}
    if entity_id not in node_ids:
        return set()

    focus = {entity_id}
    for rel in links:
        source, target = rel.endpoints
        if source not in node_ids or target not in node_ids:
            continue
        if source == entity_id:
            focus.add(target)
        elif target == entity_id:
            focus.add(source)
    return focus


def entity_relationships(
    entity_id: str,
    links: Iterable[Relationship],
    relationship_types: Iterable[str] = (),
) -> EntityRelationships:
    """Split one entity's links into outgoing and incoming.

    A self-relationship is reported once, as outgoing.
    """
    allowed = frozenset(relationship_types)
    outgoing: list[Relationship] = []
    incoming: list[Relationship] = []
    for rel in links:
        if allowed and rel.type not in allowed:
            continue
        if rel.source_entity_id == entity_id:
            outgoing.append(rel)
        elif rel.target_entity_id == entity_id:
            incoming.append(rel)
    return EntityRelationships(entity_id=entity_id, outgoing=outgoing, incoming=incoming)
