"""Pydantic schemas for graph filtering requests and the views they produce."""

from __future__ import annotations

from enum import StrEnum

from pydantic import ConfigDict, Field

from character_web.models.entities import CamelModel, Entity, Relationship


class ViewMode(StrEnum):
    """Which entity kinds the web shows."""

    characters = "characters"
    organisations = "organisations"
    all = "all"


class Grouping(StrEnum):
    """Whether organisations are drawn alone or together with their members."""

    collapsed = "collapsed"
    expanded = "expanded"


# ---------------------------------------------------------------------------
# Filter state
# ---------------------------------------------------------------------------

class FilterState(CamelModel):
    """What the viewer currently wants to see.

    An empty allow-set means *no restriction* for that category.
    """

    model_config = ConfigDict(frozen=True)

    search_query: str = ""
    factions: frozenset[str] = frozenset()
    locations: frozenset[str] = frozenset()
    statuses: frozenset[str] = frozenset()
    relationship_types: frozenset[str] = frozenset()
    view_mode: ViewMode = ViewMode.all
    grouping: Grouping = Grouping.collapsed
    selected_entity_ids: frozenset[str] = frozenset()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class GraphViewResult(CamelModel):
    """The nodes and links that should be drawn."""

    nodes: list[Entity] = Field(default_factory=list)
    links: list[Relationship] = Field(default_factory=list)
    groups: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Organisation ID -> visible member character IDs (expanded grouping only)",
    )


class EntityRelationships(CamelModel):
    """One entity's links, split by direction."""

    entity_id: str
    outgoing: list[Relationship] = Field(default_factory=list)
    incoming: list[Relationship] = Field(default_factory=list)


class RelationshipDescription(CamelModel):
    """Label and colour for one relationship, ready for a detail panel."""

    label: str
    color: str
    strength: int
    category: str | None = None


class LegendEntry(CamelModel):
    type: str
    color: str
    graded: bool


# ---------------------------------------------------------------------------
# Request / response wrappers for the HTTP layer
# ---------------------------------------------------------------------------

class GraphSnapshot(CamelModel):
    """An immutable copy of a campaign's entities and relationships."""

    entities: list[Entity] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)


class GraphViewRequest(GraphSnapshot):
    filters: FilterState = Field(default_factory=FilterState)


class StyledLink(Relationship):
    """A relationship decorated with its classifier output."""

    label: str
    color: str


class GraphViewResponse(CamelModel):
    nodes: list[Entity]
    links: list[StyledLink]
    groups: dict[str, list[str]] = Field(default_factory=dict)


class FocusResponse(CamelModel):
    entity_id: str
    ids: list[str]


class EntityRelationshipsResponse(CamelModel):
    entity_id: str
    outgoing: list[StyledLink]
    incoming: list[StyledLink]
