"""Shared fixtures for the Character Web test suite.

The service holds no connections, so the only thing isolated here is the
settings object: every test gets defaults, untouched by the ambient
environment or a stray ``.env`` file.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from character_web.config import Settings
from character_web.models.entities import Entity, EntityType, Relationship

# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_character(id: str, name: str | None = None, **fields: Any) -> Entity:
    return Entity(id=id, name=name or id.title(), entity_type=EntityType.character, **fields)


def make_organisation(id: str, name: str | None = None, **fields: Any) -> Entity:
    return Entity(id=id, name=name or id.title(), entity_type=EntityType.organisation, **fields)


def make_link(
    id: str,
    source: Entity,
    target: Entity,
    type: str = "friendly",
    strength: int = 3,
) -> Relationship:
    return Relationship(
        id=id,
        source_entity_id=source.id,
        source_entity_type=source.entity_type,
        target_entity_id=target.id,
        target_entity_type=target.entity_type,
        type=type,
        strength=strength,
    )


# ---------------------------------------------------------------------------
# Hero / Sidekick / Guild scenario
# ---------------------------------------------------------------------------


@pytest.fixture()
def hero() -> Entity:
    return make_character("hero", "Hero", title="The Bold", tags="brave, sword")


@pytest.fixture()
def sidekick() -> Entity:
    return make_character("sidekick", "Sidekick")


@pytest.fixture()
def guild() -> Entity:
    return make_organisation("guild", "Guild")


@pytest.fixture()
def scenario_entities(hero: Entity, sidekick: Entity, guild: Entity) -> list[Entity]:
    return [hero, sidekick, guild]


@pytest.fixture()
def scenario_links(hero: Entity, sidekick: Entity, guild: Entity) -> list[Relationship]:
    return [
        make_link("hero-sidekick", hero, sidekick, type="friend", strength=8),
        make_link("hero-guild", hero, guild, type="member", strength=10),
    ]


# ---------------------------------------------------------------------------
# A richer campaign for filter tests
# ---------------------------------------------------------------------------


@pytest.fixture()
def campaign() -> tuple[list[Entity], list[Relationship]]:
    """Four characters across two factions plus two organisations."""
    aria = make_character(
        "aria", "Aria Vell", title="Spymaster", faction="Crown",
        location="Capital", status="alive", tags=["spy", "noble"],
        organisations=["watch"],
    )
    bram = make_character(
        "bram", "Bram Stoke", faction="Crown", location="Harbour",
        status="dead", organisations=["watch", "guild"],
    )
    cass = make_character(
        "cass", "Cass Dune", title="Smuggler", faction="Syndicate",
        location="Harbour", status="alive", tags="smuggler",
        organisations=["guild"],
    )
    dorn = make_character("dorn", "Dorn", status="unknown")
    watch = make_organisation("watch", "City Watch")
    guild = make_organisation("guild", "Thieves Guild")

    entities = [aria, bram, cass, dorn, watch, guild]
    links = [
        make_link("r1", aria, bram, "friendly", 4),
        make_link("r2", bram, cass, "hostile", 2),
        make_link("r3", cass, guild, "friendly", 5),
        make_link("r4", watch, guild, "hostile", 5),
        make_link("r5", aria, watch, "neutral", 1),
        make_link("r6", dorn, aria, "hostile", 3),
    ]
    return entities, links


# ---------------------------------------------------------------------------
# Settings / HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture()
def settings() -> Settings:
    """Default settings, isolated from the ambient environment."""
    with patch.dict("os.environ", {}, clear=True):
        return Settings(_env_file=None)


@asynccontextmanager
async def _noop_lifespan(app: Any) -> AsyncGenerator[None, None]:
    """A lifespan that does nothing — logging is left to pytest."""
    yield


@pytest_asyncio.fixture()
async def async_client(settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the FastAPI app with fixed settings."""
    with (
        patch("character_web.routers.graph.get_settings", return_value=settings),
        patch("character_web.routers.relationships.get_settings", return_value=settings),
        patch("character_web.main.get_settings", return_value=settings),
    ):
        from character_web.main import app

        app.router.lifespan_context = _noop_lifespan

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


def snapshot_payload(entities: list[Entity], links: list[Relationship]) -> dict[str, Any]:
    """Serialise a snapshot the way the web client sends it (camelCase)."""
    return {
        "entities": [e.model_dump(mode="json", by_alias=True) for e in entities],
        "relationships": [r.model_dump(mode="json", by_alias=True) for r in links],
    }
