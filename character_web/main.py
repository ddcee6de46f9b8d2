"""Character Web API — FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from character_web.config import get_settings
from character_web.routers import graph, relationships

logger = logging.getLogger("character_web")

VERSION = "0.1.0"


def configure_logging(level: str) -> None:
    """Route every ``character_web.*`` logger through one stream handler."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# Lifespan — configure logging and report the active vocabulary
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown; the service holds no connections."""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(
        "Starting Character Web API (vocabulary=%s, max_snapshot_entities=%d)",
        settings.vocabulary.name,
        settings.max_snapshot_entities,
    )

    yield

    logger.info("Character Web API shut down")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Character Web API",
    description="Relationship classification and graph filtering for tabletop campaigns.",
    version=VERSION,
    lifespan=lifespan,
)

# -- Middleware ---------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- Routers ------------------------------------------------------------------

app.include_router(graph.router)
app.include_router(relationships.router)


# -- Root & health endpoints --------------------------------------------------

@app.get("/", tags=["meta"])
async def root() -> dict[str, str]:
    """Landing probe — returns service identity."""
    return {"name": "Character Web API", "version": VERSION}


@app.get("/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Health check; reports the relationship vocabulary in use."""
    return {"status": "healthy", "vocabulary": get_settings().vocabulary.name}
