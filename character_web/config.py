"""Application settings backed by environment variables / .env file."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from character_web.services.classifier import RelationshipVocabulary, get_vocabulary


class Settings(BaseSettings):
    """Central configuration for the Character Web service.

    Values are read from environment variables first, then from a *.env* file
    in the working directory.  There is no prefix, so ``LOG_LEVEL`` maps to
    ``log_level`` (matching is case-insensitive).
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Relationship classification -------------------------------------------
    relationship_vocabulary: str = "simplified"

    # -- Request guards -------------------------------------------------------
    max_snapshot_entities: int = 10_000

    # -- Logging --------------------------------------------------------------
    log_level: str = "INFO"

    # -- API server -----------------------------------------------------------
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["*"]

    @field_validator("relationship_vocabulary")
    @classmethod
    def _known_vocabulary(cls, value: str) -> str:
        get_vocabulary(value)
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    # -- Derived helpers ------------------------------------------------------
    @property
    def vocabulary(self) -> RelationshipVocabulary:
        """The relationship vocabulary selected by ``relationship_vocabulary``."""
        return get_vocabulary(self.relationship_vocabulary)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
