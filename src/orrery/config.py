"""Lightweight configuration for the Orrery board service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    rules_version: str = Field(default="1.0", description="Ruleset version used by the domain")
    initial_level1_angle: int = Field(default=0, description="Starting angle of the level 1 ring")
    initial_level2_angle: int = Field(default=0, description="Starting angle of the level 2 ring")
    initial_level3_angle: int = Field(default=0, description="Starting angle of the level 3 ring")
    initial_rotation_level: int = Field(
        default=1,
        ge=1,
        le=3,
        description="Level turned by the first round-triggered rotation",
    )
    setup_seed: str | None = Field(
        default=None,
        description="When set, starting sectors are drawn from this seed instead of the angles",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
