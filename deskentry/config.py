"""
deskentry Configuration
=======================
Centralized settings for decoding, locale resolution and matching.

Values are loaded from:
1. Defaults declared on `Settings`
2. A `.env` file in the working directory (optional)
3. Environment variables prefixed with DESKENTRY_ (e.g. DESKENTRY_MIN_SCORE=0.8)

List settings take plain strings:
    DESKENTRY_DEFAULT_LOCALES=fr_FR,fr      (',' or ':' separated)
    DESKENTRY_SEARCH_PATHS=/opt/apps:/srv/apps
"""
from __future__ import annotations

import os
import re
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings with defaults matching the desktop entry conventions."""

    model_config = SettingsConfigDict(
        env_prefix="DESKENTRY_",
        env_file=".env",
        extra="ignore",
    )

    # Decoding
    default_locales: Annotated[List[str], NoDecode] = []
    strict_groups: bool = False

    # Translation hook
    use_gettext: bool = True
    gettext_localedir: Optional[str] = None

    # Identifier matching
    min_score: float = Field(default=0.7, ge=0.0, le=1.0)
    min_entropy: float = Field(default=0.15, ge=0.0, le=1.0)
    min_score_at_entropy: float = Field(default=0.2, ge=0.0, le=1.0)

    # Discovery / search
    search_paths: Annotated[List[str], NoDecode] = []
    cache_ttl: int = 300  # seconds
    loader_workers: int = 4

    log_level: str = "INFO"

    @field_validator("default_locales", mode="before")
    @classmethod
    def _split_locales(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in re.split(r"[,:]", value) if part.strip()]
        return value

    @field_validator("search_paths", mode="before")
    @classmethod
    def _split_paths(cls, value):
        if isinstance(value, str):
            return [part for part in value.split(os.pathsep) if part]
        return value


# Singleton settings instance
settings = Settings()
