"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, restcore.toml only contains
overrides. An empty file yields a working in-memory server.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """[application.db] section."""

    model_config = {"frozen": True}

    url: str = "sqlite://"
    echo: bool = False


class CacheConfig(BaseModel):
    """[application.cache] section."""

    model_config = {"frozen": True}

    driver: str = "memory"
    ttl: int = 0


class ApplicationConfig(BaseModel):
    """[application] section.

    ``events`` and ``filters`` are lists of ``{hook_name: reference}``
    tables. A reference is either a callable or a ``"module:attribute"``
    string resolved at startup.
    """

    model_config = {"frozen": True}

    path: str = "/"
    output: str = "json"
    allow_output_extensions: bool = True
    plugins_dir: str | None = None
    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    events: list[dict[str, Any]] = Field(default_factory=list)
    filters: list[dict[str, Any]] = Field(default_factory=list)


class HttpConfig(BaseModel):
    """[http] section."""

    model_config = {"frozen": True}

    version: str = "1.1"
