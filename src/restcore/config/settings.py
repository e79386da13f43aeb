"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags or programmatic overrides
  2. Env vars: ``RESTCORE_*`` prefix, ``__`` for nested sections
  3. TOML file: ``restcore.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

The settings object is frozen. Code that needs a single value by its
dotted key (``application.db``, ``http.version``) goes through
:meth:`RestSettings.get`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from restcore.config.discovery import find_config
from restcore.config.models import ApplicationConfig, HttpConfig

DEVELOPMENT_MODE = "development"
PRODUCTION_MODE = "production"

_MISSING = object()


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``restcore.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RestSettings(BaseSettings):
    """Process-wide configuration for a restcore server.

    Attributes:
        config_path: The TOML file the settings were loaded from, if any.
        mode: ``"production"`` or ``"development"``. Development mode adds
            stack traces to 500 responses.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RESTCORE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False

    mode: Literal["production", "development"] = PRODUCTION_MODE

    # --- TOML sections ---
    application: ApplicationConfig = Field(default_factory=ApplicationConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

    @property
    def is_development(self) -> bool:
        return self.mode == DEVELOPMENT_MODE

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a value by dotted key, e.g. ``"application.cache.driver"``.

        Returns *default* when any part of the key is missing.
        """
        node: Any = self
        for part in key.split("."):
            if isinstance(node, BaseModel):
                node = getattr(node, part, _MISSING)
            elif isinstance(node, dict):
                node = node.get(part, _MISSING)
            else:
                return default
            if node is _MISSING:
                return default
        return node

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> RestSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given, otherwise walks up from
        *start* looking for ``restcore.toml``. *overrides* take priority
        over every other source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
