"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — explicit overrides from the host application
  2. Env vars      — ``MODELGUARD_*`` prefix, ``__`` for nested sections
  3. TOML file     — ``modelguard.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from modelguard.config.discovery import find_config
from modelguard.config.models import LoggingConfig, MetadataConfig


class ConfigFileError(ValueError):
    """The discovered config file could not be parsed."""


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``modelguard.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigFileError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class ModelguardSettings(BaseSettings):
    """Frozen settings for the validation engine.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        metadata: Where the metadata provider finds constraint markers.
        logging: Verbosity and renderer for :func:`configure_logging`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MODELGUARD_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | str | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ModelguardSettings:
        """Construct settings, discovering ``modelguard.toml`` if needed.

        An explicit *config_path* that does not exist is ignored, the same
        as no file at all.
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
