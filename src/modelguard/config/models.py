"""Pydantic section models with code-baked defaults.

Sparse TOML contract: defaults live here, ``modelguard.toml`` only holds
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class MetadataConfig(BaseModel):
    """[metadata] section."""

    model_config = {"frozen": True}

    # Key in ``Column.info`` holding the constraint markers.
    info_key: str = "constraints"


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    format: Literal["console", "json"] = "console"
