"""Config file discovery.

Walk-up finder locates modelguard.toml, similar to how git finds .git/.
The MODELGUARD_CONFIG env var overrides the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "modelguard.toml"
CONFIG_ENV_VAR = "MODELGUARD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for modelguard.toml.

    Returns the path to the config file, or None if not found. An env
    override pointing at a missing file also yields None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent
