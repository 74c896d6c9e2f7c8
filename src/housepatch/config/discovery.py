"""Config file discovery and reading.

Walk-up finder locates ``housepatch.toml`` the way git finds ``.git/``.
The ``HOUSEPATCH_CONFIG`` env var and the ``--config`` flag override it.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "housepatch.toml"
CONFIG_ENV_VAR = "HOUSEPATCH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``housepatch.toml``.

    Checks ``HOUSEPATCH_CONFIG`` first. Returns None if nothing is found.
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
        if current.parent == current:
            return None
        current = current.parent


def read_config(path: Path) -> dict[str, Any]:
    """Parse the TOML file at *path* into raw section data.

    Raises:
        tomllib.TOMLDecodeError: if the file is not valid TOML.
    """
    return tomllib.loads(path.read_text(encoding="utf-8"))
