"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``housepatch.toml`` only
contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: Path = Path(".housepatch/houses.db")
    echo: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = 120
