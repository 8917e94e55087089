"""Helpers for resolving definition file locations."""
from __future__ import annotations

import os
from pathlib import Path

DEFINITIONS_ENV_VAR = "GRIDWAR_DEFINITIONS"


def get_repo_root() -> Path:
    """Return the repository root (three levels above the package)."""
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing jobs.json and stages.json.

    An explicit ``base_path`` wins over the GRIDWAR_DEFINITIONS variable,
    which wins over ``<repo>/data/definitions``.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.environ.get(DEFINITIONS_ENV_VAR)
    if override:
        return Path(override)
    return get_repo_root() / "data" / "definitions"
