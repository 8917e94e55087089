"""Reads one definition file (jobs.json, stages.json) into plain Python data."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import DataLoadError

logger = logging.getLogger(__name__)


def load_json(path: Path) -> object:
    """Parse ``path``; a missing, unreadable or malformed file becomes DataLoadError."""
    logger.debug("Reading battle definitions from %s", path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DataLoadError(f"No definition file at {path}.") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"{path} is not valid JSON (line {exc.lineno}, column {exc.colno}).") from exc
    except OSError as exc:
        raise DataLoadError(f"Could not read definition file {path}: {exc}") from exc
