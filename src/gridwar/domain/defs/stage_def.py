"""Stage definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from gridwar.core.types import SkillCategoryId


@dataclass(frozen=True, slots=True)
class PlayerCreatureDef:
    """A creature the player brings into the battle as a card."""

    job_id: str
    skill_category_id: SkillCategoryId


@dataclass(frozen=True, slots=True)
class AppearanceDef:
    """Computer-side creatures entering the board on a given turn."""

    turn_number: int
    job_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StageDef:
    """Describes the starting setup of one battle."""

    id: str
    name: str
    headquarters_life_points: int
    player_creatures: Tuple[PlayerCreatureDef, ...]
    appearances: Tuple[AppearanceDef, ...]
    rows: int | None = None
    cols: int | None = None
