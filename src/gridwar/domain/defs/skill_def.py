"""Skill definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from gridwar.core.types import SkillCategoryId


@dataclass(frozen=True, slots=True)
class SkillDef:
    """A skill a creature can invoke; its category selects the behaviour."""

    id: str
    skill_category_id: SkillCategoryId
