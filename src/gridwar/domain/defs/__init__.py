"""Definition dataclasses loaded from JSON."""

from .job_def import AutoAttackRange, JobDef
from .skill_def import SkillDef
from .stage_def import AppearanceDef, PlayerCreatureDef, StageDef

__all__ = [
    "AppearanceDef",
    "AutoAttackRange",
    "JobDef",
    "PlayerCreatureDef",
    "SkillDef",
    "StageDef",
]
