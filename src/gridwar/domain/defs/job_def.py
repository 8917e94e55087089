"""Job definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from gridwar.core.types import RangeShapeKey


@dataclass(frozen=True, slots=True)
class AutoAttackRange:
    """Reach band of a job's auto-attack, measured in Manhattan distance."""

    range_shape_key: RangeShapeKey
    min_reach: int
    max_reach: int


@dataclass(frozen=True, slots=True)
class JobDef:
    """Describes the combat profile shared by every creature of a job."""

    id: str
    attack_power: int
    max_life_points: int
    raid_interval: int
    raid_power: int
    auto_attack_range: AutoAttackRange
    auto_attack_targets: int
