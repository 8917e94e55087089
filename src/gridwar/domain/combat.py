"""Damage, healing, normal attacks and skills."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from gridwar.core.types import SkillCategoryId
from gridwar.domain.defs import JobDef, SkillDef
from gridwar.domain.errors import UnsupportedSkillCategoryError
from gridwar.domain.game import BattleConstants
from gridwar.domain.grid import Grid
from gridwar.domain.roster import (
    Creature,
    Party,
    find_creature_by_id,
    get_attack_power,
    replace_creatures,
    update_life_points,
)
from gridwar.domain.targeting import CreatureOnSquare, TargetingResult, resolve_targets

NORMAL_ATTACK_REACH = 1
NORMAL_ATTACK_TARGETS = 1


@dataclass(frozen=True, slots=True)
class SkillParameters:
    reach: int
    max_targets: int
    damage: int


SKILL_PARAMETERS: Dict[SkillCategoryId, SkillParameters] = {
    "attack": SkillParameters(reach=2, max_targets=99, damage=3),
}


@dataclass(frozen=True, slots=True)
class SkillContext:
    """Everything a skill needs to resolve against the current board."""

    constants: BattleConstants
    skill: SkillDef
    creatures: Tuple[Creature, ...]
    parties: Tuple[Party, ...]
    grid: Grid
    invoker_creature_id: str


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Updated roster plus the targets that were hit, in the order they were hit."""

    creatures: Tuple[Creature, ...]
    targeting: TargetingResult


def apply_damage(creature: Creature, amount: int, jobs: Sequence[JobDef]) -> Creature:
    return update_life_points(creature, -amount, jobs)


def apply_healing(creature: Creature, amount: int, jobs: Sequence[JobDef]) -> Creature:
    return update_life_points(creature, amount, jobs)


def resolve_attack(
    creatures: Sequence[Creature],
    targets: Sequence[CreatureOnSquare],
    damage_per_target: int,
    jobs: Sequence[JobDef],
) -> Tuple[Creature, ...]:
    """
    Apply ``damage_per_target`` to every target independently.

    Targets already at 0 life points still receive the hit; nothing is
    dropped from the batch when a target dies part-way through.
    """
    affected: List[Creature] = []
    for target in targets:
        current = next((c for c in reversed(affected) if c.id == target.creature.id), None)
        current = current or find_creature_by_id(creatures, target.creature.id)
        affected.append(apply_damage(current, damage_per_target, jobs))
    return replace_creatures(creatures, affected)


def invoke_normal_attack(
    constants: BattleConstants,
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
    attacker_id: str,
) -> AttackOutcome:
    attacker = find_creature_by_id(creatures, attacker_id)
    targeting = resolve_targets(
        creatures,
        parties,
        grid,
        attacker_id,
        max_reach=NORMAL_ATTACK_REACH,
        max_targets=NORMAL_ATTACK_TARGETS,
    )
    damage = get_attack_power(attacker, constants.jobs)
    return AttackOutcome(
        creatures=resolve_attack(creatures, targeting.targets, damage, constants.jobs),
        targeting=targeting,
    )


def _invoke_attack_skill(context: SkillContext) -> AttackOutcome:
    parameters = SKILL_PARAMETERS["attack"]
    targeting = resolve_targets(
        context.creatures,
        context.parties,
        context.grid,
        context.invoker_creature_id,
        max_reach=parameters.reach,
        max_targets=parameters.max_targets,
    )
    return AttackOutcome(
        creatures=resolve_attack(context.creatures, targeting.targets, parameters.damage, context.constants.jobs),
        targeting=targeting,
    )


def invoke_skill(context: SkillContext) -> AttackOutcome:
    """Dispatch on the skill category; only ``attack`` is implemented."""
    category = context.skill.skill_category_id
    if category == "attack":
        return _invoke_attack_skill(context)
    if category in ("defense", "support"):
        raise UnsupportedSkillCategoryError(f"Skill category '{category}' is not implemented.")
    raise UnsupportedSkillCategoryError(f"Unknown skill category '{category}'.")
