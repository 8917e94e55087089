"""Creatures, parties and the helpers that query them."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Sequence, Tuple

from gridwar.core.types import FactionId, FactionRelationshipId
from gridwar.domain.defs import JobDef
from gridwar.domain.errors import NotFoundError

DEFAULT_PLACEMENT_ORDER = 0


@dataclass(frozen=True, slots=True)
class Creature:
    """A creature taking part in the battle; combat numbers come from its job."""

    id: str
    job_id: str
    life_points: int
    raid_charge: int = 0
    auto_attack_invoked: bool = False
    placement_order: int = DEFAULT_PLACEMENT_ORDER


@dataclass(frozen=True, slots=True)
class Party:
    """A faction and the creatures that belong to it."""

    faction_id: FactionId
    creature_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CreatureWithParty:
    creature: Creature
    party: Party


def determine_relationship(a: FactionId, b: FactionId) -> FactionRelationshipId:
    return "ally" if a == b else "enemy"


def find_job_by_id(jobs: Sequence[JobDef], job_id: str) -> JobDef:
    for job in jobs:
        if job.id == job_id:
            return job
    raise NotFoundError(f"Job '{job_id}' not found.")


def find_creature_by_id_if_possible(creatures: Sequence[Creature], creature_id: str) -> Creature | None:
    return next((creature for creature in creatures if creature.id == creature_id), None)


def find_creature_by_id(creatures: Sequence[Creature], creature_id: str) -> Creature:
    found = find_creature_by_id_if_possible(creatures, creature_id)
    if found is None:
        raise NotFoundError(f"Creature '{creature_id}' not found.")
    return found


def find_party_by_creature_id(parties: Sequence[Party], creature_id: str) -> Party:
    for party in parties:
        if creature_id in party.creature_ids:
            return party
    raise NotFoundError(f"Creature '{creature_id}' does not belong to any party.")


def find_creature_with_party(
    creatures: Sequence[Creature], parties: Sequence[Party], creature_id: str
) -> CreatureWithParty:
    party = find_party_by_creature_id(parties, creature_id)
    return CreatureWithParty(creature=find_creature_by_id(creatures, creature_id), party=party)



def replace_creatures(creatures: Sequence[Creature], updated: Iterable[Creature]) -> Tuple[Creature, ...]:
    """Merge ``updated`` into the roster by id, keeping roster order.

    When the same id is updated more than once the last value wins.
    """
    by_id: Dict[str, Creature] = {creature.id: creature for creature in updated}
    return tuple(by_id.get(creature.id, creature) for creature in creatures)


def next_placement_order(creatures: Sequence[Creature]) -> int:
    return max((creature.placement_order for creature in creatures), default=DEFAULT_PLACEMENT_ORDER) + 1


# -----------------------
# Job-derived numbers
# -----------------------
def get_attack_power(creature: Creature, jobs: Sequence[JobDef]) -> int:
    return find_job_by_id(jobs, creature.job_id).attack_power


def get_max_life_points(creature: Creature, jobs: Sequence[JobDef]) -> int:
    return find_job_by_id(jobs, creature.job_id).max_life_points


def get_raid_power(creature: Creature, jobs: Sequence[JobDef]) -> int:
    return find_job_by_id(jobs, creature.job_id).raid_power


def get_turns_until_raid(creature: Creature, jobs: Sequence[JobDef]) -> int:
    job = find_job_by_id(jobs, creature.job_id)
    return max(0, job.raid_interval - creature.raid_charge)


def is_dead(creature: Creature) -> bool:
    return creature.life_points == 0


def can_act(creature: Creature) -> bool:
    return not is_dead(creature)


def update_life_points(creature: Creature, points: int, jobs: Sequence[JobDef]) -> Creature:
    """Return a copy with ``points`` added, clamped to ``[0, max_life_points]``."""
    max_life_points = get_max_life_points(creature, jobs)
    life_points = min(max(creature.life_points + points, 0), max_life_points)
    return replace(creature, life_points=life_points)
