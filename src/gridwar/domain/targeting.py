"""Range search and target selection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from gridwar.domain.defs import JobDef
from gridwar.domain.grid import Grid, Square, find_square_by_creature_id, squares_within_range
from gridwar.domain.roster import (
    Creature,
    CreatureWithParty,
    Party,
    determine_relationship,
    find_creature_with_party,
    find_job_by_id,
)


@dataclass(frozen=True, slots=True)
class CreatureOnSquare:
    """A creature together with its party and the square it occupies."""

    creature: Creature
    party: Party
    square: Square


@dataclass(frozen=True, slots=True)
class TargetingResult:
    """Squares within reach and the chosen targets, highest priority first."""

    reachable_squares: Tuple[Square, ...]
    targets: Tuple[CreatureOnSquare, ...]


def locate_creature(
    creatures: Sequence[Creature], parties: Sequence[Party], grid: Grid, creature_id: str
) -> CreatureOnSquare:
    with_party: CreatureWithParty = find_creature_with_party(creatures, parties, creature_id)
    return CreatureOnSquare(
        creature=with_party.creature,
        party=with_party.party,
        square=find_square_by_creature_id(grid, creature_id),
    )


def prioritize_targets(candidates: Sequence[CreatureOnSquare]) -> List[CreatureOnSquare]:
    """Earlier-placed creatures first; ties keep row-major board order."""
    return sorted(candidates, key=lambda candidate: candidate.creature.placement_order)


def resolve_targets(
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
    actor_id: str,
    *,
    min_reach: int = 0,
    max_reach: int,
    max_targets: int,
) -> TargetingResult:
    """Find hostile creatures within reach of ``actor_id`` and order them by priority."""
    actor = locate_creature(creatures, parties, grid, actor_id)
    reachable = squares_within_range(grid, actor.square.position, min_reach, max_reach)

    candidates: List[CreatureOnSquare] = []
    for square in reachable:
        if square.creature_id is None:
            continue
        with_party = find_creature_with_party(creatures, parties, square.creature_id)
        if determine_relationship(with_party.party.faction_id, actor.party.faction_id) == "enemy":
            candidates.append(CreatureOnSquare(creature=with_party.creature, party=with_party.party, square=square))

    targets = prioritize_targets(candidates)[: max(0, max_targets)]
    return TargetingResult(reachable_squares=tuple(reachable), targets=tuple(targets))


def calculate_range_and_targets_of_auto_attack(
    jobs: Sequence[JobDef],
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
    creature_id: str,
) -> TargetingResult:
    """Resolve targets using the creature's job-defined auto-attack range and target count."""
    actor = locate_creature(creatures, parties, grid, creature_id)
    job = find_job_by_id(jobs, actor.creature.job_id)
    return resolve_targets(
        creatures,
        parties,
        grid,
        creature_id,
        min_reach=job.auto_attack_range.min_reach,
        max_reach=job.auto_attack_range.max_reach,
        max_targets=job.auto_attack_targets,
    )
