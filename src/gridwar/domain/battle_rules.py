"""Pure turn steps: each takes part of a battle snapshot and returns new values."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Sequence, Tuple

from gridwar.core.types import VictoryOrDefeatId
from gridwar.domain.cards import CardRelationship, remove_card_from_hand, return_card_to_deck
from gridwar.domain.combat import AttackOutcome, resolve_attack
from gridwar.domain.errors import InsufficientSpaceError, SquareOccupiedError
from gridwar.domain.game import BattleConstants, CreatureAppearance, find_creature_appearance_by_turn_number
from gridwar.domain.grid import (
    Grid,
    MatrixPosition,
    Square,
    get_square,
    iter_squares,
    replace_square,
    squares_with_occupant,
    squares_without_occupant,
)
from gridwar.domain.roster import (
    Creature,
    Party,
    find_creature_by_id,
    find_creature_with_party,
    find_party_by_creature_id,
    get_attack_power,
    get_raid_power,
    get_turns_until_raid,
    is_dead,
    next_placement_order,
    replace_creatures,
)
from gridwar.domain.targeting import CreatureOnSquare, calculate_range_and_targets_of_auto_attack

SquareChooser = Callable[[Sequence[Square], int], Sequence[Square]]


@dataclass(frozen=True, slots=True)
class SpawnOutcome:
    creatures: Tuple[Creature, ...]
    grid: Grid
    spawned_creature_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DeathCleanupOutcome:
    grid: Grid
    cards_in_deck: Tuple[CardRelationship, ...]
    removed_creature_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RaidOutcome:
    creatures: Tuple[Creature, ...]
    headquarters_life_points: int
    damage: int


@dataclass(frozen=True, slots=True)
class PlacementOutcome:
    creatures: Tuple[Creature, ...]
    grid: Grid
    cards_on_players_hand: Tuple[CardRelationship, ...]


# -----------------------
# Spawn
# -----------------------
def reserve_creatures(
    grid: Grid,
    creature_appearances: Sequence[CreatureAppearance],
    turn_number: int,
    choose_squares: SquareChooser,
) -> Grid:
    """Mark squares for the creatures scheduled on ``turn_number``."""
    appearance = find_creature_appearance_by_turn_number(creature_appearances, turn_number)
    if appearance is None:
        return grid

    candidates = squares_without_occupant(grid)
    needed = len(appearance.creature_ids)
    if len(candidates) < needed:
        raise InsufficientSpaceError(
            f"Turn {turn_number} spawns {needed} creatures but only {len(candidates)} squares are free."
        )

    chosen = list(choose_squares(candidates, needed))
    if len(chosen) != needed or any(not get_square(grid, square.position).is_free for square in chosen):
        raise InsufficientSpaceError("The square chooser did not return enough free squares.")
    if len({square.position for square in chosen}) != needed:
        raise InsufficientSpaceError("The square chooser returned the same square twice.")

    new_grid = grid
    for square, creature_id in zip(chosen, appearance.creature_ids):
        new_grid = replace_square(new_grid, square.position, reserved_creature_id=creature_id)
    return new_grid


def materialize_reserved_creatures(creatures: Sequence[Creature], grid: Grid) -> SpawnOutcome:
    """Turn every reservation into an occupant with a fresh placement order."""
    new_grid = grid
    updated: List[Creature] = []
    order = next_placement_order(creatures)
    for square in iter_squares(grid):
        creature_id = square.reserved_creature_id
        if creature_id is None:
            continue
        new_grid = replace_square(new_grid, square.position, creature_id=creature_id, reserved_creature_id=None)
        updated.append(replace(find_creature_by_id(creatures, creature_id), placement_order=order))
        order += 1
    return SpawnOutcome(
        creatures=replace_creatures(creatures, updated),
        grid=new_grid,
        spawned_creature_ids=tuple(creature.id for creature in updated),
    )


def spawn_creatures(
    creatures: Sequence[Creature],
    grid: Grid,
    creature_appearances: Sequence[CreatureAppearance],
    turn_number: int,
    choose_squares: SquareChooser,
) -> SpawnOutcome:
    reserved_grid = reserve_creatures(grid, creature_appearances, turn_number, choose_squares)
    return materialize_reserved_creatures(creatures, reserved_grid)


# -----------------------
# Placement
# -----------------------
def place_player_faction_creature(
    creatures: Sequence[Creature],
    grid: Grid,
    cards_on_players_hand: Sequence[CardRelationship],
    creature_id: str,
    position: MatrixPosition,
) -> PlacementOutcome:
    square = get_square(grid, position)
    if square.creature_id is not None:
        raise SquareOccupiedError(f"A creature exists on ({position.y}, {position.x}).")
    new_hand = remove_card_from_hand(cards_on_players_hand, creature_id)
    creature = find_creature_by_id(creatures, creature_id)
    placed = replace(creature, placement_order=next_placement_order(creatures))
    return PlacementOutcome(
        creatures=replace_creatures(creatures, [placed]),
        grid=replace_square(grid, position, creature_id=creature_id),
        cards_on_players_hand=new_hand,
    )


# -----------------------
# Auto-attack
# -----------------------
def sort_auto_attackers_order(attackers: Sequence[CreatureOnSquare]) -> List[CreatureOnSquare]:
    """Player faction first, then ascending placement order."""
    return sorted(
        attackers,
        key=lambda attacker: (attacker.party.faction_id != "player", attacker.creature.placement_order),
    )


def invoke_auto_attack(
    constants: BattleConstants,
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
    attacker_id: str,
) -> AttackOutcome:
    """
    Attack with the creature's job-defined range and target count.

    The attacker is flagged as having auto-attacked only when at least one
    target was hit; idle creatures keep charging their raid.
    """
    targeting = calculate_range_and_targets_of_auto_attack(constants.jobs, creatures, parties, grid, attacker_id)
    attacker = find_creature_by_id(creatures, attacker_id)
    damage = get_attack_power(attacker, constants.jobs)
    new_creatures = resolve_attack(creatures, targeting.targets, damage, constants.jobs)
    if targeting.targets:
        flagged = replace(find_creature_by_id(new_creatures, attacker_id), auto_attack_invoked=True)
        new_creatures = replace_creatures(new_creatures, [flagged])
    return AttackOutcome(creatures=new_creatures, targeting=targeting)


# -----------------------
# Death cleanup
# -----------------------
def remove_dead_creatures(
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
    cards_in_deck: Sequence[CardRelationship],
) -> DeathCleanupOutcome:
    """Clear dead creatures from the board; player-side cards go back to the deck tail."""
    new_grid = grid
    new_deck = tuple(cards_in_deck)
    removed: List[str] = []
    for square in squares_with_occupant(grid):
        assert square.creature_id is not None
        with_party = find_creature_with_party(creatures, parties, square.creature_id)
        if not is_dead(with_party.creature):
            continue
        new_grid = replace_square(new_grid, square.position, creature_id=None)
        if with_party.party.faction_id == "player":
            new_deck = return_card_to_deck(new_deck, square.creature_id)
        removed.append(square.creature_id)
    return DeathCleanupOutcome(grid=new_grid, cards_in_deck=new_deck, removed_creature_ids=tuple(removed))


# -----------------------
# Raid
# -----------------------
def increase_raid_charge_for_each_computer_creature(
    constants: BattleConstants,
    creatures: Sequence[Creature],
    parties: Sequence[Party],
    grid: Grid,
) -> Tuple[Creature, ...]:
    """Charge every placed computer creature that did not auto-attack this turn."""
    updated: List[Creature] = []
    for square in squares_with_occupant(grid):
        assert square.creature_id is not None
        with_party = find_creature_with_party(creatures, parties, square.creature_id)
        creature = with_party.creature
        if with_party.party.faction_id != "computer" or creature.auto_attack_invoked:
            continue
        updated.append(replace(creature, raid_charge=creature.raid_charge + 1))
    return replace_creatures(creatures, updated)


def is_raid_ready(constants: BattleConstants, creature: Creature) -> bool:
    return creature.raid_charge > 0 and get_turns_until_raid(creature, constants.jobs) == 0


def invoke_raid(
    constants: BattleConstants,
    creatures: Sequence[Creature],
    creature_id: str,
    headquarters_life_points: int,
) -> RaidOutcome:
    """Damage the headquarters by the raider's raid power and reset its charge."""
    raider = find_creature_by_id(creatures, creature_id)
    damage = get_raid_power(raider, constants.jobs)
    return RaidOutcome(
        creatures=replace_creatures(creatures, [replace(raider, raid_charge=0)]),
        headquarters_life_points=max(0, headquarters_life_points - damage),
        damage=damage,
    )


# -----------------------
# Victory / defeat
# -----------------------
def does_player_have_victory(
    parties: Sequence[Party],
    grid: Grid,
    creature_appearances: Sequence[CreatureAppearance],
    current_turn_number: int,
) -> bool:
    if any(appearance.turn_number > current_turn_number for appearance in creature_appearances):
        return False
    for square in iter_squares(grid):
        if square.reserved_creature_id is not None:
            return False
        if square.creature_id is not None:
            if find_party_by_creature_id(parties, square.creature_id).faction_id == "computer":
                return False
    return True


def does_player_have_defeat(headquarters_life_points: int) -> bool:
    return headquarters_life_points == 0


def determine_victory_or_defeat(
    parties: Sequence[Party],
    grid: Grid,
    creature_appearances: Sequence[CreatureAppearance],
    current_turn_number: int,
    headquarters_life_points: int,
) -> VictoryOrDefeatId:
    """Victory is checked before defeat, so it wins when both hold."""
    if does_player_have_victory(parties, grid, creature_appearances, current_turn_number):
        return "victory"
    if does_player_have_defeat(headquarters_life_points):
        return "defeat"
    return "pending"
