"""Battle service running the turn state machine over immutable snapshots."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Literal, Tuple

from gridwar.core.types import VictoryOrDefeatId
from gridwar.domain.battle_rules import (
    SquareChooser,
    determine_victory_or_defeat,
    increase_raid_charge_for_each_computer_creature,
    invoke_auto_attack,
    invoke_raid,
    is_raid_ready,
    place_player_faction_creature,
    remove_dead_creatures,
    sort_auto_attackers_order,
    spawn_creatures,
)
from gridwar.domain.cards import find_card_by_creature_id, refill_cards_on_players_hand
from gridwar.domain.combat import AttackOutcome, SkillContext, apply_healing, invoke_normal_attack, invoke_skill
from gridwar.domain.defs import SkillDef
from gridwar.domain.errors import CardNotInHandError
from gridwar.domain.game import BattleResult, Cursor, Game, GlobalPosition
from gridwar.domain.grid import MatrixPosition, get_square, squares_with_occupant
from gridwar.domain.roster import (
    can_act,
    find_creature_by_id,
    find_creature_with_party,
    get_attack_power,
    get_max_life_points,
    is_dead,
)
from gridwar.domain.targeting import locate_creature
from gridwar.services.errors import InvalidStateError
from gridwar.services.spawn_strategies import choose_first_squares

logger = logging.getLogger(__name__)

TurnPhase = Literal["awaiting_auto_attack", "auto_attack_resolved", "victory", "defeat"]


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class CreaturesSpawnedEvent(BattleEvent):
    turn_number: int
    creature_ids: Tuple[str, ...]


@dataclass(slots=True)
class CreaturePlacedEvent(BattleEvent):
    creature_id: str
    y: int
    x: int
    placement_order: int


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    attacker_id: str
    target_id: str
    damage: int
    target_life_points: int


@dataclass(slots=True)
class SkillInvokedEvent(BattleEvent):
    invoker_id: str
    skill_id: str
    target_ids: Tuple[str, ...]


@dataclass(slots=True)
class CreatureDefeatedEvent(BattleEvent):
    creature_id: str
    returned_to_deck: bool


@dataclass(slots=True)
class RaidInvokedEvent(BattleEvent):
    raider_id: str
    damage: int
    headquarters_life_points: int


@dataclass(slots=True)
class CardsDrawnEvent(BattleEvent):
    creature_ids: Tuple[str, ...]


@dataclass(slots=True)
class TurnAdvancedEvent(BattleEvent):
    turn_number: int
    action_points: int


@dataclass(slots=True)
class BattleResolvedEvent(BattleEvent):
    victory_or_defeat_id: VictoryOrDefeatId


class BattleService:
    """
    Deterministic turn engine.

    Every command takes a ``Game`` and returns a new ``Game`` together with
    the events it produced. A failing command raises before anything is
    returned, so the caller's snapshot stays valid.
    """

    def __init__(self, choose_squares: SquareChooser = choose_first_squares) -> None:
        self._choose_squares = choose_squares

    # -----------------------
    # State queries
    # -----------------------
    def get_turn_phase(self, game: Game) -> TurnPhase:
        result = game.battle_result.victory_or_defeat_id
        if result == "victory":
            return "victory"
        if result == "defeat":
            return "defeat"
        return "auto_attack_resolved" if game.completed_auto_attack_phase else "awaiting_auto_attack"

    def are_updates_prohibited(self, game: Game) -> bool:
        """Board edits are closed once the battle is over or the auto-attack phase ran."""
        return game.is_over or game.completed_auto_attack_phase

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def start_battle(self, game: Game) -> tuple[Game, List[BattleEvent]]:
        """Run the spawn phase of the current turn on a freshly created snapshot."""
        self._ensure_pending(game)
        return self._run_spawn_phase(game)

    def run_auto_attack_phase(self, game: Game) -> tuple[Game, List[BattleEvent]]:
        """Let every placed creature auto-attack once, player side first."""
        self._ensure_pending(game)
        if game.completed_auto_attack_phase:
            raise InvalidStateError("The auto-attack phase of this turn has already run.")

        attackers = [
            locate_creature(game.creatures, game.parties, game.grid, square.creature_id)
            for square in squares_with_occupant(game.grid)
            if square.creature_id is not None
        ]

        creatures = game.creatures
        events: List[BattleEvent] = []
        for attacker in sort_auto_attackers_order(attackers):
            current = find_creature_by_id(creatures, attacker.creature.id)
            if not can_act(current) or current.auto_attack_invoked:
                continue
            outcome = invoke_auto_attack(game.constants, creatures, game.parties, game.grid, current.id)
            creatures = outcome.creatures
            events.extend(self._attack_events(current.id, get_attack_power(current, game.constants.jobs), outcome))

        logger.debug("Auto-attack phase of turn %d produced %d attacks", game.turn_number, len(events))
        return replace(game, creatures=creatures, completed_auto_attack_phase=True), events

    def proceed_turn(self, game: Game) -> tuple[Game, List[BattleEvent]]:
        """
        Close the current turn and open the next one.

        Order: death cleanup, raid charge and raids, victory/defeat check,
        hand refill, turn increment with flag reset, spawn phase.
        """
        self._ensure_pending(game)
        if not game.completed_auto_attack_phase:
            raise InvalidStateError("Run the auto-attack phase before proceeding to the next turn.")

        events: List[BattleEvent] = []

        cleanup = remove_dead_creatures(game.creatures, game.parties, game.grid, game.cards_in_deck)
        for creature_id in cleanup.removed_creature_ids:
            party = find_creature_with_party(game.creatures, game.parties, creature_id).party
            events.append(
                CreatureDefeatedEvent(creature_id=creature_id, returned_to_deck=party.faction_id == "player")
            )
        grid = cleanup.grid

        creatures = increase_raid_charge_for_each_computer_creature(
            game.constants, game.creatures, game.parties, grid
        )
        headquarters_life_points = game.headquarters_life_points
        raiders = sorted(
            (
                find_creature_with_party(creatures, game.parties, square.creature_id)
                for square in squares_with_occupant(grid)
                if square.creature_id is not None
            ),
            key=lambda with_party: with_party.creature.placement_order,
        )
        for raider in raiders:
            if raider.party.faction_id != "computer" or not is_raid_ready(game.constants, raider.creature):
                continue
            raid = invoke_raid(game.constants, creatures, raider.creature.id, headquarters_life_points)
            creatures = raid.creatures
            headquarters_life_points = raid.headquarters_life_points
            events.append(
                RaidInvokedEvent(
                    raider_id=raider.creature.id,
                    damage=raid.damage,
                    headquarters_life_points=headquarters_life_points,
                )
            )

        result = determine_victory_or_defeat(
            game.parties, grid, game.creature_appearances, game.turn_number, headquarters_life_points
        )
        game = replace(
            game,
            grid=grid,
            creatures=creatures,
            cards_in_deck=cleanup.cards_in_deck,
            headquarters_life_points=headquarters_life_points,
        )
        if result != "pending":
            logger.info("Battle resolved on turn %d: %s", game.turn_number, result)
            events.append(BattleResolvedEvent(victory_or_defeat_id=result))
            return replace(game, battle_result=BattleResult(victory_or_defeat_id=result)), events

        cards_in_deck, cards_on_hand = refill_cards_on_players_hand(
            game.cards_in_deck, game.cards_on_players_hand, game.constants.max_number_of_players_hand
        )
        drawn = cards_on_hand[len(game.cards_on_players_hand):]
        if drawn:
            events.append(CardsDrawnEvent(creature_ids=tuple(card.creature_id for card in drawn)))

        game = replace(
            game,
            cards_in_deck=cards_in_deck,
            cards_on_players_hand=cards_on_hand,
            creatures=tuple(replace(c, auto_attack_invoked=False) for c in game.creatures),
            turn_number=game.turn_number + 1,
            completed_auto_attack_phase=False,
            action_points=game.action_points + game.action_points_recovery,
        )
        events.append(TurnAdvancedEvent(turn_number=game.turn_number, action_points=game.action_points))
        logger.debug("Advanced to turn %d", game.turn_number)

        game, spawn_events = self._run_spawn_phase(game)
        return game, events + spawn_events

    # -----------------------
    # Player Actions
    # -----------------------
    def select_square(self, game: Game, y: int, x: int) -> tuple[Game, List[BattleEvent]]:
        """
        Toggle the cursor on a battle field square.

        When a hand card is under the cursor, the square has no occupant and
        board edits are still open, the card's creature is placed there
        instead.
        """
        position = MatrixPosition(y=y, x=x)
        get_square(game.grid, position)

        cursor = game.cursor
        if (
            not self.are_updates_prohibited(game)
            and cursor is not None
            and cursor.global_position.placement_id == "cards_on_players_hand"
            and cursor.global_position.creature_id is not None
            and get_square(game.grid, position).creature_id is None
        ):
            return self.place_creature(game, cursor.global_position.creature_id, y, x)

        if cursor is not None and cursor.global_position.position == position:
            return replace(game, cursor=None), []
        new_cursor = Cursor(global_position=GlobalPosition(placement_id="battle_field", position=position))
        return replace(game, cursor=new_cursor), []

    def select_card_on_players_hand(self, game: Game, creature_id: str) -> tuple[Game, List[BattleEvent]]:
        """Toggle the cursor on a card held in the player's hand."""
        if all(card.creature_id != creature_id for card in game.cards_on_players_hand):
            raise CardNotInHandError(f"Card for creature '{creature_id}' is not on the player's hand.")
        cursor = game.cursor
        if cursor is not None and cursor.global_position.creature_id == creature_id:
            return replace(game, cursor=None), []
        new_cursor = Cursor(
            global_position=GlobalPosition(placement_id="cards_on_players_hand", creature_id=creature_id)
        )
        return replace(game, cursor=new_cursor), []

    def place_creature(self, game: Game, creature_id: str, y: int, x: int) -> tuple[Game, List[BattleEvent]]:
        """Put a creature from the player's hand onto the battle field."""
        self._ensure_pending(game)
        if game.completed_auto_attack_phase:
            raise InvalidStateError("Creatures cannot be placed after the auto-attack phase.")

        position = MatrixPosition(y=y, x=x)
        outcome = place_player_faction_creature(
            game.creatures, game.grid, game.cards_on_players_hand, creature_id, position
        )
        creatures = outcome.creatures
        placed = find_creature_by_id(creatures, creature_id)
        if is_dead(placed):
            # A card returned to the deck by death comes back at full life.
            revived = apply_healing(placed, get_max_life_points(placed, game.constants.jobs), game.constants.jobs)
            creatures = tuple(revived if c.id == creature_id else c for c in creatures)

        event = CreaturePlacedEvent(creature_id=creature_id, y=y, x=x, placement_order=placed.placement_order)
        return (
            replace(
                game,
                creatures=creatures,
                grid=outcome.grid,
                cards_on_players_hand=outcome.cards_on_players_hand,
                cursor=None,
            ),
            [event],
        )

    def invoke_normal_attack(self, game: Game, attacker_id: str) -> tuple[Game, List[BattleEvent]]:
        self._ensure_pending(game)
        attacker = find_creature_by_id(game.creatures, attacker_id)
        outcome = invoke_normal_attack(game.constants, game.creatures, game.parties, game.grid, attacker_id)
        damage = get_attack_power(attacker, game.constants.jobs)
        return replace(game, creatures=outcome.creatures), self._attack_events(attacker_id, damage, outcome)

    def invoke_skill(
        self, game: Game, invoker_id: str, skill: SkillDef | None = None
    ) -> tuple[Game, List[BattleEvent]]:
        """Invoke ``skill``, or the skill carried by the invoker's card when omitted."""
        self._ensure_pending(game)
        if skill is None:
            card = find_card_by_creature_id(game.cards, invoker_id)
            skill = SkillDef(id=card.skill_category_id, skill_category_id=card.skill_category_id)
        outcome = invoke_skill(
            SkillContext(
                constants=game.constants,
                skill=skill,
                creatures=game.creatures,
                parties=game.parties,
                grid=game.grid,
                invoker_creature_id=invoker_id,
            )
        )
        event = SkillInvokedEvent(
            invoker_id=invoker_id,
            skill_id=skill.id,
            target_ids=tuple(target.creature.id for target in outcome.targeting.targets),
        )
        return replace(game, creatures=outcome.creatures), [event]

    # -----------------------
    # Helpers
    # -----------------------
    def _run_spawn_phase(self, game: Game) -> tuple[Game, List[BattleEvent]]:
        outcome = spawn_creatures(
            game.creatures, game.grid, game.creature_appearances, game.turn_number, self._choose_squares
        )
        if not outcome.spawned_creature_ids:
            return game, []
        logger.debug("Spawned %d creatures on turn %d", len(outcome.spawned_creature_ids), game.turn_number)
        return (
            replace(game, creatures=outcome.creatures, grid=outcome.grid),
            [CreaturesSpawnedEvent(turn_number=game.turn_number, creature_ids=outcome.spawned_creature_ids)],
        )

    @staticmethod
    def _ensure_pending(game: Game) -> None:
        if game.is_over:
            raise InvalidStateError(f"The battle is already over ({game.battle_result.victory_or_defeat_id}).")

    @staticmethod
    def _attack_events(attacker_id: str, damage: int, outcome: AttackOutcome) -> List[BattleEvent]:
        events: List[BattleEvent] = []
        for target in outcome.targeting.targets:
            events.append(
                AttackResolvedEvent(
                    attacker_id=attacker_id,
                    target_id=target.creature.id,
                    damage=damage,
                    target_life_points=find_creature_by_id(outcome.creatures, target.creature.id).life_points,
                )
            )
        return events
