"""The battle snapshot and its small companion records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from gridwar.core.types import GlobalPlacementId, VictoryOrDefeatId
from gridwar.domain.cards import MAX_NUMBER_OF_PLAYERS_HAND, Card, CardRelationship
from gridwar.domain.defs import JobDef
from gridwar.domain.grid import Grid, MatrixPosition
from gridwar.domain.roster import Creature, Party


@dataclass(frozen=True, slots=True)
class CreatureAppearance:
    """Creatures scheduled to spawn on ``turn_number``."""

    turn_number: int
    creature_ids: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GlobalPosition:
    """Where the cursor points: a battle field square or a card on the hand."""

    placement_id: GlobalPlacementId
    position: MatrixPosition | None = None
    creature_id: str | None = None


@dataclass(frozen=True, slots=True)
class Cursor:
    global_position: GlobalPosition


@dataclass(frozen=True, slots=True)
class BattleResult:
    victory_or_defeat_id: VictoryOrDefeatId = "pending"


@dataclass(frozen=True, slots=True)
class BattleConstants:
    """Rules data that does not change during a battle."""

    jobs: Tuple[JobDef, ...]
    max_number_of_players_hand: int = MAX_NUMBER_OF_PLAYERS_HAND


@dataclass(frozen=True, slots=True)
class Game:
    """Immutable snapshot of a battle; every transition returns a new one."""

    constants: BattleConstants
    grid: Grid
    creatures: Tuple[Creature, ...]
    parties: Tuple[Party, ...]
    cards: Tuple[Card, ...] = ()
    cards_in_deck: Tuple[CardRelationship, ...] = ()
    cards_on_players_hand: Tuple[CardRelationship, ...] = ()
    creature_appearances: Tuple[CreatureAppearance, ...] = ()
    turn_number: int = 1
    action_points: int = 0
    action_points_recovery: int = 0
    headquarters_life_points: int = 1
    cursor: Cursor | None = None
    battle_result: BattleResult = BattleResult()
    completed_auto_attack_phase: bool = False

    @property
    def is_over(self) -> bool:
        return self.battle_result.victory_or_defeat_id != "pending"


def find_creature_appearance_by_turn_number(
    creature_appearances: Sequence[CreatureAppearance], turn_number: int
) -> CreatureAppearance | None:
    return next((e for e in creature_appearances if e.turn_number == turn_number), None)
