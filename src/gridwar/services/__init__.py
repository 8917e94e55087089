"""Service layer exports."""

from .battle_service import (
    AttackResolvedEvent,
    BattleEvent,
    BattleResolvedEvent,
    BattleService,
    CardsDrawnEvent,
    CreatureDefeatedEvent,
    CreaturePlacedEvent,
    CreaturesSpawnedEvent,
    RaidInvokedEvent,
    SkillInvokedEvent,
    TurnAdvancedEvent,
)
from .controllers import BattleCommand, BattleController
from .errors import FactoryError, InvalidStateError
from .spawn_strategies import choose_first_squares, make_random_square_chooser

__all__ = [
    "AttackResolvedEvent",
    "BattleCommand",
    "BattleController",
    "BattleEvent",
    "BattleResolvedEvent",
    "BattleService",
    "CardsDrawnEvent",
    "CreatureDefeatedEvent",
    "CreaturePlacedEvent",
    "CreaturesSpawnedEvent",
    "FactoryError",
    "InvalidStateError",
    "RaidInvokedEvent",
    "SkillInvokedEvent",
    "TurnAdvancedEvent",
    "choose_first_squares",
    "make_random_square_chooser",
]
