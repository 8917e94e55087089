"""Factory helpers for battle snapshots."""

from .game_factory import create_creature, create_game_from_stage
from .id_factory import create_numeric_uid_creator

__all__ = [
    "create_creature",
    "create_game_from_stage",
    "create_numeric_uid_creator",
]
