"""Shared type aliases for the core and domain layers."""
from typing import Literal

FactionId = Literal["player", "computer"]
FactionRelationshipId = Literal["ally", "enemy"]
SkillCategoryId = Literal["attack", "defense", "support"]
VictoryOrDefeatId = Literal["pending", "victory", "defeat"]
RangeShapeKey = Literal["circle"]
GlobalPlacementId = Literal["battle_field", "cards_on_players_hand"]

__all__ = [
    "FactionId",
    "FactionRelationshipId",
    "GlobalPlacementId",
    "RangeShapeKey",
    "SkillCategoryId",
    "VictoryOrDefeatId",
]
