"""Controller exports."""

from .battle_controller import BattleCommand, BattleController

__all__ = ["BattleCommand", "BattleController"]
