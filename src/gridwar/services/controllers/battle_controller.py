"""UI-agnostic battle controller that separates state progression from rendering."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Literal

from gridwar.domain.game import Game
from gridwar.domain.state import ApplicationState, BattlePage
from gridwar.services.battle_service import BattleEvent, BattleService
from gridwar.services.errors import InvalidStateError

BattleCommandType = Literal[
    "select_square",
    "select_card",
    "place_creature",
    "run_auto_attack_phase",
    "proceed_turn",
]
ProgressAction = Literal["auto_attack", "next", "victory", "defeat"]


@dataclass(slots=True)
class BattleCommand:
    """Represents a structured command coming from the presentation layer."""

    command_type: BattleCommandType
    y: int | None = None
    x: int | None = None
    creature_id: str | None = None


class BattleController:
    """
    UI-agnostic controller for battle state progression.

    This controller wraps BattleService and works on the ApplicationState the
    caller stores. It does NOT render, format or prompt.

    Responsibilities:
    - Reject commands when no battle page exists
    - Route structured commands to BattleService
    - Expose which progress action ("Auto-Attack" or "Next") is available
    """

    def __init__(self, battle_service: BattleService) -> None:
        self._service = battle_service

    def get_game(self, state: ApplicationState) -> Game:
        """Return the battle snapshot or raise InvalidStateError."""
        if state.battle is None:
            raise InvalidStateError("The battle page does not exist.")
        return state.battle.game

    def apply_command(
        self, state: ApplicationState, command: BattleCommand
    ) -> tuple[ApplicationState, List[BattleEvent]]:
        """
        Apply a command and return the new application state with its events.

        This method does NOT print or format anything. It only executes game logic.
        """
        game = self.get_game(state)

        if command.command_type == "select_square":
            if command.y is None or command.x is None:
                raise ValueError("Select square command requires y and x.")
            new_game, events = self._service.select_square(game, command.y, command.x)
        elif command.command_type == "select_card":
            if not command.creature_id:
                raise ValueError("Select card command requires creature_id.")
            new_game, events = self._service.select_card_on_players_hand(game, command.creature_id)
        elif command.command_type == "place_creature":
            if not command.creature_id or command.y is None or command.x is None:
                raise ValueError("Place creature command requires creature_id, y and x.")
            new_game, events = self._service.place_creature(game, command.creature_id, command.y, command.x)
        elif command.command_type == "run_auto_attack_phase":
            new_game, events = self._service.run_auto_attack_phase(game)
        elif command.command_type == "proceed_turn":
            new_game, events = self._service.proceed_turn(game)
        else:
            raise ValueError(f"Unknown command type: {command.command_type}")

        return replace(state, battle=BattlePage(game=new_game)), events

    def progress(self, state: ApplicationState) -> tuple[ApplicationState, List[BattleEvent]]:
        """Run whichever of auto-attack or next-turn the battle currently expects."""
        action = self.get_progress_action(self.get_game(state))
        if action == "auto_attack":
            return self.apply_command(state, BattleCommand(command_type="run_auto_attack_phase"))
        if action == "next":
            return self.apply_command(state, BattleCommand(command_type="proceed_turn"))
        raise InvalidStateError(f"The battle is already over ({action}).")

    def get_progress_action(self, game: Game) -> ProgressAction:
        phase = self._service.get_turn_phase(game)
        if phase == "awaiting_auto_attack":
            return "auto_attack"
        if phase == "auto_attack_resolved":
            return "next"
        return phase

    def are_updates_prohibited(self, game: Game) -> bool:
        return self._service.are_updates_prohibited(game)
