"""Battle controller routes commands without depending on any presentation layer."""
from __future__ import annotations

import pytest

from gridwar.domain.game import CreatureAppearance
from gridwar.domain.state import ApplicationState, BattlePage
from gridwar.services import BattleCommand, BattleController
from gridwar.services.battle_service import BattleResolvedEvent, BattleService, CreaturePlacedEvent
from gridwar.services.errors import InvalidStateError
from tests.helpers.builders import make_constants, make_creature, make_game, make_job


def _build_battle_controller() -> tuple[BattleController, ApplicationState]:
    service = BattleService()
    game = make_game(
        constants=make_constants(make_job(attack_power=2, max_life_points=2)),
        player_creatures=[make_creature("p", life_points=2)],
        computer_creatures=[make_creature("c", life_points=2)],
        rows=1,
        cols=2,
        hand=["p"],
        appearances=[CreatureAppearance(turn_number=1, creature_ids=("c",))],
    )
    game, _ = service.start_battle(game)
    return BattleController(service), ApplicationState(battle=BattlePage(game=game))


def test_missing_battle_page_raises() -> None:
    controller = BattleController(BattleService())

    with pytest.raises(InvalidStateError):
        controller.apply_command(ApplicationState(), BattleCommand(command_type="proceed_turn"))
    with pytest.raises(InvalidStateError):
        controller.progress(ApplicationState())


def test_place_command_updates_state() -> None:
    controller, state = _build_battle_controller()

    new_state, events = controller.apply_command(
        state, BattleCommand(command_type="place_creature", creature_id="p", y=0, x=1)
    )

    assert isinstance(events[0], CreaturePlacedEvent)
    assert controller.get_game(new_state).grid[0][1].creature_id == "p"
    assert controller.get_game(state).grid[0][1].creature_id is None


def test_commands_with_missing_arguments_are_rejected() -> None:
    controller, state = _build_battle_controller()

    with pytest.raises(ValueError):
        controller.apply_command(state, BattleCommand(command_type="select_square", y=0))
    with pytest.raises(ValueError):
        controller.apply_command(state, BattleCommand(command_type="select_card"))


def test_progress_alternates_between_auto_attack_and_next() -> None:
    controller, state = _build_battle_controller()
    state, _ = controller.apply_command(state, BattleCommand(command_type="select_card", creature_id="p"))
    state, _ = controller.apply_command(state, BattleCommand(command_type="select_square", y=0, x=1))

    assert controller.get_progress_action(controller.get_game(state)) == "auto_attack"
    assert controller.are_updates_prohibited(controller.get_game(state)) is False

    state, _ = controller.progress(state)

    assert controller.get_progress_action(controller.get_game(state)) == "next"
    assert controller.are_updates_prohibited(controller.get_game(state)) is True

    state, events = controller.progress(state)

    assert events[-1] == BattleResolvedEvent(victory_or_defeat_id="victory")
    assert controller.get_progress_action(controller.get_game(state)) == "victory"
    with pytest.raises(InvalidStateError):
        controller.progress(state)
