from __future__ import annotations

import json

import pytest

from gridwar.core.config import EngineConfig
from gridwar.core.rng import RNG
from gridwar.data.repositories import JobsRepository, StagesRepository
from gridwar.services.battle_service import BattleService
from gridwar.services.errors import FactoryError
from gridwar.services.factories import create_creature, create_game_from_stage, create_numeric_uid_creator
from gridwar.services.factories import id_factory


def _make_game(seed: int = 42, config: EngineConfig | None = None):
    jobs_repo = JobsRepository()
    return create_game_from_stage(
        "training_grounds",
        stages_repo=StagesRepository(jobs_repo=jobs_repo),
        jobs_repo=jobs_repo,
        rng=RNG(seed),
        config=config,
    )


def test_numeric_uid_creator_counts_up() -> None:
    create_uid = create_numeric_uid_creator()

    assert [create_uid() for _ in range(3)] == ["1", "2", "3"]
    assert create_numeric_uid_creator(starting_count=9)() == "10"


def test_numeric_uid_creator_stops_at_limit() -> None:
    create_uid = create_numeric_uid_creator(starting_count=id_factory.MAX_SAFE_INTEGER)

    with pytest.raises(FactoryError):
        create_uid()


def test_create_creature_starts_at_full_life() -> None:
    creature = create_creature("knight", JobsRepository(), create_numeric_uid_creator())

    assert creature.id == "1"
    assert creature.life_points == JobsRepository().get("knight").max_life_points
    assert creature.placement_order == 0


def test_create_creature_unknown_job_raises() -> None:
    with pytest.raises(FactoryError):
        create_creature("dragon", JobsRepository(), create_numeric_uid_creator())


def test_create_game_from_stage_builds_opening_snapshot() -> None:
    game = _make_game()

    player_party, computer_party = game.parties
    assert player_party.faction_id == "player"
    assert len(player_party.creature_ids) == 7
    assert len(computer_party.creature_ids) == 7
    assert len(game.cards_on_players_hand) == 5
    assert len(game.cards_in_deck) == 2
    held = {c.creature_id for c in game.cards_on_players_hand} | {c.creature_id for c in game.cards_in_deck}
    assert held == set(player_party.creature_ids)
    assert [a.turn_number for a in game.creature_appearances] == [1, 3, 5]
    assert len(game.grid) == 7 and len(game.grid[0]) == 7
    assert game.headquarters_life_points == 10
    assert game.action_points == 2
    assert all(square.creature_id is None for row in game.grid for square in row)


def test_create_game_from_stage_is_deterministic_per_seed() -> None:
    assert _make_game(seed=5) == _make_game(seed=5)


def test_create_game_from_stage_honours_config() -> None:
    game = _make_game(config=EngineConfig(max_number_of_players_hand=3, initial_action_points=4))

    assert len(game.cards_on_players_hand) == 3
    assert len(game.cards_in_deck) == 4
    assert game.constants.max_number_of_players_hand == 3
    assert game.action_points == 4


def test_create_game_from_unknown_stage_raises() -> None:
    jobs_repo = JobsRepository()
    with pytest.raises(FactoryError):
        create_game_from_stage(
            "missing",
            stages_repo=StagesRepository(jobs_repo=jobs_repo),
            jobs_repo=jobs_repo,
            rng=RNG(1),
        )


def test_started_stage_spawns_first_wave() -> None:
    game, events = BattleService().start_battle(_make_game())

    occupied = [square.creature_id for row in game.grid for square in row if square.creature_id]
    assert occupied == list(game.creature_appearances[0].creature_ids)
    assert events


def test_stage_without_board_size_uses_config(tmp_path) -> None:
    (tmp_path / "jobs.json").write_text(
        json.dumps(
            {
                "grunt": {
                    "attack_power": 1,
                    "max_life_points": 3,
                    "raid_interval": 2,
                    "raid_power": 1,
                    "auto_attack_range": {"range_shape_key": "circle", "min_reach": 1, "max_reach": 1},
                    "auto_attack_targets": 1,
                }
            }
        ),
        encoding="utf-8",
    )
    stage = {
        "name": "Open Field",
        "headquarters_life_points": 2,
        "player_creatures": [{"job_id": "grunt", "skill_category_id": "attack"}],
        "appearances": [{"turn_number": 1, "job_ids": ["grunt"]}],
    }
    (tmp_path / "stages.json").write_text(json.dumps({"open_field": stage}), encoding="utf-8")
    jobs_repo = JobsRepository(base_path=tmp_path)

    game = create_game_from_stage(
        "open_field",
        stages_repo=StagesRepository(base_path=tmp_path, jobs_repo=jobs_repo),
        jobs_repo=jobs_repo,
        rng=RNG(1),
        config=EngineConfig(rows=4, cols=6),
    )

    assert len(game.grid) == 4
    assert len(game.grid[0]) == 6
