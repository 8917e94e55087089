from __future__ import annotations

import pytest

from gridwar.domain.errors import NotFoundError
from gridwar.domain.roster import (
    DEFAULT_PLACEMENT_ORDER,
    determine_relationship,
    find_creature_by_id,
    find_creature_with_party,
    find_job_by_id,
    get_turns_until_raid,
    is_dead,
    next_placement_order,
    replace_creatures,
    update_life_points,
)
from tests.helpers.builders import make_creature, make_job, make_parties


def test_determine_relationship() -> None:
    assert determine_relationship("player", "player") == "ally"
    assert determine_relationship("computer", "computer") == "ally"
    assert determine_relationship("player", "computer") == "enemy"


def test_lookups_raise_not_found() -> None:
    creatures = [make_creature("a")]
    parties = make_parties(["a"])

    assert find_creature_with_party(creatures, parties, "a").party.faction_id == "player"
    with pytest.raises(NotFoundError):
        find_creature_by_id(creatures, "missing")
    with pytest.raises(NotFoundError):
        find_creature_with_party(creatures, parties, "missing")
    with pytest.raises(NotFoundError):
        find_job_by_id([make_job()], "missing")


def test_not_found_is_also_a_key_error() -> None:
    with pytest.raises(KeyError):
        find_creature_by_id([], "missing")


def test_update_life_points_clamps_to_bounds() -> None:
    jobs = [make_job(max_life_points=5)]
    creature = make_creature("a", life_points=3)

    assert update_life_points(creature, -10, jobs).life_points == 0
    assert update_life_points(creature, 10, jobs).life_points == 5
    assert update_life_points(creature, -1, jobs).life_points == 2
    assert creature.life_points == 3


def test_is_dead_only_at_zero() -> None:
    assert is_dead(make_creature("a", life_points=0)) is True
    assert is_dead(make_creature("a", life_points=1)) is False


def test_replace_creatures_merges_by_id() -> None:
    creatures = (make_creature("a"), make_creature("b"))
    updated = make_creature("b", life_points=0)

    result = replace_creatures(creatures, [updated])

    assert result == (creatures[0], updated)


def test_next_placement_order_is_above_every_existing_order() -> None:
    assert next_placement_order([]) == DEFAULT_PLACEMENT_ORDER + 1
    creatures = [make_creature("a", placement_order=4), make_creature("b", placement_order=2)]
    assert next_placement_order(creatures) == 5


def test_get_turns_until_raid() -> None:
    jobs = [make_job(raid_interval=3)]

    assert get_turns_until_raid(make_creature("a", raid_charge=1), jobs) == 2
    assert get_turns_until_raid(make_creature("a", raid_charge=5), jobs) == 0
