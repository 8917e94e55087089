from __future__ import annotations

import pytest

from gridwar.domain.combat import SkillContext, apply_damage, invoke_normal_attack, invoke_skill, resolve_attack
from gridwar.domain.defs import SkillDef
from gridwar.domain.errors import UnsupportedSkillCategoryError
from gridwar.domain.grid import create_grid
from gridwar.domain.roster import find_creature_by_id
from gridwar.domain.targeting import resolve_targets
from tests.helpers.builders import make_constants, make_creature, make_job, make_parties, place


def _make_board():
    constants = make_constants(make_job(attack_power=1, max_life_points=10))
    creatures = (
        make_creature("p", life_points=10),
        make_creature("near", life_points=10),
        make_creature("far", life_points=10),
    )
    parties = make_parties(["p"], ["near", "far"])
    grid = create_grid(3, 3)
    grid = place(grid, "p", 0, 0)
    grid = place(grid, "near", 0, 1)
    grid = place(grid, "far", 0, 2)
    return constants, creatures, parties, grid


def test_normal_attack_hits_adjacent_enemy_only() -> None:
    constants, creatures, parties, grid = _make_board()

    outcome = invoke_normal_attack(constants, creatures, parties, grid, "p")

    assert find_creature_by_id(outcome.creatures, "near").life_points == 9
    assert find_creature_by_id(outcome.creatures, "far").life_points == 10
    assert find_creature_by_id(creatures, "near").life_points == 10


def test_attack_skill_hits_every_enemy_within_two() -> None:
    constants, creatures, parties, grid = _make_board()
    context = SkillContext(
        constants=constants,
        skill=SkillDef(id="attack", skill_category_id="attack"),
        creatures=creatures,
        parties=parties,
        grid=grid,
        invoker_creature_id="p",
    )

    outcome = invoke_skill(context)

    assert find_creature_by_id(outcome.creatures, "near").life_points == 7
    assert find_creature_by_id(outcome.creatures, "far").life_points == 7


@pytest.mark.parametrize("category", ["defense", "support"])
def test_unimplemented_skill_categories_raise(category: str) -> None:
    constants, creatures, parties, grid = _make_board()
    context = SkillContext(
        constants=constants,
        skill=SkillDef(id=category, skill_category_id=category),
        creatures=creatures,
        parties=parties,
        grid=grid,
        invoker_creature_id="p",
    )

    with pytest.raises(UnsupportedSkillCategoryError):
        invoke_skill(context)


def test_damage_never_drops_below_zero() -> None:
    jobs = [make_job(max_life_points=3)]

    assert apply_damage(make_creature("a", life_points=2), 5, jobs).life_points == 0


def test_resolve_attack_keeps_hitting_after_a_target_dies() -> None:
    jobs = [make_job(max_life_points=5)]
    creatures = (make_creature("p", life_points=5), make_creature("a", life_points=1), make_creature("b", life_points=5))
    parties = make_parties(["p"], ["a", "b"])
    grid = create_grid(3, 3)
    grid = place(grid, "p", 1, 1)
    grid = place(grid, "a", 0, 1)
    grid = place(grid, "b", 2, 1)
    targeting = resolve_targets(creatures, parties, grid, "p", max_reach=1, max_targets=99)

    result = resolve_attack(creatures, targeting.targets, 2, jobs)

    assert find_creature_by_id(result, "a").life_points == 0
    assert find_creature_by_id(result, "b").life_points == 3
