from __future__ import annotations

import pytest

from gridwar.domain.errors import NotFoundError
from gridwar.domain.grid import (
    MatrixPosition,
    create_grid,
    find_square_by_creature_id,
    get_square,
    measure_distance,
    replace_square,
    squares_with_occupant,
    squares_within_distance,
    squares_within_range,
    squares_without_occupant,
)
from tests.helpers.builders import place


def test_create_grid_is_rectangular_and_empty() -> None:
    grid = create_grid(2, 3)

    assert len(grid) == 2
    assert all(len(row) == 3 for row in grid)
    assert all(square.creature_id is None and square.reserved_creature_id is None for row in grid for square in row)
    assert grid[1][2].position == MatrixPosition(y=1, x=2)


def test_create_grid_rejects_empty_dimensions() -> None:
    with pytest.raises(ValueError):
        create_grid(0, 3)


def test_find_square_by_creature_id_raises_when_absent() -> None:
    grid = place(create_grid(2, 2), "a", 1, 0)

    assert find_square_by_creature_id(grid, "a").position == MatrixPosition(y=1, x=0)
    with pytest.raises(NotFoundError):
        find_square_by_creature_id(grid, "missing")


def test_get_square_outside_board_raises() -> None:
    with pytest.raises(NotFoundError):
        get_square(create_grid(2, 2), MatrixPosition(y=2, x=0))


def test_measure_distance_is_manhattan() -> None:
    assert measure_distance(MatrixPosition(y=0, x=0), MatrixPosition(y=2, x=3)) == 5
    assert measure_distance(MatrixPosition(y=3, x=1), MatrixPosition(y=1, x=2)) == 3


def test_squares_within_distance_includes_origin() -> None:
    grid = create_grid(3, 3)

    positions = {square.position for square in squares_within_distance(grid, MatrixPosition(y=1, x=1), 1)}

    assert positions == {
        MatrixPosition(y=0, x=1),
        MatrixPosition(y=1, x=0),
        MatrixPosition(y=1, x=1),
        MatrixPosition(y=1, x=2),
        MatrixPosition(y=2, x=1),
    }


def test_squares_within_range_excludes_inner_band() -> None:
    grid = create_grid(3, 3)

    squares = squares_within_range(grid, MatrixPosition(y=0, x=0), 2, 2)

    assert [square.position for square in squares] == [
        MatrixPosition(y=0, x=2),
        MatrixPosition(y=1, x=1),
        MatrixPosition(y=2, x=0),
    ]


def test_squares_with_occupant_in_row_major_order() -> None:
    grid = place(place(create_grid(2, 2), "b", 1, 1), "a", 0, 1)

    assert [square.creature_id for square in squares_with_occupant(grid)] == ["a", "b"]


def test_squares_without_occupant_skips_reserved() -> None:
    grid = replace_square(create_grid(1, 3), MatrixPosition(y=0, x=0), reserved_creature_id="r")
    grid = place(grid, "a", 0, 1)

    assert [square.position for square in squares_without_occupant(grid)] == [MatrixPosition(y=0, x=2)]


def test_replace_square_does_not_mutate_input() -> None:
    grid = create_grid(2, 2)

    new_grid = replace_square(grid, MatrixPosition(y=0, x=0), creature_id="a")

    assert grid[0][0].creature_id is None
    assert new_grid[0][0].creature_id == "a"
    assert new_grid[1] is grid[1]
