"""Battle field grid: an immutable rectangular matrix of squares."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

from gridwar.domain.errors import NotFoundError


@dataclass(frozen=True, slots=True)
class MatrixPosition:
    """Row (y) and column (x) of a square."""

    y: int
    x: int


@dataclass(frozen=True, slots=True)
class Square:
    """One cell of the battle field."""

    position: MatrixPosition
    creature_id: str | None = None
    reserved_creature_id: str | None = None

    @property
    def is_free(self) -> bool:
        return self.creature_id is None and self.reserved_creature_id is None


Grid = Tuple[Tuple[Square, ...], ...]


def create_grid(rows: int, cols: int) -> Grid:
    """Return an all-empty grid with the given dimensions."""
    if rows <= 0 or cols <= 0:
        raise ValueError("A grid needs at least one row and one column.")
    return tuple(
        tuple(Square(position=MatrixPosition(y=y, x=x)) for x in range(cols))
        for y in range(rows)
    )


def iter_squares(grid: Grid) -> Iterator[Square]:
    """Yield every square in row-major order."""
    for row in grid:
        yield from row


def flatten_grid(grid: Grid) -> List[Square]:
    return list(iter_squares(grid))


def get_square(grid: Grid, position: MatrixPosition) -> Square:
    if not (0 <= position.y < len(grid) and 0 <= position.x < len(grid[position.y])):
        raise NotFoundError(f"Position ({position.y}, {position.x}) is outside the battle field.")
    return grid[position.y][position.x]


def replace_square(grid: Grid, position: MatrixPosition, **changes: str | None) -> Grid:
    """Return a new grid where the square at ``position`` has ``changes`` applied.

    Rows other than the touched one are shared with the input grid.
    """
    square = get_square(grid, position)
    new_row = list(grid[position.y])
    new_row[position.x] = replace(square, **changes)
    return grid[: position.y] + (tuple(new_row),) + grid[position.y + 1 :]


def find_square_by_creature_id(grid: Grid, creature_id: str) -> Square:
    """Return the square occupied by ``creature_id``."""
    for square in iter_squares(grid):
        if square.creature_id == creature_id:
            return square
    raise NotFoundError(f"Creature '{creature_id}' is not on the battle field.")


def find_square_by_creature_id_if_possible(grid: Grid, creature_id: str) -> Square | None:
    for square in iter_squares(grid):
        if square.creature_id == creature_id:
            return square
    return None


def measure_distance(a: MatrixPosition, b: MatrixPosition) -> int:
    """Manhattan distance between two positions."""
    return abs(a.y - b.y) + abs(a.x - b.x)


def squares_within_range(grid: Grid, origin: MatrixPosition, min_reach: int, max_reach: int) -> List[Square]:
    """Return squares whose distance from ``origin`` lies in ``[min_reach, max_reach]``."""
    return [
        square
        for square in iter_squares(grid)
        if min_reach <= measure_distance(origin, square.position) <= max_reach
    ]


def squares_within_distance(grid: Grid, origin: MatrixPosition, distance: int) -> List[Square]:
    """Return squares within ``distance`` of ``origin``, the origin included."""
    return squares_within_range(grid, origin, 0, distance)


def squares_with_occupant(grid: Grid) -> List[Square]:
    return [square for square in iter_squares(grid) if square.creature_id is not None]


def squares_without_occupant(grid: Grid) -> List[Square]:
    """Return squares with neither an occupant nor a pending reservation."""
    return [square for square in iter_squares(grid) if square.is_free]
