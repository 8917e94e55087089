"""Strategies for picking the squares computer creatures spawn on."""
from __future__ import annotations

from typing import List, Sequence

from gridwar.core.rng import RNG
from gridwar.domain.battle_rules import SquareChooser
from gridwar.domain.grid import Square


def choose_first_squares(squares: Sequence[Square], number_of_squares: int) -> List[Square]:
    """Pick the first candidates in row-major order."""
    return list(squares[:number_of_squares])


def make_random_square_chooser(rng: RNG) -> SquareChooser:
    """Return a chooser drawing distinct squares from ``rng``."""

    def choose(squares: Sequence[Square], number_of_squares: int) -> List[Square]:
        return rng.sample(squares, number_of_squares)

    return choose
