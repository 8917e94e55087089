"""Engine configuration passed in by the caller when a battle is created."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunable numbers used when a new battle is created.

    ``rows`` and ``cols`` size the board of stages that do not declare one.
    """

    max_number_of_players_hand: int = 5
    initial_action_points: int = 2
    action_points_recovery: int = 3
    rows: int = 7
    cols: int = 7
