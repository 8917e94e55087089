"""Application-level state envelope around the battle snapshot."""
from __future__ import annotations

from dataclasses import dataclass

from gridwar.domain.game import Game


@dataclass(frozen=True, slots=True)
class BattlePage:
    game: Game


@dataclass(frozen=True, slots=True)
class ApplicationState:
    """Everything the caller stores between commands; the battle page may be absent."""

    battle: BattlePage | None = None
