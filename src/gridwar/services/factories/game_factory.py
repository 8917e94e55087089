"""Factory for creating a battle snapshot from a stage definition."""
from __future__ import annotations

import logging
from typing import Callable, List

from gridwar.core.config import EngineConfig
from gridwar.core.rng import RNG
from gridwar.data.repositories import JobsRepository, StagesRepository
from gridwar.domain.cards import Card, CardRelationship, validate_cards
from gridwar.domain.game import BattleConstants, CreatureAppearance, Game
from gridwar.domain.grid import create_grid
from gridwar.domain.roster import Creature, Party
from gridwar.services.errors import FactoryError

from .id_factory import create_numeric_uid_creator

logger = logging.getLogger(__name__)


def create_creature(job_id: str, jobs_repo: JobsRepository, create_uid: Callable[[], str]) -> Creature:
    """Instantiate a creature at full life for the given job."""
    try:
        job = jobs_repo.get(job_id)
    except KeyError as exc:
        raise FactoryError(f"Job '{job_id}' not found.") from exc
    return Creature(id=create_uid(), job_id=job.id, life_points=job.max_life_points)


def create_game_from_stage(
    stage_id: str,
    *,
    stages_repo: StagesRepository,
    jobs_repo: JobsRepository,
    rng: RNG,
    config: EngineConfig | None = None,
) -> Game:
    """
    Build the opening snapshot of a stage.

    Player creatures become cards; the deck is shuffled with ``rng`` and the
    hand is dealt from its head. Computer creatures are scheduled through
    creature appearances and stay off the board until their turn.
    """
    config = config or EngineConfig()
    try:
        stage = stages_repo.get(stage_id)
    except KeyError as exc:
        raise FactoryError(f"Stage '{stage_id}' not found.") from exc

    create_uid = create_numeric_uid_creator()

    player_creatures: List[Creature] = []
    cards: List[Card] = []
    for creature_def in stage.player_creatures:
        creature = create_creature(creature_def.job_id, jobs_repo, create_uid)
        player_creatures.append(creature)
        cards.append(Card(creature_id=creature.id, skill_category_id=creature_def.skill_category_id))

    computer_creatures: List[Creature] = []
    appearances: List[CreatureAppearance] = []
    for appearance_def in sorted(stage.appearances, key=lambda a: a.turn_number):
        spawned = [create_creature(job_id, jobs_repo, create_uid) for job_id in appearance_def.job_ids]
        computer_creatures.extend(spawned)
        appearances.append(
            CreatureAppearance(
                turn_number=appearance_def.turn_number,
                creature_ids=tuple(creature.id for creature in spawned),
            )
        )

    shuffled = [CardRelationship(creature_id=card.creature_id) for card in cards]
    rng.shuffle(shuffled)
    hand_size = config.max_number_of_players_hand
    cards_on_hand = tuple(shuffled[:hand_size])
    cards_in_deck = tuple(shuffled[hand_size:])
    validate_cards(cards_in_deck, cards_on_hand)

    logger.debug(
        "Created stage '%s' with %d player and %d computer creatures",
        stage.id,
        len(player_creatures),
        len(computer_creatures),
    )
    return Game(
        constants=BattleConstants(
            jobs=tuple(jobs_repo.all()),
            max_number_of_players_hand=hand_size,
        ),
        grid=create_grid(stage.rows or config.rows, stage.cols or config.cols),
        creatures=tuple(player_creatures + computer_creatures),
        parties=(
            Party(faction_id="player", creature_ids=tuple(c.id for c in player_creatures)),
            Party(faction_id="computer", creature_ids=tuple(c.id for c in computer_creatures)),
        ),
        cards=tuple(cards),
        cards_in_deck=cards_in_deck,
        cards_on_players_hand=cards_on_hand,
        creature_appearances=tuple(appearances),
        action_points=config.initial_action_points,
        action_points_recovery=config.action_points_recovery,
        headquarters_life_points=stage.headquarters_life_points,
    )
