"""Cards, the deck and the player's hand."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from gridwar.core.types import SkillCategoryId
from gridwar.domain.errors import CardNotInHandError, HandOverflowError, NotFoundError

MAX_NUMBER_OF_PLAYERS_HAND = 5


@dataclass(frozen=True, slots=True)
class Card:
    """Binds one creature to the skill category its card carries."""

    creature_id: str
    skill_category_id: SkillCategoryId


@dataclass(frozen=True, slots=True)
class CardRelationship:
    """A reference to a card held in the deck or on the hand."""

    creature_id: str


def find_card_by_creature_id(cards: Sequence[Card], creature_id: str) -> Card:
    for card in cards:
        if card.creature_id == creature_id:
            return card
    raise NotFoundError(f"Card for creature '{creature_id}' not found.")


def validate_cards(cards_in_deck: Sequence[CardRelationship], cards_on_hand: Sequence[CardRelationship]) -> None:
    """Raise ValueError when a creature id appears more than once across deck and hand."""
    seen: set[str] = set()
    for relationship in (*cards_in_deck, *cards_on_hand):
        if relationship.creature_id in seen:
            raise ValueError(f"Card for creature '{relationship.creature_id}' is duplicated.")
        seen.add(relationship.creature_id)


def remove_card_from_hand(
    cards_on_hand: Sequence[CardRelationship], creature_id: str
) -> Tuple[CardRelationship, ...]:
    remaining = tuple(card for card in cards_on_hand if card.creature_id != creature_id)
    if len(remaining) == len(cards_on_hand):
        raise CardNotInHandError(f"Card for creature '{creature_id}' is not on the player's hand.")
    return remaining


def return_card_to_deck(
    cards_in_deck: Sequence[CardRelationship], creature_id: str
) -> Tuple[CardRelationship, ...]:
    """Put the creature's card back at the tail of the deck."""
    return (*cards_in_deck, CardRelationship(creature_id=creature_id))


def refill_cards_on_players_hand(
    cards_in_deck: Sequence[CardRelationship],
    cards_on_hand: Sequence[CardRelationship],
    max_hand_size: int = MAX_NUMBER_OF_PLAYERS_HAND,
) -> tuple[Tuple[CardRelationship, ...], Tuple[CardRelationship, ...]]:
    """
    Draw from the head of the deck until the hand is full.

    Returns ``(cards_in_deck, cards_on_hand)``; drawn cards follow the cards
    already held, in deck order.
    """
    delta = max_hand_size - len(cards_on_hand)
    if delta < 0:
        raise HandOverflowError(
            f"The player's hand holds {len(cards_on_hand)} cards, more than the maximum {max_hand_size}."
        )
    return tuple(cards_in_deck[delta:]), (*cards_on_hand, *cards_in_deck[:delta])
