from __future__ import annotations

import pytest

from gridwar.domain.cards import (
    Card,
    CardRelationship,
    find_card_by_creature_id,
    refill_cards_on_players_hand,
    remove_card_from_hand,
    return_card_to_deck,
    validate_cards,
)
from gridwar.domain.errors import CardNotInHandError, HandOverflowError, NotFoundError


def _relationships(*creature_ids: str) -> tuple[CardRelationship, ...]:
    return tuple(CardRelationship(creature_id=creature_id) for creature_id in creature_ids)


def _ids(relationships) -> list[str]:
    return [relationship.creature_id for relationship in relationships]


def test_refill_draws_from_deck_head_until_hand_is_full() -> None:
    deck, hand = refill_cards_on_players_hand(_relationships("a", "b", "c", "d", "e"), _relationships("x", "y"))

    assert _ids(hand) == ["x", "y", "a", "b", "c"]
    assert _ids(deck) == ["d", "e"]


def test_refill_with_short_deck_takes_everything() -> None:
    deck, hand = refill_cards_on_players_hand(_relationships("a"), _relationships("x"))

    assert _ids(hand) == ["x", "a"]
    assert deck == ()


def test_refill_with_full_hand_changes_nothing() -> None:
    full = _relationships("a", "b", "c", "d", "e")

    deck, hand = refill_cards_on_players_hand(_relationships("f"), full)

    assert hand == full
    assert _ids(deck) == ["f"]


def test_refill_respects_custom_hand_size() -> None:
    deck, hand = refill_cards_on_players_hand(_relationships("a", "b", "c"), (), max_hand_size=2)

    assert _ids(hand) == ["a", "b"]
    assert _ids(deck) == ["c"]


def test_refill_rejects_overfull_hand() -> None:
    with pytest.raises(HandOverflowError):
        refill_cards_on_players_hand(_relationships("f"), _relationships("a", "b", "c", "d", "e", "g"))


def test_remove_card_from_hand() -> None:
    hand = _relationships("a", "b")

    assert _ids(remove_card_from_hand(hand, "a")) == ["b"]
    with pytest.raises(CardNotInHandError):
        remove_card_from_hand(hand, "z")


def test_return_card_to_deck_appends_to_tail() -> None:
    assert _ids(return_card_to_deck(_relationships("a"), "b")) == ["a", "b"]


def test_validate_cards_rejects_duplicates() -> None:
    validate_cards(_relationships("a"), _relationships("b"))
    with pytest.raises(ValueError):
        validate_cards(_relationships("a"), _relationships("a"))


def test_find_card_by_creature_id() -> None:
    cards = (Card(creature_id="a", skill_category_id="attack"),)

    assert find_card_by_creature_id(cards, "a").skill_category_id == "attack"
    with pytest.raises(NotFoundError):
        find_card_by_creature_id(cards, "b")
