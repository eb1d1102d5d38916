"""Card identifiers and deck dealing."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable
from enum import IntEnum

from deckmate.core.config import DEFAULT_CONFIG, RuleConfig


class Card(IntEnum):
    """Card ids as stored in a deck. Each non-zero card names one event kind."""

    SKIP = 0
    BISHOP_TO_KNIGHT = 1
    KNIGHT_TO_BISHOP = 2
    ROOKS_TO_QUEEN = 3
    QUEEN_TO_ROOKS = 4
    PAWNS_TO_QUEEN = 5
    QUEEN_TO_PAWNS = 6
    SWAP = 7
    ROTATE = 8
    PAWN_RUN = 9
    KING_MOVE = 10

    @property
    def title(self) -> str:
        return _TITLES[self]


_TITLES: dict[Card, str] = {
    Card.SKIP: "No effect",
    Card.BISHOP_TO_KNIGHT: "Mount up",
    Card.KNIGHT_TO_BISHOP: "Dismount",
    Card.ROOKS_TO_QUEEN: "Fusion",
    Card.QUEEN_TO_ROOKS: "Fission",
    Card.PAWNS_TO_QUEEN: "Assemble",
    Card.QUEEN_TO_PAWNS: "Shatter",
    Card.SWAP: "Shift change",
    Card.ROTATE: "The earth is round",
    Card.PAWN_RUN: "Sprint",
    Card.KING_MOVE: "Moving house",
}


def generate_cards(
    rng: random.Random,
    count: int | None = None,
    config: RuleConfig = DEFAULT_CONFIG,
) -> list[Card]:
    """Deal *count* cards: each is SKIP with ``skip_probability``, else uniform."""
    if count is None:
        count = config.deck_size
    cards: list[Card] = []
    for _ in range(count):
        if rng.random() < config.skip_probability:
            cards.append(Card.SKIP)
        else:
            cards.append(Card(rng.randint(1, config.max_card)))
    return cards


def summarize(cards: Iterable[Card]) -> list[tuple[Card, int]]:
    """Per-card counts in card-id order, omitting cards not held."""
    counts = Counter(cards)
    return [(card, counts[card]) for card in Card if counts[card]]
