"""Rule configuration for card decks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleConfig:
    """Tunable parameters of the card mechanic."""

    # Cards dealt each time a deck runs out
    deck_size: int = 5

    # Chance that a dealt card is the no-op card
    skip_probability: float = 0.5

    # Highest card id; ids 1..max_card are drawn uniformly
    max_card: int = 10


DEFAULT_CONFIG = RuleConfig()
