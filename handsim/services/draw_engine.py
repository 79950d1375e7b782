"""Opening hand with weakness redraw, then sequential draws.

The opening hand is built by scanning a shuffled deck front to back:
weaknesses are set aside, everything else is kept until the hand is full.
The unconsumed tail plus the set-aside weaknesses are then reshuffled into
the draw pile, and later draws take cards from its head with no special
cases.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from handsim.core.errors import DeckExhaustedError
from handsim.models.card import Card


class DrawPhase(str, Enum):
    """Where the engine is in dealing a hand."""

    DRAWING_OPENING = "drawing_opening"
    OPENING_COMPLETE = "opening_complete"
    DRAW_PILE_READY = "draw_pile_ready"


@dataclass
class DrawState:
    """Opening hand and the pile later draws come from."""

    opening_hand_cards: list[Card]
    draw_pile: list[Card]
    set_aside_weaknesses: list[Card] = field(default_factory=list)


def shuffle_deck(deck: Sequence[Card], rng: random.Random) -> list[Card]:
    """Return a uniformly shuffled copy of ``deck``.

    ``random.Random.shuffle`` is a Fisher-Yates shuffle, so every
    permutation is equally likely.
    """
    copy = list(deck)
    rng.shuffle(copy)
    return copy


class DrawEngine:
    """Deals one opening hand and serves post-opening draws.

    Typical usage:
        engine = DrawEngine(shuffle_deck(deck, rng), opening_hand=5, rng=rng)
        state = engine.deal_opening_hand()
        first_draw = engine.draw()
    """

    def __init__(self, shuffled_deck: Sequence[Card], opening_hand: int, rng: random.Random):
        self._deck = list(shuffled_deck)
        self.opening_hand = opening_hand
        self.rng = rng
        self.phase = DrawPhase.DRAWING_OPENING
        self.state: DrawState | None = None
        self._next_index = 0

    def deal_opening_hand(self) -> DrawState:
        """Keep the first ``opening_hand`` non-weaknesses, deferring weaknesses.

        Raises:
            DeckExhaustedError: If the deck runs out before the hand is full.
        """
        if self.phase is not DrawPhase.DRAWING_OPENING:
            raise RuntimeError("Opening hand has already been dealt")

        kept: list[Card] = []
        set_aside: list[Card] = []
        cursor = 0
        while len(kept) < self.opening_hand and cursor < len(self._deck):
            card = self._deck[cursor]
            cursor += 1
            if card.weakness:
                set_aside.append(card)
            else:
                kept.append(card)

        if len(kept) < self.opening_hand:
            raise DeckExhaustedError(
                "Opening hand size cannot exceed the number of non-weakness cards in the deck."
            )
        self.phase = DrawPhase.OPENING_COMPLETE

        remaining = self._deck[cursor:]
        draw_pile = shuffle_deck([*remaining, *set_aside], self.rng)
        self.state = DrawState(
            opening_hand_cards=kept,
            draw_pile=draw_pile,
            set_aside_weaknesses=set_aside,
        )
        self.phase = DrawPhase.DRAW_PILE_READY
        return self.state

    def draw(self) -> Card:
        """Draw the next card from the head of the draw pile."""
        if self.phase is not DrawPhase.DRAW_PILE_READY or self.state is None:
            raise RuntimeError("Deal the opening hand before drawing")
        if self._next_index >= len(self.state.draw_pile):
            raise DeckExhaustedError("Draw pile is empty")
        card = self.state.draw_pile[self._next_index]
        self._next_index += 1
        return card

    @property
    def cards_drawn(self) -> int:
        return self._next_index


def draw_opening_hand(
    shuffled_deck: Sequence[Card], opening_hand: int, rng: random.Random
) -> DrawState:
    """Deal an opening hand from an already shuffled deck."""
    return DrawEngine(shuffled_deck, opening_hand, rng).deal_opening_hand()
