"""Per-step bookkeeping of what has been seen and what it has granted.

One-time bonuses (``resources``, ``draw``) count once for every physical
copy seen. Per-turn bonuses pay out every turn after a card is first seen
and are keyed by card identity, so a second copy of the same card does not
double the per-turn income.
"""

from __future__ import annotations

from dataclasses import dataclass

from handsim.models.card import Card, card_key

STARTING_RESOURCES = 5


class SeenIndex:
    """Maps card key -> draw index at which it was first seen."""

    def __init__(self) -> None:
        self._first_seen: dict[str, int] = {}

    def record(self, card: Card, draw_index: int) -> None:
        self._first_seen.setdefault(card_key(card), draw_index)

    def seen_at(self, key: str) -> int | None:
        return self._first_seen.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._first_seen

    def __len__(self) -> int:
        return len(self._first_seen)

    def items(self):
        return self._first_seen.items()


@dataclass(frozen=True)
class StepTotals:
    """Everything granted by the cards seen up to one draw step."""

    step: int
    opening_hand: int
    cards_per_turn: float
    weapons: int
    one_time_resources: float
    per_turn_resources: float
    one_time_draw: float
    per_turn_draw: float
    cost: float

    @property
    def resource_bonus(self) -> float:
        return self.one_time_resources + self.per_turn_resources

    @property
    def resource_total(self) -> float:
        # Fixed starting pool plus one resource of upkeep per turn
        return STARTING_RESOURCES + self.step + self.resource_bonus

    @property
    def resource_net(self) -> float:
        return self.resource_total - self.cost

    @property
    def draw_bonus(self) -> float:
        return self.one_time_draw + self.per_turn_draw

    @property
    def draw_total(self) -> float:
        return self.opening_hand + self.step + self.draw_bonus

    @property
    def cards_in_hand(self) -> float:
        return max(0.0, self.draw_total - self.cards_per_turn * self.step)


def per_turn_bonus(
    seen_cards: list[Card], seen_index: SeenIndex, step: int, attribute: str
) -> float:
    """Sum ``bonus * turns held`` over unique keys carrying ``attribute``."""
    counted: set[str] = set()
    total = 0.0
    for card in seen_cards:
        bonus = getattr(card, attribute) or 0
        if not bonus:
            continue
        key = card_key(card)
        if key in counted:
            continue
        counted.add(key)
        seen_at = seen_index.seen_at(key)
        if seen_at is None:
            continue
        total += bonus * max(0, step - seen_at)
    return total


def compute_step_totals(
    seen_cards: list[Card],
    seen_index: SeenIndex,
    step: int,
    opening_hand: int,
    cards_per_turn: float,
) -> StepTotals:
    """Recompute totals from the full seen set at ``step``."""
    weapons = 0
    one_time_resources = 0.0
    one_time_draw = 0.0
    cost = 0.0
    for card in seen_cards:
        if card.weapon:
            weapons += 1
        one_time_resources += card.resources
        one_time_draw += card.draw
        cost += card.cost

    return StepTotals(
        step=step,
        opening_hand=opening_hand,
        cards_per_turn=cards_per_turn,
        weapons=weapons,
        one_time_resources=one_time_resources,
        per_turn_resources=per_turn_bonus(seen_cards, seen_index, step, "resources_per_turn"),
        one_time_draw=one_time_draw,
        per_turn_draw=per_turn_bonus(seen_cards, seen_index, step, "draw_per_turn"),
        cost=cost,
    )


class AccrualTracker:
    """Accumulates seen cards for one sample and reports per-step totals.

    Typical usage:
        tracker = AccrualTracker(opening_hand=5, cards_per_turn=1.5)
        rows = [tracker.observe(state.opening_hand_cards, 0)]
        for i in range(1, next_draws + 1):
            rows.append(tracker.observe([engine.draw()], i))
    """

    def __init__(self, opening_hand: int, cards_per_turn: float):
        self.opening_hand = opening_hand
        self.cards_per_turn = cards_per_turn
        self.seen_cards: list[Card] = []
        self.seen_index = SeenIndex()

    def observe(self, cards: list[Card], draw_index: int) -> StepTotals:
        """Mark ``cards`` as seen at ``draw_index`` and return that step's totals."""
        for card in cards:
            self.seen_cards.append(card)
            self.seen_index.record(card, draw_index)
        return compute_step_totals(
            self.seen_cards,
            self.seen_index,
            draw_index,
            self.opening_hand,
            self.cards_per_turn,
        )


def step_label(step: int) -> str:
    return "Opening hand" if step == 0 else f"Draw {step}"
