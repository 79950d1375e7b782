"""Monte Carlo deck simulation engine.

Each sample shuffles the deck, deals an opening hand with the weakness
redraw rule, plays out ``next_draws`` draws and feeds every step through
the accrual tracker. Per-step totals and per-card sightings are summed
across samples and divided by the sample count at the end.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass

from handsim.core.logging_config import get_logger
from handsim.models.card import Card, card_key
from handsim.models.simulation_models import (
    CardContribution,
    SimulationConfig,
    SimulationResult,
    StepAverages,
)
from handsim.services.accrual import STARTING_RESOURCES, AccrualTracker, StepTotals, step_label
from handsim.services.category_analyzer import analyze_slots, analyze_traits
from handsim.services.draw_engine import DrawEngine, shuffle_deck
from handsim.services.validation import validate_draw_config

logger = get_logger(__name__)


# =============================================================================
# Accumulators
# =============================================================================


@dataclass
class SampleAccumulator:
    """Running sums for one draw step across all samples."""

    weapons: float = 0.0
    samples_with_weapon: int = 0
    one_time_resources: float = 0.0
    per_turn_resources: float = 0.0
    one_time_draw: float = 0.0
    per_turn_draw: float = 0.0
    cost: float = 0.0

    def add(self, totals: StepTotals) -> None:
        self.weapons += totals.weapons
        if totals.weapons > 0:
            self.samples_with_weapon += 1
        self.one_time_resources += totals.one_time_resources
        self.per_turn_resources += totals.per_turn_resources
        self.one_time_draw += totals.one_time_draw
        self.per_turn_draw += totals.per_turn_draw
        self.cost += totals.cost

    def merge(self, other: SampleAccumulator) -> None:
        self.weapons += other.weapons
        self.samples_with_weapon += other.samples_with_weapon
        self.one_time_resources += other.one_time_resources
        self.per_turn_resources += other.per_turn_resources
        self.one_time_draw += other.one_time_draw
        self.per_turn_draw += other.per_turn_draw
        self.cost += other.cost

    def averages(
        self, step: int, samples: int, opening_hand: int, cards_per_turn: float
    ) -> StepAverages:
        one_time_resources = self.one_time_resources / samples
        per_turn_resources = self.per_turn_resources / samples
        one_time_draw = self.one_time_draw / samples
        per_turn_draw = self.per_turn_draw / samples
        cost = self.cost / samples

        resource_bonus = one_time_resources + per_turn_resources
        resource_total = STARTING_RESOURCES + step + resource_bonus
        draw_bonus = one_time_draw + per_turn_draw
        draw_total = opening_hand + step + draw_bonus

        return StepAverages(
            step=step,
            label=step_label(step),
            avg_weapons=self.weapons / samples,
            weapon_hit_rate=self.samples_with_weapon / samples,
            avg_one_time_resources=one_time_resources,
            avg_per_turn_resources=per_turn_resources,
            avg_resource_bonus=resource_bonus,
            avg_resource_total=resource_total,
            avg_cost_total=cost,
            avg_resource_net=resource_total - cost,
            avg_one_time_draw=one_time_draw,
            avg_per_turn_draw=per_turn_draw,
            avg_draw_bonus=draw_bonus,
            avg_draw_total=draw_total,
            avg_cards_in_hand=max(0.0, draw_total - cards_per_turn * step),
        )


@dataclass
class CardStat:
    """Per unique card: how many samples saw it, and its draw bonus."""

    label: str
    copies: int = 0
    opening_hits: int = 0
    by_draw_hits: int = 0
    draw_bonus: float = 0.0

    def merge(self, other: CardStat) -> None:
        self.opening_hits += other.opening_hits
        self.by_draw_hits += other.by_draw_hits
        self.draw_bonus += other.draw_bonus


@dataclass
class SimulationTotals:
    """Additive totals for a batch of samples."""

    steps: list[SampleAccumulator]
    cards: dict[str, CardStat]
    samples: int = 0

    @classmethod
    def empty(cls, deck: list[Card], next_draws: int) -> SimulationTotals:
        cards: dict[str, CardStat] = {}
        for card in deck:
            stat = cards.setdefault(card_key(card), CardStat(label=card.name))
            stat.copies += 1
        return cls(steps=[SampleAccumulator() for _ in range(next_draws + 1)], cards=cards)

    def merge(self, other: SimulationTotals) -> None:
        """Fold another batch in; totals are pure sums so order does not matter."""
        for mine, theirs in zip(self.steps, other.steps):
            mine.merge(theirs)
        for key, stat in other.cards.items():
            self.cards[key].merge(stat)
        self.samples += other.samples


# =============================================================================
# Sampling
# =============================================================================


def _run_sample(
    deck: list[Card],
    config: SimulationConfig,
    threshold: int,
    totals: SimulationTotals,
    rng: random.Random,
) -> None:
    engine = DrawEngine(shuffle_deck(deck, rng), config.opening_hand, rng)
    state = engine.deal_opening_hand()
    tracker = AccrualTracker(config.opening_hand, config.cards_per_turn)

    totals.steps[0].add(tracker.observe(state.opening_hand_cards, 0))
    for draw_index in range(1, config.next_draws + 1):
        totals.steps[draw_index].add(tracker.observe([engine.draw()], draw_index))

    for key, seen_at in tracker.seen_index.items():
        stat = totals.cards[key]
        if seen_at == 0:
            stat.opening_hits += 1
        if seen_at <= threshold:
            stat.by_draw_hits += 1

    # One-time draw bonus of each unique card, once per sample
    credited: set[str] = set()
    for card in tracker.seen_cards:
        key = card_key(card)
        if key in credited or not card.draw:
            continue
        if tracker.seen_index.seen_at(key) <= threshold:
            credited.add(key)
            totals.cards[key].draw_bonus += card.draw
    totals.samples += 1


def _contributions(totals: SimulationTotals) -> list[CardContribution]:
    samples = totals.samples
    rows = [
        CardContribution(
            key=key,
            label=stat.label,
            copies=stat.copies,
            opening_rate=stat.opening_hits / samples,
            by_draw_rate=stat.by_draw_hits / samples,
            avg_draw_bonus=stat.draw_bonus / samples,
        )
        for key, stat in totals.cards.items()
    ]
    rows.sort(key=lambda row: (-row.by_draw_rate, -row.opening_rate, row.label))
    return rows


def simulate_batch(
    deck: list[Card],
    config: SimulationConfig,
    samples: int,
    rng: random.Random,
) -> SimulationTotals:
    """Run ``samples`` independent samples and return their raw totals.

    Batches share no state, so callers may run several in parallel and
    combine them with ``SimulationTotals.merge``.
    """
    threshold = min(config.by_draw_threshold, config.next_draws)
    totals = SimulationTotals.empty(deck, config.next_draws)
    for _ in range(samples):
        _run_sample(deck, config, threshold, totals, rng)
    return totals


def run_simulation(
    deck: list[Card],
    config: SimulationConfig | None = None,
    rng: random.Random | None = None,
) -> SimulationResult:
    """Run Monte Carlo simulation for deck performance.

    Args:
        deck: Expanded deck, one card per physical copy.
        config: Simulation configuration (defaults from settings).
        rng: Random source; defaults to one seeded from ``config.seed``.

    Returns:
        SimulationResult with per-step averages, per-card rates and
        trait/slot odds.

    Raises:
        InvalidDrawConfigError: If the deck cannot support the configuration.
    """
    config = config or SimulationConfig()
    summary = validate_draw_config(deck, config.opening_hand, config.next_draws)
    rng = rng or random.Random(config.seed)
    threshold = min(config.by_draw_threshold, config.next_draws)

    logger.info(
        f"Simulation started: {config.samples} samples",
        extra={
            "extra_data": {
                "deck_size": summary.deck_size,
                "weaknesses": summary.weakness_count,
                "opening_hand": config.opening_hand,
                "next_draws": config.next_draws,
                "samples": config.samples,
                "seed": config.seed,
            }
        },
    )
    start_time = time.perf_counter()

    totals = simulate_batch(deck, config, config.samples, rng)
    steps = [
        accumulator.averages(step, totals.samples, config.opening_hand, config.cards_per_turn)
        for step, accumulator in enumerate(totals.steps)
    ]

    result = SimulationResult(
        deck_size=summary.deck_size,
        weakness_count=summary.weakness_count,
        opening_hand=config.opening_hand,
        next_draws=config.next_draws,
        samples=totals.samples,
        cards_per_turn=config.cards_per_turn,
        by_draw_threshold=threshold,
        steps=steps,
        card_contributions=_contributions(totals),
        trait_odds=analyze_traits(deck),
        slot_odds=analyze_slots(deck),
    )

    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        f"Simulation completed: {totals.samples} samples",
        extra={"extra_data": {"duration_ms": round(duration_ms, 2)}},
    )
    return result
