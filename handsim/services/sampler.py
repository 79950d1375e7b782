"""Single literal shuffle, reported step by step.

Unlike the Monte Carlo simulator this reports one concrete deal, so two
unseeded calls will normally disagree.
"""

import random

from handsim.core.logging_config import get_logger
from handsim.models.card import Card
from handsim.models.simulation_models import SampleResult, SampleRow, SimulationConfig
from handsim.services.accrual import AccrualTracker, StepTotals, step_label
from handsim.services.draw_engine import DrawEngine, shuffle_deck
from handsim.services.validation import validate_draw_config

logger = get_logger(__name__)


def _row(totals: StepTotals) -> SampleRow:
    return SampleRow(
        step=totals.step,
        label=step_label(totals.step),
        weapons=totals.weapons,
        one_time_resources=totals.one_time_resources,
        per_turn_resources=totals.per_turn_resources,
        resource_bonus=totals.resource_bonus,
        resource_total=totals.resource_total,
        cost_total=totals.cost,
        resource_net=totals.resource_net,
        one_time_draw=totals.one_time_draw,
        per_turn_draw=totals.per_turn_draw,
        draw_bonus=totals.draw_bonus,
        draw_total=totals.draw_total,
        cards_in_hand=totals.cards_in_hand,
    )


def draw_single_sample(
    deck: list[Card],
    config: SimulationConfig,
    rng: random.Random | None = None,
) -> SampleResult:
    """Shuffle once, deal, and report every step from opening hand to the last draw.

    Args:
        deck: Expanded deck, one card per physical copy.
        config: Opening hand size, draw horizon and cards-per-turn rate.
            ``samples`` is ignored.
        rng: Random source; defaults to one seeded from ``config.seed``.

    Returns:
        SampleResult with one row per step and the literal cards drawn.
    """
    summary = validate_draw_config(deck, config.opening_hand, config.next_draws)
    rng = rng or random.Random(config.seed)

    engine = DrawEngine(shuffle_deck(deck, rng), config.opening_hand, rng)
    state = engine.deal_opening_hand()
    tracker = AccrualTracker(config.opening_hand, config.cards_per_turn)

    rows = [_row(tracker.observe(state.opening_hand_cards, 0))]
    drawn: list[Card] = []
    for draw_index in range(1, config.next_draws + 1):
        card = engine.draw()
        drawn.append(card)
        rows.append(_row(tracker.observe([card], draw_index)))

    logger.debug(
        "Drew single sample",
        extra={
            "extra_data": {
                "opening_hand": [card.name for card in state.opening_hand_cards],
                "draws": [card.name for card in drawn],
            }
        },
    )

    return SampleResult(
        deck_size=summary.deck_size,
        weakness_count=summary.weakness_count,
        opening_hand=config.opening_hand,
        next_draws=config.next_draws,
        cards_per_turn=config.cards_per_turn,
        rows=rows,
        opening_hand_cards=list(state.opening_hand_cards),
        drawn_cards=drawn,
    )
