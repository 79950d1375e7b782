"""Closed-form draw odds with the weakness redraw rule.

Weaknesses can never be in the opening hand, so the opening hand is a
hypergeometric draw from the non-weakness cards only. Later draws come from
everything that is left, weaknesses included. Cumulative odds after the
opening hand condition on how many target copies the opening hand took.
"""

from handsim.core.logging_config import get_logger
from handsim.models.odds_models import DrawOdds, HitProbability, OddsRequest, OddsResult
from handsim.services.combinatorics import (
    combination,
    probability_at_least,
    probability_no_hits,
)
from handsim.services.validation import validate_odds_inputs

logger = get_logger(__name__)


def opening_distribution(
    deck_size: int, weaknesses: int, target_copies: int, opening_hand: int
) -> list[HitProbability]:
    """P(exactly ``hits`` target copies in the opening hand), hits = 0..min(H, T)."""
    non_weak_deck = deck_size - weaknesses
    denominator = combination(non_weak_deck, opening_hand)
    distribution = []
    for hits in range(min(opening_hand, target_copies) + 1):
        ways = combination(target_copies, hits) * combination(
            non_weak_deck - target_copies, opening_hand - hits
        )
        distribution.append(HitProbability(hits=hits, probability=ways / denominator))
    return distribution


def probability_by_draw(
    distribution: list[HitProbability],
    deck_size: int,
    target_copies: int,
    opening_hand: int,
    draws: int,
    min_hits: int,
) -> float:
    """P(at least ``min_hits`` copies seen after ``draws`` post-opening draws).

    Sums over the opening-hand outcomes: hands that already hold
    ``min_hits`` copies count in full, the rest need the shortfall from
    the ``deck_size - opening_hand`` cards still in the draw pile.
    """
    if min_hits <= 0:
        return 1.0
    if min_hits > target_copies:
        return 0.0

    remaining_deck = deck_size - opening_hand
    probability = 0.0
    for outcome in distribution:
        needed = min_hits - outcome.hits
        if needed <= 0:
            probability += outcome.probability
        else:
            probability += outcome.probability * probability_at_least(
                remaining_deck, target_copies - outcome.hits, draws, needed
            )
    return min(probability, 1.0)


def hit_after_opening_miss(
    deck_size: int, weaknesses: int, target_copies: int, opening_hand: int, draws: int
) -> float:
    """P(at least one copy in the next ``draws`` | none in the opening hand).

    Returns 0 when missing in the opening hand is impossible.
    """
    miss_opening = probability_no_hits(deck_size - weaknesses, target_copies, opening_hand)
    if miss_opening == 0:
        return 0.0
    return 1 - probability_no_hits(deck_size - opening_hand, target_copies, draws)


def calculate_odds(request: OddsRequest) -> OddsResult:
    """Compute opening-hand and cumulative draw odds for one target card.

    Raises:
        InvalidDrawConfigError: If the deck description is impossible.
    """
    validate_odds_inputs(
        request.deck_size,
        request.weaknesses,
        request.target_copies,
        request.opening_hand,
        request.next_draws,
    )

    distribution = opening_distribution(
        request.deck_size, request.weaknesses, request.target_copies, request.opening_hand
    )
    opening_hit_chance = 1 - probability_no_hits(
        request.deck_size - request.weaknesses, request.target_copies, request.opening_hand
    )
    opening_two_plus = sum(o.probability for o in distribution if o.hits >= 2)

    rows = [
        DrawOdds(
            draws=draws,
            at_least_one=probability_by_draw(
                distribution,
                request.deck_size,
                request.target_copies,
                request.opening_hand,
                draws,
                1,
            ),
            at_least_two=probability_by_draw(
                distribution,
                request.deck_size,
                request.target_copies,
                request.opening_hand,
                draws,
                2,
            ),
        )
        for draws in range(1, request.next_draws + 1)
    ]

    logger.debug(
        "Computed draw odds",
        extra={
            "extra_data": {
                "deck_size": request.deck_size,
                "target_copies": request.target_copies,
                "opening_hit_chance": opening_hit_chance,
            }
        },
    )

    return OddsResult(
        deck_size=request.deck_size,
        weaknesses=request.weaknesses,
        target_copies=request.target_copies,
        opening_hand=request.opening_hand,
        next_draws=request.next_draws,
        opening_distribution=distribution,
        opening_hit_chance=opening_hit_chance,
        opening_two_plus_chance=min(opening_two_plus, 1.0),
        draws=rows,
        hit_after_opening_miss=hit_after_opening_miss(
            request.deck_size,
            request.weaknesses,
            request.target_copies,
            request.opening_hand,
            request.next_draws,
        ),
    )
