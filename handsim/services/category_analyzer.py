"""Odds of seeing at least one card of a trait or equipment slot.

Each category is treated as a single hypergeometric success class over the
non-weakness part of the deck. Weaknesses never count towards a category's
``count`` but are still listed among its cards.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Literal

from handsim.models.card import Card
from handsim.models.simulation_models import CategoryOdds
from handsim.services.combinatorics import probability_at_least

CATEGORY_DRAW_COUNTS = (5, 10, 15)

CategoryKind = Literal["trait", "slot"]


def _traits(card: Card) -> Iterable[str]:
    return card.traits


def _slots(card: Card) -> Iterable[str]:
    # A card listing the same slot twice still bears it once
    return {slot.name for slot in card.slots}


_EXTRACTORS: dict[str, Callable[[Card], Iterable[str]]] = {
    "trait": _traits,
    "slot": _slots,
}


def _label(name: str, copies: int) -> str:
    return f"{name} ({copies}x)" if copies > 1 else name


def analyze_categories(
    deck: list[Card],
    kind: CategoryKind = "trait",
    draw_counts: tuple[int, ...] = CATEGORY_DRAW_COUNTS,
) -> list[CategoryOdds]:
    """Build per-category odds rows for ``deck``.

    Args:
        deck: Expanded deck, one card per physical copy.
        kind: ``"trait"`` or ``"slot"``.
        draw_counts: Draw sizes to report P(at least one) for. Draws larger
            than the non-weakness deck are capped at its size.

    Returns:
        Rows sorted by count (descending), then name.
    """
    try:
        extract = _EXTRACTORS[kind]
    except KeyError:
        raise ValueError(f"Unknown category kind: {kind}") from None

    non_weak_deck = sum(1 for card in deck if not card.weakness)
    counts: Counter[str] = Counter()
    # category -> card name -> copies, in first-seen order
    bearers: dict[str, Counter[str]] = {}

    for card in deck:
        for category in extract(card):
            bearers.setdefault(category, Counter())[card.name] += 1
            if not card.weakness:
                counts[category] += 1

    rows: list[CategoryOdds] = []
    for category, cards in bearers.items():
        count = counts[category]
        rows.append(
            CategoryOdds(
                name=category,
                count=count,
                cards=[_label(name, copies) for name, copies in cards.items()],
                # Draw counts are capped at the non-weakness deck size (n <= N)
                probabilities={
                    draws: probability_at_least(
                        non_weak_deck, count, min(draws, non_weak_deck), 1
                    )
                    for draws in draw_counts
                },
            )
        )

    rows.sort(key=lambda row: (-row.count, row.name))
    return rows


def analyze_traits(deck: list[Card]) -> list[CategoryOdds]:
    return analyze_categories(deck, "trait")


def analyze_slots(deck: list[Card]) -> list[CategoryOdds]:
    return analyze_categories(deck, "slot")
