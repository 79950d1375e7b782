"""Up-front checks that reject impossible draw parameters.

All checks run before any sampling or accumulation starts; a failure
raises ``InvalidDrawConfigError`` and nothing partial is returned.
"""

from handsim.core.errors import InvalidDrawConfigError
from handsim.core.logging_config import get_logger
from handsim.models.card import Card
from handsim.models.deck import DeckSummary, summarize_deck

logger = get_logger(__name__)


def _reject(message: str, **context) -> None:
    logger.warning(f"Rejected draw parameters: {message}", extra={"extra_data": context})
    raise InvalidDrawConfigError(message)


def validate_draw_config(deck: list[Card], opening_hand: int, next_draws: int) -> DeckSummary:
    """Check opening hand and draw horizon against a concrete deck.

    Args:
        deck: Expanded deck, one card per physical copy.
        opening_hand: Non-weakness cards to keep.
        next_draws: Draws after the opening hand.

    Returns:
        DeckSummary for the deck.

    Raises:
        InvalidDrawConfigError: If the deck cannot support the request.
    """
    summary = summarize_deck(deck)
    context = {
        "deck_size": summary.deck_size,
        "weaknesses": summary.weakness_count,
        "opening_hand": opening_hand,
        "next_draws": next_draws,
    }
    if not deck:
        _reject("Deck is empty.", **context)
    if opening_hand > summary.non_weakness_count:
        _reject(
            "Opening hand size cannot exceed the number of non-weakness cards in the deck.",
            **context,
        )
    if opening_hand + next_draws > summary.deck_size:
        _reject("Opening hand plus next draws cannot exceed the deck size.", **context)
    return summary


def validate_odds_inputs(
    deck_size: int,
    weaknesses: int,
    target_copies: int,
    opening_hand: int,
    next_draws: int,
) -> int:
    """Check closed-form odds inputs.

    Returns:
        The non-weakness deck size.

    Raises:
        InvalidDrawConfigError: If the inputs describe an impossible deck.
    """
    context = {
        "deck_size": deck_size,
        "weaknesses": weaknesses,
        "target_copies": target_copies,
        "opening_hand": opening_hand,
        "next_draws": next_draws,
    }
    if weaknesses >= deck_size:
        _reject("Weakness count must be less than deck size.", **context)

    non_weak_deck = deck_size - weaknesses
    if target_copies > non_weak_deck:
        _reject("Target copies cannot exceed non-weakness cards in the deck.", **context)
    if opening_hand > non_weak_deck:
        _reject("Opening hand size cannot exceed non-weakness cards in the deck.", **context)
    if opening_hand + next_draws > deck_size:
        _reject("Opening hand plus next draws cannot exceed total deck size.", **context)
    return non_weak_deck
