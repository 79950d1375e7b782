"""Pydantic models for the hand simulator."""

from handsim.models.card import Card, CardSlot
from handsim.models.deck import CardAnnotations, DeckEntry, DeckSummary
from handsim.models.odds_models import OddsRequest, OddsResult
from handsim.models.simulation_models import (
    CardContribution,
    CategoryOdds,
    SampleResult,
    SimulationConfig,
    SimulationResult,
    StepAverages,
)

__all__ = [
    # Deck models
    "Card",
    "CardSlot",
    "CardAnnotations",
    "DeckEntry",
    "DeckSummary",
    # Simulation models
    "CardContribution",
    "CategoryOdds",
    "SampleResult",
    "SimulationConfig",
    "SimulationResult",
    "StepAverages",
    # Odds models
    "OddsRequest",
    "OddsResult",
]
