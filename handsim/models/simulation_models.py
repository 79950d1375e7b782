"""Pydantic models for Monte Carlo and single-sample draw simulation.

This module defines the configuration and result schemas for the opening
hand simulator. Defaults come from ``handsim.core.settings`` so that the
HTTP surface and library callers agree on them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from handsim.core.settings import get_sim_settings
from handsim.models.card import Card
from handsim.models.deck import DeckEntry


class SimulationConfig(BaseModel):
    """Configuration for a simulation run."""

    opening_hand: int = Field(
        default_factory=lambda: get_sim_settings().opening_hand,
        gt=0,
        description="Non-weakness cards kept in the opening hand",
    )
    next_draws: int = Field(
        default_factory=lambda: get_sim_settings().next_draws,
        ge=0,
        description="Draws to play out after the opening hand",
    )
    samples: int = Field(
        default_factory=lambda: get_sim_settings().samples,
        gt=0,
        description="Number of shuffled decks to sample (Monte Carlo only)",
    )
    cards_per_turn: float = Field(
        default_factory=lambda: get_sim_settings().cards_per_turn,
        gt=0,
        description="Cards spent per turn when projecting hand size",
    )
    by_draw_threshold: int = Field(
        default_factory=lambda: get_sim_settings().by_draw_threshold,
        ge=0,
        description="Draw count used for per-card 'seen by draw N' rates",
    )
    seed: int | None = Field(
        default_factory=lambda: get_sim_settings().seed,
        description="Random seed for reproducibility",
    )


class SimulationRequest(BaseModel):
    """A deck plus the configuration to simulate it with."""

    deck: list[DeckEntry] = Field(min_length=1, description="Resolved deck entries")
    config: SimulationConfig = Field(default_factory=SimulationConfig)


class StepAverages(BaseModel):
    """Averages across all samples at one draw step."""

    step: int = Field(ge=0, description="0 for the opening hand, i after the i-th draw")
    label: str = Field(description="'Opening hand' or 'Draw i'")
    avg_weapons: float = Field(ge=0.0, description="Average weapons seen so far")
    weapon_hit_rate: float = Field(
        ge=0.0, le=1.0, description="Share of samples with at least one weapon seen"
    )
    avg_one_time_resources: float
    avg_per_turn_resources: float
    avg_resource_bonus: float = Field(description="One-time plus per-turn resources")
    avg_resource_total: float = Field(description="5 start + upkeep + resource bonus")
    avg_cost_total: float = Field(description="Printed cost of every card seen")
    avg_resource_net: float = Field(description="Resource total minus cost total")
    avg_one_time_draw: float
    avg_per_turn_draw: float
    avg_draw_bonus: float = Field(description="One-time plus per-turn extra draws")
    avg_draw_total: float = Field(description="Opening hand + draws so far + draw bonus")
    avg_cards_in_hand: float = Field(ge=0.0, description="Projected hand size")


class CardContribution(BaseModel):
    """How often one unique card shows up, and what it adds."""

    key: str = Field(description="Card code, or name when no code is known")
    label: str = Field(description="Card display name")
    copies: int = Field(ge=1, description="Physical copies in the deck")
    opening_rate: float = Field(ge=0.0, le=1.0, description="Share of samples with it in the opening hand")
    by_draw_rate: float = Field(
        ge=0.0, le=1.0, description="Share of samples with it seen by the draw threshold"
    )
    avg_draw_bonus: float = Field(
        description="Average one-time draw it supplied by the threshold; negative for drawbacks"
    )


class CategoryOdds(BaseModel):
    """Hypergeometric odds of seeing a trait or slot category."""

    name: str = Field(description="Trait or slot name")
    count: int = Field(ge=0, description="Non-weakness cards bearing it")
    cards: list[str] = Field(
        default_factory=list,
        description="Every bearing card, weaknesses included, '(Nx)' for duplicates",
    )
    probabilities: dict[int, float] = Field(
        default_factory=dict,
        description="Draw count -> P(at least one bearing card)",
    )


class SimulationResult(BaseModel):
    """Complete results from a Monte Carlo run."""

    deck_size: int
    weakness_count: int
    opening_hand: int
    next_draws: int
    samples: int
    cards_per_turn: float
    by_draw_threshold: int = Field(description="Effective threshold, capped at next_draws")
    steps: list[StepAverages] = Field(default_factory=list)
    card_contributions: list[CardContribution] = Field(default_factory=list)
    trait_odds: list[CategoryOdds] = Field(default_factory=list)
    slot_odds: list[CategoryOdds] = Field(default_factory=list)


class SampleRow(BaseModel):
    """Totals for one draw step of a single literal shuffle."""

    step: int = Field(ge=0)
    label: str
    weapons: int = Field(ge=0)
    one_time_resources: float
    per_turn_resources: float
    resource_bonus: float
    resource_total: float
    cost_total: float
    resource_net: float
    one_time_draw: float
    per_turn_draw: float
    draw_bonus: float
    draw_total: float
    cards_in_hand: float = Field(ge=0.0)


class SampleResult(BaseModel):
    """One concrete shuffle: the rows plus the literal cards drawn."""

    deck_size: int
    weakness_count: int
    opening_hand: int
    next_draws: int
    cards_per_turn: float
    rows: list[SampleRow] = Field(default_factory=list)
    opening_hand_cards: list[Card] = Field(default_factory=list)
    drawn_cards: list[Card] = Field(default_factory=list)
