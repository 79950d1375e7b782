"""Pydantic models for the closed-form draw odds calculator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from handsim.core.settings import get_sim_settings
from handsim.models.deck import DeckEntry


class OddsRequest(BaseModel):
    """Inputs for exact (hypergeometric) draw odds."""

    deck_size: int = Field(default=33, gt=0, description="Total deck size")
    weaknesses: int = Field(
        default=2, ge=0, description="Weaknesses (redrawn during the opening hand)"
    )
    target_copies: int = Field(default=1, ge=0, description="Copies of the card you care about")
    opening_hand: int = Field(
        default_factory=lambda: get_sim_settings().opening_hand,
        gt=0,
        description="Opening hand size (non-weakness cards kept)",
    )
    next_draws: int = Field(
        default_factory=lambda: get_sim_settings().next_draws,
        ge=0,
        description="Draws to check after the opening hand",
    )


class HitProbability(BaseModel):
    """P(exactly ``hits`` target copies in the opening hand)."""

    hits: int = Field(ge=0)
    probability: float = Field(ge=0.0, le=1.0)


class DrawOdds(BaseModel):
    """Cumulative odds after ``draws`` post-opening draws."""

    draws: int = Field(ge=1)
    at_least_one: float = Field(ge=0.0, le=1.0)
    at_least_two: float = Field(ge=0.0, le=1.0)


class OddsResult(BaseModel):
    """Closed-form odds for one target card."""

    deck_size: int
    weaknesses: int
    target_copies: int
    opening_hand: int
    next_draws: int
    opening_distribution: list[HitProbability] = Field(default_factory=list)
    opening_hit_chance: float = Field(ge=0.0, le=1.0)
    opening_two_plus_chance: float = Field(ge=0.0, le=1.0)
    draws: list[DrawOdds] = Field(default_factory=list)
    hit_after_opening_miss: float = Field(
        ge=0.0,
        le=1.0,
        description="P(hit within next_draws | no copy in the opening hand)",
    )


class CategoryRequest(BaseModel):
    """Deck to analyse by trait or by equipment slot."""

    deck: list[DeckEntry] = Field(min_length=1)
    kind: Literal["trait", "slot"] = "trait"
