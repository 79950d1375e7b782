"""Tests for the Monte Carlo simulator."""

import random

import pytest

from handsim.core.errors import InvalidDrawConfigError
from handsim.models.card import Card
from handsim.models.deck import CardAnnotations, DeckEntry, expand_deck
from handsim.models.odds_models import OddsRequest
from handsim.models.simulation_models import SimulationConfig
from handsim.services.combinatorics import probability_at_least
from handsim.services.odds import calculate_odds
from handsim.services.simulator import SimulationTotals, run_simulation, simulate_batch


def _standard_deck(fillers=30):
    """One target card, ``fillers`` plain cards and two weaknesses."""
    deck = [Card(name="Target", code="T0")]
    deck += [Card(name=f"Filler {i}", code=f"F{i:02d}") for i in range(fillers)]
    deck += [Card(name="Amnesia", code="W0", weakness=True), Card(name="Paranoia", code="W1", weakness=True)]
    return deck


def _contribution(result, key):
    return next(row for row in result.card_contributions if row.key == key)


# =============================================================================
# Statistical agreement with the closed form
# =============================================================================


class TestConvergence:
    """Sampled rates should match the exact odds."""

    def test_opening_rate(self):
        config = SimulationConfig(opening_hand=5, next_draws=0, samples=50_000, seed=11)
        result = run_simulation(_standard_deck(fillers=27), config)
        expected = probability_at_least(28, 1, 5, 1)
        assert expected == pytest.approx(5 / 28)
        assert _contribution(result, "T0").opening_rate == pytest.approx(expected, abs=0.01)

    def test_by_draw_rate_matches_odds(self):
        config = SimulationConfig(
            opening_hand=5, next_draws=3, samples=20_000, by_draw_threshold=3, seed=12
        )
        result = run_simulation(_standard_deck(), config)

        odds = calculate_odds(
            OddsRequest(deck_size=33, weaknesses=2, target_copies=1, opening_hand=5, next_draws=3)
        )
        assert _contribution(result, "T0").by_draw_rate == pytest.approx(
            odds.draws[-1].at_least_one, abs=0.02
        )

    def test_weapon_hit_rate_per_step(self):
        # No weaknesses, so the first H + i cards are a uniform random subset
        deck = [Card(name="Machete", code="01020", weapon=True), Card(name="Knife", code="01086", weapon=True)]
        deck += [Card(name=f"Filler {i}", code=f"F{i}") for i in range(8)]
        config = SimulationConfig(opening_hand=3, next_draws=4, samples=20_000, seed=21)
        result = run_simulation(deck, config)

        for step in result.steps:
            expected = probability_at_least(10, 2, 3 + step.step, 1)
            assert step.weapon_hit_rate == pytest.approx(expected, abs=0.02)

    def test_weaknesses_never_open(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=5, samples=500, seed=3)
        result = run_simulation(sample_deck, config)
        assert _contribution(result, "01096").opening_rate == 0.0
        assert _contribution(result, "01097").opening_rate == 0.0


# =============================================================================
# Deterministic behaviour
# =============================================================================


class TestRunSimulation:
    """Tests for result shape and exact accrual."""

    def test_seed_is_reproducible(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=6, samples=300, seed=42)
        assert run_simulation(sample_deck, config) == run_simulation(sample_deck, config)

    def test_result_shape(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=10, samples=200, seed=1)
        result = run_simulation(sample_deck, config)

        assert result.deck_size == 30
        assert result.weakness_count == 2
        assert result.samples == 200
        assert [step.label for step in result.steps][:2] == ["Opening hand", "Draw 1"]
        assert len(result.steps) == 11
        assert len(result.card_contributions) == 16
        assert result.trait_odds and result.slot_odds
        for step in result.steps:
            assert 0.0 <= step.weapon_hit_rate <= 1.0

    def test_contributions_sorted(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=4, samples=300, seed=5)
        rows = run_simulation(sample_deck, config).card_contributions
        keys = [(-row.by_draw_rate, -row.opening_rate, row.label) for row in rows]
        assert keys == sorted(keys)

    def test_draw_bonus_of_a_card_always_in_hand(self):
        deck = [Card(name="Sketches", code="S", draw=2)] + [Card(name=f"C{i}") for i in range(4)]
        config = SimulationConfig(opening_hand=5, next_draws=0, samples=50, seed=1)
        result = run_simulation(deck, config)

        sketches = _contribution(result, "S")
        assert sketches.opening_rate == 1.0
        assert sketches.avg_draw_bonus == pytest.approx(2.0)
        assert result.steps[0].avg_draw_total == pytest.approx(7.0)

    def test_per_turn_resources(self):
        deck = [Card(name="Milan", code="01033", resources_per_turn=1)] * 4
        config = SimulationConfig(opening_hand=2, next_draws=2, samples=20, seed=1)
        result = run_simulation(deck, config)

        assert [step.avg_per_turn_resources for step in result.steps] == [0, 1, 2]
        assert result.steps[2].avg_resource_total == pytest.approx(5 + 2 + 2)

    def test_per_turn_draw(self):
        deck = [Card(name="Lucky Cigarette Case", code="02030", draw_per_turn=1)] * 4
        config = SimulationConfig(opening_hand=2, next_draws=2, samples=20, seed=1)
        result = run_simulation(deck, config)

        assert [step.avg_per_turn_draw for step in result.steps] == [0, 1, 2]
        assert result.steps[2].avg_draw_total == pytest.approx(2 + 2 + 2)

    def test_negative_draw_bonus(self):
        entries = [
            DeckEntry(count=1, name="Drawback", code="X1", annotations=CardAnnotations(draw=-1)),
            DeckEntry(count=9, name="Filler", code="F1"),
        ]
        config = SimulationConfig(opening_hand=5, next_draws=3, samples=50, seed=1)
        result = run_simulation(expand_deck(entries), config)

        drawback = _contribution(result, "X1")
        assert drawback.avg_draw_bonus < 0
        assert drawback.avg_draw_bonus == pytest.approx(-drawback.by_draw_rate)

    def test_threshold_capped_at_next_draws(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=2, by_draw_threshold=10, samples=50, seed=1)
        assert run_simulation(sample_deck, config).by_draw_threshold == 2

    def test_invalid_config(self, sample_deck):
        config = SimulationConfig(opening_hand=29, next_draws=0, samples=10)
        with pytest.raises(InvalidDrawConfigError):
            run_simulation(sample_deck, config)


class TestMerge:
    """Batches combine by plain addition."""

    def test_merged_batches_add_up(self, sample_deck):
        config = SimulationConfig(opening_hand=5, next_draws=3, samples=1, seed=None)
        first = simulate_batch(sample_deck, config, 100, random.Random(1))
        second = simulate_batch(sample_deck, config, 150, random.Random(2))

        merged = SimulationTotals.empty(sample_deck, config.next_draws)
        merged.merge(first)
        merged.merge(second)

        assert merged.samples == 250
        for step, (a, b) in enumerate(zip(first.steps, second.steps)):
            assert merged.steps[step].weapons == a.weapons + b.weapons
            assert merged.steps[step].cost == pytest.approx(a.cost + b.cost)
        machete = merged.cards["01020"]
        assert machete.copies == 2
        assert machete.by_draw_hits == first.cards["01020"].by_draw_hits + second.cards["01020"].by_draw_hits
