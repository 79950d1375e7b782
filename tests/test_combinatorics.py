"""Tests for binomial and hypergeometric primitives."""

import math

import pytest

from handsim.services.combinatorics import (
    combination,
    hypergeometric_pmf,
    probability_at_least,
    probability_no_hits,
)

# =============================================================================
# Test combination
# =============================================================================


class TestCombination:
    """Tests for the exact binomial coefficient."""

    @pytest.mark.parametrize(
        "n,k,expected",
        [
            (5, 2, 10),
            (52, 5, 2_598_960),
            (33, 5, 237_336),
            (0, 0, 1),
            (7, 0, 1),
            (7, 7, 1),
        ],
    )
    def test_known_values(self, n, k, expected):
        assert combination(n, k) == expected

    def test_out_of_range_is_zero(self):
        assert combination(5, 6) == 0
        assert combination(5, -1) == 0

    def test_symmetry(self):
        for n in range(0, 40):
            for k in range(0, n + 1):
                assert combination(n, k) == combination(n, n - k)

    def test_matches_math_comb_for_large_decks(self):
        """Deck sizes in the low hundreds stay exact."""
        for n in (100, 150, 250):
            for k in (1, 7, 30, n // 2, n - 3):
                assert combination(n, k) == math.comb(n, k)

    def test_returns_int(self):
        assert isinstance(combination(200, 100), int)


# =============================================================================
# Test hypergeometric probabilities
# =============================================================================


class TestHypergeometric:
    """Tests for the hypergeometric pmf and tail probabilities."""

    @pytest.mark.parametrize(
        "population,successes,draws",
        [(30, 4, 5), (28, 1, 5), (10, 2, 3), (20, 3, 10), (200, 12, 40)],
    )
    def test_pmf_sums_to_one(self, population, successes, draws):
        total = sum(
            hypergeometric_pmf(population, successes, draws, k) for k in range(draws + 1)
        )
        assert total == pytest.approx(1.0, abs=1e-12)

    def test_pmf_known_value(self):
        # One copy among 31 cards, 5 drawn
        assert hypergeometric_pmf(31, 1, 5, 1) == pytest.approx(5 / 31)

    def test_pmf_impossible_inputs(self):
        assert hypergeometric_pmf(10, 2, 11, 1) == 0.0  # draws > population
        assert hypergeometric_pmf(10, 2, 5, -1) == 0.0
        assert hypergeometric_pmf(10, 2, 5, 6) == 0.0  # hits > draws
        assert hypergeometric_pmf(10, 2, 5, 3) == 0.0  # hits > successes

    def test_at_least_bounds(self):
        assert probability_at_least(20, 3, 10, 0) == 1.0
        assert probability_at_least(20, 3, 10, -2) == 1.0
        assert probability_at_least(20, 3, 10, 4) == 0.0
        assert probability_at_least(20, 3, 2, 3) == 0.0

    def test_at_least_two_matches_direct_sum(self):
        direct = hypergeometric_pmf(20, 3, 10, 2) + hypergeometric_pmf(20, 3, 10, 3)
        assert probability_at_least(20, 3, 10, 2) == pytest.approx(direct)
        assert probability_at_least(20, 3, 10, 2) == pytest.approx(0.5)

    @pytest.mark.parametrize(
        "population,successes,draws",
        [(28, 1, 5), (30, 4, 7), (33, 3, 15), (60, 4, 7), (150, 20, 30)],
    )
    def test_at_least_one_is_complement_of_no_hits(self, population, successes, draws):
        at_least = probability_at_least(population, successes, draws, 1)
        assert at_least == pytest.approx(1 - hypergeometric_pmf(population, successes, draws, 0), abs=1e-15)
        assert at_least == pytest.approx(1 - probability_no_hits(population, successes, draws), abs=1e-15)

    def test_drawing_whole_population_always_hits(self):
        assert probability_at_least(10, 2, 10, 2) == 1.0

    def test_large_population_stays_finite(self):
        value = probability_at_least(250, 10, 60, 1)
        assert 0.0 < value < 1.0
        assert math.isfinite(value)
