"""Exact binomial and hypergeometric primitives.

Binomial coefficients are built with the multiplicative formula over
``min(k, n - k)`` terms, so intermediate values never exceed the result
by more than a factor of ``k``. Probabilities are summed as exact
fractions and rounded to ``float`` once, which makes the complement
identity ``P(X >= 1) == 1 - P(X == 0)`` hold bit-for-bit.
"""

from fractions import Fraction


def combination(n: int, k: int) -> int:
    """Return C(n, k), or 0 when ``k`` is outside ``[0, n]``."""
    if k < 0 or k > n:
        return 0
    if k == 0 or k == n:
        return 1
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        # Divides exactly: result is C(n - k + i, i) after each step
        result = result * (n - k + i) // i
    return result


def _pmf(population: int, successes: int, draws: int, hits: int) -> Fraction:
    if draws < 0 or draws > population:
        return Fraction(0)
    if hits < 0 or hits > draws or hits > successes:
        return Fraction(0)
    denominator = combination(population, draws)
    if denominator == 0:
        return Fraction(0)
    numerator = combination(successes, hits) * combination(population - successes, draws - hits)
    return Fraction(numerator, denominator)


def hypergeometric_pmf(population: int, successes: int, draws: int, hits: int) -> float:
    """P(exactly ``hits`` successes when drawing ``draws`` from ``population``).

    Args:
        population: Cards in the pool (N).
        successes: Qualifying cards in the pool (K).
        draws: Cards drawn without replacement (n).
        hits: Qualifying cards wanted (k).

    Returns:
        C(K, k) * C(N - K, n - k) / C(N, n), or 0 for impossible inputs.
    """
    return float(_pmf(population, successes, draws, hits))


def probability_at_least(population: int, successes: int, draws: int, min_hits: int) -> float:
    """P(at least ``min_hits`` successes) for a hypergeometric draw."""
    if min_hits <= 0:
        return 1.0
    max_hits = min(successes, draws)
    if min_hits > max_hits:
        return 0.0
    total = sum(
        (_pmf(population, successes, draws, hits) for hits in range(min_hits, max_hits + 1)),
        Fraction(0),
    )
    return float(total)


def probability_no_hits(population: int, successes: int, draws: int) -> float:
    """P(zero successes); shorthand for ``hypergeometric_pmf(..., 0)``."""
    return hypergeometric_pmf(population, successes, draws, 0)
