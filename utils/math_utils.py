"""
Mathematical utility functions for probability calculations.

This module provides exact combinatorics for card draws: binomial
coefficients and the single-card hypergeometric helpers built on them.
All probabilities are returned as ``Fraction`` so callers decide when to
round.
"""

from fractions import Fraction


def choose(n: int, r: int) -> int:
    """
    Return the number of ways to pick ``r`` unordered items from ``n``.

    Computed as the running product of ``(n - r + i) / i`` for ``i = 1..r``.
    Every partial product is itself a binomial coefficient, so the integer
    division at each step is exact and no factorial is ever formed.

    Returns 0 when ``r`` is negative or larger than ``n``.

    Example:
        >>> choose(40, 5)
        658008
    """
    if r < 0 or r > n:
        return 0
    if r == 0:
        return 1
    # C(n, r) == C(n, n - r); walk the shorter side
    r = min(r, n - r)
    result = 1
    for i in range(1, r + 1):
        result = result * (n - r + i) // i
    return result


def hypergeometric_probability(
    population: int,
    successes_in_pop: int,
    sample_size: int,
    successes_in_sample: int,
) -> Fraction:
    """
    Calculate the exact probability of drawing a specific number of target cards.

    Formula: P(X = k) = [C(K, k) × C(N-K, n-k)] / C(N, n)

    Args:
        population: Total number of cards in the deck (N)
        successes_in_pop: Number of target cards in the deck (K)
        sample_size: Number of cards drawn (n)
        successes_in_sample: Target number of cards to draw (k)

    Returns:
        Probability as a Fraction between 0 and 1

    Raises:
        ValueError: If any input is invalid (negative numbers, sample > population, etc.)

    Example:
        >>> # Exactly 1 copy of a 3-of in a 5-card hand from a 40-card deck
        >>> float(hypergeometric_probability(40, 3, 5, 1))
        0.3011...
    """
    if population < 0:
        raise ValueError(f"Population must be non-negative, got {population}")
    if successes_in_pop < 0:
        raise ValueError(f"Successes in population must be non-negative, got {successes_in_pop}")
    if sample_size < 0:
        raise ValueError(f"Sample size must be non-negative, got {sample_size}")
    if successes_in_sample < 0:
        raise ValueError(f"Successes in sample must be non-negative, got {successes_in_sample}")

    if successes_in_pop > population:
        raise ValueError(
            f"Successes in population ({successes_in_pop}) cannot exceed "
            f"population ({population})"
        )
    if sample_size > population:
        raise ValueError(f"Sample size ({sample_size}) cannot exceed population ({population})")
    if successes_in_sample > successes_in_pop:
        raise ValueError(
            f"Successes in sample ({successes_in_sample}) cannot exceed "
            f"successes in population ({successes_in_pop})"
        )
    if successes_in_sample > sample_size:
        raise ValueError(
            f"Successes in sample ({successes_in_sample}) cannot exceed "
            f"sample size ({sample_size})"
        )

    # choose() already yields 0 when there are not enough non-target cards
    numerator = choose(successes_in_pop, successes_in_sample) * choose(
        population - successes_in_pop, sample_size - successes_in_sample
    )
    return Fraction(numerator, choose(population, sample_size))


def hypergeometric_range(
    population: int,
    successes_in_pop: int,
    sample_size: int,
    min_successes: int,
    max_successes: int,
) -> Fraction:
    """
    Calculate the probability that the number of target cards drawn lies in a band.

    Computes P(min_successes <= X <= max_successes). The upper bound is capped
    at min(max_successes, sample_size, successes_in_pop); an empty band is
    probability 0, not an error.

    Raises:
        ValueError: If a bound is negative or the deck parameters are invalid
    """
    if min_successes < 0:
        raise ValueError(f"Minimum successes must be non-negative, got {min_successes}")
    if max_successes < 0:
        raise ValueError(f"Maximum successes must be non-negative, got {max_successes}")

    upper = min(max_successes, sample_size, successes_in_pop)
    total = Fraction(0)
    for k in range(min_successes, upper + 1):
        total += hypergeometric_probability(population, successes_in_pop, sample_size, k)
    return total


def hypergeometric_at_least(
    population: int,
    successes_in_pop: int,
    sample_size: int,
    min_successes: int,
) -> Fraction:
    """
    Calculate the probability of drawing at least a minimum number of target cards.

    Example:
        >>> # At least 1 copy of a 3-of in a 5-card hand from a 40-card deck
        >>> float(hypergeometric_at_least(40, 3, 5, 1))
        0.3375...
    """
    if min_successes < 0:
        raise ValueError(f"Minimum successes must be non-negative, got {min_successes}")

    # Edge case: requesting at least 0 is always probability 1
    if min_successes == 0:
        return Fraction(1)

    return hypergeometric_range(
        population, successes_in_pop, sample_size, min_successes, successes_in_pop
    )
