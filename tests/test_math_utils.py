"""Unit tests for mathematical utility functions."""

import math
from fractions import Fraction

import pytest

from utils.math_utils import (
    choose,
    hypergeometric_at_least,
    hypergeometric_probability,
    hypergeometric_range,
)


class TestChoose:
    """Tests for the exact binomial coefficient."""

    def test_choose_zero_is_one(self) -> None:
        for n in range(0, 70):
            assert choose(n, 0) == 1

    def test_choose_out_of_range_is_zero(self) -> None:
        assert choose(5, 6) == 0
        assert choose(0, 1) == 0
        assert choose(5, -1) == 0
        assert choose(40, -40) == 0

    def test_symmetry(self) -> None:
        for n in range(0, 61):
            for r in range(0, n + 1):
                assert choose(n, r) == choose(n, n - r)

    def test_matches_math_comb(self) -> None:
        for n in range(0, 101):
            for r in range(0, 21):
                assert choose(n, r) == math.comb(n, r)

    def test_known_values(self) -> None:
        assert choose(40, 5) == 658008
        assert choose(60, 7) == 386206920
        assert choose(37, 4) == 66045

    def test_large_values_stay_exact(self) -> None:
        """Values far beyond float precision are still exact integers."""
        assert choose(200, 100) == math.comb(200, 100)
        assert isinstance(choose(200, 100), int)


class TestHypergeometricProbability:
    """Tests for hypergeometric_probability function."""

    def test_opening_hand_exactly_one_playset(self) -> None:
        """Probability of exactly 1 copy of a 4-of in 7-card opening hand (60-card deck).

        Expected: ~33.63%
        """
        prob = hypergeometric_probability(
            population=60,
            successes_in_pop=4,
            sample_size=7,
            successes_in_sample=1,
        )
        assert 0.335 <= prob <= 0.337

    def test_exact_fraction(self) -> None:
        """Exactly 1 copy of a 3-of in a 5-card hand from 40 cards."""
        prob = hypergeometric_probability(40, 3, 5, 1)
        assert prob == Fraction(3 * 66045, 658008)

    def test_limited_format_40_card_deck(self) -> None:
        """Exactly 1 bomb (1 copy) in 7 cards from 40 is 7/40."""
        assert hypergeometric_probability(40, 1, 7, 1) == Fraction(7, 40)

    def test_not_enough_other_cards(self) -> None:
        """Drawing 3 cards from 4 cards with 3 targets cannot hit 0 targets."""
        assert hypergeometric_probability(4, 3, 3, 0) == 0

    def test_guaranteed_draw(self) -> None:
        assert hypergeometric_probability(60, 4, 60, 4) == 1

    def test_single_card_deck(self) -> None:
        assert hypergeometric_probability(1, 1, 1, 1) == 1

    def test_zero_copies_zero_target(self) -> None:
        assert hypergeometric_probability(60, 0, 7, 0) == 1

    def test_sum_of_all_probabilities_equals_one(self) -> None:
        pop, k_pop, n = 60, 4, 7
        total = sum(hypergeometric_probability(pop, k_pop, n, k) for k in range(min(k_pop, n) + 1))
        assert total == 1


class TestHypergeometricRange:
    """Tests for the band sum used by single-card requirements."""

    def test_band_matches_closed_form(self) -> None:
        expected = Fraction(
            sum(choose(3, k) * choose(37, 5 - k) for k in range(1, 4)),
            choose(40, 5),
        )
        assert hypergeometric_range(40, 3, 5, 1, 3) == expected
        assert hypergeometric_range(40, 3, 5, 1, 3) == Fraction(222111, 658008)

    def test_upper_bound_is_capped(self) -> None:
        """A max above copies or hand size behaves like the cap."""
        assert hypergeometric_range(40, 3, 5, 1, 10) == hypergeometric_range(40, 3, 5, 1, 3)
        assert hypergeometric_range(40, 10, 2, 0, 10) == 1

    def test_empty_band_is_zero(self) -> None:
        assert hypergeometric_range(40, 1, 5, 2, 2) == 0

    def test_full_band_is_one(self) -> None:
        assert hypergeometric_range(40, 3, 5, 0, 3) == 1

    def test_negative_bounds_raise(self) -> None:
        with pytest.raises(ValueError, match="Minimum successes must be non-negative"):
            hypergeometric_range(40, 3, 5, -1, 3)
        with pytest.raises(ValueError, match="Maximum successes must be non-negative"):
            hypergeometric_range(40, 3, 5, 0, -1)


class TestHypergeometricAtLeast:
    """Tests for hypergeometric_at_least function."""

    def test_at_least_one_playset_opening_hand(self) -> None:
        """P(X >= 1) for a 4-of in 7 cards from 60 is ~39.95%."""
        prob = hypergeometric_at_least(60, 4, 7, 1)
        assert 0.398 <= prob <= 0.401

    def test_at_least_one_is_complement_of_zero(self) -> None:
        assert hypergeometric_at_least(40, 3, 5, 1) == 1 - hypergeometric_probability(40, 3, 5, 0)

    def test_at_least_zero_always_one(self) -> None:
        assert hypergeometric_at_least(60, 4, 7, 0) == 1

    def test_at_least_more_than_possible(self) -> None:
        assert hypergeometric_at_least(60, 4, 7, 5) == 0

    def test_limited_deck_at_least_one_land(self) -> None:
        """P(at least 1 land in 7 cards from 40-card deck with 17 lands) is ~98.69%."""
        assert hypergeometric_at_least(40, 17, 7, 1) > 0.98


class TestInputValidation:
    """Tests for input validation error handling."""

    def test_negative_population_raises(self) -> None:
        with pytest.raises(ValueError, match="Population must be non-negative"):
            hypergeometric_probability(-1, 4, 7, 1)

    def test_negative_successes_raises(self) -> None:
        with pytest.raises(ValueError, match="Successes in population must be non-negative"):
            hypergeometric_probability(60, -1, 7, 1)

    def test_negative_sample_raises(self) -> None:
        with pytest.raises(ValueError, match="Sample size must be non-negative"):
            hypergeometric_probability(60, 4, -1, 1)

    def test_negative_target_raises(self) -> None:
        with pytest.raises(ValueError, match="Successes in sample must be non-negative"):
            hypergeometric_probability(60, 4, 7, -1)

    def test_successes_exceed_population_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed population"):
            hypergeometric_probability(60, 61, 7, 1)

    def test_sample_exceed_population_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed population"):
            hypergeometric_probability(60, 4, 61, 1)

    def test_target_exceed_successes_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed successes in population"):
            hypergeometric_probability(60, 4, 7, 5)

    def test_target_exceed_sample_raises(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed sample size"):
            hypergeometric_probability(60, 10, 7, 8)

    def test_at_least_negative_min_raises(self) -> None:
        with pytest.raises(ValueError, match="Minimum successes must be non-negative"):
            hypergeometric_at_least(60, 4, 7, -1)
