"""Opening hand probability engine.

Computes the exact chance that a hand of ``draw_size`` cards, drawn without
replacement from a deck of ``population`` cards, satisfies every tracked
card's accepted count range at once (multivariate hypergeometric).
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Sequence

from loguru import logger

from utils.constants import PERCENT_DECIMALS, REMAINDER_LABEL
from utils.math_utils import choose, hypergeometric_range

if TYPE_CHECKING:
    from services.requirement_set import RequirementSet


@dataclass(frozen=True)
class CategorySpec:
    """A tracked card: copies in the deck and how many are accepted in hand."""

    label: str
    population_count: int
    min_draw: int
    max_draw: int


class ConfigError(ValueError):
    """An input configuration the engine refuses to evaluate."""

    invariant = "configuration"


class InvalidPopulation(ConfigError):
    invariant = "population"


class InvalidDrawSize(ConfigError):
    invariant = "draw_size"


class InvalidCategoryRange(ConfigError):
    invariant = "category_range"

    def __init__(self, message: str, category_index: int, label: str) -> None:
        super().__init__(message)
        self.category_index = category_index
        self.label = label


class OverAllocatedPopulation(ConfigError):
    invariant = "over_allocated"


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(population: int, draw_size: int, categories: Sequence[CategorySpec]) -> None:
    """
    Check a configuration before any enumeration happens.

    Raises:
        InvalidPopulation: population is not a positive integer
        InvalidDrawSize: draw size is not in 1..population
        InvalidCategoryRange: a category breaks 0 <= copies <= population or 0 <= min <= max
        OverAllocatedPopulation: tracked copies add up to more than the population
    """
    if not _is_count(population) or population <= 0:
        raise InvalidPopulation(f"Population must be a positive integer, got {population!r}")
    if not _is_count(draw_size) or draw_size <= 0:
        raise InvalidDrawSize(f"Draw size must be a positive integer, got {draw_size!r}")
    if draw_size > population:
        raise InvalidDrawSize(f"Draw size ({draw_size}) cannot exceed population ({population})")

    for index, category in enumerate(categories):
        name = category.label or f"#{index + 1}"
        fields = (category.population_count, category.min_draw, category.max_draw)
        if not all(_is_count(value) for value in fields):
            raise InvalidCategoryRange(
                f"Category {name}: counts must be integers, got {fields!r}", index, category.label
            )
        if not 0 <= category.population_count <= population:
            raise InvalidCategoryRange(
                f"Category {name}: copies ({category.population_count}) must be between 0 "
                f"and population ({population})",
                index,
                category.label,
            )
        # A range reaching past the copies is accepted; it is clamped during enumeration
        if not 0 <= category.min_draw <= category.max_draw:
            raise InvalidCategoryRange(
                f"Category {name}: expected 0 <= min ({category.min_draw}) <= "
                f"max ({category.max_draw})",
                index,
                category.label,
            )

    allocated = sum(category.population_count for category in categories)
    if allocated > population:
        raise OverAllocatedPopulation(
            f"Tracked copies ({allocated}) cannot exceed population ({population})"
        )


def find_config_error(
    population: int, draw_size: int, categories: Sequence[CategorySpec]
) -> ConfigError | None:
    """Return the first violated invariant, or None when the configuration is usable."""
    try:
        validate(population, draw_size, categories)
    except ConfigError as exc:
        return exc
    return None


def _count_hands(
    categories: Sequence[CategorySpec],
    index: int,
    slots: int,
    min_needed: Sequence[int],
    max_absorbed: Sequence[int],
) -> int:
    """Number of hands filling exactly ``slots`` cards from ``categories[index:]``."""
    if index == len(categories):
        return 1 if slots == 0 else 0
    if slots < min_needed[index] or slots > max_absorbed[index]:
        return 0

    category = categories[index]
    total = 0
    upper = min(category.max_draw, category.population_count, slots)
    for drawn in range(category.min_draw, upper + 1):
        total += choose(category.population_count, drawn) * _count_hands(
            categories, index + 1, slots - drawn, min_needed, max_absorbed
        )
    return total


def _suffix_sums(values: list[int]) -> list[int]:
    sums = [0] * (len(values) + 1)
    for i in range(len(values) - 1, -1, -1):
        sums[i] = sums[i + 1] + values[i]
    return sums


def _count_satisfying_hands(
    population: int, draw_size: int, categories: Sequence[CategorySpec]
) -> int:
    remainder_size = population - sum(category.population_count for category in categories)
    remainder = CategorySpec(REMAINDER_LABEL, remainder_size, 0, remainder_size)
    groups = [*categories, remainder]

    min_needed = _suffix_sums([group.min_draw for group in groups])
    max_absorbed = _suffix_sums(
        [min(group.max_draw, group.population_count) for group in groups]
    )
    return _count_hands(groups, 0, draw_size, min_needed, max_absorbed)


def probability(
    population: int, draw_size: int, categories: Sequence[CategorySpec]
) -> Fraction:
    """
    Exact probability that one hand satisfies every category at once.

    Every category's draw count is assigned in turn, with the untracked
    remainder of the deck appended as a final unconstrained category, and
    each complete assignment of exactly ``draw_size`` cards contributes
    ``prod C(copies, drawn)`` hands. The total is divided by
    ``C(population, draw_size)``.

    Raises:
        ConfigError: the configuration is invalid (see ``validate``)
        ArithmeticError: the result left [0, 1], which means a logic defect
    """
    validate(population, draw_size, categories)

    if not categories:
        return Fraction(1)

    if len(categories) == 1:
        (category,) = categories
        result = hypergeometric_range(
            population,
            category.population_count,
            draw_size,
            category.min_draw,
            category.max_draw,
        )
    else:
        result = Fraction(
            _count_satisfying_hands(population, draw_size, categories),
            choose(population, draw_size),
        )

    if not 0 <= result <= 1:
        logger.error(f"Hand probability {result} outside [0, 1] for {population}/{draw_size}")
        raise ArithmeticError(f"Computed probability {result} is outside [0, 1]")
    return result


def _clamped_percent(value: Fraction | float) -> float:
    return max(0.0, min(float(value) * 100, 100.0))


def format_percentage(value: Fraction | float, decimals: int = PERCENT_DECIMALS) -> str:
    """Render a probability as a percentage clamped to [0, 100]."""
    percent = _clamped_percent(value)
    return f"{percent:.{decimals}f}%"


@dataclass(frozen=True)
class ProbabilityResult:
    """Outcome of one evaluation: a probability or the reason there is none."""

    probability: Fraction | None = None
    error: ConfigError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def percentage(self) -> float | None:
        if self.probability is None:
            return None
        return _clamped_percent(self.probability)

    @property
    def display_text(self) -> str:
        if self.error is not None:
            return str(self.error)
        return format_percentage(self.probability)


class HandProbabilityService:
    """Evaluate opening hand configurations for a presentation layer."""

    def evaluate(
        self, population: int, draw_size: int, categories: Sequence[CategorySpec]
    ) -> ProbabilityResult:
        categories = tuple(categories)
        try:
            value = probability(population, draw_size, categories)
        except ConfigError as exc:
            logger.info(f"Rejected hand configuration ({exc.invariant}): {exc}")
            return ProbabilityResult(error=exc)

        logger.debug(
            f"P(hand) for {draw_size} from {population} with {len(categories)} "
            f"categories = {float(value):.6f}"
        )
        return ProbabilityResult(probability=value)

    def evaluate_requirements(self, requirements: RequirementSet) -> ProbabilityResult:
        return self.evaluate(
            requirements.deck_size, requirements.hand_size, requirements.to_categories()
        )


__all__ = [
    "CategorySpec",
    "ConfigError",
    "HandProbabilityService",
    "InvalidCategoryRange",
    "InvalidDrawSize",
    "InvalidPopulation",
    "OverAllocatedPopulation",
    "ProbabilityResult",
    "find_config_error",
    "format_percentage",
    "probability",
    "validate",
]
