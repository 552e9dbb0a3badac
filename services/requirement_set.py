"""Editable card requirements for an opening hand calculation."""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field, replace
from typing import Any

from loguru import logger

from services.hand_probability import CategorySpec
from utils.constants import (
    DEFAULT_DECK_SIZE,
    DEFAULT_HAND_SIZE,
    DEFAULT_REQUIREMENT_COPIES,
    DEFAULT_REQUIREMENT_MAX,
    DEFAULT_REQUIREMENT_MIN,
    MAX_REQUIREMENTS,
    REQUIREMENT_ID_LENGTH,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_NUMERIC_FIELDS = {"amount", "min", "max"}
_EDITABLE_FIELDS = _NUMERIC_FIELDS | {"name"}


class RequirementLimitError(ValueError):
    """Raised when adding a requirement past the configured cap."""


def _new_requirement_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(REQUIREMENT_ID_LENGTH))


@dataclass(frozen=True)
class CardRequirement:
    id: str
    name: str = ""
    amount: int = DEFAULT_REQUIREMENT_COPIES
    min: int = DEFAULT_REQUIREMENT_MIN
    max: int = DEFAULT_REQUIREMENT_MAX

    def to_category(self) -> CategorySpec:
        return CategorySpec(
            label=self.name,
            population_count=self.amount,
            min_draw=self.min,
            max_draw=self.max,
        )


@dataclass
class RequirementSet:
    """
    Deck size, hand size and the ordered card requirements a user is editing.

    Rows are edited between calculations; nothing here validates the
    combination. ``HandProbabilityService`` reports invalid configurations.
    """

    deck_size: int = DEFAULT_DECK_SIZE
    hand_size: int = DEFAULT_HAND_SIZE
    max_requirements: int = MAX_REQUIREMENTS
    requirements: list[CardRequirement] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.requirements)

    def can_add(self) -> bool:
        return len(self.requirements) < self.max_requirements

    def add(self, name: str = "", **overrides: Any) -> CardRequirement:
        if not self.can_add():
            logger.warning(f"Requirement limit of {self.max_requirements} reached")
            raise RequirementLimitError(
                f"Cannot track more than {self.max_requirements} card requirements"
            )
        unknown = set(overrides) - _NUMERIC_FIELDS
        if unknown:
            raise ValueError(f"Unknown requirement fields: {sorted(unknown)}")

        requirement = CardRequirement(
            id=_new_requirement_id(),
            name=name,
            **{key: int(value) for key, value in overrides.items()},
        )
        self.requirements.append(requirement)
        return requirement

    def remove(self, requirement_id: str) -> bool:
        remaining = [req for req in self.requirements if req.id != requirement_id]
        removed = len(remaining) != len(self.requirements)
        self.requirements = remaining
        return removed

    def update(self, requirement_id: str, field_name: str, value: Any) -> CardRequirement:
        if field_name not in _EDITABLE_FIELDS:
            raise ValueError(f"Cannot update requirement field {field_name!r}")
        if field_name in _NUMERIC_FIELDS:
            value = int(value)
        else:
            value = str(value)

        for index, requirement in enumerate(self.requirements):
            if requirement.id == requirement_id:
                updated = replace(requirement, **{field_name: value})
                self.requirements[index] = updated
                return updated
        raise KeyError(requirement_id)

    def get(self, requirement_id: str) -> CardRequirement | None:
        return next((req for req in self.requirements if req.id == requirement_id), None)

    def to_categories(self) -> tuple[CategorySpec, ...]:
        return tuple(requirement.to_category() for requirement in self.requirements)


__all__ = ["CardRequirement", "RequirementLimitError", "RequirementSet"]
