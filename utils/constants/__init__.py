"""Shared constants for the opening hand tools."""

from utils.constants.calculator import (
    DEFAULT_DECK_SIZE,
    DEFAULT_HAND_SIZE,
    DEFAULT_REQUIREMENT_COPIES,
    DEFAULT_REQUIREMENT_MAX,
    DEFAULT_REQUIREMENT_MIN,
    MAX_REQUIREMENTS,
    PERCENT_DECIMALS,
    REMAINDER_LABEL,
    REQUIREMENT_ID_LENGTH,
)

__all__ = [
    "DEFAULT_DECK_SIZE",
    "DEFAULT_HAND_SIZE",
    "DEFAULT_REQUIREMENT_COPIES",
    "DEFAULT_REQUIREMENT_MAX",
    "DEFAULT_REQUIREMENT_MIN",
    "MAX_REQUIREMENTS",
    "PERCENT_DECIMALS",
    "REMAINDER_LABEL",
    "REQUIREMENT_ID_LENGTH",
]
