"""Opening hand calculator defaults and limits."""

DEFAULT_DECK_SIZE = 40
DEFAULT_HAND_SIZE = 5

# Requirement editor rows; the probability engine itself has no cap
MAX_REQUIREMENTS = 5
DEFAULT_REQUIREMENT_COPIES = 3
DEFAULT_REQUIREMENT_MIN = 1
DEFAULT_REQUIREMENT_MAX = 3
REQUIREMENT_ID_LENGTH = 9

REMAINDER_LABEL = "Other cards"
PERCENT_DECIMALS = 2
