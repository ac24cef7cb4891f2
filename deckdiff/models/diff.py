from dataclasses import dataclass
from enum import Enum


class DiffStatus(str, Enum):
    """Presence/quantity relationship of one card between two decks."""

    EQUAL = "equal"
    ONLY_LEFT = "only_left"
    ONLY_RIGHT = "only_right"
    DIFFERS = "differs"


@dataclass(frozen=True, slots=True)
class DiffRow:
    """
    One card in the union of two decks.

    Attributes:
        name: Canonical card name
        left: Quantity in the left deck, None if absent
        right: Quantity in the right deck, None if absent
        status: Classification of the pair of quantities
        left_delta: left - right, None when either side is absent or equal
        right_delta: right - left, None when either side is absent or equal
    """

    name: str
    left: int | None
    right: int | None
    status: DiffStatus
    left_delta: int | None
    right_delta: int | None


@dataclass
class DiffSummary:
    """Per-status counts of distinct card names."""

    equal: int = 0
    only_left: int = 0
    only_right: int = 0
    differs: int = 0

    def total(self) -> int:
        """Number of distinct names across both decks."""
        return self.equal + self.only_left + self.only_right + self.differs
