from dataclasses import dataclass
from enum import Enum


class MergeSource(str, Enum):
    """Where a merged quantity is taken from."""

    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class MergeRow:
    """
    One line of a merged deck.

    Attributes:
        name: Canonical card name
        quantity: Resulting quantity (always > 0)
        choice: Source the quantity was taken from
        options: Sources the user may pick for this name
    """

    name: str
    quantity: int
    choice: MergeSource
    options: tuple[MergeSource, ...]

    @property
    def is_ambiguous(self) -> bool:
        """True when the user has more than one source to choose from."""
        return len(self.options) > 1
