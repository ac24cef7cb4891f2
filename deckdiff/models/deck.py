from enum import Enum
from typing import TypeAlias

# Canonical card name -> quantity. Quantities are always > 0; absent means 0.
Deck: TypeAlias = dict[str, int]


class Side(str, Enum):
    """Which of the two compared decks a value belongs to."""

    LEFT = "left"
    RIGHT = "right"
