from dataclasses import dataclass, field

CURVE_BUCKETS = ("0", "1", "2", "3", "4", "5", "6", "7+")
COLOR_ORDER = ("W", "U", "B", "R", "G", "C")
CARD_TYPES = (
    "creature",
    "planeswalker",
    "instant",
    "sorcery",
    "enchantment",
    "artifact",
    "land",
    "other",
)


def _zeroed(keys: tuple[str, ...]) -> dict[str, int]:
    return dict.fromkeys(keys, 0)


@dataclass
class DeckStats:
    """
    Aggregate statistics of a deck over resolved catalog records.

    All counts are weighted by quantity. Cards without a record only
    contribute to total_cards and unresolved.
    """

    total_cards: int = 0
    mana_curve: dict[str, int] = field(default_factory=lambda: _zeroed(CURVE_BUCKETS))
    colors: dict[str, int] = field(default_factory=lambda: _zeroed(COLOR_ORDER))
    card_types: dict[str, int] = field(default_factory=lambda: _zeroed(CARD_TYPES))
    unresolved: list[str] = field(default_factory=list)

    @property
    def average_mana_value(self) -> float:
        """Average mana value of non-land cards (7+ bucket counted as 7)."""
        spells = sum(self.mana_curve.values())
        if spells == 0:
            return 0.0
        weighted = sum(
            (7 if bucket == "7+" else int(bucket)) * count
            for bucket, count in self.mana_curve.items()
        )
        return weighted / spells
