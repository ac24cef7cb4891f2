"""
Aggregate deck statistics over resolved catalog records.

Feeds the curve and color charts. Lands are excluded from the mana curve
and from colorless counts.
"""

from collections.abc import Mapping

from deckdiff.models.card import CatalogRecord
from deckdiff.models.stats import DeckStats

# Checked in order: "Artifact Creature" counts as a creature
_TYPE_PRIORITY = (
    "creature",
    "planeswalker",
    "instant",
    "sorcery",
    "enchantment",
    "artifact",
    "land",
)


def primary_type(record: CatalogRecord) -> str:
    """Primary card type of a record, "other" if none matches."""
    front_type = record.type_line.split("//")[0].lower()
    for card_type in _TYPE_PRIORITY:
        if card_type in front_type:
            return card_type
    return "other"


def curve_bucket(mana_value: float) -> str:
    """Mana curve bucket for a mana value: "0".."6" or "7+"."""
    value = int(mana_value)
    return "7+" if value >= 7 else str(value)


def deck_stats(
    deck: Mapping[str, int],
    records: Mapping[str, CatalogRecord | None],
) -> DeckStats:
    """
    Compute curve, color and type counts for a deck.

    Args:
        deck: Deck to summarize
        records: Resolved record per name (a CardCache works here); names
            that are missing or map to None are reported as unresolved

    Returns:
        DeckStats weighted by quantity
    """
    stats = DeckStats()

    for name in sorted(deck):
        quantity = deck[name]
        if quantity <= 0:
            continue
        stats.total_cards += quantity

        record = records.get(name)
        if record is None:
            stats.unresolved.append(name)
            continue

        card_type = primary_type(record)
        stats.card_types[card_type] += quantity
        if card_type == "land":
            continue

        stats.mana_curve[curve_bucket(record.cmc)] += quantity
        if record.colors:
            for color in record.colors:
                if color in stats.colors:
                    stats.colors[color] += quantity
        else:
            stats.colors["C"] += quantity

    return stats
