from deckdiff.models.card import CacheEntry, CardFace, CatalogRecord
from deckdiff.models.deck import Deck, Side
from deckdiff.models.diff import DiffRow, DiffStatus, DiffSummary
from deckdiff.models.merge import MergeRow, MergeSource
from deckdiff.models.stats import DeckStats

__all__ = [
    "CacheEntry",
    "CardFace",
    "CatalogRecord",
    "Deck",
    "DeckStats",
    "DiffRow",
    "DiffStatus",
    "DiffSummary",
    "MergeRow",
    "MergeSource",
    "Side",
]
