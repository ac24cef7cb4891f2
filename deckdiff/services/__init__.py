"""
DeckDiff services.

Catalog lookup, card caching and state persistence.
"""

from deckdiff.services.card_cache import CardCache, load_card_cache, save_card_cache
from deckdiff.services.card_resolver import (
    CardResolver,
    ResolutionReport,
    index_records,
    lookup_attempts,
)
from deckdiff.services.merge_choices import (
    load_merge_choices,
    parse_choices,
    save_merge_choices,
)
from deckdiff.services.scryfall_client import (
    CollectionResult,
    LookupMode,
    ScryfallClient,
    ScryfallError,
)
from deckdiff.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SqlKeyValueStore,
    StoreError,
)

__all__ = [
    "CardCache",
    "CardResolver",
    "CollectionResult",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "LookupMode",
    "ResolutionReport",
    "ScryfallClient",
    "ScryfallError",
    "SqlKeyValueStore",
    "StoreError",
    "index_records",
    "load_card_cache",
    "load_merge_choices",
    "lookup_attempts",
    "parse_choices",
    "save_card_cache",
    "save_merge_choices",
]
