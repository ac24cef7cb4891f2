"""
Persistent cache of resolved Scryfall records.

Keyed by the name exactly as requested (normalized deck key), not by the
catalog spelling. An entry with no record is a tombstone. Any entry,
tombstone or not, stops the resolver from querying that name again until
the cache key version is bumped.
"""

import json
import logging
import time
from collections.abc import Iterable
from typing import Any

from deckdiff.config import settings
from deckdiff.models.card import CacheEntry, CatalogRecord
from deckdiff.services.storage import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


class CardCache:
    """In-memory name -> CacheEntry map with JSON (de)serialization."""

    def __init__(self, entries: dict[str, CacheEntry] | None = None) -> None:
        self._entries: dict[str, CacheEntry] = dict(entries or {})

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def entry(self, name: str) -> CacheEntry | None:
        """Raw cache entry, None if the name was never looked up."""
        return self._entries.get(name)

    def get(self, name: str) -> CatalogRecord | None:
        """Resolved record, None for tombstones and unknown names."""
        entry = self._entries.get(name)
        return entry.record if entry else None

    def put(self, name: str, record: CatalogRecord) -> None:
        self._entries[name] = CacheEntry(record=record, fetched_at=time.time())

    def tombstone(self, name: str) -> None:
        """Record that the name has no catalog match."""
        self._entries[name] = CacheEntry(record=None, fetched_at=time.time())

    def missing(self, names: Iterable[str]) -> list[str]:
        """Names without any entry, de-duplicated, in first-seen order."""
        return [name for name in dict.fromkeys(names) if name not in self._entries]

    def records(self, names: Iterable[str]) -> dict[str, CatalogRecord | None]:
        """Record (or None) for each of the given names."""
        return {name: self.get(name) for name in names}

    def tombstones(self) -> list[str]:
        return sorted(name for name, entry in self._entries.items() if entry.is_tombstone)

    def to_json(self) -> str:
        payload = {
            name: {
                "record": entry.record.to_dict() if entry.record else None,
                "fetched_at": entry.fetched_at,
            }
            for name, entry in self._entries.items()
        }
        return json.dumps(payload)

    @classmethod
    def from_json(cls, raw: str | None) -> "CardCache":
        """
        Parse a serialized cache.

        Corrupt documents yield an empty cache; corrupt entries are skipped
        and will simply be looked up again.
        """
        if not raw:
            return cls()
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Discarding corrupt card cache document")
            return cls()
        if not isinstance(payload, dict):
            return cls()

        entries: dict[str, CacheEntry] = {}
        for name, item in payload.items():
            entry = _entry_from_json(item)
            if entry is not None:
                entries[name] = entry
        return cls(entries)


def _entry_from_json(item: Any) -> CacheEntry | None:
    if not isinstance(item, dict):
        return None
    try:
        data = item.get("record")
        record = CatalogRecord.from_dict(data) if data is not None else None
        return CacheEntry(record=record, fetched_at=float(item.get("fetched_at", 0.0)))
    except (KeyError, TypeError, ValueError):
        return None


async def load_card_cache(store: KeyValueStore, key: str | None = None) -> CardCache:
    """Load the cache from the store; read failures give an empty cache."""
    key = key or settings.card_cache_key
    try:
        raw = await store.get(key)
    except StoreError as e:
        logger.warning("Card cache unavailable, starting empty: %s", e)
        return CardCache()
    return CardCache.from_json(raw)


async def save_card_cache(store: KeyValueStore, cache: CardCache, key: str | None = None) -> bool:
    """
    Write the whole cache to the store.

    Returns:
        False if the write failed; the in-memory cache stays usable.
    """
    key = key or settings.card_cache_key
    try:
        await store.set(key, cache.to_json())
    except StoreError as e:
        logger.warning("Failed to persist card cache: %s", e)
        return False
    return True
