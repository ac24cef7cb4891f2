"""
Card name resolution against Scryfall.

Fills a CardCache for every name it has no entry for:

1. Bulk lookup in batches of at most 70 names.
2. Bulk results are matched back to requested names case-insensitively,
   by card name and by front-face name.
3. Names still unmatched go through single lookups, first hit wins:
   exact name, fuzzy name, exact front face, fuzzy front face.
4. Names with no hit are tombstoned.
5. The cache is persisted once at the end of the pass, unless every bulk
   lookup failed.

Records are cached under the requested name, not the catalog spelling.
Transport failures only cost the attempt they happened in; they are
counted in the ResolutionReport and never raised.
"""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from deckdiff.config import MAX_COLLECTION_IDENTIFIERS, settings
from deckdiff.models.card import CatalogRecord
from deckdiff.parsers.names import front_face_query, match_key, normalize_card_name
from deckdiff.parsers.scryfall import MalformedCardError, card_from_scryfall
from deckdiff.services.card_cache import CardCache, save_card_cache
from deckdiff.services.scryfall_client import (
    CollectionResult,
    LookupMode,
    ScryfallClient,
    ScryfallError,
)
from deckdiff.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

# Scryfall asks for 50-100ms between requests
_RATE_LIMIT_DELAY = 0.1

LookupAttempt = tuple[LookupMode, str]


@dataclass
class ResolutionReport:
    """Outcome counts of one resolution pass."""

    requested: int = 0
    """Names that had no cache entry when the pass started."""

    resolved: int = 0
    tombstoned: int = 0
    batches: int = 0
    failed_batches: int = 0

    failed_calls: int = 0
    """Bulk and single requests that failed in transport or parsing."""

    saved: bool = False
    """True if the cache was written to the store."""

    @property
    def unreachable(self) -> bool:
        """True if every bulk request of the pass failed."""
        return self.batches > 0 and self.failed_batches == self.batches


def lookup_attempts(name: str) -> list[LookupAttempt]:
    """
    Ordered single-lookup fallbacks for a name.

    Front-face attempts are only added for names containing a slash.
    """
    query = normalize_card_name(name)
    attempts: list[LookupAttempt] = [(LookupMode.EXACT, query), (LookupMode.FUZZY, query)]
    prefix = front_face_query(query)
    if prefix:
        attempts += [(LookupMode.EXACT, prefix), (LookupMode.FUZZY, prefix)]
    return list(dict.fromkeys(attempts))


def index_records(
    cards: Iterable[dict[str, Any]],
) -> tuple[dict[str, CatalogRecord], dict[str, CatalogRecord]]:
    """
    Index bulk results case-insensitively.

    Returns:
        (by card name, by front-face name). First record wins on collisions.
    """
    by_name: dict[str, CatalogRecord] = {}
    by_front_face: dict[str, CatalogRecord] = {}
    for card in cards:
        try:
            record = card_from_scryfall(card)
        except MalformedCardError as e:
            logger.debug("Skipping card object: %s", e)
            continue
        by_name.setdefault(match_key(record.name), record)
        if record.front_face_name:
            by_front_face.setdefault(match_key(record.front_face_name), record)
    return by_name, by_front_face


def _batches(names: list[str], size: int) -> Iterator[list[str]]:
    for start in range(0, len(names), size):
        yield names[start : start + size]


class CardResolver:
    """
    Resolves card names into a CardCache.

    Not safe for concurrent passes over the same cache: callers serialize
    passes (the API holds a lock around resolve()).
    """

    def __init__(
        self,
        client: ScryfallClient,
        store: KeyValueStore | None = None,
        batch_size: int | None = None,
        cache_key: str | None = None,
        request_delay: float = _RATE_LIMIT_DELAY,
    ) -> None:
        self._client = client
        self._store = store
        self._batch_size = min(
            batch_size or settings.collection_batch_size, MAX_COLLECTION_IDENTIFIERS
        )
        self._cache_key = cache_key
        self._request_delay = request_delay
        self._requests_sent = 0

    async def resolve(self, names: Iterable[str], cache: CardCache) -> ResolutionReport:
        """
        Resolve every name that has no cache entry yet.

        Args:
            names: Card names (deck keys); duplicates are fine
            cache: Cache to fill in place

        Returns:
            Counts for the pass. Cached names, tombstones included, cost
            no requests.
        """
        pending = cache.missing(names)
        report = ResolutionReport(requested=len(pending))
        if not pending:
            return report

        for batch in _batches(pending, self._batch_size):
            await self._resolve_batch(batch, cache, report)

        # Tombstones of an unreachable pass stay in memory only
        if self._store is not None and not report.unreachable:
            report.saved = await save_card_cache(self._store, cache, self._cache_key)

        logger.info(
            "Resolved %d/%d names (%d tombstoned, %d failed requests)",
            report.resolved,
            report.requested,
            report.tombstoned,
            report.failed_calls,
        )
        if report.unreachable:
            logger.warning("Scryfall unreachable: all %d bulk lookups failed", report.batches)
        return report

    async def _resolve_batch(
        self, batch: list[str], cache: CardCache, report: ResolutionReport
    ) -> None:
        report.batches += 1
        try:
            await self._throttle()
            result = await self._client.fetch_collection(batch)
        except ScryfallError as e:
            logger.warning("Bulk lookup of %d names failed: %s", len(batch), e)
            report.failed_batches += 1
            report.failed_calls += 1
            result = CollectionResult(not_found=list(batch))

        by_name, by_front_face = index_records(result.cards)

        for name in batch:
            key = match_key(name)
            record = by_name.get(key) or by_front_face.get(key)
            if record is None:
                record = await self._lookup_single(name, report)

            if record is None:
                logger.debug("No Scryfall match for %r", name)
                cache.tombstone(name)
                report.tombstoned += 1
            else:
                cache.put(name, record)
                report.resolved += 1

    async def _lookup_single(self, name: str, report: ResolutionReport) -> CatalogRecord | None:
        for mode, query in lookup_attempts(name):
            try:
                await self._throttle()
                card = await self._client.fetch_named(query, mode)
            except ScryfallError as e:
                logger.warning("Lookup %s=%r failed: %s", mode.value, query, e)
                report.failed_calls += 1
                continue
            if card is None:
                continue
            try:
                return card_from_scryfall(card)
            except MalformedCardError as e:
                logger.warning("Lookup %s=%r returned an unusable card: %s", mode.value, query, e)
                report.failed_calls += 1
                continue
        return None

    async def _throttle(self) -> None:
        if self._requests_sent and self._request_delay > 0:
            await asyncio.sleep(self._request_delay)
        self._requests_sent += 1
