"""
Shared FastAPI dependencies.

The card cache lives for the whole process and is loaded lazily from the
store on first use. Resolution passes run one at a time under a lock.
"""

import asyncio
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from deckdiff.db.database import get_session
from deckdiff.services.card_cache import CardCache, load_card_cache
from deckdiff.services.scryfall_client import ScryfallClient
from deckdiff.services.storage import KeyValueStore, SqlKeyValueStore


class CardCacheState:
    """Process-lifetime card cache plus the lock serializing resolution."""

    def __init__(self) -> None:
        self.cache: CardCache | None = None
        self.lock = asyncio.Lock()

    async def get(self, store: KeyValueStore) -> CardCache:
        if self.cache is None:
            self.cache = await load_card_cache(store)
        return self.cache

    def reset(self) -> None:
        self.cache = None


card_cache_state = CardCacheState()


async def get_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> KeyValueStore:
    return SqlKeyValueStore(session)


async def get_scryfall_client() -> AsyncGenerator[ScryfallClient, None]:
    async with ScryfallClient() as client:
        yield client
