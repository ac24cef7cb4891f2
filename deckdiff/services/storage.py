"""
Key-value persistence for engine state.

The engine only ever reads and writes whole JSON documents by key, so
any backend offering get/set works. Backend failures surface as
StoreError; callers in this package degrade instead of propagating it.
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from deckdiff.db.operations import get_value, set_value


class StoreError(Exception):
    """Raised when the backing store cannot be read or written."""

    pass


class KeyValueStore(Protocol):
    """Minimal async key-value store."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemoryKeyValueStore:
    """Dict-backed store for tests and the command line."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqlKeyValueStore:
    """Store backed by the key_values table of the application database."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> str | None:
        try:
            return await get_value(self._session, key)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {key}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            await set_value(self._session, key, value)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to write {key}: {e}") from e
