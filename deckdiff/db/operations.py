"""
Key-value CRUD operations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deckdiff.models.db import KeyValueDB


async def get_value(session: AsyncSession, key: str) -> str | None:
    """
    Get the stored document for a key.

    Returns None if the key was never written.
    """
    result = await session.execute(select(KeyValueDB.value).where(KeyValueDB.key == key))
    return result.scalar_one_or_none()


async def set_value(session: AsyncSession, key: str, value: str) -> None:
    """Insert or replace the document for a key."""
    row = await session.get(KeyValueDB, key)
    if row is None:
        session.add(KeyValueDB(key=key, value=value))
    else:
        row.value = value
    await session.flush()
