"""
Persistence of per-name merge choices.

Stored as a flat JSON object {name: "left" | "right" | "both"}.
"""

import json
import logging
from collections.abc import Mapping

from deckdiff.config import settings
from deckdiff.models.merge import MergeSource
from deckdiff.services.storage import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


def parse_choices(raw: Mapping[str, object]) -> dict[str, MergeSource]:
    """Keep only entries whose value is a known merge source."""
    valid = {source.value for source in MergeSource}
    return {
        str(name): MergeSource(value)
        for name, value in raw.items()
        if isinstance(value, str) and value in valid
    }


async def load_merge_choices(
    store: KeyValueStore, key: str | None = None
) -> dict[str, MergeSource]:
    """Load persisted choices; missing or corrupt data gives {}."""
    key = key or settings.merge_choices_key
    try:
        raw = await store.get(key)
    except StoreError as e:
        logger.warning("Merge choices unavailable: %s", e)
        return {}
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.warning("Discarding corrupt merge choices document")
        return {}
    if not isinstance(payload, dict):
        return {}
    return parse_choices(payload)


async def save_merge_choices(
    store: KeyValueStore,
    choices: Mapping[str, MergeSource],
    key: str | None = None,
) -> bool:
    """Persist choices. Returns False if the write failed."""
    key = key or settings.merge_choices_key
    payload = {name: MergeSource(choice).value for name, choice in choices.items()}
    try:
        await store.set(key, json.dumps(payload, sort_keys=True))
    except StoreError as e:
        logger.warning("Failed to persist merge choices: %s", e)
        return False
    return True
