"""
Scryfall API client.

Two endpoints are used:
    POST /cards/collection   bulk lookup by exact name (max 75 identifiers)
    GET  /cards/named        single lookup, ?exact= or ?fuzzy=

API docs: https://scryfall.com/docs/api
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

from deckdiff.config import MAX_COLLECTION_IDENTIFIERS, settings

logger = logging.getLogger(__name__)


class ScryfallError(Exception):
    """Raised when a Scryfall request fails or returns an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LookupMode(str, Enum):
    """Matching mode of the single-card endpoint."""

    EXACT = "exact"
    FUZZY = "fuzzy"


@dataclass
class CollectionResult:
    """Parsed response of one bulk lookup."""

    cards: list[dict[str, Any]] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)


class ScryfallClient:
    """
    Thin async wrapper over the Scryfall card endpoints.

    Pass an httpx.AsyncClient to share connections; otherwise one is
    created per client and closed by aclose().
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._base_url = (base_url or settings.scryfall_api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
            timeout=settings.scryfall_timeout,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ScryfallClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def fetch_collection(self, names: list[str]) -> CollectionResult:
        """
        Look up cards by exact name in one bulk request.

        Args:
            names: Up to 75 card names

        Returns:
            Matched card objects and the names Scryfall reported as not found

        Raises:
            ValueError: If more names are passed than the endpoint accepts
            ScryfallError: If the request fails or the body is malformed
        """
        if len(names) > MAX_COLLECTION_IDENTIFIERS:
            raise ValueError(
                f"At most {MAX_COLLECTION_IDENTIFIERS} names per request, got {len(names)}"
            )

        body = {"identifiers": [{"name": name} for name in names]}
        data = await self._request("POST", "/cards/collection", json=body)

        cards = data.get("data")
        not_found = data.get("not_found")
        if not isinstance(cards, list) or not isinstance(not_found or [], list):
            raise ScryfallError("Malformed /cards/collection response")

        return CollectionResult(
            cards=[card for card in cards if isinstance(card, dict)],
            not_found=[
                str(item["name"])
                for item in not_found or []
                if isinstance(item, dict) and item.get("name")
            ],
        )

    async def fetch_named(self, query: str, mode: LookupMode) -> dict[str, Any] | None:
        """
        Look up a single card by name.

        Returns:
            Card object, or None if Scryfall has no (unambiguous) match

        Raises:
            ScryfallError: On transport failures and non-404 error statuses
        """
        try:
            return await self._request("GET", "/cards/named", params={mode.value: query})
        except ScryfallError as e:
            if e.status_code == httpx.codes.NOT_FOUND:
                return None
            raise

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ScryfallError(
                f"{method} {path} failed: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise ScryfallError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise ScryfallError(f"{method} {path} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ScryfallError(f"{method} {path} returned unexpected payload")
        return data
