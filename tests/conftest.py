import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
import respx

from deckdiff.api.dependencies import card_cache_state

SCRYFALL_URL = "https://api.scryfall.com"

CardFactory = Callable[..., dict[str, Any]]


def _image_uris(slug: str) -> dict[str, str]:
    return {
        "small": f"https://cards.scryfall.io/small/{slug}.jpg",
        "normal": f"https://cards.scryfall.io/normal/{slug}.jpg",
        "large": f"https://cards.scryfall.io/large/{slug}.jpg",
        "png": f"https://cards.scryfall.io/png/{slug}.png",
        "art_crop": f"https://cards.scryfall.io/art_crop/{slug}.jpg",
    }


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for Scryfall card objects."""

    def _make(
        name: str,
        *,
        mana_cost: str = "{R}",
        cmc: float = 1.0,
        type_line: str = "Instant",
        colors: tuple[str, ...] = ("R",),
        faces: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        slug = name.lower().replace(" ", "-").replace("/", "")
        card: dict[str, Any] = {
            "object": "card",
            "id": f"id-{slug}",
            "name": name,
            "cmc": cmc,
            "type_line": type_line,
            "color_identity": list(colors),
            "scryfall_uri": f"https://scryfall.com/card/tst/1/{slug}",
            "set_name": "Test Set",
        }
        if faces:
            card["card_faces"] = faces
        else:
            card["mana_cost"] = mana_cost
            card["colors"] = list(colors)
            card["oracle_text"] = f"{name} rules text."
            card["image_uris"] = _image_uris(slug)
        return card

    return _make


@pytest.fixture
def split_card(make_card: CardFactory) -> dict[str, Any]:
    """Fire // Ice, a split card with per-face images."""
    return make_card(
        "Fire // Ice",
        cmc=4.0,
        type_line="Instant // Instant",
        colors=("R", "U"),
        faces=[
            {
                "name": "Fire",
                "mana_cost": "{1}{R}",
                "type_line": "Instant",
                "oracle_text": "Fire deals 2 damage divided as you choose.",
                "image_uris": _image_uris("fire"),
            },
            {
                "name": "Ice",
                "mana_cost": "{1}{U}",
                "type_line": "Instant",
                "oracle_text": "Tap target permanent. Draw a card.",
                "image_uris": _image_uris("ice"),
            },
        ],
    )


class FakeScryfall:
    """
    In-process stand-in for the Scryfall card endpoints.

    Bulk and exact lookups match card or front-face names case-insensitively.
    Fuzzy lookups only succeed for queries registered in fuzzy_aliases.
    """

    def __init__(self, router: respx.MockRouter) -> None:
        self.cards: list[dict[str, Any]] = []
        self.fuzzy_aliases: dict[str, str] = {}
        self.named_queries: list[tuple[str, str]] = []
        self.collection_requests: list[list[str]] = []
        self.collection_route = router.post("/cards/collection").mock(
            side_effect=self._collection
        )
        self.named_route = router.get("/cards/named").mock(side_effect=self._named)

    @property
    def call_count(self) -> int:
        return self.collection_route.call_count + self.named_route.call_count

    def _find(self, name: str) -> dict[str, Any] | None:
        wanted = name.lower()
        for card in self.cards:
            names = [card["name"]]
            if card.get("card_faces"):
                names.append(card["card_faces"][0]["name"])
            if wanted in (n.lower() for n in names):
                return card
        return None

    def _collection(self, request: httpx.Request) -> httpx.Response:
        identifiers = json.loads(request.content)["identifiers"]
        names = [item["name"] for item in identifiers]
        self.collection_requests.append(names)

        data: list[dict[str, Any]] = []
        not_found: list[dict[str, str]] = []
        for name in names:
            card = self._find(name)
            if card is None:
                not_found.append({"name": name})
            elif card not in data:
                data.append(card)
        return httpx.Response(
            200, json={"object": "list", "not_found": not_found, "data": data}
        )

    def _named(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        mode = "exact" if "exact" in params else "fuzzy"
        query = params[mode]
        self.named_queries.append((mode, query))

        if mode == "exact":
            card = self._find(query)
        else:
            alias = self.fuzzy_aliases.get(query)
            card = self._find(alias) if alias else None

        if card is None:
            return httpx.Response(404, json={"object": "error", "code": "not_found"})
        return httpx.Response(200, json=card)


@pytest.fixture
def scryfall_router() -> Iterator[respx.MockRouter]:
    with respx.mock(base_url=SCRYFALL_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def fake_scryfall(scryfall_router: respx.MockRouter) -> FakeScryfall:
    return FakeScryfall(scryfall_router)


@pytest.fixture(autouse=True)
def reset_card_cache_state() -> Iterator[None]:
    """The API keeps one card cache per process; isolate tests from it."""
    card_cache_state.reset()
    yield
    card_cache_state.reset()


@pytest.fixture
def sample_arena_export() -> str:
    """Sample Arena deck export for testing."""
    return """Deck
4 Lightning Bolt (LEB) 163
4 Monastery Swiftspear (BRO) 144
20 Mountain (NEO) 290

Sideboard
2 Abrade (VOW) 139"""
