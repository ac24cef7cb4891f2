"""Tests for card resolution API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from deckdiff.api.dependencies import card_cache_state, get_store
from deckdiff.config import settings
from deckdiff.main import app
from deckdiff.services.storage import InMemoryKeyValueStore


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
async def client(store: InMemoryKeyValueStore):
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestResolveEndpoint:
    async def test_resolves_and_reports_misses(
        self, client: AsyncClient, fake_scryfall, make_card, split_card
    ) -> None:
        fake_scryfall.cards += [make_card("Lightning Bolt"), split_card]

        response = await client.post(
            "/cards/resolve", json={"names": ["Lightning Bolt", "Fire//Ice", "Not A Card"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert set(data["records"]) == {"Lightning Bolt", "Fire // Ice"}
        assert data["records"]["Fire // Ice"]["back_png"] is not None
        assert data["unresolved"] == ["Not A Card"]
        assert data["report"]["requested"] == 3
        assert data["report"]["tombstoned"] == 1

    async def test_cache_is_shared_across_requests(
        self, client: AsyncClient, fake_scryfall, make_card, store: InMemoryKeyValueStore
    ) -> None:
        fake_scryfall.cards.append(make_card("Shock"))

        await client.post("/cards/resolve", json={"names": ["Shock", "Not A Card"]})
        calls = fake_scryfall.call_count
        response = await client.post("/cards/resolve", json={"names": ["Shock", "Not A Card"]})

        assert fake_scryfall.call_count == calls
        assert response.json()["report"]["requested"] == 0
        assert settings.card_cache_key in store.data

    async def test_cache_loaded_from_store(
        self, client: AsyncClient, fake_scryfall, make_card, store: InMemoryKeyValueStore
    ) -> None:
        fake_scryfall.cards.append(make_card("Shock"))
        await client.post("/cards/resolve", json={"names": ["Shock"]})
        card_cache_state.reset()
        calls = fake_scryfall.call_count

        response = await client.post("/cards/resolve", json={"names": ["Shock"]})

        assert fake_scryfall.call_count == calls
        assert response.json()["records"]["Shock"]["name"] == "Shock"

    async def test_empty_name_list_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/cards/resolve", json={"names": []})

        assert response.status_code == 422


class TestStatsEndpoint:
    async def test_stats(self, client: AsyncClient, fake_scryfall, make_card) -> None:
        fake_scryfall.cards += [
            make_card("Lightning Bolt"),
            make_card("Goblin Guide", type_line="Creature — Goblin Scout"),
            make_card(
                "Mountain",
                mana_cost="",
                cmc=0,
                type_line="Basic Land — Mountain",
                colors=(),
            ),
        ]
        text = "4 Lightning Bolt\n4 Goblin Guide\n12 Mountain\n1 Not A Card"

        response = await client.post("/cards/stats", json={"text": text})

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 21
        assert data["mana_curve"]["1"] == 8
        assert data["colors"]["R"] == 8
        assert data["card_types"]["land"] == 12
        assert data["unresolved"] == ["Not A Card"]
        assert data["average_mana_value"] == 1.0

    async def test_empty_deck_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/cards/stats", json={"text": "Deck\nSideboard\n4 Shock"})

        assert response.status_code == 400
