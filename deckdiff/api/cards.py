"""
Card resolution endpoints.

Resolve card names against Scryfall through the shared process cache,
and compute deck statistics from the resolved records.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from deckdiff.analysis.stats import deck_stats
from deckdiff.api.dependencies import card_cache_state, get_scryfall_client, get_store
from deckdiff.models.card import CatalogRecord
from deckdiff.parsers.deck_text import parse_deck_text
from deckdiff.parsers.names import normalize_card_name
from deckdiff.services.card_cache import CardCache
from deckdiff.services.card_resolver import CardResolver, ResolutionReport
from deckdiff.services.scryfall_client import ScryfallClient
from deckdiff.services.storage import KeyValueStore

router = APIRouter(prefix="/cards", tags=["cards"])

MAX_NAMES_PER_REQUEST = 500


class ResolveRequest(BaseModel):
    """Card names to resolve."""

    names: list[str] = Field(min_length=1, max_length=MAX_NAMES_PER_REQUEST)


class CardRecordResponse(BaseModel):
    """Resolved card data for display."""

    id: str
    name: str
    mana_cost: str = ""
    cmc: float = 0.0
    type_line: str = ""
    colors: list[str] = Field(default_factory=list)
    color_identity: list[str] = Field(default_factory=list)
    art: str | None = None
    small: str | None = None
    png: str | None = None
    back_png: str | None = None
    scryfall_uri: str | None = None
    set_name: str | None = None


class ReportResponse(BaseModel):
    """Counts of the resolution pass that served this request."""

    requested: int
    resolved: int
    tombstoned: int
    failed_calls: int
    unreachable: bool


class ResolveResponse(BaseModel):
    """Response model for name resolution."""

    records: dict[str, CardRecordResponse] = Field(default_factory=dict)
    unresolved: list[str] = Field(default_factory=list)
    report: ReportResponse


class StatsRequest(BaseModel):
    """A single decklist as pasted text."""

    text: str


class StatsResponse(BaseModel):
    """Aggregate deck statistics."""

    total_cards: int
    average_mana_value: float
    mana_curve: dict[str, int]
    colors: dict[str, int]
    card_types: dict[str, int]
    unresolved: list[str] = Field(default_factory=list)
    report: ReportResponse


def _record_response(record: CatalogRecord) -> CardRecordResponse:
    return CardRecordResponse(
        id=record.id,
        name=record.name,
        mana_cost=record.mana_cost,
        cmc=record.cmc,
        type_line=record.type_line,
        colors=list(record.colors),
        color_identity=list(record.color_identity),
        art=record.art,
        small=record.small,
        png=record.png,
        back_png=record.back_png,
        scryfall_uri=record.scryfall_uri,
        set_name=record.set_name,
    )


def _report_response(report: ResolutionReport) -> ReportResponse:
    return ReportResponse(
        requested=report.requested,
        resolved=report.resolved,
        tombstoned=report.tombstoned,
        failed_calls=report.failed_calls,
        unreachable=report.unreachable,
    )


async def _resolve_names(
    names: list[str], store: KeyValueStore, client: ScryfallClient
) -> tuple[CardCache, ResolutionReport]:
    async with card_cache_state.lock:
        cache = await card_cache_state.get(store)
        report = await CardResolver(client, store).resolve(names, cache)
    return cache, report


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_cards(
    request: ResolveRequest,
    store: Annotated[KeyValueStore, Depends(get_store)],
    client: Annotated[ScryfallClient, Depends(get_scryfall_client)],
) -> ResolveResponse:
    """
    Resolve card names to Scryfall records.

    Names already cached (including known misses) are answered without
    contacting Scryfall. Misses are listed under `unresolved`.
    """
    names = [name for name in dict.fromkeys(map(normalize_card_name, request.names)) if name]
    cache, report = await _resolve_names(names, store, client)

    records: dict[str, CardRecordResponse] = {}
    unresolved: list[str] = []
    for name, record in cache.records(names).items():
        if record is None:
            unresolved.append(name)
        else:
            records[name] = _record_response(record)

    return ResolveResponse(
        records=records,
        unresolved=unresolved,
        report=_report_response(report),
    )


@router.post("/stats", response_model=StatsResponse)
async def card_stats(
    request: StatsRequest,
    store: Annotated[KeyValueStore, Depends(get_store)],
    client: Annotated[ScryfallClient, Depends(get_scryfall_client)],
) -> StatsResponse:
    """Mana curve, colors and card types of a decklist."""
    deck = parse_deck_text(request.text)
    if not deck:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid cards found in deck text",
        )

    cache, report = await _resolve_names(list(deck), store, client)
    stats = deck_stats(deck, cache.records(deck))

    return StatsResponse(
        total_cards=stats.total_cards,
        average_mana_value=round(stats.average_mana_value, 2),
        mana_curve=stats.mana_curve,
        colors=stats.colors,
        card_types=stats.card_types,
        unresolved=stats.unresolved,
        report=_report_response(report),
    )
