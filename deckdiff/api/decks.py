"""
Deck comparison endpoints.

Both endpoints take raw decklist text for the two sides; decks are
rebuilt from text on every call.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from deckdiff.analysis.diff import diff_decks, summarize_diff
from deckdiff.analysis.merge import (
    compute_merge,
    merge_selected_names,
    merge_to_text,
    prune_choices,
    prune_selection,
)
from deckdiff.api.dependencies import get_store
from deckdiff.models.diff import DiffStatus
from deckdiff.models.merge import MergeSource
from deckdiff.parsers.deck_text import parse_deck_text
from deckdiff.services.merge_choices import load_merge_choices, save_merge_choices
from deckdiff.services.storage import KeyValueStore

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckPairRequest(BaseModel):
    """Two decklists as pasted text."""

    left: str = ""
    right: str = ""


class DiffRowResponse(BaseModel):
    """One card of the diff."""

    name: str
    left: int | None = None
    right: int | None = None
    status: DiffStatus
    left_delta: int | None = None
    right_delta: int | None = None


class DiffSummaryResponse(BaseModel):
    """Distinct card counts per status."""

    equal: int = 0
    only_left: int = 0
    only_right: int = 0
    differs: int = 0


class DiffResponse(BaseModel):
    """Response model for a deck diff."""

    rows: list[DiffRowResponse] = Field(default_factory=list)
    summary: DiffSummaryResponse


class MergeRequest(DeckPairRequest):
    """Two decklists plus the user's merge picks."""

    choices: dict[str, MergeSource] = Field(default_factory=dict)
    selected: dict[str, bool] | None = None


class MergeRowResponse(BaseModel):
    """One line of the merged deck."""

    name: str
    quantity: int
    choice: MergeSource
    options: list[MergeSource]


class MergeResponse(BaseModel):
    """Response model for a deck merge."""

    rows: list[MergeRowResponse] = Field(default_factory=list)
    text: str
    total_cards: int
    choices: dict[str, MergeSource] = Field(default_factory=dict)
    merge_selected: list[str] = Field(default_factory=list)


@router.post("/diff", response_model=DiffResponse)
async def diff(request: DeckPairRequest) -> DiffResponse:
    """Compare two decklists card by card."""
    rows = diff_decks(parse_deck_text(request.left), parse_deck_text(request.right))
    summary = summarize_diff(rows)

    return DiffResponse(
        rows=[
            DiffRowResponse(
                name=row.name,
                left=row.left,
                right=row.right,
                status=row.status,
                left_delta=row.left_delta,
                right_delta=row.right_delta,
            )
            for row in rows
        ],
        summary=DiffSummaryResponse(
            equal=summary.equal,
            only_left=summary.only_left,
            only_right=summary.only_right,
            differs=summary.differs,
        ),
    )


@router.post("/merge", response_model=MergeResponse)
async def merge(
    request: MergeRequest,
    store: Annotated[KeyValueStore, Depends(get_store)],
) -> MergeResponse:
    """
    Merge two decklists.

    Request choices override persisted ones. The combined choices are
    pruned to cards still present and written back.
    """
    left = parse_deck_text(request.left)
    right = parse_deck_text(request.right)

    persisted = await load_merge_choices(store)
    choices = prune_choices({**persisted, **request.choices}, left, right)
    if choices != persisted:
        await save_merge_choices(store, choices)

    selected = None
    if request.selected is not None:
        selected = prune_selection(request.selected, left, right)
    rows = compute_merge(left, right, choices, selected)

    return MergeResponse(
        rows=[
            MergeRowResponse(
                name=row.name,
                quantity=row.quantity,
                choice=row.choice,
                options=list(row.options),
            )
            for row in rows
        ],
        text=merge_to_text(rows),
        total_cards=sum(row.quantity for row in rows),
        choices=choices,
        merge_selected=sorted(merge_selected_names(left, right, selected or {})),
    )
