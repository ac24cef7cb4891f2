from deckdiff.analysis.diff import (
    diff_decks,
    diff_status,
    quantity_delta,
    summarize_diff,
    union_names,
)
from deckdiff.analysis.merge import (
    compute_merge,
    merge_options,
    merge_selected_names,
    merge_to_text,
    prune_choices,
    prune_selection,
)
from deckdiff.analysis.stats import curve_bucket, deck_stats, primary_type

__all__ = [
    "compute_merge",
    "curve_bucket",
    "deck_stats",
    "diff_decks",
    "diff_status",
    "merge_options",
    "merge_selected_names",
    "merge_to_text",
    "primary_type",
    "prune_choices",
    "prune_selection",
    "quantity_delta",
    "summarize_diff",
    "union_names",
]
