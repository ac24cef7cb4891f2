"""
Merge two decks into one.

For every card the user picks a source: the left quantity, the right
quantity, or their sum. Defaults:

    both sides, equal quantity    -> LEFT   (options LEFT, RIGHT)
    both sides, unequal quantity  -> BOTH   (options LEFT, RIGHT, BOTH)
    one side only                 -> that side (only option)

A persisted choice that is not among a name's current options is
ignored, so a stale choice can never pull a quantity from an absent side.
"""

from collections.abc import Mapping

from deckdiff.analysis.diff import union_names
from deckdiff.models.merge import MergeRow, MergeSource


def merge_options(
    left: int | None, right: int | None
) -> tuple[tuple[MergeSource, ...], MergeSource | None]:
    """
    Available sources and the default source for one name.

    Returns:
        (options, default). Both empty/None when the name is on neither side.
    """
    if left and right:
        if left == right:
            return (MergeSource.LEFT, MergeSource.RIGHT), MergeSource.LEFT
        return (MergeSource.LEFT, MergeSource.RIGHT, MergeSource.BOTH), MergeSource.BOTH
    if left:
        return (MergeSource.LEFT,), MergeSource.LEFT
    if right:
        return (MergeSource.RIGHT,), MergeSource.RIGHT
    return (), None


def _merged_quantity(left: int, right: int, source: MergeSource) -> int:
    if source == MergeSource.LEFT:
        return left
    if source == MergeSource.RIGHT:
        return right
    return left + right


def is_single_side(left: Mapping[str, int], right: Mapping[str, int], name: str) -> bool:
    """True if the name has a positive quantity on exactly one side."""
    return bool(left.get(name)) != bool(right.get(name))


def compute_merge(
    left: Mapping[str, int],
    right: Mapping[str, int],
    choices: Mapping[str, MergeSource] | None = None,
    selected: Mapping[str, bool] | None = None,
) -> list[MergeRow]:
    """
    Merge two decks using per-name choices.

    Args:
        left: Left deck
        right: Right deck
        choices: User-picked sources by name; invalid entries fall back to
            the default
        selected: Opt-in flags for names present on one side only. None
            means every single-side name participates.

    Returns:
        Rows sorted by name; rows with a resulting quantity of 0 are dropped
    """
    choices = choices or {}
    rows: list[MergeRow] = []

    for name in union_names(left, right):
        qa = left.get(name, 0)
        qb = right.get(name, 0)

        if selected is not None and is_single_side(left, right, name) and not selected.get(name):
            continue

        options, default = merge_options(qa, qb)
        if default is None:
            continue

        choice = choices.get(name)
        if choice not in options:
            choice = default
        choice = MergeSource(choice)

        quantity = _merged_quantity(qa, qb, choice)
        if quantity <= 0:
            continue

        rows.append(MergeRow(name=name, quantity=quantity, choice=choice, options=options))

    return rows


def merge_selected_names(
    left: Mapping[str, int],
    right: Mapping[str, int],
    selected: Mapping[str, bool],
) -> frozenset[str]:
    """
    Single-side names the user opted into the merge.

    Callers hide these from the plain per-deck listings since they are
    already shown in the merge.
    """
    return frozenset(
        name for name, flag in selected.items() if flag and is_single_side(left, right, name)
    )


def prune_choices(
    choices: Mapping[str, MergeSource],
    left: Mapping[str, int],
    right: Mapping[str, int],
) -> dict[str, MergeSource]:
    """Drop choices for names no longer in either deck."""
    return {name: choice for name, choice in choices.items() if left.get(name) or right.get(name)}


def prune_selection(
    selected: Mapping[str, bool],
    left: Mapping[str, int],
    right: Mapping[str, int],
) -> dict[str, bool]:
    """Drop selection flags for names no longer in either deck."""
    return {name: flag for name, flag in selected.items() if left.get(name) or right.get(name)}


def merge_to_text(rows: list[MergeRow]) -> str:
    """Export merged rows as "<qty> <name>" lines."""
    return "\n".join(f"{row.quantity} {row.name}" for row in rows)
