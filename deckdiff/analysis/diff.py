"""
Deck diff algebra.

Pure functions over two decks. A missing name and a zero quantity are
the same thing: the card is absent from that side.
"""

from collections.abc import Mapping

from deckdiff.models.deck import Side
from deckdiff.models.diff import DiffRow, DiffStatus, DiffSummary


def union_names(left: Mapping[str, int], right: Mapping[str, int]) -> list[str]:
    """All distinct names of both decks, sorted lexicographically."""
    return sorted(set(left) | set(right))


def diff_status(left: int | None, right: int | None) -> DiffStatus:
    """
    Classify one name's quantities across two decks.

    Args:
        left: Quantity in the left deck (None or 0 when absent)
        right: Quantity in the right deck (None or 0 when absent)
    """
    if left and right:
        return DiffStatus.EQUAL if left == right else DiffStatus.DIFFERS
    if left:
        return DiffStatus.ONLY_LEFT
    if right:
        return DiffStatus.ONLY_RIGHT
    return DiffStatus.EQUAL


def quantity_delta(left: int | None, right: int | None, side: Side = Side.LEFT) -> int | None:
    """
    Signed quantity difference seen from one side.

    Returns:
        left - right for Side.LEFT, right - left for Side.RIGHT.
        None when either side is absent or the quantities are equal.
    """
    if not left or not right:
        return None
    delta = left - right if side == Side.LEFT else right - left
    return delta or None


def diff_decks(left: Mapping[str, int], right: Mapping[str, int]) -> list[DiffRow]:
    """
    Compare two decks name by name.

    Returns:
        One row per name in union_names(left, right), in the same order
    """
    rows: list[DiffRow] = []
    for name in union_names(left, right):
        qa = left.get(name) or None
        qb = right.get(name) or None
        rows.append(
            DiffRow(
                name=name,
                left=qa,
                right=qb,
                status=diff_status(qa, qb),
                left_delta=quantity_delta(qa, qb, Side.LEFT),
                right_delta=quantity_delta(qa, qb, Side.RIGHT),
            )
        )
    return rows


def summarize_diff(rows: list[DiffRow]) -> DiffSummary:
    """Count diff rows per status."""
    summary = DiffSummary()
    for row in rows:
        if row.status == DiffStatus.EQUAL:
            summary.equal += 1
        elif row.status == DiffStatus.ONLY_LEFT:
            summary.only_left += 1
        elif row.status == DiffStatus.ONLY_RIGHT:
            summary.only_right += 1
        else:
            summary.differs += 1
    return summary
