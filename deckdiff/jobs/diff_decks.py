"""
Compare or merge two decklist files from the command line.

    python -m deckdiff.jobs.diff_decks old.txt new.txt
    python -m deckdiff.jobs.diff_decks old.txt new.txt --merge > merged.txt
    python -m deckdiff.jobs.diff_decks old.txt new.txt --resolve
"""

import argparse
import asyncio
import logging
from pathlib import Path

from deckdiff.analysis.diff import diff_decks, summarize_diff
from deckdiff.analysis.merge import compute_merge, merge_to_text
from deckdiff.db.database import async_session_factory, init_db
from deckdiff.models.diff import DiffRow, DiffStatus, DiffSummary
from deckdiff.parsers.deck_text import parse_deck_text
from deckdiff.services.card_cache import load_card_cache
from deckdiff.services.card_resolver import CardResolver, ResolutionReport
from deckdiff.services.scryfall_client import ScryfallClient
from deckdiff.services.storage import SqlKeyValueStore

logger = logging.getLogger(__name__)

_STATUS_MARKERS = {
    DiffStatus.EQUAL: "=",
    DiffStatus.ONLY_LEFT: "<",
    DiffStatus.ONLY_RIGHT: ">",
    DiffStatus.DIFFERS: "~",
}


def format_diff(rows: list[DiffRow], summary: DiffSummary) -> str:
    """
    Render a diff as plain text, one card per line.

    Example line: "~ Lightning Bolt  4 -> 3 (-1)"
    """
    lines = [
        f"equal: {summary.equal}  only left: {summary.only_left}  "
        f"only right: {summary.only_right}  different: {summary.differs}",
        "",
    ]
    for row in rows:
        left = row.left if row.left is not None else "-"
        right = row.right if row.right is not None else "-"
        line = f"{_STATUS_MARKERS[row.status]} {row.name}  {left} -> {right}"
        if row.right_delta is not None:
            line += f" ({row.right_delta:+d})"
        lines.append(line)
    return "\n".join(lines)


async def resolve_names(names: list[str]) -> tuple[list[str], ResolutionReport]:
    """
    Resolve names through the persistent card cache.

    Returns:
        (names without a Scryfall match, pass report)
    """
    await init_db()
    async with async_session_factory() as session:
        store = SqlKeyValueStore(session)
        cache = await load_card_cache(store)
        async with ScryfallClient() as client:
            report = await CardResolver(client, store).resolve(names, cache)
        await session.commit()

    unresolved = [name for name in names if cache.get(name) is None]
    return unresolved, report


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Diff or merge two MTG decklists")
    parser.add_argument("left", type=Path, help="First decklist file")
    parser.add_argument("right", type=Path, help="Second decklist file")
    parser.add_argument(
        "--merge",
        action="store_true",
        help="Print the merged decklist instead of the diff",
    )
    parser.add_argument(
        "--resolve",
        action="store_true",
        help="Look up every card on Scryfall and report unknown names",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    for path in (args.left, args.right):
        if not path.exists():
            print(f"Error: Deck file not found: {path}")
            return 1

    left = parse_deck_text(args.left.read_text(encoding="utf-8"))
    right = parse_deck_text(args.right.read_text(encoding="utf-8"))

    if args.merge:
        print(merge_to_text(compute_merge(left, right)))
    else:
        rows = diff_decks(left, right)
        print(format_diff(rows, summarize_diff(rows)))

    if args.resolve:
        names = sorted(set(left) | set(right))
        unresolved, report = asyncio.run(resolve_names(names))
        if report.unreachable:
            logger.error(
                "Could not reach Scryfall; %d names left unresolved, retry later", report.requested
            )
            return 2
        for name in unresolved:
            print(f"Unresolved: {name}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
