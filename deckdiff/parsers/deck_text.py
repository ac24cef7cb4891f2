"""
Parser for free-form decklist text.

Accepts the common export shapes:
    4 Lightning Bolt
    4x Lightning Bolt
    4 Lightning Bolt (LEB) 163
    4 Lightning Bolt [LEB]

Arena "Deck" / "Companion" headers are skipped. Everything from the first
"Sideboard" line onwards is discarded.
"""

import re

from deckdiff.models.deck import Deck
from deckdiff.parsers.names import normalize_card_name

_LINE_BREAKS = re.compile(r"[\r\n]+")

SIDEBOARD_PATTERN = re.compile(r"^sideboard\b", re.IGNORECASE)
HEADER_PATTERN = re.compile(r"^(deck|companion)\b", re.IGNORECASE)

# Groups: (quantity, remainder)
CARD_LINE_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)

# "[MOM]" at end of line
_BRACKET_SUFFIX = re.compile(r"\s*\[[^\]]+\]\s*$")
# "(MOM)", "(MOM) 150", "(NEO) 290a" or "(PRM-123)" at end of line
_SET_SUFFIX = re.compile(r"\s*\([^()]+\)(?:\s+[A-Za-z0-9★-]+)?\s*$")
# Residual bare collector number
_NUMBER_SUFFIX = re.compile(r"\s+\d+\s*$")


def clean_card_name(remainder: str) -> str:
    """
    Strip printing annotations from the name part of a card line.

    Stacked annotations ("Foo (ABC) (DEF)", "Foo 12 34") are stripped
    until none is left, so a cleaned name cleans to itself.

    Returns:
        Normalized card name, empty string if nothing is left.
    """
    name = normalize_card_name(remainder)
    while True:
        stripped = _BRACKET_SUFFIX.sub("", name)
        stripped = _SET_SUFFIX.sub("", stripped)
        stripped = _NUMBER_SUFFIX.sub("", stripped)
        stripped = normalize_card_name(stripped)
        if stripped == name:
            return name
        name = stripped


def parse_deck_text(text: str) -> Deck:
    """
    Parse decklist text into a name -> quantity multiset.

    Never fails: malformed lines are skipped. Repeated names are summed.
    Zero totals are dropped, so every quantity in the result is > 0.

    Args:
        text: Raw decklist text (paste or file contents)

    Returns:
        Deck keyed by canonical card name
    """
    deck: Deck = {}

    for line in _LINE_BREAKS.split(text):
        line = line.strip()
        if not line:
            continue

        if SIDEBOARD_PATTERN.match(line):
            break

        if HEADER_PATTERN.match(line):
            continue

        match = CARD_LINE_PATTERN.match(line)
        if not match:
            continue

        name = clean_card_name(match.group(2))
        if not name:
            continue

        deck[name] = deck.get(name, 0) + int(match.group(1))

    return {name: qty for name, qty in deck.items() if qty > 0}


def deck_to_text(deck: Deck) -> str:
    """
    Serialize a deck as "<qty> <name>" lines, sorted by name.

    The output parses back to the same deck with parse_deck_text.
    """
    return "\n".join(f"{deck[name]} {name}" for name in sorted(deck) if deck[name] > 0)
