from deckdiff.parsers.deck_text import clean_card_name, deck_to_text, parse_deck_text
from deckdiff.parsers.names import (
    FACE_SEPARATOR,
    front_face_query,
    match_key,
    normalize_card_name,
)
from deckdiff.parsers.scryfall import MalformedCardError, card_from_scryfall

__all__ = [
    "FACE_SEPARATOR",
    "MalformedCardError",
    "card_from_scryfall",
    "clean_card_name",
    "deck_to_text",
    "front_face_query",
    "match_key",
    "normalize_card_name",
    "parse_deck_text",
]
