"""
Scryfall card object parser.

Maps the JSON card objects returned by the Scryfall API onto
CatalogRecord. Multi-faced cards carry their images per face, so the
front face is preferred for images and cost, falling back to the
top-level object.

Card objects: https://scryfall.com/docs/api/cards
"""

from typing import Any

from deckdiff.models.card import CardFace, CatalogRecord

# Only the first two faces are ever rendered
MAX_FACES = 2


class MalformedCardError(ValueError):
    """Raised when a card object is missing required fields or has the wrong shape."""

    pass


def _face_from_scryfall(face: dict[str, Any]) -> CardFace:
    return CardFace(
        name=str(face.get("name", "")),
        mana_cost=face.get("mana_cost") or "",
        type_line=face.get("type_line") or "",
        oracle_text=face.get("oracle_text") or "",
        image_uris=dict(face.get("image_uris") or {}),
    )


def card_from_scryfall(card: dict[str, Any]) -> CatalogRecord:
    """
    Build a CatalogRecord from a Scryfall card object.

    Args:
        card: Card object as returned by /cards/named or /cards/collection

    Returns:
        Immutable record with front-face images and up to two faces

    Raises:
        MalformedCardError: If the object has no id or name, or a field
            has an unexpected type
    """
    if not isinstance(card, dict) or not card.get("id") or not card.get("name"):
        raise MalformedCardError("Card object has no id or name")

    raw_faces = card.get("card_faces") or []
    if not isinstance(raw_faces, list) or not all(isinstance(f, dict) for f in raw_faces):
        raise MalformedCardError(f"Unexpected card_faces on {card['name']!r}")
    front: dict[str, Any] = raw_faces[0] if raw_faces else card

    try:
        image_uris: dict[str, str] = front.get("image_uris") or card.get("image_uris") or {}
        art = (
            image_uris.get("art_crop")
            or image_uris.get("normal")
            or image_uris.get("large")
            or image_uris.get("small")
        )
        small = image_uris.get("small") or image_uris.get("normal") or image_uris.get("png") or art

        return CatalogRecord(
            id=str(card["id"]),
            name=str(card["name"]),
            mana_cost=front.get("mana_cost") or card.get("mana_cost") or "",
            cmc=float(card.get("cmc") or 0.0),
            type_line=card.get("type_line") or front.get("type_line") or "",
            oracle_text=front.get("oracle_text") or card.get("oracle_text") or "",
            colors=tuple(card.get("colors") or front.get("colors") or ()),
            color_identity=tuple(card.get("color_identity") or ()),
            faces=tuple(_face_from_scryfall(face) for face in raw_faces[:MAX_FACES]),
            art=art,
            small=small,
            normal=image_uris.get("normal"),
            png=image_uris.get("png"),
            scryfall_uri=card.get("scryfall_uri"),
            set_name=card.get("set_name"),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedCardError(f"Malformed card object {card['name']!r}: {e}") from e
