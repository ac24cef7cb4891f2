"""
Catalog data resolved from Scryfall.

Records are immutable once fetched and round-trip through plain dicts
so they can live in the JSON card cache.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CardFace:
    """
    One face of a multi-faced card (split, adventure, MDFC, flip).

    Attributes:
        name: Face name, e.g. "Fire" for "Fire // Ice"
        mana_cost: Face cost expression, e.g. "{1}{R}"
        type_line: Face type line
        oracle_text: Face rules text
        image_uris: Face image URIs keyed by Scryfall size name
    """

    name: str
    mana_cost: str = ""
    type_line: str = ""
    oracle_text: str = ""
    image_uris: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """
    Resolved catalog data for one card.

    Attributes:
        id: Scryfall card id
        name: Catalog spelling of the card name ("Fire // Ice")
        mana_cost: Cost expression of the front face
        cmc: Mana value
        type_line: Full type line
        oracle_text: Rules text of the front face
        colors: Printed colors (W, U, B, R, G)
        color_identity: Color identity
        faces: Up to two faces for multi-faced cards, empty otherwise
        art: Art crop of the front face
        small: Small image of the front face
        normal: Normal image of the front face
        png: Full-resolution PNG of the front face
        scryfall_uri: Link to the card page on Scryfall
        set_name: Name of the printing's set
    """

    id: str
    name: str
    mana_cost: str = ""
    cmc: float = 0.0
    type_line: str = ""
    oracle_text: str = ""
    colors: tuple[str, ...] = ()
    color_identity: tuple[str, ...] = ()
    faces: tuple[CardFace, ...] = ()
    art: str | None = None
    small: str | None = None
    normal: str | None = None
    png: str | None = None
    scryfall_uri: str | None = None
    set_name: str | None = None

    @property
    def front_face_name(self) -> str | None:
        """Name of the first face, or None for single-faced cards."""
        return self.faces[0].name if self.faces else None

    @property
    def back_png(self) -> str | None:
        """PNG image of the second face, if the card has one."""
        if len(self.faces) < 2:
            return None
        return self.faces[1].image_uris.get("png")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogRecord":
        faces = tuple(CardFace(**face) for face in data.get("faces", []))
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            mana_cost=data.get("mana_cost", ""),
            cmc=float(data.get("cmc", 0.0)),
            type_line=data.get("type_line", ""),
            oracle_text=data.get("oracle_text", ""),
            colors=tuple(data.get("colors", ())),
            color_identity=tuple(data.get("color_identity", ())),
            faces=faces,
            art=data.get("art"),
            small=data.get("small"),
            normal=data.get("normal"),
            png=data.get("png"),
            scryfall_uri=data.get("scryfall_uri"),
            set_name=data.get("set_name"),
        )


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """
    Cached resolution outcome for one requested name.

    A None record is a tombstone: the name was looked up and Scryfall had
    no match. Tombstones are never re-queried for the same cache version.
    """

    record: CatalogRecord | None
    fetched_at: float

    @property
    def is_tombstone(self) -> bool:
        return self.record is None
