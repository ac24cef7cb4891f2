"""
Card name canonicalization.

Every map key in the engine goes through normalize_card_name so that
"Fire//Ice", "Fire ///  Ice" and " Fire // Ice " collapse to one key.
Case is preserved here; case-insensitive matching happens in the resolver.
"""

import re

FACE_SEPARATOR = "//"

# Three or more slashes in a row collapse to the canonical separator
_SLASH_RUN = re.compile(r"/{3,}")
_SEPARATOR = re.compile(r"\s*//\s*")
_WHITESPACE = re.compile(r"\s+")


def normalize_card_name(raw: str) -> str:
    """
    Canonicalize a raw card name token.

    Rules, in order: trim, collapse slash runs to "//", put exactly one
    space on each side of "//", collapse whitespace runs. Idempotent.

    Args:
        raw: Card name as typed or exported

    Returns:
        Canonical name used as a deck / cache key
    """
    name = raw.strip()
    name = _SLASH_RUN.sub(FACE_SEPARATOR, name)
    name = _SEPARATOR.sub(f" {FACE_SEPARATOR} ", name)
    name = _WHITESPACE.sub(" ", name)
    return name.strip()


def front_face_query(name: str) -> str | None:
    """
    Text before the first face separator, for multi-face fallbacks.

    Any slash counts, so nonstandard spellings such as "Fire/Ice" still
    yield "Fire".

    Returns:
        Stripped prefix, or None if the name has no separator or the
        prefix is empty.
    """
    if "/" not in name:
        return None
    prefix = name.split("/", 1)[0].strip()
    return prefix or None


def match_key(name: str) -> str:
    """Case-insensitive lookup key for a card name."""
    return normalize_card_name(name).lower()
