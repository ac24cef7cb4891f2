from deckdiff.db.database import get_session, init_db
from deckdiff.db.operations import get_value, set_value

__all__ = [
    "get_session",
    "get_value",
    "init_db",
    "set_value",
]
