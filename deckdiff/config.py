from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DeckDiff"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./deckdiff.db"

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_timeout: float = 30.0
    user_agent: str = "DeckDiff/0.1"

    # Scryfall's /cards/collection endpoint rejects more than 75 identifiers
    collection_batch_size: int = 70

    # Bump the version suffix to invalidate every cached card at once
    card_cache_key: str = "deckdiff_card_cache_v1"
    merge_choices_key: str = "deckdiff_merge_choices_v1"


settings = Settings()


# =============================================================================
# SCRYFALL LIMITS
# =============================================================================

# Hard cap of the bulk lookup endpoint
MAX_COLLECTION_IDENTIFIERS = 75
