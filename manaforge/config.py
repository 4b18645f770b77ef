from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# CARD LOOKUP THROTTLING
# =============================================================================

# Maximum lookups in flight at once for a single request
DEFAULT_LOOKUP_CONCURRENCY = 8

# Minimum seconds between lookup starts (Scryfall asks for <= 10 requests/second)
DEFAULT_LOOKUP_MIN_INTERVAL = 0.1


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "ManaForge"
    debug: bool = False

    anthropic_api_key: str = ""
    generation_model: str = "claude-sonnet-4-20250514"
    generation_max_tokens: int = 4096
    generation_temperature: float = 0.7

    scryfall_api_url: str = "https://api.scryfall.com"
    scryfall_timeout: float = 30.0

    lookup_concurrency: int = DEFAULT_LOOKUP_CONCURRENCY
    lookup_min_interval: float = DEFAULT_LOOKUP_MIN_INTERVAL

    # Optional local Scryfall bulk file; when set, lookups never hit the network
    card_database_path: str | None = None


settings = Settings()
