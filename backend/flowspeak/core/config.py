"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "FlowSpeak Backend"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./flowspeak.db"
    storage_provider: str = "sql"
    storage_key: str = "@flowspeak_progress"
    random_seed: int | None = None
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "flowspeak"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
