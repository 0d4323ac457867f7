# floordepot/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Optional env vars (.env):
      - SHEET_SCRIPT_URL (Google Apps Script web app URL baked into the
        deployment; when set, the persisted URL is never consulted)
      - DATABASE_URL (local SQLite file holding the persisted script URL)
      - POLL_INTERVAL_SECONDS (background catalog refresh period)
      - WHATSAPP_PHONE (number used by the public contact flow)
    """

    PROJECT_NAME: str = "Floor Depot Catalog"
    API_V1_STR: str = "/api/v1"

    # Remote store
    SHEET_SCRIPT_URL: str = ""
    POLL_INTERVAL_SECONDS: float = 5.0

    # Local persistence for the user-supplied script URL
    DATABASE_URL: str = "sqlite:///./floordepot.db"

    # Public contact flow
    WHATSAPP_PHONE: str = "56979796666"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
