# quotedesk/core/settings.py
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === General ===
    app_env: str = "local"  # local | development | production
    company_name: str = "JJSATs Quotation"

    # Public base URL used in approval deep links. Falls back to the request origin.
    app_base_url: Optional[str] = None

    # === Database ===
    database_url: str = "sqlite:///./quotedesk.db"

    # === Telegram ===
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_api_base: str = "https://api.telegram.org"
    http_timeout_seconds: float = 15.0

    # === PIN session ===
    master_pins: list[str] = Field(default_factory=lambda: ["000000", "111111", "222222"])
    pin_cookie_max_age: int = 60 * 60  # 1 hour

    # === CORS ===
    allowed_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # === Logging ===
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance with simple environment overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s


# from quotedesk.core.settings import settings
settings = get_settings()
