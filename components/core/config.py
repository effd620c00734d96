from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        validate_default=True,
        extra="ignore",
    )

    # Database settings
    DB_URL: Optional[str] = None  # Optional full DB URL
    DB_PATH: str = "stride.db"

    # API settings
    SERVICE_NAME: str = "Stride"
    API_VERSION: str = "v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @property
    def sync_db_url(self) -> str:
        """Get synchronous database URL."""
        if self.DB_URL:
            return self.DB_URL.replace("sqlite+aiosqlite", "sqlite")
        return f"sqlite:///{self.DB_PATH}"

    @property
    def async_db_url(self) -> str:
        """Get asynchronous database URL."""
        if self.DB_URL:
            return self.DB_URL
        return f"sqlite+aiosqlite:///{self.DB_PATH}"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()
