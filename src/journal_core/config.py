"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Journal settings loaded from environment."""

    # Storage
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    storage_db_name: str = "journal_storage.db"

    @property
    def storage_db_path(self) -> str:
        return os.path.join(self.data_path, self.storage_db_name)

    # Defaults applied when a persisted record lacks a field
    default_user_name: str = "My Journal"
    default_dark_mode: bool = True

    # External collaborators
    nominatim_url: str = "https://nominatim.openstreetmap.org/reverse"
    weather_url: str = "https://api.open-meteo.com/v1/forecast"
    user_agent: str = "JournalApp/1.0"
    http_timeout: float = 10.0

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083

    # CORS
    cors_origins: list[str] = ["http://localhost:8081", "http://127.0.0.1:8081"]

    class Config:
        env_prefix = "JOURNAL_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
