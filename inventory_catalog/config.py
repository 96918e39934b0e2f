from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Inventory Catalog"

    # ==============================
    # Storage
    # ==============================
    INVENTORY_FILE: str = "inventory.txt"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
