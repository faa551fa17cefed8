from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PASSLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Pass Ledger API"
    log_level: str = "INFO"

    # Identities
    ledger_address: str = "passledger"
    owner_address: str = "owner"

    # Reward currency
    currency_name: str = "Reward Token"
    currency_symbol: str = "RWD"

    # Economy
    checkin_cooldown_seconds: int = 3600
    vip_bonus: int = 50
    backstage_bonus: int = 100
    series_id_offset: int = 100  # above the tier ids 1..3
    metadata_item_path: str = "/items/"


@lru_cache
def get_settings() -> Settings:
    return Settings()
