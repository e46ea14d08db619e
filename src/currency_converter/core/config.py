from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: str | None = None
    rates_api_url: str = "https://api.exchangerate-api.com/v4/latest"
    request_timeout_s: float = 10.0

    default_base_currency: str = "PLN"

    log_level: str = "WARNING"


settings = Settings()
