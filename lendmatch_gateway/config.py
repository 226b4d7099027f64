"""Configuration management using Pydantic Settings"""

from typing import Dict
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _standard_market_rates() -> Dict[int, float]:
    return {3: 5.25, 6: 5.75, 12: 6.25, 24: 6.75, 36: 7.25, 48: 7.75, 60: 8.25}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    market_data_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "lendmatch-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Used when the market data source is down and the caller sent no rates
    fallback_market_rates: Dict[int, float] = Field(default_factory=_standard_market_rates)

    # Demo data
    synthetic_max_records: int = 500


settings = Settings()
