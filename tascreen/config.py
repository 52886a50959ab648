"""Screener configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Screener settings loaded from environment variables (TASCREEN_*)."""

    model_config = SettingsConfigDict(
        env_prefix="TASCREEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Securities with fewer bars are skipped
    min_bars: int = Field(default=20, ge=2)
    volume_avg_window: int = Field(default=20, ge=1)

    # Indicator periods used for the screening snapshot
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    stochastic_k_period: int = 14
    stochastic_k_slow_period: int = 3
    stochastic_d_period: int = 3
    adx_period: int = 14

    # Presentation
    label_locale: str = "de"

    # Execution
    max_workers: int = 1
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
