"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerConfig(BaseSettings):
    """Token ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Balance range: balances are unsigned integers of this width
    balance_bits: int = Field(default=64, ge=8, le=256)

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Optional[str] = None  # If None, logs to stderr

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
