"""
Configuration Management for Group Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger itself has no external dependencies, so the settings only
cover display, logging and the audit trail.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main ledger settings.
    
    Loads configuration from GROUPLEDGER_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="GROUPLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )
    display_places: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Fixed-point decimal places used when displaying amounts"
    )
    
    # Queries
    default_recent_count: int = Field(
        default=10,
        ge=1,
        description="Transactions returned by recent_xct when no count is given"
    )
    
    # Audit / logging
    audit_enabled: bool = Field(
        default=True,
        description="Record audit events for ledger mutations"
    )
    audit_trail_size: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of events kept in the in-memory audit trail"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library logging level name"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows about."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
