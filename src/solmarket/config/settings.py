"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Every value has a working default, so the library can be imported without
an .env file; deployments override the RPC endpoint and cache windows
through environment variables.

Files that USE this module:
- solmarket.adapters.rpc.gateway (endpoint URL and timeout)
- solmarket.application.* (cache windows, sampling limits, reference vaults)
- solmarket.shared.logging_conf (log destinations)

Files that this module USES:
- solmarket.shared.validators (validation functions for settings)
- solmarket.domain.addresses (default reference pool vaults)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator, model_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from solmarket.domain.addresses import SOL_USDC_POOL
from solmarket.shared.validators import (
    validate_address,  # Validate base58 account address
    validate_rpc_url,  # Validate RPC endpoint URL
)


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- RPC ---
    rpc_url: str = Field(default="https://api.mainnet-beta.solana.com", alias="SOLANA_RPC_URL")
    rpc_timeout_seconds: float = Field(default=15.0, alias="RPC_TIMEOUT_SECONDS", ge=1, le=120)

    # --- Native asset price (SOL/USD) ---
    native_price_ttl_seconds: float = Field(default=60.0, alias="NATIVE_PRICE_TTL_SECONDS", ge=1)
    native_price_default: float = Field(default=200.0, alias="NATIVE_PRICE_DEFAULT", gt=0)
    native_price_min: float = Field(default=10.0, alias="NATIVE_PRICE_MIN", gt=0)
    native_price_max: float = Field(default=1000.0, alias="NATIVE_PRICE_MAX", gt=0)
    reference_native_vault: str = Field(default=SOL_USDC_POOL.native_vault, alias="REFERENCE_NATIVE_VAULT")
    reference_stable_vault: str = Field(default=SOL_USDC_POOL.stable_vault, alias="REFERENCE_STABLE_VAULT")

    # --- Sampling limits ---
    lp_holder_sample: int = Field(default=10, alias="LP_HOLDER_SAMPLE", ge=1, le=20)
    activity_signature_limit: int = Field(default=100, alias="ACTIVITY_SIGNATURE_LIMIT", ge=1, le=1000)

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="SOLMARKET_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, v: str) -> str:
        """Validate RPC endpoint format."""
        if not validate_rpc_url(v):
            raise ValueError("SOLANA_RPC_URL must be an http(s) URL")
        return v

    @field_validator("reference_native_vault", "reference_stable_vault")
    @classmethod
    def validate_vault(cls, v: str) -> str:
        """Validate reference vault addresses."""
        if not validate_address(v):
            raise ValueError(f"Invalid reference vault address: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return v

    @model_validator(mode="after")
    def validate_price_band(self) -> "Settings":
        """The sanity band must be a non-empty interval."""
        if self.native_price_min >= self.native_price_max:
            raise ValueError("NATIVE_PRICE_MIN must be lower than NATIVE_PRICE_MAX")
        return self


# Global settings instance
settings = Settings()
