"""Configuration loading for the FundMe custody system.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ledger configuration
    owner: str = Field(
        default="0x0000000000000000000000000000000000000001",
        description="Identity allowed to withdraw the custodied balance",
    )
    minimum_usd: int = Field(
        default=50,
        description="Minimum contribution in whole USD",
    )

    # Price feed configuration
    price_feed_backend: Literal["mock", "http"] = Field(
        default="mock",
        description="Price feed backend type",
    )
    mock_price_decimals: int = Field(
        default=8,
        description="Decimal precision of the mock aggregator",
    )
    mock_price_initial_answer: int = Field(
        default=200000000000,
        description="Initial scaled USD answer of the mock aggregator",
    )
    price_feed_url: str = Field(
        default="http://localhost:8080",
        description="Price service endpoint URL",
    )
    price_feed_api_key: str = Field(
        default="",
        description="Price service authentication key",
    )
    price_feed_timeout_seconds: float = Field(
        default=10.0,
        description="Price service request timeout in seconds",
    )

    # Transfer configuration
    max_transfer: int | None = Field(
        default=None,
        description="Largest amount (wei) a single transfer may carry",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("minimum_usd")
    @classmethod
    def validate_minimum_usd(cls, v: int) -> int:
        """Ensure minimum contribution is non-negative."""
        if v < 0:
            raise ValueError("minimum_usd must be non-negative")
        return v

    @field_validator("owner")
    @classmethod
    def validate_owner(cls, v: str) -> str:
        """Ensure owner identity is non-empty."""
        if not v.strip():
            raise ValueError("owner must be a non-empty identity")
        return v

    @field_validator("mock_price_decimals")
    @classmethod
    def validate_mock_decimals(cls, v: int) -> int:
        """Ensure aggregator decimals are in a sane range."""
        if v < 0 or v > 36:
            raise ValueError("mock_price_decimals must be between 0 and 36")
        return v

    @field_validator("mock_price_initial_answer")
    @classmethod
    def validate_mock_answer(cls, v: int) -> int:
        """Ensure the initial price is positive."""
        if v <= 0:
            raise ValueError("mock_price_initial_answer must be positive")
        return v

    @field_validator("price_feed_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure timeout is positive."""
        if v <= 0:
            raise ValueError("price_feed_timeout_seconds must be positive")
        return v

    @field_validator("max_transfer")
    @classmethod
    def validate_max_transfer(cls, v: int | None) -> int | None:
        """Ensure transfer limit is non-negative when set."""
        if v is not None and v < 0:
            raise ValueError("max_transfer must be non-negative")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
