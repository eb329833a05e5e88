"""
Configuration management using Pydantic Settings.
Validates all environment variables at startup for fail-fast behavior.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings with validation."""

    # Storage
    DATA_DIR: str = Field(
        default="data",
        description="Directory holding one evaluation_<id>.json file per evaluation"
    )

    # Frontend settings
    FRONTEND_ORIGIN: str = Field(
        default="http://localhost:5173",
        description="Frontend origin for CORS (no wildcard allowed)"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    # Scoring
    RISK_AWARE_WIFI_SCORING: bool = Field(
        default=False,
        description="Score publicWifi by its safe answer ('no') instead of awarding points to 'si'"
    )

    # Abuse protection
    RATE_LIMIT: str = Field(
        default="100 per 15 minutes",
        description="Per-client request limit for /api routes (limits syntax)"
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Turn rate limiting off (tests, local tooling)"
    )
    MAX_BODY_BYTES: int = Field(
        default=10 * 1024,
        ge=1024,
        le=1024 * 1024,
        description="Maximum accepted request body size in bytes (1 KiB - 1 MiB)"
    )

    # Server
    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port used when running the app directly"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @field_validator("FRONTEND_ORIGIN")
    @classmethod
    def validate_no_wildcard_origin(cls, v: str) -> str:
        """Prevent wildcard CORS origin."""
        if v == "*":
            raise ValueError(
                "FRONTEND_ORIGIN cannot be '*' (wildcard). "
                "Set explicit origin or leave unset for localhost:5173 default."
            )
        return v

    @field_validator("DATA_DIR")
    @classmethod
    def validate_data_dir(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DATA_DIR cannot be empty")
        return v


# Global settings instance
settings = Settings()
