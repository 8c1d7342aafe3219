"""
POI Claim configuration management using pydantic-settings.
"""

import warnings
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, production",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")

    # Inbound webhook (CFTools Hephaistos)
    cf_webhook_secret: str = Field(
        default="",
        description="Shared secret used to verify webhook signatures",
    )

    # CFTools Data API
    cftools_application_id: Optional[str] = Field(
        default=None,
        description="CFTools application id",
    )
    cftools_application_secret: Optional[str] = Field(
        default=None,
        description="CFTools application secret",
    )
    cftools_server_api_id: Optional[str] = Field(
        default=None,
        description="Server API id from the CFTools dashboard",
    )
    cftools_base_url: str = Field(
        default="https://data.cftools.cloud/v1",
        description="CFTools Data API base URL",
    )
    cftools_webhook_url: Optional[str] = Field(
        default=None,
        description="Public URL of this service's /webhook endpoint",
    )

    # Claims
    claim_ttl_minutes: float = Field(
        default=60.0, gt=0, description="Minutes before a claim expires"
    )
    sweep_interval_seconds: float = Field(
        default=60.0, gt=0, description="Seconds between expiry sweeps"
    )

    # Name matching
    match_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum similarity for a fuzzy POI match",
    )
    similarity_metric: str = Field(
        default="dice",
        description="Similarity metric: dice, levenshtein, jaro_winkler",
    )
    catalog_path: Optional[Path] = Field(
        default=None,
        description="JSON catalog file (built-in catalog when unset)",
    )

    # Proximity gate
    proximity_enabled: bool = Field(
        default=False, description="Require players to be near a POI to claim it"
    )
    proximity_radius_m: float = Field(
        default=500.0, gt=0, description="Maximum claim distance in metres"
    )

    # Rate limiting on the webhook endpoint
    rate_limit_requests: int = Field(
        default=600, description="Rate limit requests per window"
    )
    rate_limit_window_seconds: int = Field(
        default=60, description="Rate limit window in seconds"
    )

    @field_validator("similarity_metric")
    @classmethod
    def validate_similarity_metric(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"dice", "levenshtein", "jaro_winkler"}:
            raise ValueError("SIMILARITY_METRIC must be one of: dice, levenshtein, jaro_winkler")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure critical settings are configured in production."""
        if self.environment == "production":
            if self.debug:
                raise ValueError("DEBUG must be False in production")
            if not self.cf_webhook_secret:
                raise ValueError("CF_WEBHOOK_SECRET must be set in production")
        elif not self.cf_webhook_secret:
            warnings.warn(
                "CF_WEBHOOK_SECRET not set. Webhook signatures will not be verified. "
                "Set CF_WEBHOOK_SECRET environment variable in production!",
                UserWarning,
                stacklevel=2,
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def claim_ttl_seconds(self) -> float:
        return self.claim_ttl_minutes * 60

    @property
    def cftools_configured(self) -> bool:
        return bool(
            self.cftools_application_id
            and self.cftools_application_secret
            and self.cftools_server_api_id
        )


# Global settings instance
settings = Settings()
