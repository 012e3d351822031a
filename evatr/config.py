"""Client configuration via pydantic-settings.

Values are loaded from environment variables (or a .env file).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Root settings for the eVatR client.

    Usage:
        from evatr.config import settings
        settings.evatr_rpc_url
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    evatr_rpc_url: str = Field(
        default="https://evatr.bff-online.de/evatrRPC",
        description="eVatR XML-RPC endpoint (GET with query parameters)",
    )
    evatr_timeout: float = Field(default=10.0, description="HTTP read timeout in seconds")
    evatr_connect_timeout: float = Field(default=5.0, description="HTTP connect timeout in seconds")
    evatr_error_codes_path: Path | None = Field(
        default=None,
        description="Optional JSON file replacing the bundled error-code table",
    )

    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton; import this wherever settings are needed.
settings = Settings()
