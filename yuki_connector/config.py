"""Configuration management for the Yuki connector.

Uses pydantic-settings to load configuration from environment variables
with validation and type coercion.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import SERVICE_WSDL, DEFAULT_SERVICE, get_wsdl_url, service_url_from_wsdl


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Yuki Configuration
    yuki_api_key: Optional[str] = Field(
        default=None,
        description="Yuki webservice access key (type Administration, Settings > Webservices)"
    )
    yuki_service: str = Field(
        default=DEFAULT_SERVICE,
        description="Yuki service to connect to: 'sales', 'accounting' or 'accountinginfo'"
    )
    yuki_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout for a single webservice call (seconds)"
    )

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="JSON log file path (console only when unset)"
    )

    @field_validator("yuki_service")
    @classmethod
    def validate_service(cls, v: str) -> str:
        """Ensure the service is one of the known Yuki webservices."""
        v = v.lower().strip()
        if v not in SERVICE_WSDL:
            raise ValueError(f"Yuki service must be one of: {sorted(SERVICE_WSDL)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        v = v.upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    @property
    def wsdl_url(self) -> str:
        """Get the WSDL URL of the configured service."""
        return get_wsdl_url(self.yuki_service)

    @property
    def service_url(self) -> str:
        """Get the SOAP endpoint URL of the configured service."""
        return service_url_from_wsdl(self.wsdl_url)


def get_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings: Application settings loaded from environment
    """
    return Settings()
