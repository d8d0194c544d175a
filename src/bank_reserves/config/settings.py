"""
Configuration settings for the Bank Reserves application.

Values come from environment variables or a local ``.env`` file. Every
setting is optional: without an FDIC API key the BankFind API is used
unauthenticated, with its public rate limits.
"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..banking.fdic_constants import FDIC_API_BASE_URL


class Settings(BaseSettings):
    """
    Application settings.

    Field names map case-insensitively onto environment variables,
    e.g. ``fdic_api_key`` is read from ``FDIC_API_KEY``.
    """

    # FDIC BankFind Configuration
    fdic_api_key: Optional[str] = Field(
        None,
        description="FDIC BankFind Suite API key, appended to every request when set"
    )
    fdic_api_base_url: str = Field(
        FDIC_API_BASE_URL,
        description="Origin of the FDIC BankFind API"
    )

    # Environment Configuration
    environment: str = Field(
        "dev",
        description="Deployment environment (dev, staging, prod)"
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO",
        description="Logging level"
    )
    log_format: str = Field(
        "text",
        description="Log format (json, text)"
    )
    log_file_path: str = Field(
        "logs/bank_reserves.log",
        description="Log file path"
    )
    enable_console_logging: bool = Field(
        True,
        description="Enable console logging output"
    )
    enable_file_logging: bool = Field(
        False,
        description="Enable file logging"
    )

    # Streamlit Configuration
    streamlit_port: int = Field(
        8501,
        ge=1024,
        le=65535,
        description="Streamlit application port"
    )
    streamlit_host: str = Field(
        "localhost",
        description="Streamlit application host"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore"
    )

    @field_validator('fdic_api_key')
    @classmethod
    def validate_api_key(cls, v):
        """Treat a blank key as no key."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('fdic_api_base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Validate FDIC API origin format."""
        if not v.startswith(('https://', 'http://')):
            raise ValueError('FDIC API base URL must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ['json', 'text']
        if v.lower() not in valid_formats:
            raise ValueError(f'Log format must be one of: {valid_formats}')
        return v.lower()

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment."""
        valid_envs = ['dev', 'staging', 'prod']
        if v not in valid_envs:
            raise ValueError(f'Environment must be one of: {valid_envs}')
        return v

    def has_fdic_api_key(self) -> bool:
        """Check if an FDIC API key is configured."""
        return bool(self.fdic_api_key)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == 'prod'

    def get_log_config(self) -> Dict[str, Any]:
        """
        Get logging configuration.

        Returns:
            Dictionary containing logging configuration
        """
        return {
            'level': self.log_level,
            'format': self.log_format,
            'file_path': self.log_file_path,
            'console': self.enable_console_logging,
            'file': self.enable_file_logging,
        }

    def __repr__(self) -> str:
        """Secure string representation that doesn't expose secrets."""
        return (
            f"Settings("
            f"environment={self.environment}, "
            f"fdic_api_key_configured={self.has_fdic_api_key()}, "
            f"fdic_api_base_url={self.fdic_api_base_url}, "
            f"log_level={self.log_level}"
            f")"
        )


# Global settings instance
_settings: Optional[Settings] = None


def clear_settings_cache():
    """Clear the global settings cache to force reload."""
    global _settings
    _settings = None


def get_settings(reload: bool = False) -> Settings:
    """
    Get application settings instance (singleton pattern).

    Args:
        reload: Whether to reload settings from the environment

    Returns:
        Settings instance
    """
    global _settings

    # Runs before structlog is configured, so nothing is logged here
    if _settings is None or reload:
        _settings = Settings()

    return _settings
