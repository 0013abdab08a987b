"""
Core configuration module for the Expression Evolver.

This module manages process-level settings using Pydantic Settings,
providing type-safe configuration with environment variable support.
Run parameters of the genetic algorithm live in ``src.evolver.core.config``.
"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Logfire settings
    logfire_token: Optional[str] = Field(default=None)
    logfire_service_name: str = Field(default="evolver")
    logfire_environment: str = Field(default="development")

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Normalize and check the console log level."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": "if-token-present",
        }


# Create global settings instance
settings = Settings()
