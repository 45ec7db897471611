"""
Configuration management for the Sixpack client.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support (``SIXPACK_*``)."""

    # Remote service
    base_url: str = Field(default="http://localhost:5000")
    user_agent: str = Field(default="sixpack-client/1.0.0")

    # Timeouts (seconds)
    connect_timeout: float = Field(default=0.25, gt=0)
    read_timeout: float = Field(default=5.0, gt=0)

    # Visitor identity persistence
    cookie_name: str = Field(default="sixpack_client_id")
    cookie_max_age_days: int = Field(default=30, gt=0)
    force_param_prefix: str = Field(default="sixpack-force-")

    # Logging
    log_level: str = Field(default="INFO")
    environment: str = Field(default="development")
    json_logs: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="SIXPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment."""
        valid_envs = ["development", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def cookie_max_age(self) -> int:
        """Identity cookie lifetime in seconds."""
        return self.cookie_max_age_days * 24 * 60 * 60

    @property
    def timeout(self) -> tuple:
        """``(connect, read)`` pair in the form ``requests`` expects."""
        return (self.connect_timeout, self.read_timeout)


# Global settings instance
settings = Settings()


def get_settings(override: Optional[Settings] = None) -> Settings:
    """Get client settings."""
    return override or settings
