"""
Core utilities and configuration for the Sixpack client.
"""

from sixpack_client.core.config import Settings, settings, get_settings
from sixpack_client.core.logging import get_logger, setup_logging, LoggerMixin
from sixpack_client.core.exceptions import (
    SixpackError,
    ValidationError,
    ConfigurationError,
    IdentityGenerationError,
    TransportError,
    ServerError,
    DecodeError,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "LoggerMixin",
    "SixpackError",
    "ValidationError",
    "ConfigurationError",
    "IdentityGenerationError",
    "TransportError",
    "ServerError",
    "DecodeError",
]
