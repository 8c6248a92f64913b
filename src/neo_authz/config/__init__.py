"""Configuration for neo-authz: settings and logging."""

from .settings import KeycloakAuthzSettings, get_settings
from .logging_config import (
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
    setup_logging,
    get_logger,
)

__all__ = [
    "KeycloakAuthzSettings",
    "get_settings",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
