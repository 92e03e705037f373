"""Configuration management for swagger-api-explorer."""

from .logging import configure_logging, get_logger
from .settings import LoaderConfig, LoggingConfig, ServerConfig, Settings

__all__ = [
    "configure_logging",
    "get_logger",
    "LoaderConfig",
    "LoggingConfig",
    "ServerConfig",
    "Settings",
]
