"""Application configuration settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    json_format: bool = Field(default=True, description="Use JSON log format")


class ServerConfig(BaseSettings):
    """MCP server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    name: str = Field(
        default="swagger-api-explorer", description="Server name"
    )
    version: str = Field(default="1.0.0", description="Server version")


class LoaderConfig(BaseSettings):
    """Specification loader configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOADER_")

    fetch_timeout: float = Field(
        default=30.0, description="Timeout in seconds for fetching URLs"
    )
    validate_openapi: bool = Field(
        default=False,
        description="Validate documents with openapi-spec-validator before dereferencing",
    )
    max_document_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max document size in bytes (10MB)"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Sub-configurations
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)

    # Global settings
    debug: bool = Field(default=False, description="Enable debug mode")
