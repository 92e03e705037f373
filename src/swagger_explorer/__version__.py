"""Version information for swagger-api-explorer."""

__version__ = "1.0.0"
