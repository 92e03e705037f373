"""Swagger API Explorer - query loaded OpenAPI/Swagger documents over MCP."""

from .__version__ import __version__

__all__ = ["__version__"]
