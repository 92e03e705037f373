"""In-memory storage for loaded specifications."""

from swagger_explorer.storage.registry import LoadedAPI, SpecificationRegistry

__all__ = ["LoadedAPI", "SpecificationRegistry"]
