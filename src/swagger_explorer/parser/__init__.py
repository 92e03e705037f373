"""Loading, dereferencing and endpoint projection of OpenAPI/Swagger documents."""

from .endpoint_normalizer import (
    EndpointNormalizer,
    count_endpoints,
    count_paths,
    iter_operations,
)
from .loader import SpecificationLoader
from .models import EndpointRecord, HttpMethod, LoadResult

__all__ = [
    "EndpointNormalizer",
    "EndpointRecord",
    "HttpMethod",
    "LoadResult",
    "SpecificationLoader",
    "count_endpoints",
    "count_paths",
    "iter_operations",
]
