"""Keyword search over the endpoint projection of a document.

A linear scan: a record matches when the pattern is a case-insensitive
substring of its path, summary or description. Results keep projection
order; there is no relevance ranking.
"""

from typing import Any, List, Mapping, Optional

from swagger_explorer.config.logging import get_logger
from swagger_explorer.parser.endpoint_normalizer import EndpointNormalizer
from swagger_explorer.parser.models import EndpointRecord

logger = get_logger(__name__)


def matches(record: EndpointRecord, pattern: str) -> bool:
    """Whether ``pattern`` occurs in the record's path, summary or description."""
    needle = pattern.lower()
    fields = (record.path, record.summary, record.description)
    return any(needle in (value or "").lower() for value in fields)


class EndpointSearch:
    """Searches endpoints of a dereferenced document."""

    def __init__(self, normalizer: Optional[EndpointNormalizer] = None):
        self.normalizer = normalizer or EndpointNormalizer()
        self.logger = get_logger(__name__)

    def search(
        self, document: Mapping[str, Any], pattern: str
    ) -> List[EndpointRecord]:
        """Return every projected endpoint matching ``pattern``.

        Args:
            document: Dereferenced OpenAPI/Swagger document
            pattern: Substring to look for; empty matches every endpoint

        Returns:
            Matching records in projection order
        """
        records = self.normalizer.project_all(document)
        results = [record for record in records if matches(record, pattern)]

        self.logger.debug(
            "Endpoint search completed",
            pattern=pattern,
            scanned=len(records),
            matched=len(results),
        )
        return results
