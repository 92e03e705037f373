"""Registry of loaded specifications keyed by caller-chosen identifiers.

State lives for the lifetime of the owning server process. Writes are
unconditional overwrites: loading the same identifier twice keeps the last
completed load.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from swagger_explorer.config.logging import get_logger
from swagger_explorer.parser.endpoint_normalizer import count_endpoints, count_paths
from swagger_explorer.parser.models import ApiSummary

logger = get_logger(__name__)


@dataclass
class LoadedAPI:
    """A dereferenced document registered under ``id``."""

    id: str
    document: Dict[str, Any]
    source: Optional[str] = None
    loaded_at: float = field(default_factory=time.time)

    @property
    def info(self) -> Dict[str, Any]:
        info = self.document.get("info")
        return info if isinstance(info, dict) else {}

    @property
    def title(self) -> str:
        title = self.info.get("title")
        return str(title) if title else self.id

    @property
    def version(self) -> Optional[str]:
        version = self.info.get("version")
        return None if version is None else str(version)

    @property
    def description(self) -> Optional[str]:
        description = self.info.get("description")
        return None if description is None else str(description)

    @property
    def path_count(self) -> int:
        return count_paths(self.document)

    @property
    def endpoint_count(self) -> int:
        return count_endpoints(self.document)

    def to_summary(self) -> ApiSummary:
        return ApiSummary(
            id=self.id,
            title=self.title,
            version=self.version,
            description=self.description,
            path_count=self.path_count,
        )


class SpecificationRegistry:
    """Mapping of identifier to loaded specification, at most one per key."""

    def __init__(self):
        self._apis: Dict[str, LoadedAPI] = {}

    def get(self, api_id: str) -> Optional[LoadedAPI]:
        """Return the entry for ``api_id`` or ``None``; never raises."""
        return self._apis.get(api_id)

    def put(
        self,
        api_id: str,
        document: Dict[str, Any],
        source: Optional[str] = None,
    ) -> LoadedAPI:
        """Install ``document`` under ``api_id``, replacing any previous entry."""
        replaced = api_id in self._apis
        entry = LoadedAPI(id=api_id, document=document, source=source)
        self._apis[api_id] = entry

        logger.info(
            "Specification registered",
            api_id=api_id,
            source=source,
            replaced=replaced,
        )
        return entry

    def list(self) -> Iterator[ApiSummary]:
        """Lazily summarize every entry in registration order."""
        for entry in self._apis.values():
            yield entry.to_summary()

    def ids(self) -> List[str]:
        return list(self._apis)

    def __contains__(self, api_id: object) -> bool:
        return api_id in self._apis

    def __len__(self) -> int:
        return len(self._apis)
