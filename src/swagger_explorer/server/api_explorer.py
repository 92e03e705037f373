"""Protocol-independent operations over loaded API specifications.

``ApiExplorer`` owns a ``SpecificationRegistry`` and a loader; every
operation either returns data or raises a tagged ``MCPServerError``. The MCP
layer decides how errors are presented.
"""

from typing import Any, Dict, List, Optional

from swagger_explorer.config.logging import get_logger
from swagger_explorer.config.settings import Settings
from swagger_explorer.exceptions import ApiNotFoundError
from swagger_explorer.parser.endpoint_normalizer import EndpointNormalizer, get_paths
from swagger_explorer.parser.loader import SpecificationLoader
from swagger_explorer.parser.models import ApiSummary, EndpointRecord, LoadResult
from swagger_explorer.search.endpoint_search import EndpointSearch
from swagger_explorer.search.summarizer import summarize
from swagger_explorer.storage.registry import LoadedAPI, SpecificationRegistry

logger = get_logger(__name__)


class ApiExplorer:
    """Loads specifications and answers endpoint queries about them."""

    def __init__(
        self,
        registry: Optional[SpecificationRegistry] = None,
        loader: Optional[SpecificationLoader] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize explorer.

        Args:
            registry: Registry to read and write; a fresh one if None
            loader: Specification loader; built from ``settings`` if None
            settings: Application settings, defaults are used if None
        """
        self.settings = settings or Settings()
        self.registry = registry if registry is not None else SpecificationRegistry()
        self.loader = loader or SpecificationLoader(self.settings.loader)
        self.normalizer = EndpointNormalizer()
        self.search = EndpointSearch(self.normalizer)
        self.logger = get_logger(__name__)

    def _require(self, api_id: str, hint: Optional[str] = None) -> LoadedAPI:
        api = self.registry.get(api_id)
        if api is None:
            raise ApiNotFoundError(api_id, hint)
        return api

    async def load_api(self, api_id: str, source: str) -> LoadResult:
        """Load ``source`` and register it under ``api_id``.

        The registry is only written once the document is fully dereferenced;
        a failed load leaves any previous entry in place.

        Raises:
            LoadFailure: The specification could not be loaded
        """
        document = await self.loader.load(source)
        api = self.registry.put(api_id, document, source=source)

        result = LoadResult(
            api_id=api_id,
            title=api.title,
            version=api.version,
            path_count=api.path_count,
            endpoint_count=api.endpoint_count,
        )
        self.logger.info(
            "API loaded",
            api_id=api_id,
            title=result.title,
            paths=result.path_count,
            endpoints=result.endpoint_count,
        )
        return result

    def get_endpoint_details(
        self, api_id: str, method: str, path: str, natural: bool = False
    ) -> Any:
        """Return the endpoint record, or its prose summary when ``natural``.

        Raises:
            ApiNotFoundError, PathNotFoundError, MethodNotFoundError
        """
        api = self._require(api_id, "Use load_api tool first.")
        record = self.normalizer.project_one(api.document, path, method)
        if natural:
            return summarize(record)
        return record

    def list_apis(self) -> List[ApiSummary]:
        return list(self.registry.list())

    def search_endpoints(self, api_id: str, pattern: str) -> List[EndpointRecord]:
        """Search endpoints of ``api_id`` by path, summary or description.

        Raises:
            ApiNotFoundError: ``api_id`` is not registered
        """
        api = self._require(api_id)
        return self.search.search(api.document, pattern)

    def get_overview(self, api_id: str) -> Dict[str, Any]:
        """Info, servers, path names and schema names of a loaded API."""
        document = self._require(api_id).document

        components = document.get("components")
        schemas = components.get("schemas") if isinstance(components, dict) else None
        if schemas is None:
            # Swagger 2.0 keeps schemas under "definitions"
            schemas = document.get("definitions")

        overview = {"info": document.get("info")}
        if document.get("servers") is not None:
            overview["servers"] = document.get("servers")
        overview["paths"] = [str(path) for path in get_paths(document)]
        overview["components"] = list(schemas) if isinstance(schemas, dict) else []
        return overview

    def list_endpoints(self, api_id: str) -> List[Dict[str, Any]]:
        """Method, path and summary of every endpoint of a loaded API."""
        api = self._require(api_id)
        return [
            record.to_listing()
            for record in self.normalizer.project_all(api.document)
        ]

    def get_endpoint(self, api_id: str, method: str, path: str) -> EndpointRecord:
        api = self._require(api_id)
        return self.normalizer.project_one(api.document, path, method)
