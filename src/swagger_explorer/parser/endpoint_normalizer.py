"""Endpoint projection for dereferenced OpenAPI/Swagger documents.

Turns the ``paths`` object of a document into ``EndpointRecord`` instances.
Records are produced in path-entry order and, within a path, in the fixed
``HttpMethod`` order (GET, POST, PUT, DELETE, PATCH, HEAD, OPTIONS, TRACE).
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from swagger_explorer.config.logging import get_logger
from swagger_explorer.parser.models import (
    EndpointRecord,
    HttpMethod,
    ParameterRecord,
    RequestBodyRecord,
    ResponseRecord,
)
from swagger_explorer.exceptions import (
    MethodNotFoundError,
    PathNotFoundError,
)

logger = get_logger(__name__)


def get_paths(document: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the ``paths`` object of a document, empty when missing."""
    paths = document.get("paths")
    return paths if isinstance(paths, Mapping) else {}


def iter_operations(
    document: Mapping[str, Any]
) -> Iterator[Tuple[str, HttpMethod, Mapping[str, Any], Mapping[str, Any]]]:
    """Yield ``(path, method, operation, path_item)`` for every defined operation."""
    for path, path_item in get_paths(document).items():
        if not isinstance(path_item, Mapping):
            continue
        for method in HttpMethod:
            operation = path_item.get(method.value)
            if isinstance(operation, Mapping):
                yield str(path), method, operation, path_item


def count_endpoints(document: Mapping[str, Any]) -> int:
    """Count operations over every path entry using the fixed method set."""
    return sum(1 for _ in iter_operations(document))


def count_paths(document: Mapping[str, Any]) -> int:
    return len(get_paths(document))


class EndpointNormalizer:
    """Projects path operations into ``EndpointRecord`` models."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def project_all(self, document: Mapping[str, Any]) -> List[EndpointRecord]:
        """Project every operation defined in the document.

        Args:
            document: Dereferenced OpenAPI/Swagger document

        Returns:
            One record per (path, method) pair, in path then method order
        """
        records = [
            self._build_record(path, method, operation, path_item)
            for path, method, operation, path_item in iter_operations(document)
        ]
        self.logger.debug("Projected endpoints", endpoints=len(records))
        return records

    def project_one(
        self, document: Mapping[str, Any], path: str, method: str
    ) -> EndpointRecord:
        """Project the operation declared for an exact path template.

        Args:
            document: Dereferenced OpenAPI/Swagger document
            path: Path template exactly as declared, e.g. ``/pet/{petId}``
            method: HTTP method name in any case

        Returns:
            The endpoint record, with the method reported upper-case

        Raises:
            PathNotFoundError: The document does not declare ``path``
            MethodNotFoundError: ``path`` exists but ``method`` is not defined on it
        """
        # A path key declared with no value counts as undeclared
        path_item = get_paths(document).get(path)
        if path_item is None:
            raise PathNotFoundError(path)

        http_method = HttpMethod.lookup(method)
        operation = None
        if http_method is not None and isinstance(path_item, Mapping):
            operation = path_item.get(http_method.value)

        if not isinstance(operation, Mapping):
            raise MethodNotFoundError(method, path)

        return self._build_record(path, http_method, operation, path_item)

    def _build_record(
        self,
        path: str,
        method: HttpMethod,
        operation: Mapping[str, Any],
        path_item: Mapping[str, Any],
    ) -> EndpointRecord:
        tags = operation.get("tags")
        return EndpointRecord(
            method=method.name,
            path=path,
            summary=_text(operation.get("summary")),
            description=_text(operation.get("description")),
            operation_id=_text(operation.get("operationId")),
            tags=list(tags) if isinstance(tags, list) else None,
            parameters=self._normalize_parameters(
                path_item.get("parameters"), operation.get("parameters")
            ),
            request_body=self._normalize_request_body(
                operation.get("requestBody")
            ),
            responses=self._normalize_responses(operation.get("responses")),
        )

    def _normalize_parameters(
        self, path_parameters: Any, operation_parameters: Any
    ) -> List[ParameterRecord]:
        """Merge path-level and operation-level parameters.

        Operation parameters override inherited ones with the same name and
        location.
        """
        own = [
            param
            for param in (operation_parameters or [])
            if isinstance(param, Mapping)
        ]
        overridden = {(param.get("name"), param.get("in")) for param in own}
        inherited = [
            param
            for param in (path_parameters or [])
            if isinstance(param, Mapping)
            and (param.get("name"), param.get("in")) not in overridden
        ]

        return [
            ParameterRecord(
                name=_text(param.get("name")),
                location=_text(param.get("in")),
                required=bool(param.get("required", False)),
                description=_text(param.get("description")),
                schema=param.get("schema"),
                example=param.get("example"),
            )
            for param in inherited + own
        ]

    def _normalize_request_body(
        self, request_body: Any
    ) -> Optional[RequestBodyRecord]:
        if not isinstance(request_body, Mapping):
            return None

        return RequestBodyRecord(
            description=_text(request_body.get("description")),
            required=bool(request_body.get("required", False)),
            content=request_body.get("content"),
        )

    def _normalize_responses(self, responses: Any) -> Dict[str, ResponseRecord]:
        normalized = {}
        if not isinstance(responses, Mapping):
            return normalized

        for code, response in responses.items():
            # Only response objects proper; extensions and stray values are skipped
            if not isinstance(response, Mapping) or "description" not in response:
                continue
            normalized[str(code)] = ResponseRecord(
                description=_text(response.get("description")),
                content=response.get("content"),
                headers=response.get("headers"),
            )

        return normalized


def _text(value: Any) -> Optional[str]:
    """YAML scalars such as ``version: 1.0`` arrive as numbers."""
    if value is None or isinstance(value, str):
        return value
    return str(value)
