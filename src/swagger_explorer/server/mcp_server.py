"""MCP server exposing loaded Swagger/OpenAPI documents to AI agents.

Tools: load_api, get_endpoint_details, list_apis, search_endpoints.
Resource templates: swagger://{apiId}/load, swagger://{apiId}/endpoints and
swagger://{apiId}/endpoint/{method}/{path} (path percent-encoded).
"""

import re
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import quote, unquote

from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from swagger_explorer.config.logging import get_logger, sanitize_log_data
from swagger_explorer.config.settings import Settings
from swagger_explorer.exceptions import (
    ApiNotFoundError,
    ErrorLogger,
    MCPServerError,
    ResourceNotFoundError,
    ValidationError,
    sanitize_error_data,
)
from swagger_explorer.server.api_explorer import ApiExplorer
from swagger_explorer.server.formatting import dump_json

logger = get_logger(__name__)

JSON_MIME_TYPE = "application/json"
TEXT_MIME_TYPE = "text/plain"

OVERVIEW_URI = re.compile(r"^swagger://(?P<api_id>[^/]+)/load/?$")
ENDPOINTS_URI = re.compile(r"^swagger://(?P<api_id>[^/]+)/endpoints/?$")
ENDPOINT_DETAIL_URI = re.compile(
    r"^swagger://(?P<api_id>[^/]+)/endpoint/(?P<method>[^/]+)/(?P<path>.+)$"
)

NO_APIS_LOADED = (
    "No APIs loaded. Use the load_api tool to load an API specification."
)

TOOLS = [
    types.Tool(
        name="load_api",
        description="Load an OpenAPI/Swagger specification from a URL or file path and register it under an ID",
        inputSchema={
            "type": "object",
            "properties": {
                "apiId": {
                    "type": "string",
                    "description": "Unique identifier for this API",
                },
                "source": {
                    "type": "string",
                    "description": "URL or file path to the OpenAPI/Swagger specification",
                },
            },
            "required": ["apiId", "source"],
        },
    ),
    types.Tool(
        name="get_endpoint_details",
        description="Get parameters, request body and responses of one endpoint, optionally as a human-readable summary",
        inputSchema={
            "type": "object",
            "properties": {
                "apiId": {
                    "type": "string",
                    "description": "ID of the loaded API",
                },
                "method": {
                    "type": "string",
                    "description": "HTTP method (GET, POST, etc.)",
                },
                "path": {
                    "type": "string",
                    "description": "API endpoint path, exactly as declared (e.g. '/pet/{petId}')",
                },
                "natural": {
                    "type": "boolean",
                    "description": "If true, returns a human-readable summary",
                    "default": False,
                },
            },
            "required": ["apiId", "method", "path"],
        },
    ),
    types.Tool(
        name="list_apis",
        description="List all loaded API specifications",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="search_endpoints",
        description="Search endpoints of a loaded API by path, summary or description",
        inputSchema={
            "type": "object",
            "properties": {
                "apiId": {
                    "type": "string",
                    "description": "ID of the loaded API",
                },
                "pattern": {
                    "type": "string",
                    "description": "Search pattern for endpoint paths or descriptions",
                },
            },
            "required": ["apiId", "pattern"],
        },
    ),
]

RESOURCE_TEMPLATES = [
    types.ResourceTemplate(
        uriTemplate="swagger://{apiId}/load",
        name="load-api",
        description="Overview of a loaded API: info, servers, paths and schema names",
        mimeType=JSON_MIME_TYPE,
    ),
    types.ResourceTemplate(
        uriTemplate="swagger://{apiId}/endpoints",
        name="endpoints",
        description="Method, path and summary of every endpoint of a loaded API",
        mimeType=JSON_MIME_TYPE,
    ),
    types.ResourceTemplate(
        uriTemplate="swagger://{apiId}/endpoint/{method}/{path}",
        name="endpoint-detail",
        description="Details of one endpoint; the path must be URL-encoded",
        mimeType=JSON_MIME_TYPE,
    ),
]


def _string_argument(arguments: Dict[str, Any], name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str):
        raise ValidationError(name, "A string value is required", value)
    return value


class SwaggerExplorerServer:
    """MCP server for exploring loaded Swagger/OpenAPI documents."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        explorer: Optional[ApiExplorer] = None,
    ):
        """Initialize the MCP server.

        Args:
            settings: Application settings, uses default if None
            explorer: Explorer holding the specification registry; a fresh
                one is created if None
        """
        self.settings = settings or Settings()
        self.explorer = explorer or ApiExplorer(settings=self.settings)
        self.logger = get_logger(__name__)
        self.error_logger = ErrorLogger(self.logger)

        self._tool_handlers: Dict[
            str, Callable[[Dict[str, Any]], Awaitable[str]]
        ] = {
            "load_api": self._load_api,
            "get_endpoint_details": self._get_endpoint_details,
            "list_apis": self._list_apis,
            "search_endpoints": self._search_endpoints,
        }

        self.server = Server(self.settings.server.name)
        self._register_handlers()

        self.logger.info(
            "MCP server initialized",
            name=self.settings.server.name,
            version=self.settings.server.version,
        )

    @property
    def registry(self):
        return self.explorer.registry

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[types.Tool]:
            return TOOLS

        @self.server.call_tool()
        async def call_tool(
            name: str, arguments: Dict[str, Any]
        ) -> List[types.TextContent]:
            # Raised errors are returned to the client as isError results
            return await self.dispatch_tool(name, arguments)

        @self.server.list_resource_templates()
        async def list_resource_templates() -> List[types.ResourceTemplate]:
            return RESOURCE_TEMPLATES

        @self.server.list_resources()
        async def list_resources() -> List[types.Resource]:
            return self.list_loaded_resources()

        @self.server.read_resource()
        async def read_resource(uri) -> List[ReadResourceContents]:
            return self.read_resource_contents(str(uri))

    # Tools

    async def dispatch_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[types.TextContent]:
        """Run a tool and wrap its text output.

        Raises:
            MCPServerError: The tool failed; the message is client-facing
        """
        request_id = str(uuid.uuid4())
        arguments = arguments or {}

        try:
            handler = self._tool_handlers.get(name)
            if handler is None:
                raise ValidationError(
                    parameter="name",
                    message=f"Unknown tool '{name}'",
                    value=name,
                    suggestions=list(self._tool_handlers),
                )

            self.logger.info(
                f"Processing {name} request",
                request_id=request_id,
                tool=name,
                arguments=sanitize_log_data(arguments),
            )

            text = await handler(arguments)

            self.logger.info(
                f"{name} request completed successfully",
                request_id=request_id,
                tool=name,
            )
            return [types.TextContent(type="text", text=text)]

        except MCPServerError as e:
            self.error_logger.log_error(
                e,
                context={"tool": name, "arguments": sanitize_error_data(arguments)},
                request_id=request_id,
            )
            raise

        except Exception as e:
            self.error_logger.log_operation_error(
                operation=f"call_tool_{name}",
                error=e,
                context={"tool": name, "arguments": sanitize_error_data(arguments)},
                request_id=request_id,
            )
            raise MCPServerError(
                code=-32603,
                message=f"Internal server error: {e}",
                data={"error_type": "internal_error", "request_id": request_id},
            ) from e

    async def _load_api(self, arguments: Dict[str, Any]) -> str:
        result = await self.explorer.load_api(
            _string_argument(arguments, "apiId"),
            _string_argument(arguments, "source"),
        )
        return result.describe()

    async def _get_endpoint_details(self, arguments: Dict[str, Any]) -> str:
        natural = arguments.get("natural", False)
        if not isinstance(natural, bool):
            raise ValidationError("natural", "A boolean value is required", natural)

        details = self.explorer.get_endpoint_details(
            _string_argument(arguments, "apiId"),
            _string_argument(arguments, "method"),
            _string_argument(arguments, "path"),
            natural=natural,
        )
        if natural:
            return details
        return dump_json(details.to_dict())

    async def _list_apis(self, arguments: Dict[str, Any]) -> str:
        apis = self.explorer.list_apis()
        if not apis:
            return NO_APIS_LOADED
        return dump_json([api.to_dict() for api in apis])

    async def _search_endpoints(self, arguments: Dict[str, Any]) -> str:
        pattern = _string_argument(arguments, "pattern")
        records = self.explorer.search_endpoints(
            _string_argument(arguments, "apiId"), pattern
        )
        if not records:
            return f"No endpoints found matching pattern: {pattern}"
        return dump_json(
            [record.to_listing(include_description=True) for record in records]
        )

    # Resources

    def list_loaded_resources(self) -> List[types.Resource]:
        """Concrete overview and endpoint-list resources for every loaded API."""
        resources = []
        for summary in self.registry.list():
            api_id = quote(summary.id, safe="")
            resources.append(
                types.Resource(
                    uri=f"swagger://{api_id}/load",
                    name=f"{summary.id}-overview",
                    description=f"Overview of {summary.title}",
                    mimeType=JSON_MIME_TYPE,
                )
            )
            resources.append(
                types.Resource(
                    uri=f"swagger://{api_id}/endpoints",
                    name=f"{summary.id}-endpoints",
                    description=f"Endpoints of {summary.title}",
                    mimeType=JSON_MIME_TYPE,
                )
            )
        return resources

    def read_resource_contents(self, uri: str) -> List[ReadResourceContents]:
        """Read a resource; lookup failures are reported as plain text.

        Raises:
            ResourceNotFoundError: ``uri`` matches no resource template
        """
        match = OVERVIEW_URI.match(uri)
        if match:
            return self._read(uri, self._read_overview, unquote(match["api_id"]))

        match = ENDPOINTS_URI.match(uri)
        if match:
            return self._read(uri, self._read_endpoints, unquote(match["api_id"]))

        match = ENDPOINT_DETAIL_URI.match(uri)
        if match:
            return self._read(
                uri,
                self._read_endpoint_detail,
                unquote(match["api_id"]),
                unquote(match["method"]),
                unquote(match["path"]),
            )

        raise ResourceNotFoundError("resource", uri)

    def _read(
        self, uri: str, reader: Callable[..., str], *args: str
    ) -> List[ReadResourceContents]:
        try:
            text = reader(*args)
            mime_type = JSON_MIME_TYPE
        except MCPServerError as e:
            self.error_logger.log_error(e, context={"uri": uri})
            text = self._resource_error_text(reader, e)
            mime_type = TEXT_MIME_TYPE

        return [ReadResourceContents(content=text, mime_type=mime_type)]

    def _resource_error_text(
        self, reader: Callable[..., str], error: MCPServerError
    ) -> str:
        if reader == self._read_overview and isinstance(error, ApiNotFoundError):
            return (
                f"API with ID '{error.api_id}' not loaded. "
                "Use the load_api tool first."
            )
        return error.message

    def _read_overview(self, api_id: str) -> str:
        return dump_json(self.explorer.get_overview(api_id))

    def _read_endpoints(self, api_id: str) -> str:
        return dump_json(self.explorer.list_endpoints(api_id))

    def _read_endpoint_detail(self, api_id: str, method: str, path: str) -> str:
        return dump_json(self.explorer.get_endpoint(api_id, method, path).to_dict())

    # Lifecycle

    async def preload(self, sources: Dict[str, str]) -> None:
        """Load specifications before serving; failures are logged, not raised."""
        for api_id, source in sources.items():
            try:
                await self.explorer.load_api(api_id, source)
            except MCPServerError as e:
                self.error_logger.log_error(
                    e, context={"api_id": api_id, "phase": "preload"}
                )

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.settings.server.name,
            server_version=self.settings.server.version,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def run_stdio(self) -> None:
        """Run the server with stdio transport."""
        self.logger.info("Starting MCP server with stdio transport")

        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream, write_stream, self.initialization_options()
                )
        except Exception as e:
            self.logger.error("Failed to run MCP server", error=str(e))
            raise
        finally:
            self.logger.info("MCP server stopped")


def create_server(settings: Optional[Settings] = None) -> SwaggerExplorerServer:
    """Create and configure MCP server instance.

    Args:
        settings: Application settings, uses default if None

    Returns:
        Configured MCP server instance
    """
    return SwaggerExplorerServer(settings or Settings())
