"""MCP server implementation

Protocol-compliant MCP server with load_api, get_endpoint_details, list_apis
and search_endpoints tools plus read-only API resources.
"""

from .api_explorer import ApiExplorer
from .mcp_server import SwaggerExplorerServer, create_server

__all__ = ["ApiExplorer", "SwaggerExplorerServer", "create_server"]
