"""Custom MCP server exceptions and error handling framework.

Every failure an operation can report is a subclass of ``MCPServerError`` so
callers branch on the error class (or ``data["error_type"]``) instead of
parsing messages.
"""

import logging
import time
from typing import Any, Dict, List, Optional


class MCPServerError(Exception):
    """Base exception for MCP server errors with JSON-RPC 2.0 compliance."""

    def __init__(
        self, code: int, message: str, data: Optional[Dict[str, Any]] = None
    ):
        """Initialize MCP server error.

        Args:
            code: JSON-RPC 2.0 error code
            message: Human-readable error message
            data: Additional error context and debugging information
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data or {}
        self.timestamp = time.time()

    @property
    def error_type(self) -> str:
        return self.data.get("error_type", "unknown")

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to JSON-RPC 2.0 error response format."""
        error_dict = {"code": self.code, "message": self.message}
        if self.data:
            error_dict["data"] = self.data
        return error_dict


class ValidationError(MCPServerError):
    """Parameter validation error (-32602 Invalid params)."""

    def __init__(
        self,
        parameter: str,
        message: str,
        value: Any = None,
        suggestions: Optional[List[str]] = None,
    ):
        """Initialize validation error.

        Args:
            parameter: Name of the invalid parameter
            message: Specific validation error message
            value: The invalid value that caused the error
            suggestions: List of suggested valid values
        """
        data = {"parameter": parameter, "error_type": "validation_error"}
        if value is not None:
            data["value"] = str(value)
        if suggestions:
            data["suggestions"] = suggestions

        super().__init__(
            code=-32602,
            message=f"Invalid parameter '{parameter}': {message}",
            data=data,
        )


class LoadFailure(MCPServerError):
    """Specification could not be fetched, decoded or dereferenced (-1004)."""

    def __init__(self, source: str, reason: str):
        """Initialize load failure.

        Args:
            source: Locator (URL or path) that failed to load
            reason: Message from the failing collaborator, kept verbatim
        """
        super().__init__(
            code=-1004,
            message=f"Failed to load API: {reason}",
            data={
                "error_type": "load_error",
                "source": source,
                "reason": reason,
                "recoverable": True,
            },
        )
        self.source = source
        self.reason = reason


class ResourceNotFoundError(MCPServerError):
    """Resource not found error (custom code -1001)."""

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        message: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """Initialize resource not found error.

        Args:
            resource_type: Type of resource (api, path, method)
            identifier: Resource identifier that was not found
            message: Override for the default message
            suggestions: List of similar resources that exist
        """
        data = {
            "error_type": "not_found_error",
            "resource_type": resource_type,
            "identifier": identifier,
        }
        if suggestions:
            data["suggestions"] = suggestions

        super().__init__(
            code=-1001,
            message=message
            or f"{resource_type.title()} '{identifier}' not found",
            data=data,
        )
        self.resource_type = resource_type
        self.identifier = identifier


class ApiNotFoundError(ResourceNotFoundError):
    """No specification is registered under the requested identifier."""

    def __init__(self, api_id: str, hint: Optional[str] = None):
        message = f"API with ID '{api_id}' not found"
        if hint:
            message = f"{message}. {hint}"
        super().__init__("api", api_id, message=message)
        self.api_id = api_id


class PathNotFoundError(ResourceNotFoundError):
    """The document does not declare the requested path template."""

    def __init__(self, path: str):
        super().__init__("path", path, message=f"Path '{path}' not found in API")
        self.path = path


class MethodNotFoundError(ResourceNotFoundError):
    """The path exists but does not define the requested method."""

    def __init__(self, method: str, path: str):
        super().__init__(
            "method",
            method,
            message=f"Method '{method}' not found for path '{path}'",
        )
        self.data["path"] = path
        self.method = method
        self.path = path


class ErrorLogger:
    """Structured error logging for MCP server operations."""

    def __init__(self, logger: logging.Logger):
        """Initialize error logger.

        Args:
            logger: Logger instance for error reporting
        """
        self.logger = logger

    def log_error(
        self,
        error: MCPServerError,
        context: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> None:
        """Log MCP server error with structured context.

        Args:
            error: MCP server error to log
            context: Additional context information
            request_id: Request ID for correlation
        """
        log_data = {
            "error_code": error.code,
            "error_message": error.message,
            "error_type": error.error_type,
        }

        if request_id:
            log_data["request_id"] = request_id

        if context:
            log_data.update(context)

        if error.data:
            log_data["error_data"] = error.data

        # Client errors and recoverable failures are not server faults
        if error.code in (-32600, -32601, -32602, -1001):
            self.logger.warning("MCP client error", **log_data)
        elif error.data.get("recoverable", False):
            self.logger.warning("MCP recoverable error", **log_data)
        else:
            self.logger.error("MCP server error", **log_data)

    def log_operation_error(
        self,
        operation: str,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> None:
        """Log general operation error.

        Args:
            operation: Name of the operation that failed
            error: Exception that occurred
            context: Additional context information
            request_id: Request ID for correlation
        """
        log_data = {
            "operation": operation,
            "error_message": str(error),
            "error_type": type(error).__name__,
        }

        if request_id:
            log_data["request_id"] = request_id

        if context:
            log_data.update(context)

        self.logger.error("Operation failed", exc_info=True, **log_data)


def sanitize_error_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize error data to remove sensitive information.

    Args:
        data: Raw error data dictionary

    Returns:
        Sanitized error data safe for logging
    """
    sensitive_keys = {
        "password",
        "token",
        "secret",
        "auth",
        "credential",
    }

    sanitized = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            continue

        if isinstance(value, dict):
            sanitized[key] = sanitize_error_data(value)
        elif isinstance(value, str) and len(value) > 500:
            # Truncate very long strings
            sanitized[key] = value[:500] + "... (truncated)"
        else:
            sanitized[key] = value

    return sanitized
