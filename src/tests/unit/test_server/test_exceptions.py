"""Tests for the error hierarchy and error logging."""

from unittest.mock import MagicMock

from swagger_explorer.exceptions import (
    ApiNotFoundError,
    ErrorLogger,
    LoadFailure,
    MCPServerError,
    MethodNotFoundError,
    PathNotFoundError,
    ResourceNotFoundError,
    ValidationError,
    sanitize_error_data,
)


class TestErrorClasses:
    """Test error codes, messages and data."""

    def test_base_error_to_dict(self):
        error = MCPServerError(-32603, "Internal error")

        assert error.to_dict() == {"code": -32603, "message": "Internal error"}
        assert error.error_type == "unknown"
        assert str(error) == "Internal error"

    def test_validation_error(self):
        error = ValidationError(
            "method", "Unsupported method", value="FETCH", suggestions=["GET"]
        )

        assert error.code == -32602
        assert error.message == "Invalid parameter 'method': Unsupported method"
        assert error.data == {
            "parameter": "method",
            "error_type": "validation_error",
            "value": "FETCH",
            "suggestions": ["GET"],
        }

    def test_load_failure(self):
        error = LoadFailure("./missing.yaml", "File not found: missing.yaml")

        assert error.code == -1004
        assert error.message == "Failed to load API: File not found: missing.yaml"
        assert error.error_type == "load_error"
        assert error.data["recoverable"] is True
        assert error.reason == "File not found: missing.yaml"

    def test_not_found_errors_share_code(self):
        errors = [
            ApiNotFoundError("petstore"),
            PathNotFoundError("/users"),
            MethodNotFoundError("PATCH", "/pet"),
        ]

        assert all(isinstance(e, ResourceNotFoundError) for e in errors)
        assert {e.code for e in errors} == {-1001}
        assert [e.data["resource_type"] for e in errors] == ["api", "path", "method"]

    def test_api_not_found_hint(self):
        assert ApiNotFoundError("x").message == "API with ID 'x' not found"
        assert (
            ApiNotFoundError("x", "Use load_api tool first.").message
            == "API with ID 'x' not found. Use load_api tool first."
        )

    def test_method_not_found_keeps_path(self):
        error = MethodNotFoundError("PATCH", "/pet")

        assert error.data["path"] == "/pet"
        assert error.data["identifier"] == "PATCH"

    def test_generic_resource_message(self):
        error = ResourceNotFoundError("resource", "swagger://x/schemas")

        assert error.message == "Resource 'swagger://x/schemas' not found"


class TestErrorLogger:
    """Test log levels chosen by ErrorLogger."""

    def setup_method(self):
        self.logger = MagicMock()
        self.error_logger = ErrorLogger(self.logger)

    def test_client_error_logged_as_warning(self):
        self.error_logger.log_error(PathNotFoundError("/users"), request_id="r1")

        self.logger.warning.assert_called_once()
        kwargs = self.logger.warning.call_args.kwargs
        assert kwargs["error_code"] == -1001
        assert kwargs["request_id"] == "r1"
        self.logger.error.assert_not_called()

    def test_recoverable_error_logged_as_warning(self):
        self.error_logger.log_error(LoadFailure("x", "boom"), context={"tool": "load_api"})

        args, kwargs = self.logger.warning.call_args
        assert args == ("MCP recoverable error",)
        assert kwargs["tool"] == "load_api"

    def test_server_error_logged_as_error(self):
        self.error_logger.log_error(MCPServerError(-32603, "Internal error"))

        self.logger.error.assert_called_once()
        self.logger.warning.assert_not_called()

    def test_operation_error_includes_traceback(self):
        self.error_logger.log_operation_error("call_tool_list_apis", RuntimeError("boom"))

        kwargs = self.logger.error.call_args.kwargs
        assert kwargs["exc_info"] is True
        assert kwargs["error_type"] == "RuntimeError"
        assert kwargs["operation"] == "call_tool_list_apis"


def test_sanitize_error_data():
    data = {
        "apiId": "petstore",
        "auth_header": "Bearer abc",
        "nested": {"client_secret": "s", "source": "./a.yaml"},
        "long": "x" * 600,
    }

    sanitized = sanitize_error_data(data)

    assert "auth_header" not in sanitized
    assert sanitized["nested"] == {"source": "./a.yaml"}
    assert sanitized["long"].endswith("... (truncated)")
    assert len(sanitized["long"]) == 500 + len("... (truncated)")
