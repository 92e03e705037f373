"""Tests for structured logging configuration."""

import logging

import pytest
import structlog

from swagger_explorer.config.logging import (
    configure_logging,
    get_logger,
    log_performance,
    sanitize_log_data,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(force=True)


class TestConfigureLogging:
    """Test cases for configure_logging."""

    def test_level_is_applied(self):
        configure_logging(level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="CHATTY")

        assert logging.getLogger().level == logging.INFO

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "explorer.log"

        configure_logging(level="INFO", log_file=str(log_file), json_logs=True)
        logger = get_logger("test.file", component="loader")
        logger.info("Specification registered", api_id="petstore")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert '"api_id": "petstore"' in content
        assert '"component": "loader"' in content

    def test_console_format(self, capsys):
        configure_logging(level="INFO", json_logs=False)

        get_logger("test.console").warning("Heads up", source="a.yaml")

        captured = capsys.readouterr()
        assert "Heads up" in captured.err
        assert "source=a.yaml" in captured.err
        assert captured.out == ""


def test_log_performance():
    calls = []

    class Recorder:
        def info(self, event, **kwargs):
            calls.append((event, kwargs))

    log_performance(Recorder(), "load_specification", 12.5, source="a.yaml")

    assert calls == [
        (
            "Performance metric",
            {
                "operation": "load_specification",
                "duration_ms": 12.5,
                "metric_type": "performance",
                "source": "a.yaml",
            },
        )
    ]


def test_sanitize_log_data():
    data = {"apiId": "petstore", "api_key": "k", "headers": {"Authorization": "x"}}

    assert sanitize_log_data(data) == {
        "apiId": "petstore",
        "api_key": "[REDACTED]",
        "headers": {"Authorization": "[REDACTED]"},
    }
