"""Unit tests for ragdocs.utils.logging."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from ragdocs.utils.logging import REDACTED, configure_logging, redact_secrets


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRedactSecrets:
    def test_masks_top_level_key(self) -> None:
        event = redact_secrets(None, "info", {"event": "x", "api_key": "sk-live", "model": "m"})
        assert event["api_key"] == REDACTED
        assert event["model"] == "m"

    def test_masks_inside_arguments(self) -> None:
        event = redact_secrets(
            None, "debug", {"event": "tool_called", "arguments": {"apiKey": "k", "text": "hi"}}
        )
        assert event["arguments"] == {"apiKey": REDACTED, "text": "hi"}

    def test_empty_secret_left_alone(self) -> None:
        assert redact_secrets(None, "info", {"api_key": ""})["api_key"] == ""


class TestConfigureLogging:
    def test_json_lines_go_to_given_stream(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", json_output=True, stream=stream)

        structlog.get_logger().info("embedding_test_failed", provider="openai", api_key="sk-1")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "embedding_test_failed"
        assert record["level"] == "info"
        assert record["api_key"] == REDACTED

    def test_level_filters_debug(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", json_output=True, stream=stream)

        structlog.get_logger().debug("tool_called")

        assert stream.getvalue() == ""

    def test_http_client_loggers_quieted(self) -> None:
        configure_logging("INFO", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING

        configure_logging("DEBUG", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.DEBUG
