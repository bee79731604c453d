"""
Tests for app/core/logging_config.py - formatters, structured extras and request middleware.
"""
import json
import logging
import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.logging_config import (
    ColoredFormatter,
    JSONFormatter,
    RequestLoggingMiddleware,
    generate_request_id,
    setup_logging,
)


def _record(msg="Recomputed project 5", level=logging.INFO, **extra):
    record = logging.LogRecord("staffing.po_amendments", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_emits_structured_fields(self):
        output = json.loads(JSONFormatter("staffing-test").format(_record()))

        assert output["message"] == "Recomputed project 5"
        assert output["level"] == "INFO"
        assert output["logger"] == "staffing.po_amendments"
        assert output["service"] == "staffing-test"
        assert "extra" not in output

    def test_extra_fields_are_nested(self):
        output = json.loads(JSONFormatter().format(_record(project_id=5, request_id="abc123")))

        assert output["extra"] == {"project_id": 5, "request_id": "abc123"}

    def test_exception_details(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        output = json.loads(JSONFormatter().format(record))

        assert output["exception"]["type"] == "RuntimeError"
        assert output["exception"]["message"] == "boom"


class TestColoredFormatter:

    def test_includes_level_and_logger(self):
        output = ColoredFormatter().format(_record(level=logging.WARNING))

        assert "WARNING" in output
        assert "staffing.po_amendments" in output
        assert output.startswith(ColoredFormatter.COLORS["WARNING"])


class TestSetupLogging:

    def test_json_handler_in_json_mode(self):
        setup_logging(log_level="WARNING", json_logs=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONFormatter)
        assert logging.getLogger().level == logging.WARNING

    def test_colored_handler_in_dev_mode(self):
        setup_logging(log_level="DEBUG", json_logs=False)

        assert isinstance(logging.getLogger().handlers[0].formatter, ColoredFormatter)


def test_request_ids_are_short_and_unique():
    ids = {generate_request_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(len(i) == 8 for i in ids)


class TestRequestLoggingMiddleware:

    @staticmethod
    def _app(status_code):
        async def app(scope, receive, send):
            await send({"type": "http.response.start", "status": status_code, "headers": []})
            await send({"type": "http.response.body", "body": b""})
        return app

    @pytest.mark.asyncio
    async def test_logs_request_with_status(self):
        middleware = RequestLoggingMiddleware(self._app(422))
        scope = {"type": "http", "method": "POST", "path": "/api/v1/projects/1/employees"}

        with patch.object(middleware, "logger") as inner:
            await middleware(scope, AsyncMock(), AsyncMock())

        level, message = inner.log.call_args.args
        assert level == logging.WARNING
        assert message.startswith("POST /api/v1/projects/1/employees 422")
        assert inner.log.call_args.kwargs["extra"]["status"] == 422
        assert "request_id" in scope["state"]

    @pytest.mark.asyncio
    async def test_health_checks_are_not_logged(self):
        middleware = RequestLoggingMiddleware(self._app(200))
        scope = {"type": "http", "method": "GET", "path": "/health"}

        with patch.object(middleware, "logger") as inner:
            await middleware(scope, AsyncMock(), AsyncMock())

        inner.log.assert_not_called()
