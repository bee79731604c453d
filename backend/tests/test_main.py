"""
Tests for app/main.py - FastAPI application, error handlers and health checks.
"""
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import status
from fastapi.responses import JSONResponse

from app.core.exceptions import ConflictError, NotFoundError, ValidationError


class TestHealthEndpoint:
    """Test application health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check_healthy(self):
        """Health check should return healthy when DB is connected."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = True

            response = await health_check()

        assert response.status == "healthy"
        assert response.service == "staffing-backend"
        assert response.checks["database"] is True

    @pytest.mark.asyncio
    async def test_health_check_unavailable_when_db_down(self):
        """Health check should answer 503 when DB is down."""
        from app.main import health_check

        with patch("app.main.check_db_connection", new_callable=AsyncMock) as mock_db:
            mock_db.return_value = False

            response = await health_check()

        assert isinstance(response, JSONResponse)
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert json.loads(response.body)["status"] == "unhealthy"


class TestStaffingErrorHandler:
    """Domain errors map onto their HTTP status with the standard error body."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc, expected_status",
        [
            (ValidationError("Allocation percentage must be > 0", field="allocation_percentage"), 422),
            (NotFoundError("PO amendment 4 not found"), 404),
            (ConflictError("Employee is already assigned to this project"), 409),
        ],
    )
    async def test_status_codes(self, mock_request, exc, expected_status):
        from app.main import staffing_error_handler

        response = await staffing_error_handler(mock_request, exc)

        assert response.status_code == expected_status
        body = json.loads(response.body)
        assert body["error"] == exc.__class__.__name__
        assert body["detail"] == exc.message
        assert body["path"] == "/api/v1/test"

    @pytest.mark.asyncio
    async def test_field_is_reported(self, mock_request):
        from app.main import staffing_error_handler

        response = await staffing_error_handler(
            mock_request, ValidationError("End date must be after start date", field="end_date")
        )

        assert json.loads(response.body)["field"] == "end_date"

    @pytest.mark.asyncio
    async def test_timestamp_is_utc_aware(self, mock_request):
        from app.main import staffing_error_handler

        response = await staffing_error_handler(mock_request, NotFoundError("Project 9 not found"))

        assert json.loads(response.body)["timestamp"].endswith("+00:00")


class TestGlobalExceptionHandler:
    """Test global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_in_dev_includes_details(self, mock_request):
        """In development, exception details should be included."""
        from app.main import global_exception_handler

        response = await global_exception_handler(mock_request, ValueError("Test error message"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = json.loads(response.body)
        assert body["error"] == "ValueError"
        assert body["detail"] == "Test error message"

    @pytest.mark.asyncio
    async def test_exception_handler_in_production_hides_details(self, mock_request):
        """In production, only a reference ID is returned."""
        from app import main

        with patch.object(main.settings, "ENVIRONMENT", "production"):
            response = await main.global_exception_handler(mock_request, ValueError("secret internals"))

        body = json.loads(response.body)
        assert body["error"] == "Internal server error"
        assert "secret internals" not in body["detail"]
        assert "Reference ID" in body["detail"]


class TestRootEndpoint:

    @pytest.mark.asyncio
    async def test_root_returns_welcome(self):
        from app.main import root

        response = await root()

        assert "Staffing Tracker" in response["message"]


class TestDatabaseConnection:
    """Test database connection check."""

    @pytest.mark.asyncio
    async def test_check_db_connection_success(self):
        from app.db.session import check_db_connection

        mock_engine = MagicMock()
        mock_connection = AsyncMock()
        mock_engine.connect = MagicMock(return_value=mock_connection)
        mock_connection.__aenter__ = AsyncMock(return_value=mock_connection)
        mock_connection.__aexit__ = AsyncMock(return_value=None)
        mock_connection.execute = AsyncMock()

        with patch("app.db.session.engine", mock_engine):
            result = await check_db_connection()

        assert result is True

    @pytest.mark.asyncio
    async def test_check_db_connection_failure(self):
        from app.db.session import check_db_connection

        mock_engine = MagicMock()
        mock_engine.connect = MagicMock(side_effect=Exception("Connection refused"))

        with patch("app.db.session.engine", mock_engine):
            result = await check_db_connection()

        assert result is False
