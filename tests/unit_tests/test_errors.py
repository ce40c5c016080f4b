"""Unit tests for the error handlers and the broad exception middleware."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import Request

from app.core.exceptions import (
    BadRequestError,
    ConflictError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.logging import handle_app_errors, handle_broad_exceptions


class TestHandleBroadExceptions:
    """Tests for handle_broad_exceptions middleware."""

    @pytest.mark.asyncio
    async def test_successful_request(self):
        """Test middleware passes through successful requests."""
        mock_request = MagicMock(spec=Request)
        mock_response = MagicMock()

        async def mock_call_next(request):
            return mock_response

        result = await handle_broad_exceptions(mock_request, mock_call_next)

        assert result == mock_response

    @pytest.mark.asyncio
    async def test_exception_returns_500(self):
        """Test middleware catches exceptions and returns 500."""
        mock_request = MagicMock(spec=Request)
        mock_request.method = "GET"
        mock_request.url.path = "/api/v1/defra/projects"

        async def mock_call_next(request):
            raise ValueError("Test error")

        result = await handle_broad_exceptions(mock_request, mock_call_next)

        assert result.status_code == 500
        assert json.loads(result.body) == {
            "detail": "Internal server error",
            "code": "INTERNAL_SERVER_ERROR",
        }


class TestHandleAppErrors:
    """Tests for handle_app_errors handler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error,status_code,code",
        [
            (NotFoundError("Tenant not found"), 404, "NOT_FOUND"),
            (BadRequestError("Invalid"), 400, "BAD_REQUEST"),
            (ConflictError("Taken"), 409, "CONFLICT"),
            (InternalServerError("Boom"), 500, "INTERNAL_SERVER_ERROR"),
        ],
    )
    async def test_status_and_code(self, error, status_code, code):
        mock_request = MagicMock(spec=Request)
        mock_request.url.path = "/api/v1/tenants"

        result = await handle_app_errors(mock_request, error)

        assert result.status_code == status_code
        assert json.loads(result.body) == {"detail": error.detail, "code": code}

    @pytest.mark.asyncio
    async def test_unauthorized_sets_www_authenticate(self):
        mock_request = MagicMock(spec=Request)

        result = await handle_app_errors(mock_request, UnauthorizedError())

        assert result.status_code == 401
        assert result.headers["www-authenticate"] == "Bearer"
        assert json.loads(result.body)["detail"] == "Could not validate credentials"


def test_default_detail_from_code():
    assert NotFoundError().detail == "Not found"
