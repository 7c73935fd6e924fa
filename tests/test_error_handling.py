"""
Tests for error handling and response formatting.
Tests custom exceptions, the error envelope and request id propagation.
"""

import pytest
import json
import uuid
from unittest.mock import Mock
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError, OperationalError

from rural_properties.services.error_handler import ErrorHandlerService
from rural_properties.utils.exceptions import (
    AuthError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    PartialSeedFailure,
    PropertyNotFoundError,
    QueryError,
    UnauthorizedError,
    ValidationError,
)


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        """Test error response formatting."""
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")
        assert "redirect_to" not in response["error"]

    def test_handle_api_exception_with_field_errors(self):
        exception = ValidationError("Bad filters", field_errors=[{"field": "price", "message": "Unknown label"}])
        response = ErrorHandlerService.handle_api_exception(exception)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["details"] == [{"field": "price", "message": "Unknown label"}]

    def test_denials_carry_redirect(self):
        response = ErrorHandlerService.handle_api_exception(UnauthorizedError(redirect_to="/signin"))
        assert response.status_code == 401
        assert json.loads(response.body)["error"]["redirect_to"] == "/signin"
        assert response.headers["WWW-Authenticate"] == "Bearer"

        response = ErrorHandlerService.handle_api_exception(ForbiddenError(redirect_to="/user"))
        assert response.status_code == 403
        assert json.loads(response.body)["error"]["redirect_to"] == "/user"

    def test_query_error_is_retryable(self):
        response = ErrorHandlerService.handle_api_exception(QueryError())

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "1"
        assert json.loads(response.body)["error"]["code"] == "QUERY_ERROR"

    def test_handle_validation_error(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("body", "email"), "msg": "Field required", "type": "missing", "input": None},
            {"loc": ("query", "page_size"), "msg": "Too large", "type": "less_than_equal", "input": 500},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        body = json.loads(response.body)
        assert response.status_code == 422
        assert [d["field"] for d in body["error"]["details"]] == ["body -> email", "query -> page_size"]

    def test_handle_database_errors(self):
        integrity = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
        response = ErrorHandlerService.handle_database_error(integrity)
        assert response.status_code == 409
        assert json.loads(response.body)["error"]["message"] == "Constraint violation: Duplicate value for unique field"

        operational = OperationalError("SELECT", {}, Exception("connection refused"))
        response = ErrorHandlerService.handle_database_error(operational)
        body = json.loads(response.body)
        assert response.status_code == 500
        assert "connection refused" not in body["error"]["message"]

    def test_handle_unexpected_error_hides_detail(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret stack detail"))

        body = json.loads(response.body)
        assert response.status_code == 500
        assert body["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "secret" not in body["error"]["message"]


class TestExceptions:
    """Exception hierarchy."""

    def test_not_found_detail(self):
        assert PropertyNotFoundError("abc").detail == "Property not found with ID: abc"
        assert NotFoundError("Agent profile").detail == "Agent profile not found"

    def test_auth_error_is_unauthorized(self):
        error = AuthError("bad password")
        assert isinstance(error, UnauthorizedError)
        assert error.status_code == 401
        assert error.error_code == "AUTH_ERROR"

    def test_configuration_error_lists_keys(self):
        error = ConfigurationError(["PROJECT_ID", "JWT_SECRET_KEY"])
        assert error.missing == ["PROJECT_ID", "JWT_SECRET_KEY"]
        assert "PROJECT_ID, JWT_SECRET_KEY" in str(error)

    def test_partial_seed_failure_lists_errors(self):
        error = PartialSeedFailure(["Reviews: write rejected"])
        assert error.errors == ["Reviews: write rejected"]
        assert "1 error(s)" in str(error)


class TestErrorResponsesOverHTTP:
    """Error envelope as seen by API clients."""

    @pytest.mark.asyncio
    async def test_missing_listing(self, client: AsyncClient):
        response = await client.get(f"/api/v1/properties/{uuid.uuid4()}")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_malformed_listing_id_is_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/properties/prop_001")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/v1/castles")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_404"

    @pytest.mark.asyncio
    async def test_request_validation(self, client: AsyncClient):
        response = await client.get("/api/v1/properties", params={"page_size": 0})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert any("page_size" in detail["field"] for detail in error["details"])

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/api/v1/properties", headers={"X-Request-ID": "trace-42"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "trace-42"
        assert "X-Processing-Time" in response.headers

    @pytest.mark.asyncio
    async def test_anonymous_denial_redirects_to_signin(self, client: AsyncClient):
        response = await client.get("/api/v1/users/me")

        assert response.status_code == 401
        assert response.json()["error"]["redirect_to"] == "/signin"
