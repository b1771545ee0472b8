"""Unit tests for domain error rendering."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from commentary.domain.error import (
    ConflictError,
    FieldError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)
from commentary.interface.api.errors import register_error_handlers


def _client(exc: Exception) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom(count: int = 0):
        raise exc

    return TestClient(app)


class TestErrorHandlers:
    """Each domain error maps to a stable status and code."""

    @pytest.mark.parametrize(
        "exc,status_code,code",
        [
            (UnauthorizedError(), 401, "unauthorized"),
            (ForbiddenError("moderate comments", "u1"), 403, "forbidden"),
            (ConflictError("duplicate"), 409, "conflict"),
            (InternalError("db down"), 500, "internal_error"),
        ],
    )
    def test_status_and_code(self, exc, status_code, code):
        response = _client(exc).get("/boom")

        assert response.status_code == status_code
        assert response.json()["error"] == code

    def test_internal_error_hides_detail(self):
        response = _client(InternalError("password=hunter2")).get("/boom")

        assert "hunter2" not in response.text
        assert response.json()["message"] == "Internal server error"

    def test_validation_lists_every_field(self):
        # Arrange
        exc = ValidationError(
            [
                FieldError(field="author_name", message="Name is required"),
                FieldError(field="author_email", message="Email is required"),
            ]
        )

        # Act
        response = _client(exc).get("/boom")

        # Assert
        assert response.status_code == 400
        assert [d["field"] for d in response.json()["details"]] == [
            "author_name",
            "author_email",
        ]

    def test_not_found_does_not_echo_identifier(self):
        response = _client(NotFoundError("Post", "secret-draft")).get("/boom")

        assert response.status_code == 404
        assert "secret-draft" not in response.text

    def test_rate_limited_sets_retry_after(self):
        response = _client(RateLimitedError("comments_create", 42)).get("/boom")

        assert response.status_code == 429
        assert response.headers["retry-after"] == "42"
        assert response.json()["retry_after"] == 42

    def test_request_validation_is_400(self):
        response = _client(UnauthorizedError()).get("/boom", params={"count": "x"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "query.count"
