"""Tests for the FastAPI exception handlers and response DTOs."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from streamvault.api import register_exception_handlers
from streamvault.core.exceptions import (
    EntityAlreadyExistsError,
    EntityNotFoundError,
    TransactionError,
    ValidationError,
)
from streamvault.features.pagination import PaginatedResult
from streamvault.features.songs.repositories import SongRepository
from streamvault.features.users.repositories import UserRepository
from streamvault.models import PaginatedResponse, SongResponse, UserResponse


def _app(exc: Exception, is_production: bool = True) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app, is_production=is_production)

    @app.get("/boom")
    async def boom():
        raise exc

    return app


class TestExceptionHandlers:
    """Repository errors rendered as JSON."""

    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (ValidationError.for_field("page", "page must be at least 1"), 400),
            (EntityNotFoundError("song", "abc"), 404),
            (EntityAlreadyExistsError("user", constraint="idx_users_email_active"), 409),
            (TransactionError("bulk_save"), 500),
        ],
    )
    def test_status_codes(self, exc, status_code):
        response = TestClient(_app(exc)).get("/boom")

        assert response.status_code == status_code
        body = response.json()
        assert body["error"]["type"] == exc.__class__.__name__
        assert body["error"]["message"] == exc.message

    def test_validation_error_details(self):
        exc = ValidationError.for_field("page", "page must be at least 1")

        body = TestClient(_app(exc)).get("/boom").json()

        assert body["error"]["code"] == "ValidationError"
        assert body["error"]["details"]["errors"] == [
            {"field": "page", "message": "page must be at least 1"}
        ]

    def test_conflict_details(self):
        exc = EntityAlreadyExistsError("user", constraint="idx_users_email_active")

        body = TestClient(_app(exc)).get("/boom").json()

        assert body["error"]["details"] == {
            "entity_type": "user",
            "constraint": "idx_users_email_active",
        }

    def test_unexpected_error_is_sanitized(self):
        app = _app(RuntimeError("password=hunter2"))

        response = TestClient(app, raise_server_exceptions=False).get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "An unexpected error occurred"
        assert "hunter2" not in response.text

    def test_unexpected_error_message_outside_production(self):
        app = _app(RuntimeError("kaboom"), is_production=False)

        response = TestClient(app, raise_server_exceptions=False).get("/boom")

        assert response.json()["error"]["message"] == "kaboom"


class TestResponseModels:
    """camelCase DTOs built from entities."""

    def test_paginated_response(self, mock_db, song_row):
        song = SongRepository(mock_db).map_row(song_row)
        result = PaginatedResult.create([song], total_count=25, page=2, page_size=10)

        response = PaginatedResponse[SongResponse].from_result(result, SongResponse.from_entity)
        data = response.model_dump(by_alias=True)

        assert data["totalCount"] == 25
        assert data["pageSize"] == 10
        assert data["totalPages"] == 3
        assert data["hasNextPage"] is True
        assert data["hasPreviousPage"] is True
        assert data["items"][0]["title"] == "Difference Engine"
        assert data["items"][0]["playCount"] == 42
        assert data["items"][0]["albumId"] is None

    def test_user_response_hides_password(self, mock_db, user_row):
        user = UserRepository(mock_db).map_row(user_row)

        data = UserResponse.from_entity(user).model_dump(by_alias=True)

        assert "password_hash" not in data
        assert "passwordHash" not in data
        assert data["displayName"] == "ada"
        assert data["firstName"] == "Ada"
        assert data["isActive"] is True
