"""
Noteful Backend — Application Wiring Tests
===========================================

What:  Exception handlers, middleware headers and the health route.
"""

import pytest
from unittest.mock import AsyncMock, patch

from noteful.exceptions import StoreError
from noteful.main import first_validation_message
from noteful.services.repository import folder_repository, note_repository


class TestErrorHandling:

    @pytest.mark.asyncio
    async def test_store_error_returns_generic_500(self, test_client):
        failing = AsyncMock(side_effect=StoreError(context={"table": "folders"}))
        with patch.object(folder_repository, "list_all", failing):
            response = await test_client.get("/api/folders")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"message": "An internal error occurred. Please try again later."}
        }

    @pytest.mark.asyncio
    async def test_store_error_on_insert_is_not_retried(self, test_client):
        failing = AsyncMock(side_effect=StoreError())
        with patch.object(note_repository, "insert", failing):
            response = await test_client.post(
                "/api/notes", json={"name": "n", "content": "c", "folder": 1}
            )

        assert response.status_code == 500
        failing.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_validation_error_never_reaches_the_store(self, test_client):
        spy = AsyncMock()
        with patch.object(folder_repository, "insert", spy):
            response = await test_client.post("/api/folders", json={})

        assert response.status_code == 400
        spy.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existence_check_skips_the_handler(self, test_client):
        spy = AsyncMock()
        with patch.object(folder_repository, "delete_by_id", spy):
            response = await test_client.delete("/api/folders/123456")

        assert response.status_code == 404
        spy.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_json_returns_400(self, test_client):
        response = await test_client.post(
            "/api/folders",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_generic_500(self, server_error_client):
        failing = AsyncMock(side_effect=RuntimeError("connection pool exhausted"))
        with patch.object(folder_repository, "list_all", failing):
            response = await server_error_client.get("/api/folders")

        assert response.status_code == 500
        assert response.json() == {
            "error": {"message": "An internal error occurred. Please try again later."}
        }
        assert "connection pool exhausted" not in response.text


class TestMiddleware:

    @pytest.mark.asyncio
    async def test_generates_request_id(self, test_client):
        response = await test_client.get("/api/folders")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoes_client_request_id(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_database_reachable(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"


def test_first_validation_message_without_errors():
    class Empty:
        def errors(self):
            return []

    assert first_validation_message(Empty()) == "Invalid request"
