"""
Unit tests for the main application module.

Covers application creation, the request-ID middleware, the error envelope
produced by the exception handlers, and the informational endpoints.
"""

import uuid

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from taskify.core.config import settings
from taskify.exceptions.task import TaskNotFoundError
from taskify.main import app, create_app


class TestAppCreation:
    """Test cases for FastAPI application creation."""

    def test_create_app_returns_fastapi_instance(self):
        test_app = create_app()

        assert isinstance(test_app, FastAPI)
        assert test_app.title == settings.app_name
        assert test_app.version == settings.version

    def test_routes_registered(self):
        paths = {getattr(route, "path", None) for route in app.routes}

        assert {
            "/",
            "/health",
            "/api/auth/register",
            "/api/auth/login",
            "/api/auth/me",
            "/api/tasks/",
            "/api/tasks/stats/summary",
            "/api/tasks/{task_id}",
            "/api/projects/",
            "/api/projects/{project_id}",
            "/api/projects/{project_id}/tasks",
        } <= paths


class TestInfoEndpoints:
    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == settings.app_name

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["services"]["database"] == "healthy"


class TestMiddleware:
    @pytest.mark.asyncio
    async def test_request_id_header(self, client):
        response = await client.get("/")

        request_id = response.headers["X-Request-ID"]
        assert uuid.UUID(request_id)

    @pytest.mark.asyncio
    async def test_request_ids_differ(self, client):
        first = await client.get("/")
        second = await client.get("/")

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_validation_error_envelope(self, authenticated_client):
        response = await authenticated_client.post("/api/tasks/", json={"description": "no title"})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Validation error"
        assert body["error_code"] == "VALIDATION_ERROR"
        assert {error["field"] for error in body["details"]} == {"title", "due_date"}
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_app_exception_envelope(self):
        test_app = create_app()

        @test_app.get("/boom-404")
        async def boom_404():
            raise TaskNotFoundError()

        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
            response = await ac.get("/boom-404")

        assert response.status_code == 404
        body = response.json()
        assert body["message"] == "Task not found"
        assert body["error_code"] == "TASK_NOT_FOUND"
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, client):
        response = await client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["status"] == "error"

    @pytest.mark.asyncio
    async def test_unhandled_error_is_generic_500(self):
        test_app = create_app()

        @test_app.get("/boom")
        async def boom():
            raise RuntimeError("database password is hunter2")

        transport = ASGITransport(app=test_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Server error"
        assert "hunter2" not in response.text
