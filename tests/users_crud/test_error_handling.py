"""
Error envelopes, recovery from unhandled exceptions and request tracing
"""

import logging

import pytest

from users_api.app import app
from users_api.api.dependencies import get_users_service


class ExplodingService:
    """Storage accessor that raises instead of returning a ServiceResult"""

    async def list_users(self):
        raise RuntimeError("connection reset by peer")


class TestErrorHandling:

    @pytest.mark.asyncio
    async def test_unhandled_exception_becomes_500_envelope(self, client, caplog):
        app.dependency_overrides[get_users_service] = lambda: ExplodingService()

        with caplog.at_level(logging.ERROR):
            response = await client.get("/")

        assert response.status_code == 500
        assert response.json() == {"error": "internal server error"}
        assert "connection reset by peer" not in response.text
        assert "connection reset by peer" in caplog.text

    @pytest.mark.asyncio
    async def test_responses_carry_trace_id(self, client):
        response = await client.get("/")

        assert response.headers.get("X-Trace-ID")

    @pytest.mark.asyncio
    async def test_error_responses_carry_single_trace_id(self, client):
        response = await client.delete("/ghost")

        assert response.status_code == 500
        assert len(response.headers.get_list("X-Trace-ID")) == 1

    @pytest.mark.asyncio
    async def test_unknown_method_uses_error_envelope(self, client):
        response = await client.patch("/")

        assert response.status_code == 405
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_database_errors_are_logged_not_returned(self, client, users_table, caplog):
        users_table.fail_on.add("DELETE")

        with caplog.at_level(logging.ERROR):
            response = await client.delete("/alice")

        assert response.json() == {"error": "failed to remove the user"}
        assert "simulated DELETE failure" in caplog.text
