"""Tests for exporting results to the external results service."""

import logging

import httpx
import pytest

from ecotrack.api.v1.schemas.result import PersistencePayload
from ecotrack.core import http_client
from ecotrack.core.config import settings

PAYLOAD = PersistencePayload(
    transportCO2=1.2,
    foodCO2=2.5,
    housingCO2=0.2,
    consumptionCO2=0.0,
    totalCO2=3.9,
    rawAnswers={"food": {"diet": "omnivore"}},
    userId=None,
)


@pytest.fixture
def mock_transport(monkeypatch):
    """Routes every AsyncClient created by the exporter through a MockTransport."""
    received = []
    state = {"status": 200}

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(state["status"], json={"ok": state["status"] < 400})

    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(http_client.httpx, "AsyncClient", client_factory)
    return received, state


class TestExportResult:
    @pytest.mark.asyncio
    async def test_not_configured(self, monkeypatch, mock_transport):
        monkeypatch.setattr(settings, "RESULT_EXPORT_URL", None)
        received, _ = mock_transport
        assert await http_client.export_result(PAYLOAD) is False
        assert received == []

    @pytest.mark.asyncio
    async def test_posts_payload(self, mock_transport):
        received, _ = mock_transport
        assert await http_client.export_result(PAYLOAD, "https://results.example/api") is True
        assert received[0].method == "POST"
        assert b'"totalCO2":3.9' in received[0].content.replace(b" ", b"")

    @pytest.mark.asyncio
    async def test_http_error_is_reported_not_raised(self, mock_transport):
        _, state = mock_transport
        state["status"] = 500
        assert await http_client.export_result(PAYLOAD, "https://results.example/api") is False

    @pytest.mark.asyncio
    async def test_rejection_is_logged_with_the_footprint(self, mock_transport, caplog):
        _, state = mock_transport
        state["status"] = 422
        with caplog.at_level(logging.ERROR, logger="ecotrack.core.http_client"):
            await http_client.export_result(PAYLOAD, "https://results.example/api")
        assert "3.9 t CO2e footprint of anonymous" in caplog.text
        assert "HTTP 422" in caplog.text

    @pytest.mark.asyncio
    async def test_unreachable_service(self, monkeypatch, caplog):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            http_client.httpx,
            "AsyncClient",
            lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
        )
        with caplog.at_level(logging.ERROR, logger="ecotrack.core.http_client"):
            assert await http_client.export_result(PAYLOAD, "https://results.example/api") is False
        assert "unreachable" in caplog.text
