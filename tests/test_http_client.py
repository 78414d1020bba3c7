"""Tests for the API client and the request delay."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from fortnite_archive.models import ArchiveConfig
from fortnite_archive.services.errors import ErrorHandlingService
from fortnite_archive.services.http_client import ApiClientService, delay


def make_config(api_key: str | None = "test-key") -> ArchiveConfig:
    return ArchiveConfig(
        api_key=api_key,
        output_dir=Path("/tmp/archive"),
        base_url="https://api.example.test",
        request_delay=0.0,
    )


def make_client(handler, api_key: str | None = "test-key") -> ApiClientService:
    return ApiClientService(make_config(api_key), transport=httpx.MockTransport(handler))


def logged_categories(mock_logger: Mock) -> list[str]:
    calls = mock_logger.warning.call_args_list + mock_logger.error.call_args_list
    return [call.kwargs["category"] for call in calls]


@pytest.mark.asyncio
async def test_fetch_json_returns_decoded_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"result": True, "seasons": []})

    async with make_client(handler) as client:
        data = await client.fetch_json("/v1/seasons/list?lang=en")

    assert data == {"result": True, "seasons": []}
    assert len(seen) == 1
    assert str(seen[0].url) == "https://api.example.test/v1/seasons/list?lang=en"
    assert seen[0].headers["Authorization"] == "test-key"


@pytest.mark.asyncio
async def test_missing_api_key_sends_no_authorization_header() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(401, json={"result": False, "error": "Invalid API key"})

    async with make_client(handler, api_key=None) as client:
        with patch("fortnite_archive.services.http_client.get_error_service", return_value=ErrorHandlingService()):
            data = await client.fetch_json("/v1/weapons/list")

    assert data is None
    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_http_error_returns_none_and_logs_remote_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"result": False, "error": "Season not found"})

    async with make_client(handler) as client:
        with patch("fortnite_archive.services.errors.log") as mock_logger:
            data = await client.fetch_json("/v2/battlepass?lang=en&season=99")

    assert data is None
    _, kwargs = mock_logger.warning.call_args
    assert kwargs["category"] == "network"
    assert kwargs["context"]["url"] == "/v2/battlepass?lang=en&season=99"
    assert kwargs["context"]["payload"] == {"result": False, "error": "Season not found"}
    assert "Status: 404" in kwargs["technical_details"]
    mock_logger.error.assert_not_called()


@pytest.mark.asyncio
async def test_network_error_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with patch("fortnite_archive.services.errors.log") as mock_logger:
            data = await client.fetch_json("/v1/weapons/list")

    assert data is None
    assert logged_categories(mock_logger) == ["network"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"<html>maintenance</html>",
        b"\xff\xfe\xfa{bad",
        b"\xc3\x28",
    ],
)
async def test_undecodable_body_returns_none(body: bytes) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    async with make_client(handler) as client:
        with patch("fortnite_archive.services.errors.log") as mock_logger:
            data = await client.fetch_json("/v2/game/vehicles")

    assert data is None
    assert logged_categories(mock_logger) == ["validation"]


@pytest.mark.asyncio
async def test_no_retries_on_failure() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503, text="unavailable")

    async with make_client(handler) as client:
        assert await client.fetch_json("/v2/game/poi?lang=en&gameVersion=9.30") is None

    assert calls == 1


@pytest.mark.asyncio
async def test_delay_sleeps_for_configured_seconds() -> None:
    with patch("fortnite_archive.services.http_client.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await delay(1.5)

    mock_sleep.assert_awaited_once_with(1.5)


@pytest.mark.asyncio
async def test_zero_delay_does_not_sleep() -> None:
    with patch("fortnite_archive.services.http_client.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await delay(0)

    mock_sleep.assert_not_awaited()


def test_delay_is_a_real_pause() -> None:
    async def timed() -> float:
        loop = asyncio.get_running_loop()
        start = loop.time()
        await delay(0.05)
        return loop.time() - start

    assert asyncio.run(timed()) >= 0.04
