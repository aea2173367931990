"""Unit tests for the backend HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

import masikip.api.client as client_module
from masikip.api.client import APIClient, get_api_client

BASE_URL = "http://test:8080/api"


def recording_client(seen: list[httpx.Request], **kwargs) -> APIClient:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    return APIClient(base_url=BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestAPIClient:
    """Tests for APIClient class."""

    def test_explicit_settings_win(self) -> None:
        client = APIClient(base_url=BASE_URL, timeout=5.0, frontend_id="cli")
        assert (client.base_url, client.timeout, client.frontend_id) == (BASE_URL, 5.0, "cli")

    def test_strips_trailing_slash(self) -> None:
        assert APIClient(base_url=f"{BASE_URL}/").base_url == BASE_URL

    def test_missing_settings_come_from_configuration(self) -> None:
        client = APIClient()
        assert client.base_url == "http://localhost:8080/api"
        assert client.timeout == 30.0
        assert client.frontend_id == "tui"

    @pytest.mark.asyncio
    async def test_paths_are_joined_under_base_path(self) -> None:
        seen: list[httpx.Request] = []
        client = recording_client(seen)
        response = await client.request("GET", "/notes/7")
        await client.close()

        assert response.status_code == 200
        assert str(seen[0].url) == "http://test:8080/api/notes/7"

    @pytest.mark.asyncio
    async def test_sends_frontend_and_json_headers(self) -> None:
        seen: list[httpx.Request] = []
        client = recording_client(seen, frontend_id="cli")
        await client.request("POST", "/notes", json={"title": "New Note", "content": ""})
        await client.close()

        assert seen[0].headers["X-Frontend-ID"] == "cli"
        assert seen[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_kwargs_pass_through(self) -> None:
        mock_response = MagicMock(spec=httpx.Response)
        mock_response.status_code = 201
        client = APIClient(base_url=BASE_URL, timeout=5.0, frontend_id="tui")

        with patch.object(httpx.AsyncClient, "request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = mock_response
            response = await client.request("POST", "/notes", json={"title": "New Note"})

        assert response is mock_response
        mock_request.assert_awaited_once_with("POST", "/notes", json={"title": "New Note"})
        await client.close()

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        client = APIClient(base_url=BASE_URL, frontend_id="tui", timeout=1.0, transport=transport)
        response = await client.request("GET", "/notes")
        await client.close()
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        client = APIClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        with pytest.raises(httpx.ConnectError):
            await client.request("DELETE", "/notes/1")
        assert client.is_open is True
        await client.close()

    @pytest.mark.asyncio
    async def test_close_and_reopen(self) -> None:
        seen: list[httpx.Request] = []
        client = recording_client(seen)

        await client.request("GET", "/notes")
        assert client.is_open is True

        await client.close()
        assert client.is_open is False

        await client.request("GET", "/notes")
        assert len(seen) == 2
        await client.close()


class TestGetApiClient:
    """Tests for the shared client."""

    def test_returns_singleton(self, monkeypatch) -> None:
        monkeypatch.setattr(client_module, "_client", None)
        assert get_api_client() is get_api_client()
