"""Tests for API client."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from focusflow_cli.models.config_models import Context
from focusflow_cli.services.api.client import APIClient


def _client(tmp_config, handler, **kwargs) -> APIClient:
    return APIClient(
        tmp_config,
        base_url="https://api.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_base_url_from_remote_context(tmp_config):
    tmp_config.add_context(
        Context(name="work", type="remote", source="https://work.example.com/api/")
    )
    tmp_config.use_context("work")

    client = APIClient(tmp_config)

    assert client.base_url == "https://work.example.com/api"
    assert client.timeout == 30
    assert client._client is None


def test_base_url_falls_back_to_api_endpoint(tmp_config):
    client = APIClient(tmp_config)
    assert client.base_url == tmp_config.config.api.endpoint


def test_headers_without_auth(tmp_config):
    tmp_config.save_credentials("tok")
    headers = APIClient(tmp_config)._get_headers(skip_auth=True)

    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"
    assert "Authorization" not in headers


def test_headers_with_auth(tmp_config):
    tmp_config.save_credentials("tok")
    headers = APIClient(tmp_config)._get_headers()
    assert headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_request_sends_json_and_token(tmp_config):
    tmp_config.save_credentials("tok")
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async with _client(tmp_config, handler) as client:
        response = await client.patch("v1/users/u/document", json={"tasks": []})

    assert response.json() == {"ok": True}
    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/v1/users/u/document"
    assert seen[0].headers["Authorization"] == "Bearer tok"
    assert json.loads(seen[0].content) == {"tasks": []}
    assert client._client is None


@pytest.mark.asyncio
async def test_client_errors_are_not_retried(tmp_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(404)

    client = _client(tmp_config, handler)
    with pytest.raises(httpx.HTTPStatusError):
        await client.get("/missing")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_server_errors_are_retried(tmp_config):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    client = _client(tmp_config, handler)
    with patch(
        "focusflow_cli.services.api.client.asyncio.sleep", new=AsyncMock()
    ) as sleep:
        with pytest.raises(httpx.HTTPStatusError):
            await client.request("GET", "/flaky", retry=2)

    assert len(calls) == 3
    assert [c.args[0] for c in sleep.await_args_list] == [1, 2]


@pytest.mark.asyncio
async def test_transport_error_then_success(tmp_config):
    attempts = iter([httpx.ConnectError("down"), httpx.Response(200, json={})])

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = next(attempts)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = _client(tmp_config, handler)
    with patch("focusflow_cli.services.api.client.asyncio.sleep", new=AsyncMock()):
        response = await client.get("/document")

    assert response.status_code == 200
