"""Unit tests for the local and remote auth providers."""

from __future__ import annotations

import json

import httpx
import pytest

from focusflow_cli.exceptions import AuthenticationError, NotFoundError
from focusflow_cli.services.api.client import APIClient
from focusflow_cli.services.auth_service import LocalAuthProvider, RemoteAuthProvider
from focusflow_cli.services.events import AUTH_CHANGED, EventEmitter


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def auth_events(events):
    received = []
    events.subscribe(AUTH_CHANGED, received.append)
    return received


class TestLocalAuthProvider:
    @pytest.mark.asyncio
    async def test_sign_up_activates_profile(self, tmp_config, events, auth_events):
        provider = LocalAuthProvider(config_service=tmp_config, events=events)

        profile = await provider.sign_up("Ada", "Ada@Example.com")

        assert profile.email == "ada@example.com"
        assert provider.current_user() == profile
        assert tmp_config.get_current_context().user_id == profile.id
        assert auth_events == [profile]
        assert tmp_config.profiles_path.stat().st_mode & 0o777 == 0o600

    @pytest.mark.asyncio
    async def test_sign_up_twice_fails(self, tmp_config):
        provider = LocalAuthProvider(config_service=tmp_config)
        await provider.sign_up("Ada", "ada@example.com")
        with pytest.raises(AuthenticationError, match="already exists"):
            await provider.sign_up("Ada again", "ADA@example.com")

    @pytest.mark.asyncio
    async def test_sign_up_invalid_email(self, tmp_config):
        provider = LocalAuthProvider(config_service=tmp_config)
        with pytest.raises(AuthenticationError, match="Invalid profile"):
            await provider.sign_up("Ada", "not-an-email")

    @pytest.mark.asyncio
    async def test_sign_in_existing_profile(self, tmp_config):
        provider = LocalAuthProvider(config_service=tmp_config)
        created = await provider.sign_up("Ada", "ada@example.com")
        await provider.sign_out()
        assert provider.current_user() is None

        profile = await provider.sign_in("ada@example.com")

        assert profile == created
        assert provider.current_user() == created

    @pytest.mark.asyncio
    async def test_sign_in_unknown_email(self, tmp_config):
        provider = LocalAuthProvider(config_service=tmp_config)
        with pytest.raises(NotFoundError):
            await provider.sign_in("nobody@example.com")

    @pytest.mark.asyncio
    async def test_sign_out_notifies(self, tmp_config, events, auth_events):
        provider = LocalAuthProvider(config_service=tmp_config, events=events)
        await provider.sign_up("Ada", "ada@example.com")

        await provider.sign_out()

        assert auth_events[-1] is None
        assert tmp_config.get_current_context().user is None

    def test_corrupt_profiles_file(self, tmp_config):
        tmp_config.profiles_path.write_text("{not json", encoding="utf-8")
        tmp_config.update_current_context(user_id="abc")
        assert LocalAuthProvider(config_service=tmp_config).current_user() is None


USER = {"id": "u-42", "name": "Ada", "email": "ada@example.com"}


def _remote_provider(tmp_config, handler, events=None):
    tmp_config.use_context("cloud")
    client = APIClient(
        tmp_config,
        base_url="https://api.test",
        transport=httpx.MockTransport(handler),
    )
    return RemoteAuthProvider(config_service=tmp_config, events=events, client=client)


class TestRemoteAuthProvider:
    @pytest.mark.asyncio
    async def test_sign_in_saves_credentials(self, tmp_config, events, auth_events):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200, json={"access_token": "tok", "refresh_token": "ref", "user": USER}
            )

        provider = _remote_provider(tmp_config, handler, events)
        profile = await provider.sign_in("ada@example.com", "secret")

        assert profile.id == "u-42"
        assert requests[0].url.path == "/v1/auth/login"
        assert json.loads(requests[0].content) == {
            "email": "ada@example.com",
            "password": "secret",
        }
        assert "Authorization" not in requests[0].headers
        credentials = tmp_config.load_credentials()
        assert credentials["token"] == "tok"
        assert credentials["refresh_token"] == "ref"
        assert provider.current_user() == profile
        assert tmp_config.get_current_context().user == "ada@example.com"
        assert auth_events == [profile]

    @pytest.mark.asyncio
    async def test_sign_up_posts_name(self, tmp_config):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json={"token": "tok", "user": USER})

        provider = _remote_provider(tmp_config, handler)
        await provider.sign_up("Ada", "ada@example.com", "secret")

        assert requests[0].url.path == "/v1/auth/signup"
        assert json.loads(requests[0].content)["name"] == "Ada"

    @pytest.mark.asyncio
    async def test_rejected_credentials(self, tmp_config):
        provider = _remote_provider(
            tmp_config, lambda request: httpx.Response(401, json={"detail": "nope"})
        )
        with pytest.raises(AuthenticationError, match="401"):
            await provider.sign_in("ada@example.com", "wrong")
        assert tmp_config.load_credentials() is None

    @pytest.mark.asyncio
    async def test_missing_token(self, tmp_config):
        provider = _remote_provider(
            tmp_config, lambda request: httpx.Response(200, json={"user": USER})
        )
        with pytest.raises(AuthenticationError, match="no token"):
            await provider.sign_in("ada@example.com", "secret")

    @pytest.mark.asyncio
    async def test_password_required(self, tmp_config):
        provider = _remote_provider(
            tmp_config, lambda request: httpx.Response(500)
        )
        with pytest.raises(AuthenticationError, match="Password is required"):
            await provider.sign_in("ada@example.com")

    @pytest.mark.asyncio
    async def test_sign_out_clears_credentials(self, tmp_config):
        provider = _remote_provider(
            tmp_config,
            lambda request: httpx.Response(200, json={"token": "tok", "user": USER}),
        )
        await provider.sign_in("ada@example.com", "secret")

        await provider.sign_out()

        assert tmp_config.load_credentials() is None
        assert provider.current_user() is None
        assert tmp_config.get_current_context().user_id is None
