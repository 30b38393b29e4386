"""Auth providers: who is signed in for the active context.

The local provider keeps profiles on this machine (no passwords, the
offline "demo" mode); the remote provider exchanges email and password for
an access token on the FocusFlow API.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from focusflow_cli.exceptions import AuthenticationError, NotFoundError
from focusflow_cli.models import UserProfile
from focusflow_cli.services.events import AUTH_CHANGED, EventEmitter
from focusflow_cli.utils.ids import generate_id
from focusflow_cli.utils.logger import get_logger

if TYPE_CHECKING:
    from focusflow_cli.services.api.client import APIClient
    from focusflow_cli.services.config_service import ConfigService


class AuthProvider(ABC):
    """Port for the authentication collaborator."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        events: EventEmitter | None = None,
    ):
        self._config_service = config_service
        self._events = events

    @property
    def config_service(self) -> ConfigService:
        if self._config_service is None:
            from focusflow_cli.services.config_service import get_config_service

            self._config_service = get_config_service()
        return self._config_service

    def bind_events(self, events: EventEmitter) -> None:
        """Publish auth changes on ``events``."""
        self._events = events

    def _notify(self, user: UserProfile | None) -> None:
        if self._events is not None:
            self._events.emit(AUTH_CHANGED, user)

    @abstractmethod
    def current_user(self) -> UserProfile | None:
        """Return the signed-in user of the active context, if any."""

    @abstractmethod
    async def sign_in(self, email: str, password: str | None = None) -> UserProfile:
        """Sign in and make the user current."""

    @abstractmethod
    async def sign_up(
        self, name: str, email: str, password: str | None = None
    ) -> UserProfile:
        """Create an account and make it current."""

    @abstractmethod
    async def sign_out(self) -> None:
        """Forget the current user."""


class LocalAuthProvider(AuthProvider):
    """Profiles stored in ``profiles.json`` next to the configuration."""

    def _read_profiles(self) -> dict[str, dict[str, Any]]:
        path = self.config_service.profiles_path
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, JSONDecodeError) as e:
            get_logger("auth").warning("could not read profiles %s: %s", path, e)
            return {}

    def _write_profiles(self, profiles: dict[str, dict[str, Any]]) -> None:
        path = self.config_service.profiles_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(profiles, f, indent=2)
        path.chmod(0o600)

    def list_profiles(self) -> list[UserProfile]:
        return [
            UserProfile.model_validate(raw) for raw in self._read_profiles().values()
        ]

    def current_user(self) -> UserProfile | None:
        try:
            context = self.config_service.get_current_context()
        except ValueError:
            return None
        if not context.user_id:
            return None
        raw = self._read_profiles().get(context.user_id)
        if raw is None:
            return None
        return UserProfile.model_validate(raw)

    def _activate(self, profile: UserProfile) -> UserProfile:
        self.config_service.update_current_context(
            user=profile.email, user_id=profile.id
        )
        get_logger("auth").info("signed in locally as %s", profile.email)
        self._notify(profile)
        return profile

    async def sign_in(self, email: str, password: str | None = None) -> UserProfile:
        email = email.strip().lower()
        for profile in self.list_profiles():
            if profile.email.lower() == email:
                return self._activate(profile)
        raise NotFoundError(
            f"No local profile for {email}. Create one with 'focusflow auth signup'."
        )

    async def sign_up(
        self, name: str, email: str, password: str | None = None
    ) -> UserProfile:
        email = email.strip().lower()
        if any(p.email.lower() == email for p in self.list_profiles()):
            raise AuthenticationError(f"A local profile for {email} already exists")
        try:
            profile = UserProfile(id=generate_id(), name=name.strip(), email=email)
        except ValidationError as e:
            raise AuthenticationError(f"Invalid profile: {e.errors()[0]['msg']}") from e

        profiles = self._read_profiles()
        profiles[profile.id] = profile.to_document()
        self._write_profiles(profiles)
        return self._activate(profile)

    async def sign_out(self) -> None:
        self.config_service.update_current_context(user=None, user_id=None)
        get_logger("auth").info("signed out of local context")
        self._notify(None)


class RemoteAuthProvider(AuthProvider):
    """Accounts on the FocusFlow API; tokens saved per context."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        events: EventEmitter | None = None,
        client: APIClient | None = None,
    ):
        super().__init__(config_service, events)
        self._client = client

    @property
    def client(self) -> APIClient:
        if self._client is None:
            from focusflow_cli.services.api.client import APIClient

            self._client = APIClient(self.config_service)
        return self._client

    def current_user(self) -> UserProfile | None:
        credentials = self.config_service.load_credentials()
        if not credentials or "token" not in credentials:
            return None
        profile = credentials.get("profile")
        if not profile:
            return None
        return UserProfile.model_validate(profile)

    async def _authenticate(self, path: str, body: dict[str, Any]) -> UserProfile:
        try:
            response = await self.client.post(path, json=body, skip_auth=True)
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Server rejected the request ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise AuthenticationError(f"Could not reach the server: {e}") from e

        result = response.json()
        token = result.get("access_token") or result.get("token")
        if not token:
            raise AuthenticationError("Invalid response from server: no token received")
        try:
            profile = UserProfile.model_validate(result.get("user") or {})
        except ValidationError as e:
            raise AuthenticationError("Invalid response from server: no user") from e

        self.config_service.save_credentials(
            token, result.get("refresh_token"), profile=profile.to_document()
        )
        self.config_service.update_current_context(
            user=profile.email, user_id=profile.id
        )
        get_logger("auth").info(
            "signed in to %s as %s", self.client.base_url, profile.email
        )
        self._notify(profile)
        return profile

    async def sign_in(self, email: str, password: str | None = None) -> UserProfile:
        if not password:
            raise AuthenticationError("Password is required for remote contexts")
        return await self._authenticate(
            "/v1/auth/login", {"email": email, "password": password}
        )

    async def sign_up(
        self, name: str, email: str, password: str | None = None
    ) -> UserProfile:
        if not password:
            raise AuthenticationError("Password is required for remote contexts")
        return await self._authenticate(
            "/v1/auth/signup", {"name": name, "email": email, "password": password}
        )

    async def sign_out(self) -> None:
        self.config_service.clear_credentials()
        self.config_service.update_current_context(user=None, user_id=None)
        get_logger("auth").info("signed out of remote context")
        self._notify(None)
