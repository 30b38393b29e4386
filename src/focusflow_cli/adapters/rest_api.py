"""REST API adapter - user document repository backed by the FocusFlow API.

The API stores one document per user at ``/v1/users/{user_id}/document``:
GET returns the document (404 for new users), PATCH merges top-level keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from focusflow_cli.models import UserData
from focusflow_cli.repositories import UserDataRepository, validate_partial
from focusflow_cli.services.api.client import APIClient
from focusflow_cli.utils.logger import get_logger

if TYPE_CHECKING:
    from focusflow_cli.services.config_service import ConfigService


class RestApiUserDataRepository(UserDataRepository):
    """User document repository implementation using the REST API."""

    def __init__(
        self,
        client: APIClient | None = None,
        config_service: ConfigService | None = None,
    ):
        """Initialize REST API repository.

        Args:
            client: APIClient to use; created lazily when omitted
            config_service: Config service for the lazily created client
        """
        self._client = client
        self._config_service = config_service

    @property
    def client(self) -> APIClient:
        """Get or create the APIClient instance."""
        if self._client is None:
            self._client = APIClient(self._config_service)
        return self._client

    @staticmethod
    def _document_path(user_id: str) -> str:
        return f"/v1/users/{user_id}/document"

    async def load(self, user_id: str) -> UserData:
        path = self._document_path(user_id)
        try:
            response = await self.client.get(path)
        except httpx.HTTPStatusError as e:
            if e.response.status_code != 404:
                raise
            data = UserData.empty()
            document = data.to_document()
            document.pop("updatedAt", None)
            await self.client.put(path, json=document)
            get_logger("storage").info("created remote document for %s", user_id)
            return data

        payload = response.json()
        # Envelope: {"document": {...}}; bare documents are accepted too
        document = payload.get("document", payload) if isinstance(payload, dict) else {}
        return UserData.model_validate(document)

    async def save(self, user_id: str, partial: dict[str, Any]) -> bool:
        validate_partial(partial)
        try:
            await self.client.patch(self._document_path(user_id), json=partial)
        except (httpx.HTTPError, RuntimeError) as e:
            get_logger("storage").warning("remote save for %s failed: %s", user_id, e)
            return False
        return True
