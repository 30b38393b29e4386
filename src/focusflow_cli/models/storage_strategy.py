"""
Strategy Pattern: Storage Strategy Container

The storage backend is chosen once, when the configuration is loaded. The
StorageStrategyContext holds that strategy and hands its repository and auth
provider to services, so no caller branches on local versus remote.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from focusflow_cli.repositories import UserDataRepository

if TYPE_CHECKING:
    from focusflow_cli.services.auth_service import AuthProvider
    from focusflow_cli.services.config_service import ConfigService


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy bundles the user document repository and the auth provider
    for one storage backend (local JSON files or the remote API).
    """

    @abstractmethod
    def get_user_data_repository(self) -> UserDataRepository:
        """Get the user document repository for this strategy."""

    @abstractmethod
    def get_auth_provider(self) -> AuthProvider:
        """Get the auth provider for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class LocalStorageStrategy(StorageStrategy):
    """
    Local JSON storage strategy.

    Documents are files in ``data_dir``; profiles are kept on this machine.
    """

    def __init__(self, data_dir: str, config_service: ConfigService | None = None):
        """
        Initialize local strategy.

        Args:
            data_dir: Directory holding the user documents
            config_service: Config service the auth provider records users in
        """
        self.data_dir = data_dir

        # Import here to avoid circular dependencies
        from focusflow_cli.adapters.local_json import LocalJsonUserDataRepository
        from focusflow_cli.services.auth_service import LocalAuthProvider

        self._user_data_repo = LocalJsonUserDataRepository(data_dir=data_dir)
        self._auth_provider = LocalAuthProvider(config_service=config_service)

    def get_user_data_repository(self) -> UserDataRepository:
        return self._user_data_repo

    def get_auth_provider(self) -> AuthProvider:
        return self._auth_provider

    @property
    def storage_type(self) -> str:
        return "local"


class RemoteStorageStrategy(StorageStrategy):
    """
    Remote API storage strategy.

    Documents and accounts live on the FocusFlow API.
    """

    def __init__(self, config_service: ConfigService | None = None):
        """
        Initialize remote strategy.

        Args:
            config_service: Config service holding the endpoint and credentials
        """
        from focusflow_cli.adapters.rest_api import RestApiUserDataRepository
        from focusflow_cli.services.auth_service import RemoteAuthProvider

        self._user_data_repo = RestApiUserDataRepository(config_service=config_service)
        self._auth_provider = RemoteAuthProvider(config_service=config_service)

    def get_user_data_repository(self) -> UserDataRepository:
        return self._user_data_repo

    def get_auth_provider(self) -> AuthProvider:
        return self._auth_provider

    @property
    def storage_type(self) -> str:
        return "remote"


class StorageStrategyContext:
    """
    Strategy context that provides access to the repository and auth provider.

    Usage:
        strategy = LocalStorageStrategy(data_dir="/path/to/documents")
        context = StorageStrategyContext(strategy)

        data = await context.user_data_repository.load(user_id)
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    def switch_strategy(self, new_strategy: StorageStrategy):
        """Switch to a new storage strategy (after changing context)."""
        self._strategy = new_strategy

    @property
    def user_data_repository(self) -> UserDataRepository:
        """Get user document repository from current strategy."""
        return self._strategy.get_user_data_repository()

    @property
    def auth_provider(self) -> AuthProvider:
        """Get auth provider from current strategy."""
        return self._strategy.get_auth_provider()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

    @property
    def strategy(self) -> StorageStrategy:
        """Get underlying strategy."""
        return self._strategy
