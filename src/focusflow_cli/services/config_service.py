"""Configuration service for managing FocusFlow CLI configuration.

This module provides the ConfigService class, which is the single source of truth
for all configuration management in FocusFlow CLI. It handles:

- Loading and saving config.json
- Context management (list, add, switch) and the signed-in user of a context
- Credential management for remote contexts
- Building the storage strategy for the active context
"""

from __future__ import annotations

import json
from functools import lru_cache
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from focusflow_cli.models.config_models import AppConfig, Context
from focusflow_cli.models.storage_strategy import (
    LocalStorageStrategy,
    RemoteStorageStrategy,
    StorageStrategy,
    StorageStrategyContext,
)
from focusflow_cli.utils.logger import get_logger

DEFAULT_CLOUD_ENDPOINT = "https://api.focusflow.app"


class ConfigService:
    """Service for managing application configuration.

    Configuration lives in ``config.json`` inside the platform config
    directory; credentials for remote contexts are kept next to it, one
    owner-readable file per context.
    """

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("focusflow_cli"))
        self.config_path = self.config_dir / "config.json"
        self.credentials_dir = self.config_dir / "credentials"
        self.profiles_path = self.config_dir / "profiles.json"
        self.data_dir = Path(user_data_dir("focusflow_cli"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.credentials_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

        self._storage_strategy_context: StorageStrategyContext | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Get the StorageStrategyContext built for the current context."""
        if self._storage_strategy_context is None:
            self._storage_strategy_context = StorageStrategyContext(
                self._build_strategy()
            )
        return self._storage_strategy_context

    def _build_strategy(self) -> StorageStrategy:
        context = self.get_current_context()
        if context.type == "remote":
            return RemoteStorageStrategy(config_service=self)
        return LocalStorageStrategy(data_dir=context.source, config_service=self)

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = self.create_default_config()
        except (OSError, ValidationError) as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        self._storage_strategy_context = StorageStrategyContext(self._build_strategy())
        get_logger().debug(
            "loaded config, context=%s storage=%s",
            self._config.current_context_name,
            self._storage_strategy_context.storage_type,
        )
        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create the first-run configuration.

        The local context is selected so nothing needs a network or an account
        to get started; the cloud context is there for switching later.
        """
        local_context = Context(
            name="local",
            type="local",
            source=str(self.data_dir / "documents"),
            description="Local JSON documents",
        )
        cloud_context = Context(
            name="cloud",
            type="remote",
            source=DEFAULT_CLOUD_ENDPOINT,
            description="FocusFlow Cloud (requires login)",
        )

        self._config = AppConfig(
            current_context_name=local_context.name,
            contexts=[local_context, cloud_context],
        )
        self.save_config()
        return self._config

    def list_contexts(self) -> list[Context]:
        """List all available contexts."""
        return self.config.contexts

    def get_current_context(self) -> Context:
        """Get the currently active context.

        Raises:
            ValueError: If the current context is not configured
        """
        return self.config.get_current_context()

    def use_context(self, name: str) -> Context:
        """Set the current context by name and rebuild the storage strategy."""

        context = self.config.get_context(name)
        self.config.current_context_name = context.name
        self.save_config()
        self.storage_strategy_context.switch_strategy(self._build_strategy())
        return context

    def add_context(self, context: Context):
        """Add a new context to the configuration."""

        self.config.add_context(context)
        self.save_config()

    def update_current_context(self, **fields: Any) -> Context:
        """Update fields (``user``, ``user_id``...) of the active context."""
        context = self.get_current_context()
        for key, value in fields.items():
            if key not in Context.model_fields:
                raise ValueError(f"Unknown context field: {key}")
            setattr(context, key, value)
        self.save_config()
        return context

    def remove_context_credentials(self, context_name: str):
        """Remove credentials associated with a context."""
        cred_path = self.credentials_dir / f"{context_name}.json"
        if cred_path.exists():
            cred_path.unlink()

    def load_credentials(self) -> dict | None:
        """Load credentials for the current context.

        Returns:
            dict with 'token' and optionally 'refresh_token' and 'profile',
            or None if not found
        """
        try:
            current_context = self.config.get_current_context()
            return self.load_context_credentials(current_context.name)
        except (ValueError, FileNotFoundError):
            return None

    def load_context_credentials(self, context_name: str) -> dict | None:
        """Load credentials for a specific context."""

        cred_path = self.credentials_dir / f"{context_name}.json"
        if not cred_path.exists():
            return None

        try:
            with open(cred_path, encoding="utf-8") as f:
                return json.load(f)
        except JSONDecodeError:
            return None

    def save_credentials(
        self,
        access_token: str,
        refresh_token: str | None = None,
        context_name: str | None = None,
        profile: dict | None = None,
    ):
        """Save credentials for a context.

        Args:
            access_token: The access token
            refresh_token: Optional refresh token
            context_name: Context name (defaults to current context)
            profile: Optional user profile returned by the server
        """

        if context_name is None:
            context_name = self.config.get_current_context().name

        cred_data: dict[str, Any] = {"token": access_token}
        if refresh_token:
            cred_data["refresh_token"] = refresh_token
        if profile:
            cred_data["profile"] = profile

        cred_path = self.credentials_dir / f"{context_name}.json"
        cred_path.parent.mkdir(parents=True, exist_ok=True)

        with open(cred_path, "w", encoding="utf-8") as f:
            json.dump(cred_data, f, indent=2)

        cred_path.chmod(0o600)

    def clear_credentials(self, context_name: str | None = None) -> None:
        """Clear credentials for a context (defaults to current context)."""
        if context_name is None:
            try:
                context_name = self.config.get_current_context().name
            except (ValueError, KeyError):
                return
        self.remove_context_credentials(context_name)


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service


def get_storage_strategy_context() -> StorageStrategyContext:
    """Get the StorageStrategyContext for the current configuration."""
    return get_config_service().storage_strategy_context
