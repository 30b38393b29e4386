"""Fixtures for CLI command tests.

Commands run end to end against a local context in a temporary directory,
with "today" pinned to Monday 2024-01-15.
"""

from __future__ import annotations

import asyncio
from datetime import date
from unittest.mock import patch

import pytest

from focusflow_cli.services.auth_service import LocalAuthProvider

TODAY = date(2024, 1, 15)


@pytest.fixture
def cli_env(patch_config_service):
    """Point every command module at the temporary ConfigService."""
    config = patch_config_service
    with patch(
        "focusflow_cli.commands.context.get_config_service", return_value=config
    ), patch(
        "focusflow_cli.commands.calendar_command.get_config_service",
        return_value=config,
    ), patch(
        "focusflow_cli.main.get_config_service", return_value=config
    ), patch(
        "focusflow_cli.services.context_manager.get_today", return_value=TODAY
    ):
        yield config


@pytest.fixture
def signed_in(cli_env):
    """Local profile signed in on the temporary local context."""
    provider = LocalAuthProvider(config_service=cli_env)
    return asyncio.run(provider.sign_up("Ada", "ada@example.com"))


@pytest.fixture
def task_service(signed_in):
    from focusflow_cli.services.context_manager import get_task_service

    return get_task_service(signed_in.id)
