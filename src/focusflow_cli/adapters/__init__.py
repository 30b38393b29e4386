"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository interfaces:
- local_json: one JSON document per user on disk
- rest_api: Remote REST API backend
"""

from .local_json import LocalJsonUserDataRepository
from .rest_api import RestApiUserDataRepository

__all__ = [
    "LocalJsonUserDataRepository",
    "RestApiUserDataRepository",
]
