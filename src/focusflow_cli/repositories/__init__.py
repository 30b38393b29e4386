"""Repository interfaces for the FocusFlow CLI.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- focusflow_cli.adapters.local_json (local storage)
- focusflow_cli.adapters.rest_api (remote API)
"""

from .repository import DOCUMENT_KEYS, UserDataRepository, validate_partial

__all__ = [
    "DOCUMENT_KEYS",
    "UserDataRepository",
    "validate_partial",
]
