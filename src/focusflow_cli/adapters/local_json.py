"""Local JSON adapter - one pretty-printed document file per user.

This is the offline storage backend: ``<data_dir>/<user_id>.json``.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from focusflow_cli.exceptions import PersistenceError
from focusflow_cli.models import UserData
from focusflow_cli.repositories import UserDataRepository, validate_partial
from focusflow_cli.utils.logger import get_logger


class LocalJsonUserDataRepository(UserDataRepository):
    """User document repository backed by JSON files in a directory."""

    def __init__(self, data_dir: str | Path):
        """Initialize local JSON repository.

        Args:
            data_dir: Directory holding one ``<user_id>.json`` file per user
        """
        self.data_dir = Path(data_dir).expanduser()

    def _document_path(self, user_id: str) -> Path:
        if not user_id or "/" in user_id or "\\" in user_id or user_id in (".", ".."):
            raise ValueError(f"Invalid user ID: {user_id!r}")
        return self.data_dir / f"{user_id}.json"

    def _read_document(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, JSONDecodeError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

    def _write_document(self, path: Path, document: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
            tmp_path.chmod(0o600)
            tmp_path.replace(path)
        finally:
            tmp_path.unlink(missing_ok=True)

    async def load(self, user_id: str) -> UserData:
        path = self._document_path(user_id)
        document = self._read_document(path)
        if document is None:
            data = UserData.empty()
            data.updated_at = datetime.now(UTC)
            try:
                self._write_document(path, data.to_document())
                get_logger("storage").info("created user document %s", path)
            except (OSError, TypeError, ValueError) as e:
                get_logger("storage").warning(
                    "could not create document %s: %s", path, e
                )
            return data
        return UserData.model_validate(document)

    async def save(self, user_id: str, partial: dict[str, Any]) -> bool:
        path = self._document_path(user_id)
        validate_partial(partial)
        try:
            document = self._read_document(path) or UserData.empty().to_document()
            document.update(partial)
            document["updatedAt"] = datetime.now(UTC).isoformat()
            self._write_document(path, document)
        except (OSError, TypeError, ValueError, PersistenceError) as e:
            get_logger("storage").warning("saving %s failed: %s", path, e)
            return False
        get_logger("storage").debug("saved %s to %s", ", ".join(sorted(partial)), path)
        return True
