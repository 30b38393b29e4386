"""Domain exceptions for FocusFlow CLI."""

from __future__ import annotations

from focusflow_cli.utils import exit_codes


class FocusFlowError(Exception):
    """Base class for errors surfaced to the user."""

    exit_code = exit_codes.ERROR_GENERAL


class NotFoundError(FocusFlowError):
    """A task, bookmark or profile could not be resolved."""

    exit_code = exit_codes.ERROR_NOT_FOUND


class AmbiguousIdError(FocusFlowError):
    """An ID prefix matches more than one record."""

    exit_code = exit_codes.ERROR_INVALID_ARGS

    def __init__(self, prefix: str, candidates: list[str]):
        self.prefix = prefix
        self.candidates = candidates
        super().__init__(
            f"Multiple records match '{prefix}':\n"
            + "\n".join(f"  {candidate}" for candidate in candidates)
            + "\n\nUse a longer prefix to select a specific record."
        )


class InvalidBookmarkUrlError(FocusFlowError):
    """Bookmark URL could not be parsed."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class AuthenticationError(FocusFlowError):
    """No user is signed in, or sign-in failed."""

    exit_code = exit_codes.ERROR_AUTH_FAILURE


class PersistenceError(FocusFlowError):
    """The storage backend rejected a save."""

    exit_code = exit_codes.ERROR_STORAGE
