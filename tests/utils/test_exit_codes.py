"""Unit tests for focusflow_cli.utils.exit_codes."""

from __future__ import annotations

import pytest

from focusflow_cli.exceptions import (
    AmbiguousIdError,
    AuthenticationError,
    FocusFlowError,
    InvalidBookmarkUrlError,
    NotFoundError,
    PersistenceError,
)
from focusflow_cli.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
    SUCCESS,
    get_exit_code_description,
    get_exit_code_name,
)

ALL_CODES = [
    SUCCESS,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_AUTH_FAILURE,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    ERROR_STORAGE,
]


def test_codes_are_distinct():
    assert len(set(ALL_CODES)) == len(ALL_CODES)
    assert SUCCESS == 0


@pytest.mark.parametrize("code", ALL_CODES)
def test_every_code_has_name_and_description(code):
    assert not get_exit_code_name(code).startswith("UNKNOWN")
    assert get_exit_code_description(code) != "Unknown error"


def test_unknown_code():
    assert get_exit_code_name(99) == "UNKNOWN(99)"
    assert get_exit_code_description(99) == "Unknown error"


@pytest.mark.parametrize(
    "error, code",
    [
        (FocusFlowError("x"), ERROR_GENERAL),
        (NotFoundError("x"), ERROR_NOT_FOUND),
        (AmbiguousIdError("ab", ["abc1", "abd2"]), ERROR_INVALID_ARGS),
        (InvalidBookmarkUrlError("x"), ERROR_INVALID_ARGS),
        (AuthenticationError("x"), ERROR_AUTH_FAILURE),
        (PersistenceError("x"), ERROR_STORAGE),
    ],
)
def test_domain_errors_carry_exit_codes(error, code):
    assert error.exit_code == code
