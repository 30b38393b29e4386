"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import httpx
import typer

from focusflow_cli.exceptions import FocusFlowError
from focusflow_cli.models import UserProfile
from focusflow_cli.services.context_manager import get_strategy_context
from focusflow_cli.utils import exit_codes
from focusflow_cli.utils.logger import get_logger
from focusflow_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def require_user() -> UserProfile:
    """Return the signed-in user of the active context.

    Raises:
        AppError: If nobody is signed in
    """
    user = get_strategy_context().auth_provider.current_user()
    if user is None:
        raise AppError(
            "Not signed in. Use 'focusflow auth signup' or 'focusflow auth login'.",
            exit_codes.ERROR_AUTH_FAILURE,
        )
    return user


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with common functionality.

    Runs coroutines on a fresh event loop, logs timing and turns errors into a
    red message plus an exit code.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except (AppError, FocusFlowError) as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except httpx.HTTPError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(f"Could not reach the server: {e}")
                raise typer.Exit(code=exit_codes.ERROR_NETWORK) from e

            except ValueError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=exit_codes.ERROR_INVALID_ARGS) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
