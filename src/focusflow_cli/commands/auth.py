"""Authentication commands."""

from typing import Annotated

import typer
from rich.prompt import Prompt

from focusflow_cli.services.context_manager import get_strategy_context
from focusflow_cli.utils.typer_helpers import SuggestingGroup
from focusflow_cli.utils.ui.console import get_console
from focusflow_cli.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper, require_user

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


def _ask_password(remote: bool, confirm: bool = False) -> str | None:
    if not remote:
        return None
    password = Prompt.ask("Password", password=True)
    if confirm and password != Prompt.ask("Confirm password", password=True):
        raise ValueError("Passwords do not match")
    return password


@app.command()
@command_wrapper
async def signup(
    name: Annotated[str, typer.Argument(help="Display name")],
    email: Annotated[str, typer.Argument(help="Email address")],
    password: Annotated[
        str | None, typer.Option("--password", help="Password (remote contexts)")
    ] = None,
) -> None:
    """Create an account (or a local profile) and sign in."""
    strategy = get_strategy_context()
    remote = strategy.storage_type == "remote"
    if password is None:
        password = _ask_password(remote, confirm=True)

    user = await strategy.auth_provider.sign_up(name, email, password)
    format_success(f"Welcome, {user.name}! Signed in as {user.email}")


@app.command()
@command_wrapper
async def login(
    email: Annotated[str, typer.Argument(help="Email address")],
    password: Annotated[
        str | None, typer.Option("--password", help="Password (remote contexts)")
    ] = None,
) -> None:
    """Sign in to the active context."""
    strategy = get_strategy_context()
    if password is None:
        password = _ask_password(strategy.storage_type == "remote")

    user = await strategy.auth_provider.sign_in(email, password)
    format_success(f"Welcome back, {user.name}")


@app.command()
@command_wrapper
async def logout() -> None:
    """Sign out of the active context."""
    provider = get_strategy_context().auth_provider
    if provider.current_user() is None:
        console.print("[yellow]Not signed in[/yellow]")
        return
    await provider.sign_out()
    format_success("Signed out")


@app.command()
@command_wrapper
def whoami(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format (pretty/json/yaml)")
    ] = "pretty",
) -> None:
    """Show the signed-in user."""
    strategy = get_strategy_context()
    user = require_user()

    if output == "pretty":
        console.print(f"[bold]{user.name}[/bold] <{user.email}>")
        console.print(f"[dim]{strategy.storage_type} • {user.id}[/dim]")
    else:
        format_output(user.model_dump(mode="json"), output)
