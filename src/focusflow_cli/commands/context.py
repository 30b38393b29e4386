"""Context management commands for FocusFlow CLI.

Switch between local JSON storage and the remote document API.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from focusflow_cli.models.config_models import Context
from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.utils.typer_helpers import SuggestingGroup
from focusflow_cli.utils.ui.console import get_console

from .decorators import command_wrapper

app = typer.Typer(
    cls=SuggestingGroup,
    help="Manage storage contexts (local/remote)",
    no_args_is_help=False,
)
console = get_console()


def show_current_context_info(output: str = "text"):
    """Show current context information including the signed-in user."""
    ctx = get_config_service().get_current_context()

    if output == "json":
        data = {
            "name": ctx.name,
            "type": ctx.type,
            "source": ctx.source,
            "description": ctx.description,
            "user": ctx.user,
        }
        console.print_json(json.dumps(data, indent=2))
        return

    console.print(f"\n[bold]Context:[/bold] {ctx.name} ([cyan]{ctx.type}[/cyan])")
    console.print(f"[bold]Source:[/bold] {ctx.source}")
    if ctx.description:
        console.print(f"[bold]Description:[/bold] {ctx.description}")
    console.print(f"[bold]User:[/bold] {ctx.user or '[dim]not signed in[/dim]'}")


@app.callback(invoke_without_command=True)
def context_callback(
    ctx: typer.Context,
    output: str = typer.Option(
        "text", "--output", "-o", help="Output format: text or json"
    ),
):
    """Show current context information.

    Run 'focusflow context' to see the active context.
    """
    if ctx.invoked_subcommand is not None:
        return
    show_current_context_info(output)


@app.command("list", help="List all available contexts")
@command_wrapper
def list_contexts(
    output: str = typer.Option(
        "table", "--output", "-o", help="Output format: table or json"
    ),
):
    """List all available contexts."""
    manager = get_config_service()
    contexts = manager.list_contexts()
    current_name = manager.config.current_context_name

    if output == "json":
        context_list = [
            {
                "name": ctx.name,
                "type": ctx.type,
                "source": ctx.source,
                "current": ctx.name == current_name,
                "description": ctx.description,
            }
            for ctx in contexts
        ]
        console.print_json(json.dumps(context_list, indent=2))
        return

    table = Table(title="FocusFlow Contexts")
    table.add_column("ACTIVE", style="green")
    table.add_column("NAME", style="cyan")
    table.add_column("TYPE", style="yellow")
    table.add_column("SOURCE")
    table.add_column("USER")

    for ctx in contexts:
        active = "*" if ctx.name == current_name else ""
        table.add_row(active, ctx.name, ctx.type, ctx.source, ctx.user or "-")

    console.print(table)


@app.command("use", help="Switch to a different context")
@command_wrapper
def use_context(name: str = typer.Argument(..., help="Context name to switch to")):
    """Switch to a different context."""
    manager = get_config_service()

    current = manager.get_current_context()
    if current.name == name:
        console.print(
            f"[yellow]ℹ[/yellow] Already using context '{name}' ([cyan]{current.type}[/cyan])"
        )
        return

    ctx = manager.use_context(name)
    console.print(
        f"[green]✓[/green] Switched to context '{ctx.name}' ([cyan]{ctx.type}[/cyan])"
    )
    console.print(f"  Using: {ctx.source}")
    if ctx.type == "local" and not Path(ctx.source).expanduser().exists():
        console.print("  [dim]The data directory will be created on first use.[/dim]")
    if not ctx.user_id:
        console.print("  [dim]Sign in with 'focusflow auth login'.[/dim]")


@app.command("create", help="Create a new context")
@command_wrapper
def create_context(
    name: str = typer.Argument(..., help="Context name"),
    ctx_type: str = typer.Option(..., "--type", help="Context type: local or remote"),
    source: str = typer.Option(
        None, "--source", help="Data directory or API URL (optional for local)"
    ),
    description: str = typer.Option("", "--description", help="Context description"),
):
    """Create a new context."""
    manager = get_config_service()

    if ctx_type not in ("local", "remote"):
        raise ValueError("type must be 'local' or 'remote'")
    if not source:
        if ctx_type == "remote":
            raise ValueError("--source is required for remote contexts")
        source = str(manager.data_dir / name)
        console.print(f"[dim]Using default data directory: {source}[/dim]")

    manager.add_context(
        Context(name=name, type=ctx_type, source=source, description=description)
    )
    console.print(f"[green]✓[/green] Created context '{name}' ([cyan]{ctx_type}[/cyan])")
