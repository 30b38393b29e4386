"""Main entry point for FocusFlow CLI."""

import typer

from focusflow_cli import __version__
from focusflow_cli.commands import (
    add_command,
    auth,
    bookmarks,
    calendar_command,
    complete_command,
    context,
    delete_command,
    list_command,
    reopen_command,
    start_command,
    stats_command,
    streak_command,
    tags,
    today_command,
)
from focusflow_cli.services.config_service import get_config_service
from focusflow_cli.utils import exit_codes
from focusflow_cli.utils.logger import log_file_path
from focusflow_cli.utils.typer_helpers import SuggestingGroup
from focusflow_cli.utils.ui.console import apply_output_config, get_console
from focusflow_cli.utils.ui.formatters import format_error

app = typer.Typer(
    name="focusflow",
    cls=SuggestingGroup,
    help="Track recurring tasks, daily progress and your completion streak",
    no_args_is_help=True,
)

console = get_console()

# Task commands live at the top level
for _module in (
    add_command,
    list_command,
    today_command,
    complete_command,
    start_command,
    reopen_command,
    delete_command,
    streak_command,
    calendar_command,
    stats_command,
):
    app.registered_commands.extend(_module.app.registered_commands)

app.add_typer(auth.app, name="auth", help="Sign up, sign in and out")
app.add_typer(bookmarks.app, name="bookmarks", help="Manage bookmarks")
app.add_typer(tags.app, name="tags", help="Manage task tags")
app.add_typer(context.app, name="context", help="Manage storage contexts")


@app.callback()
def main_callback() -> None:
    """Track recurring tasks, daily progress and your completion streak."""
    try:
        config = get_config_service().config
    except RuntimeError as e:
        format_error(str(e))
        raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e
    apply_output_config(config.output)


@app.command()
def version() -> None:
    """Show version information and the active context."""
    console.print(f"[bold]FocusFlow CLI[/bold] version [cyan]{__version__}[/cyan]")
    ctx = get_config_service().get_current_context()
    console.print(f"[dim]Context: {ctx.name} ({ctx.type})[/dim]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")


if __name__ == "__main__":
    app()
