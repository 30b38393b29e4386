"""Rich console shared by commands and formatters."""

from functools import lru_cache

from rich.console import Console

from focusflow_cli.models.config_models import OutputConfig


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get a Rich Console instance for consistent output formatting."""
    return Console(highlight=highlight)


def apply_output_config(output: OutputConfig) -> None:
    """Turn colors off on every console when ``output.color`` is false."""
    if output.color:
        return
    for highlight in (True, False):
        get_console(highlight).no_color = True
