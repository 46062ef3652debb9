#!/usr/bin/env python3
"""
reductor CLI - reducer dispatcher generation

Main entrypoint for the reductor command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from ..logging_config import setup_logging
from .commands import check, generate

app = typer.Typer(
    name="reductor",
    help="Generate verified reducer dispatchers from declared action creators",
    add_completion=False,
)

console = Console()

app.command(name="check")(check.check_command)
app.command(name="generate")(generate.generate_command)


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="REDUCTOR_LOG_LEVEL",
        help="DEBUG, INFO, WARNING or ERROR",
    ),
    log_format: str = typer.Option(
        "text",
        "--log-format",
        envvar="REDUCTOR_LOG_FORMAT",
        help="json or text",
    ),
):
    """Configure logging for every command."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from .. import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]reductor[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
