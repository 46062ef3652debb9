"""
Check command: validate every reducer of a module.
"""

import json
from typing import Sequence

import typer
from rich.console import Console
from rich.table import Table

from ...core.errors import GenerationError
from ...core.types import Diagnostic
from ...discovery import collect_module
from ...pipeline import run_generation
from ..loader import load_config, load_target

console = Console()


def print_diagnostics(diagnostics: Sequence[Diagnostic], json_output: bool) -> None:
    if json_output:
        print(json.dumps({"ok": False, "diagnostics": [d.to_dict() for d in diagnostics]}, indent=2))
        return

    table = Table(title="Diagnostics")
    table.add_column("Severity", style="red")
    table.add_column("Location", style="yellow")
    table.add_column("Message")
    for d in diagnostics:
        table.add_row(d.severity.value, str(d.location), d.message)
    console.print(table)


def check_command(
    target: str = typer.Argument(..., help="Module name or path to a .py file"),
    allow_implicit: bool = typer.Option(
        False,
        "--allow-implicit",
        help="Let handlers without a source contract define their own actions",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Validate reducers against the action creators they handle.

    Examples:
        reductor check shop.reducers
        reductor check ./reducers.py --json
    """
    config = load_config(allow_implicit)
    try:
        module = load_target(target)
        discovered = collect_module(module)
        result = run_generation(discovered.contracts, discovered.reducers, config)
    except GenerationError as e:
        print_diagnostics(e.diagnostics, json_output)
        raise typer.Exit(1)
    except FileNotFoundError:
        console.print(f"[red]Error: File not found:[/red] {target}")
        raise typer.Exit(2)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if not result.ok:
        print_diagnostics(result.diagnostics, json_output)
        raise typer.Exit(1)

    if json_output:
        output = {
            "ok": True,
            "reducers": {r.name: r.fingerprint() for r in result.reducers},
            "builders": {b.name: b.fingerprint() for b in result.builders},
        }
        print(json.dumps(output, indent=2, sort_keys=True))
        return

    table = Table(title=f"Generated for {target}")
    table.add_column("Class", style="green")
    table.add_column("Kind", style="cyan")
    table.add_column("Actions", justify="right")
    for r in result.reducers:
        table.add_row(r.name, "reducer", str(len(r.cases)))
    for b in result.builders:
        table.add_row(b.name, "builder", str(len(b.ops)))
    console.print(table)
    console.print(f"[green]✓ {len(result.reducers)} reducers, {len(result.builders)} builders OK[/green]")
