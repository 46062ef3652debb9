"""
Generate command: render dispatchers and builders as Python source.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from ...core.canonical import canonicalize
from ...core.errors import GenerationError
from ...discovery import collect_module
from ...generate import render_module
from ...pipeline import run_generation
from ..loader import load_config, load_target
from .check import print_diagnostics

console = Console()


def generate_command(
    target: str = typer.Argument(..., help="Module name or path to a .py file"),
    output: Optional[str] = typer.Option(None, "--out", "-o", help="Write rendered module to this file"),
    allow_implicit: bool = typer.Option(
        False,
        "--allow-implicit",
        help="Let handlers without a source contract define their own actions",
    ),
    highlight: bool = typer.Option(False, "--highlight", help="Syntax-highlight printed source"),
    json_output: bool = typer.Option(False, "--json", help="Output generated definitions as JSON"),
):
    """
    Generate dispatcher and builder source for a module.

    Examples:
        reductor generate shop.reducers
        reductor generate shop.reducers --out shop/reducers_gen.py
        reductor generate ./reducers.py --json
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
        output_doc = {
            "reducers": [dict(r.to_dict(), fingerprint=r.fingerprint()) for r in result.reducers],
            "builders": [dict(b.to_dict(), fingerprint=b.fingerprint()) for b in result.builders],
        }
        print(json.dumps(canonicalize(output_doc), indent=2))
        return

    source = render_module(result.reducers, result.builders)
    if output:
        Path(output).write_text(source, encoding="utf-8")
        console.print(f"[green]✓ Wrote {len(result.reducers) + len(result.builders)} classes to[/green] {output}")
    elif highlight:
        console.print(Syntax(source, "python", theme="monokai"))
    else:
        print(source, end="")
