"""
Run command: run a property test entry point
"""

import json
from dataclasses import replace
from typing import Optional

import typer
from rich.console import Console

from proptest_engine.logging_config import setup_logging
from proptest_engine.runner import Config, RunStatus, run_entry

console = Console()


def _parse_seed(seed: Optional[str]):
    if seed is None:
        return None
    parts = seed.replace(",", " ").split()
    try:
        return tuple(int(p) for p in parts)
    except ValueError:
        raise typer.BadParameter("seed must be four integers, e.g. '1 2 3 4'")


def run_command(
    entry: str = typer.Argument(..., help="module:attribute naming a PropertyTest"),
    cases: Optional[int] = typer.Option(None, "--cases", "-n", help="Passing cases required"),
    fork: bool = typer.Option(False, "--fork", "-f", help="Run cases in a worker process"),
    seed: Optional[str] = typer.Option(None, "--seed", help="Four seed words, e.g. '1 2 3 4'"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Run a property test and report the result.

    Examples:
        proptest run mypkg.props:never_negative
        proptest run mypkg.props:never_negative --fork --cases 1000
    """
    setup_logging(level=log_level, fmt="text")

    config = Config.from_env()
    overrides = {}
    if cases is not None:
        overrides["cases"] = cases
    if fork:
        overrides["fork"] = True
    if overrides:
        config = replace(config, **overrides)

    try:
        result = run_entry(entry, config, seed=_parse_seed(seed))
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({
            "status": result.status.value,
            "seed": list(result.seed),
            "cases": result.cases,
            "rejects": result.rejects,
            "reason": result.reason,
            "minimal": repr(result.minimal) if result.failed else None,
            "shrink_iters": result.shrink_iters,
        }, indent=2))
    elif result.passed:
        console.print(f"[green]✓ {result.summary()}[/green]")
    else:
        console.print(f"[red]✗ {result.summary()}[/red]")
        console.print(f"  Seed: [yellow]{' '.join(str(w) for w in result.seed)}[/yellow]")

    raise typer.Exit(0 if result.status is RunStatus.PASSED else 1)
