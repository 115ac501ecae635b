#!/usr/bin/env python3
"""
proptest CLI

Main entrypoint for the proptest command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from proptest_cli.commands import replay, run

app = typer.Typer(
    name="proptest",
    help="Property-based test runner with crash-resilient replay",
    add_completion=False,
)

console = Console()

app.add_typer(replay.app, name="replay", help="Replay file operations")
app.command(name="run")(run.run_command)


@app.command()
def version():
    """Show version information."""
    from proptest_cli import __version__
    from proptest_engine import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]proptest CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
