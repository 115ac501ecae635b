"""
Replay file commands: inspect, merge
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from proptest_engine.core.errors import ReplayStoreError
from proptest_engine.replay import load, rewrite

app = typer.Typer()
console = Console()


@app.command()
def inspect(
    path: str = typer.Argument(..., help="Path to replay file"),
    show_steps: bool = typer.Option(False, "--steps", "-s", help="Show the outcome glyphs"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Parse a replay file and show its state.

    Examples:
        proptest replay inspect /tmp/replay
        proptest replay inspect /tmp/replay --steps --json
    """
    try:
        status = load(path)
    except ReplayStoreError as e:
        if json_output:
            print(json.dumps({"error": str(e), "path": path}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if status.is_corrupt:
        if json_output:
            print(json.dumps({"path": path, "state": status.state.value}))
        else:
            console.print(f"[red]Replay file is corrupt:[/red] {path}")
        raise typer.Exit(1)

    replay = status.replay
    if json_output:
        output = {
            "path": path,
            "state": status.state.value,
            "seed": list(replay.seed),
            "steps": len(replay.steps),
            "counts": replay.counts(),
        }
        if show_steps:
            output["glyphs"] = replay.glyphs()
        print(json.dumps(output, indent=2))
        raise typer.Exit(0)

    style = "green" if status.is_terminated else "yellow"
    table = Table(title=f"Replay: {path}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("State", f"[{style}]{status.state.value}[/{style}]")
    table.add_row("Seed", " ".join(str(w) for w in replay.seed))
    table.add_row("Steps", str(len(replay.steps)))
    for kind, count in replay.counts().items():
        table.add_row(f"  {kind}", str(count))
    console.print(table)

    if show_steps:
        console.print(replay.glyphs() or "[dim](no steps)[/dim]")

    raise typer.Exit(0)


@app.command()
def merge(
    target: str = typer.Argument(..., help="Replay file to extend"),
    source: str = typer.Argument(..., help="Replay file to take extra steps from"),
):
    """
    Append the steps SOURCE has beyond TARGET's to TARGET.

    Both files must share a seed. TARGET keeps its terminated/in-progress state.
    Do not run while a worker is appending to TARGET.
    """
    try:
        target_status = load(target)
        source_status = load(source)
    except ReplayStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    for name, status in ((target, target_status), (source, source_status)):
        if status.is_corrupt:
            console.print(f"[red]Replay file is corrupt:[/red] {name}")
            raise typer.Exit(1)

    merged = target_status.replay
    if merged.seed != source_status.replay.seed:
        console.print("[red]Error:[/red] replay seeds differ")
        raise typer.Exit(1)

    before = len(merged.steps)
    merged.merge(source_status.replay)
    try:
        rewrite(target, merged, terminated=target_status.is_terminated)
    except ReplayStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    console.print(f"[green]✓ Merged {len(merged.steps) - before} steps[/green] into {target}")
    raise typer.Exit(0)
