import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nodeflow._editor import NodeEditor
from nodeflow._errors import ConfigError, NodeflowError
from nodeflow._eval_engine import Evaluator, ManualClock
from nodeflow._node import NodeKind

from .config import DEFAULT_DT, DEFAULT_PRESET, DEFAULT_TICKS, NodeflowConfig, get_config
from .presets import PRESETS, get_preset

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Nodeflow CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> NodeflowConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _build_editor(preset_name: str) -> tuple[NodeEditor, ManualClock]:
    """Build a preset into a fresh editor driven by a manual clock."""
    clock = ManualClock()
    editor = NodeEditor(evaluator=Evaluator(clock))
    try:
        preset = get_preset(preset_name)
        preset.build(editor)
    except NodeflowError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug(f"Built preset '{preset_name}' with {len(editor.store)} core nodes")
    return editor, clock


@app.command()
def presets() -> None:
    """List the preset patches available to `run` and `inspect`."""
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Preset", style="bold")
    table.add_column("Description")

    for preset in PRESETS.values():
        table.add_row(preset.name, preset.description)

    out_console.print(table)


@app.command()
def run(
    *,
    preset: Annotated[
        str | None,
        typer.Option("-p", "--preset", help=f"Preset patch to run [default: {DEFAULT_PRESET}]"),
    ] = None,
    ticks: Annotated[
        int | None,
        typer.Option("-n", "--ticks", min=1, help=f"Number of frames to evaluate [default: {DEFAULT_TICKS}]"),
    ] = None,
    dt: Annotated[
        float | None,
        typer.Option("--dt", min=0.0, help=f"Seconds the clock advances per frame [default: {DEFAULT_DT}]"),
    ] = None,
) -> None:
    """Evaluate a preset patch once per frame at a fixed time step."""
    err_console.print()

    config = _load_config()
    effective_preset = preset or config.preset or DEFAULT_PRESET
    effective_ticks = ticks or config.ticks or DEFAULT_TICKS
    effective_dt = dt if dt is not None else config.dt
    if effective_dt is None:
        effective_dt = DEFAULT_DT

    err_console.print(f"[cyan]Preset:[/cyan] [bold]{effective_preset}[/bold]")
    editor, clock = _build_editor(effective_preset)

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Tick", justify="right", style="dim")
    table.add_column("Time (s)", justify="right", style="yellow")
    table.add_column("Output", justify="right", style="green")

    for tick in range(effective_ticks):
        now = clock()
        value = editor.tick()
        table.add_row(str(tick), f"{now:.3f}", "-" if value is None else f"{value:.6f}")
        clock.advance(effective_dt)

    out_console.print(Panel(table, title=f"[bold]{effective_preset}[/bold]", border_style="cyan"))

    err_console.print()


@app.command()
def inspect(
    *,
    preset: Annotated[
        str | None,
        typer.Option("-p", "--preset", help=f"Preset patch to inspect [default: {DEFAULT_PRESET}]"),
    ] = None,
) -> None:
    """Show the core nodes and edges a preset patch is made of."""
    config = _load_config()
    effective_preset = preset or config.preset or DEFAULT_PRESET
    editor, _ = _build_editor(effective_preset)
    store = editor.store

    nodes_table = Table(show_header=True, header_style="bold cyan")
    nodes_table.add_column("Id", justify="right")
    nodes_table.add_column("Kind", style="bold")
    nodes_table.add_column("Arity", justify="right")
    nodes_table.add_column("Value", justify="right", style="yellow")
    nodes_table.add_column("Driven")

    for node_id, record in store.nodes():
        driven = ""
        if record.kind == NodeKind.INPUT:
            driven = "[green]yes[/green]" if store.num_edges_from(node_id) else "[dim]no[/dim]"
        nodes_table.add_row(str(node_id), str(record.kind), str(record.arity), f"{record.value:g}", driven)

    visible = {edge.id for edge in editor.links()}
    edges_table = Table(show_header=True, header_style="bold cyan")
    edges_table.add_column("Id", justify="right")
    edges_table.add_column("From", justify="right")
    edges_table.add_column("To", justify="right")
    edges_table.add_column("Link")

    for edge in store.edges():
        link = "[green]link[/green]" if edge.id in visible else "[dim]internal[/dim]"
        edges_table.add_row(str(edge.id), str(edge.from_id), str(edge.to_id), link)

    out_console.print(Panel(nodes_table, title=f"[bold]Nodes: {effective_preset}[/bold]", border_style="cyan"))
    out_console.print(Panel(edges_table, title="[bold]Edges[/bold]", border_style="cyan"))


def main() -> None:
    app()
