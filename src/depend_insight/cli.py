"""Command-line interface for Depend Insight"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .code import load_registry_file
from .config import load_config
from .exceptions import DependInsightError
from .logging_config import setup_logging
from .metrics import AnalysisRunner, InheritanceAnalyzer

app = typer.Typer(
    name="depend-insight",
    help="Depend Insight - inheritance metrics for code models",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


@app.command()
def analyze(
    graph: Path = typer.Argument(
        ...,
        help="JSON graph document describing packages and types",
        dir_okay=False,
    ),
    package: Optional[List[str]] = typer.Option(
        None,
        "--package",
        "-p",
        help="Only report types of this package (repeatable)",
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default), json",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a depend-insight.toml configuration file",
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Threads for the visiting phase",
        min=1,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """Compute inheritance metrics for a graph document."""
    if verbose and quiet:
        console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    if fmt not in {"rich", "json"}:
        console.print("[red]Error:[/red] --format must be one of: json, rich")
        raise typer.Exit(1)

    logger = setup_logging("verbose" if verbose else "quiet" if quiet else "normal")

    try:
        settings = load_config(
            config_file=config,
            packages=package or None,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        # Config files and DEPEND_VERBOSITY may change the level chosen from flags
        logger = setup_logging(settings.verbosity)
        logger.debug(f"Loaded settings: {settings}")

        registry = load_registry_file(graph)
        analyzer = InheritanceAnalyzer.from_config(settings)
        runner = AnalysisRunner([analyzer], timeout_seconds=settings.timeout_seconds)
        completed = runner.run(registry.packages)
        if runner.errors:
            for error in runner.errors:
                console.print(f"[red]Error:[/red] {escape(str(error))}")
            raise typer.Exit(1)

        project = runner.project_metrics(completed)
        nodes = {}
        for node in registry.types:
            metrics = analyzer.get_node_metrics(node)
            if metrics:
                nodes[node.qualified_name] = metrics
    except DependInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if fmt == "json":
        print(json.dumps({"project": project, "nodes": nodes}, indent=2))
        return

    _print_tables(project, nodes)


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"[bold cyan]Depend Insight[/bold cyan] version [green]{__version__}[/green]")


def _print_tables(project: dict, nodes: dict) -> None:
    table = Table(title="Classes", show_lines=False)
    table.add_column("Class", style="cyan")
    for metric in ("dit", "noc", "noam", "noom"):
        table.add_column(metric.upper(), justify="right")
    for name, metrics in nodes.items():
        table.add_row(name, *(str(metrics[m]) for m in ("dit", "noc", "noam", "noom")))
    console.print(table)

    summary = Table(title="Project")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", justify="right")
    for metric, value in project.items():
        summary.add_row(metric.upper(), f"{value:.4f}" if isinstance(value, float) else str(value))
    console.print(summary)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
