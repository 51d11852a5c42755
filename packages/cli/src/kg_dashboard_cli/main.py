"""KG Dashboard CLI - Main entry point.

Provides the `kg-dashboard` command-line interface.

Usage:
    kg-dashboard sources
    kg-dashboard search "AI companies in healthcare" --seed 7 --watch
"""

import asyncio
import random
from enum import Enum
from typing import Callable, Optional

import typer

from kg_dashboard_common import (
    ConfigurationError,
    configure_logging,
    get_logger,
    get_settings,
    init_telemetry,
)
from kg_dashboard_contracts import SourceSnapshot
from kg_dashboard_search import (
    SearchController,
    SearchProgressOrchestrator,
    SimulationConfig,
    SourceRegistry,
    default_registry,
)

from kg_dashboard_cli.formatters import (
    format_snapshot_line,
    format_snapshots_json,
    format_snapshots_table,
    format_sources_json,
    format_sources_table,
)

logger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Output format options."""

    table = "table"
    json = "json"


app = typer.Typer(
    name="kg-dashboard",
    help="Explore the company/investor knowledge graph data sources.",
    add_completion=False,
)


def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_format == "json")
    init_telemetry(service_name="kg-dashboard-cli", console=settings.telemetry_console)


async def run_search(
    query: str,
    config: SimulationConfig,
    registry: Optional[SourceRegistry] = None,
    seed: Optional[int] = None,
    cancel_after: Optional[float] = None,
    on_change: Optional[Callable[[SourceSnapshot], None]] = None,
) -> tuple[list[SourceSnapshot], bool]:
    """Run one simulated federated search session.

    Args:
        query: Query text (must be non-blank)
        config: Simulation timing and outcome parameters
        registry: Sources to search (default: dashboard catalog)
        seed: Seed for reproducible cadence and outcomes
        cancel_after: Cancel the session if it has not settled after this many seconds
        on_change: Called with every source state change

    Returns:
        Tuple of (per-source snapshots, whether the session was cancelled)

    Raises:
        ValueError: If the query is blank
    """
    async with SearchProgressOrchestrator(
        registry, config, rng=random.Random(seed)
    ) as orchestrator:
        if on_change is not None:
            orchestrator.add_listener(on_change)

        controller = SearchController(orchestrator)
        if not controller.submit(query):
            raise ValueError("query must not be blank")

        try:
            await orchestrator.wait_settled(timeout=cancel_after)
            cancelled = False
        except asyncio.TimeoutError:
            logger.info("search_cancelled", query=query, after_seconds=cancel_after)
            controller.cancel()
            cancelled = True

        return orchestrator.snapshots(), cancelled


@app.command()
def sources(
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", "-f", help="Output format"
    ),
):
    """List the data sources a search fans out to."""
    registry = default_registry()

    if output_format == OutputFormat.json:
        typer.echo(format_sources_json(registry))
    else:
        typer.echo(format_sources_table(registry))


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query text"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    failure_rate: Optional[float] = typer.Option(
        None, "--failure-rate", help="Probability a source ends in error (0-1)"
    ),
    stagger: Optional[float] = typer.Option(
        None, "--stagger", help="Seconds between source starts"
    ),
    tick_min: Optional[float] = typer.Option(
        None, "--tick-min", help="Minimum seconds between progress ticks"
    ),
    tick_max: Optional[float] = typer.Option(
        None, "--tick-max", help="Maximum seconds between progress ticks"
    ),
    cancel_after: Optional[float] = typer.Option(
        None, "--cancel-after", help="Cancel the search after this many seconds"
    ),
    watch: bool = typer.Option(False, "--watch", "-w", help="Print every state change"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", "-f", help="Output format"
    ),
):
    """Run a simulated federated search and report per-source progress."""
    _setup()

    try:
        config = SimulationConfig.from_settings().with_overrides(
            failure_probability=failure_rate,
            stagger_interval=stagger,
            tick_interval_min=tick_min,
            tick_interval_max=tick_max,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    on_change = None
    if watch:
        on_change = lambda snapshot: typer.echo(format_snapshot_line(snapshot))  # noqa: E731

    try:
        snapshots, cancelled = asyncio.run(
            run_search(
                query,
                config,
                seed=seed,
                cancel_after=cancel_after,
                on_change=on_change,
            )
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if watch:
        typer.echo("")

    if output_format == OutputFormat.json:
        typer.echo(format_snapshots_json(snapshots, query.strip(), cancelled))
    else:
        typer.echo(format_snapshots_table(snapshots, query.strip(), cancelled))


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
