"""Output formatters for CLI results.

Provides two output formats:
- table: Human-readable rows with a text progress bar
- json: Machine-parseable JSON
"""

import json
from typing import Iterable, Optional

from kg_dashboard_contracts import Source, SourceSnapshot, SourceStatus

STATUS_LABELS = {
    SourceStatus.IDLE: "idle",
    SourceStatus.SEARCHING: "searching",
    SourceStatus.COMPLETE: "complete",
    SourceStatus.ERROR: "ERROR",
}


def format_progress_bar(progress: Optional[float], width: int = 20) -> str:
    """Render progress as ``[#####...............]  25%``.

    Args:
        progress: Percentage in [0, 100], or None for a source with no progress
        width: Number of cells inside the brackets

    Returns:
        Fixed-width bar string
    """
    if progress is None:
        return "[" + " " * width + "]     "

    clamped = max(0.0, min(100.0, progress))
    filled = int(clamped / 100.0 * width)
    return f"[{'#' * filled}{'.' * (width - filled)}] {clamped:3.0f}%"


def format_snapshot_line(snapshot: SourceSnapshot) -> str:
    """One row: name, category, status, bar, info."""
    source = snapshot.source
    state = snapshot.state
    line = (
        f"{source.name[:16]:16} {source.category.value:9} "
        f"{STATUS_LABELS[state.status]:9} {format_progress_bar(state.progress)}"
    )
    if state.info:
        line += f"  {state.info}"
    return line.rstrip()


def format_snapshots_table(
    snapshots: list[SourceSnapshot],
    query: str,
    cancelled: bool = False,
) -> str:
    """Format a finished (or cancelled) search session as a table.

    Args:
        snapshots: Per-source results in registry order
        query: Submitted query
        cancelled: Whether the session was cancelled before settling

    Returns:
        Multi-line string with header, rows and a summary line
    """
    header = f'Data sources for: "{query}"'
    if cancelled:
        header += " (cancelled)"

    rows = [format_snapshot_line(s) for s in snapshots]

    complete = sum(1 for s in snapshots if s.state.status == SourceStatus.COMPLETE)
    failed = sum(1 for s in snapshots if s.state.status == SourceStatus.ERROR)
    summary = f"{complete} complete, {failed} failed, {len(snapshots)} total"

    return "\n".join([header, "", *rows, "", summary])


def format_snapshots_json(
    snapshots: list[SourceSnapshot],
    query: str,
    cancelled: bool = False,
) -> str:
    """Format a search session as a JSON document."""
    output = {
        "query": query,
        "cancelled": cancelled,
        "sources": [
            {
                "id": s.source.id,
                "name": s.source.name,
                "category": s.source.category.value,
                "status": s.state.status.value,
                "progress": s.state.progress,
                "info": s.state.info,
            }
            for s in snapshots
        ],
    }
    return json.dumps(output, indent=2)


def format_sources_table(sources: Iterable[Source]) -> str:
    """List catalog entries, one per line."""
    sources = list(sources)
    lines = [f"{len(sources)} data sources:", ""]
    for source in sources:
        badge = f"[{source.category.value}]"
        lines.append(f"  {badge:11} {source.id:16} {source.name}")
    return "\n".join(lines)


def format_sources_json(sources: Iterable[Source]) -> str:
    return json.dumps([s.model_dump(mode="json") for s in sources], indent=2)
