"""
Status Command - Which metrics ran, and which were skipped.
"""

import sys
from typing import Dict, List

import click
from pydantic import BaseModel, Field
from rich.console import Console

from ...analysis.metrics import GraphAnalyzer
from ...config import FORCE_FULL_HINT
from ...core.exceptions import DepsightError
from ...core.graph import IssueGraph
from ...core.types import MetricFamily, MetricRunStatus
from ...insights.panels import PANEL_INFO, Panel
from ...insights.skip import resolve_skip_state
from ..render import status_table
from ..renderers import JsonRenderer
from ..utils import echo_info, load_cli_settings, load_issue_graph, read_issue_graph


# --- API Models ---
class PanelStatus(BaseModel):
    panel: Panel
    skipped: bool
    reason: str = ""


class StatusResponse(BaseModel):
    issues: int
    edges: int
    metrics: Dict[str, MetricRunStatus] = Field(default_factory=dict)
    panels: List[PanelStatus] = Field(default_factory=list)


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("--force-full-analysis", is_flag=True, help="Compute every metric regardless of graph size")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status(path: str, force_full_analysis: bool, as_json: bool) -> None:
    """Show metric run status for the issues at PATH."""
    if as_json:
        renderer = JsonRenderer("status")
        error_to_report = None
        response = None

        with renderer.capture():
            try:
                graph = read_issue_graph(path)
                response = _status_response(graph, path, force_full_analysis)
            except DepsightError as e:
                error_to_report = e

        if error_to_report is not None:
            renderer.render_error(error_to_report)
            sys.exit(1)
        renderer.render_success(response)
        return

    graph = load_issue_graph(path)
    if graph is None:
        sys.exit(1)
    response = _status_response(graph, path, force_full_analysis)

    console = Console()
    console.print(f"[bold]{response.issues}[/bold] issues, [bold]{response.edges}[/bold] edges")
    console.print(status_table({MetricFamily(name): s for name, s in response.metrics.items()}))

    skipped = [p for p in response.panels if p.skipped]
    if skipped:
        for p in skipped:
            click.echo(f"  {PANEL_INFO[p.panel].icon} {PANEL_INFO[p.panel].title}: {p.reason}")
        echo_info(FORCE_FULL_HINT)


def _status_response(graph: IssueGraph, path: str, force_full: bool) -> StatusResponse:
    settings = load_cli_settings(path, force_full)
    result = GraphAnalyzer(graph, settings).analyze(force_full=force_full or None)

    panels = []
    for panel in Panel:
        skip = resolve_skip_state(panel, result.scores)
        panels.append(PanelStatus(panel=panel, skipped=skip.skipped, reason=skip.reason))

    return StatusResponse(
        issues=graph.issue_count,
        edges=graph.edge_count,
        metrics={family.value: s for family, s in result.scores.statuses().items()},
        panels=panels,
    )
