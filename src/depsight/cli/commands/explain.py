"""
Explain Command - Calculation proof for a single issue.

Prints the drill-down explanation for ISSUE_ID as seen from one panel.
Ids missing from the issue set are still explained, with the raw id
standing in for the title.
"""

import sys

import click
from rich.console import Console

from ...core.exceptions import DepsightError
from ...core.graph import IssueGraph
from ...insights.explain import ExplanationPayload
from ...insights.panels import Panel, parse_panel
from ..render import render_explanation
from ..renderers import JsonRenderer
from ..utils import echo_error, echo_warning, load_cli_settings, load_issue_graph, read_issue_graph
from .insights import PANEL_CHOICES, build_dashboard


@click.command()
@click.argument("issue_id")
@click.argument("path", default=".", type=click.Path())
@click.option("-p", "--panel", "panel_name", default=Panel.BOTTLENECKS.value,
              help=f"Panel whose proof to show ({', '.join(PANEL_CHOICES)})")
@click.option("--force-full-analysis", is_flag=True, help="Compute every metric regardless of graph size")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def explain(issue_id: str, path: str, panel_name: str, force_full_analysis: bool, as_json: bool) -> None:
    """
    Explain why ISSUE_ID scores the way it does.

    \b
    Examples:
      depsight explain ISSUE-12
      depsight explain ISSUE-12 --panel hubs
    """
    if as_json:
        renderer = JsonRenderer("explain")
        error_to_report = None
        payload = None

        with renderer.capture():
            try:
                panel = parse_panel(panel_name)
                graph = read_issue_graph(path)
                payload = _explanation(graph, path, issue_id, panel, force_full_analysis)
            except DepsightError as e:
                error_to_report = e

        if error_to_report is not None:
            renderer.render_error(error_to_report)
            sys.exit(1)
        renderer.render_success(payload)
        return

    try:
        panel = parse_panel(panel_name)
    except DepsightError as e:
        echo_error(str(e))
        sys.exit(1)
    graph = load_issue_graph(path)
    if graph is None:
        sys.exit(1)

    payload = _explanation(graph, path, issue_id, panel, force_full_analysis)
    if not payload.found:
        echo_warning(f"{issue_id} is not in the issue set")
    console = Console()
    console.print(f"[bold]{payload.title}[/bold] [dim]({payload.issue_id})[/dim]")
    console.print(render_explanation(payload))


def _explanation(
    graph: IssueGraph, path: str, issue_id: str, panel: Panel, force_full: bool
) -> ExplanationPayload:
    """Proof for `issue_id` on `panel`, with the cycle or top pick it belongs to."""
    settings = load_cli_settings(path, force_full)
    dashboard = build_dashboard(graph, settings, force_full)

    cycle = None
    if panel is Panel.CYCLES:
        cycle = next((c for c in dashboard.state.insights.cycles if issue_id in c), None)
    top_pick = None
    if panel is Panel.PRIORITY:
        top_pick = next((p for p in dashboard.state.top_picks if p.id == issue_id), None)

    return dashboard.explainer.build(panel, issue_id, cycle=cycle, top_pick=top_pick)
