"""
Insights Command - One-shot render of every metric panel.

Loads the issues, runs the graph analysis and prints all ten panels plus
the detail panel for the selected issue, either as rich text or as the
standard JSON envelope.
"""

import logging
import sys

import click
from rich.console import Console

from ...analysis.metrics import GraphAnalyzer
from ...core.exceptions import DepsightError
from ...core.graph import IssueGraph
from ...insights.dashboard import InsightsDashboard
from ...insights.panels import Panel, parse_panel
from ...insights.view import DashboardView
from ..render import render_dashboard
from ..renderers import JsonRenderer
from ..utils import echo_error, load_cli_settings, load_issue_graph, read_issue_graph

logger = logging.getLogger(__name__)

PANEL_CHOICES = [panel.value for panel in Panel]


def build_dashboard(graph, settings, force_full: bool) -> InsightsDashboard:
    """Analyze `graph` and open a dashboard session over the result."""
    result = GraphAnalyzer(graph, settings).analyze(force_full=force_full or None)
    logger.debug(
        f"Analysis ready: {len(result.insights.cycles)} cycles, {len(result.top_picks)} top picks"
    )
    return InsightsDashboard(graph, result.insights, result.scores, result.top_picks, settings)


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("-p", "--panel", "panel_name", default=Panel.BOTTLENECKS.value,
              help=f"Panel to focus ({', '.join(PANEL_CHOICES)})")
@click.option("-s", "--select", "select_index", default=0, type=int,
              help="Row to select in the focused panel (0-based)")
@click.option("--rows", default=None, type=click.IntRange(min=1),
              help="Visible rows per panel")
@click.option("--no-explanations", is_flag=True, help="Hide metric descriptions")
@click.option("--no-calculation", is_flag=True, help="Hide the calculation proof")
@click.option("--force-full-analysis", is_flag=True, help="Compute every metric regardless of graph size")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def insights(
    path: str,
    panel_name: str,
    select_index: int,
    rows: int | None,
    no_explanations: bool,
    no_calculation: bool,
    force_full_analysis: bool,
    as_json: bool,
) -> None:
    """
    Show graph insights for the issues at PATH.

    \b
    Examples:
      depsight insights
      depsight insights --panel keystones --select 2
      depsight insights .beads/issues.jsonl --json
    """
    options = dict(
        select_index=select_index,
        rows=rows,
        no_explanations=no_explanations,
        no_calculation=no_calculation,
        force_full=force_full_analysis,
    )

    if as_json:
        renderer = JsonRenderer("insights")
        error_to_report = None
        view = None

        with renderer.capture():
            try:
                panel = parse_panel(panel_name)
                graph = read_issue_graph(path)
                view = _dashboard_view(graph, path, panel, **options)
            except DepsightError as e:
                error_to_report = e

        if error_to_report is not None:
            renderer.render_error(error_to_report)
            sys.exit(1)
        renderer.render_success(view)
        return

    try:
        panel = parse_panel(panel_name)
    except DepsightError as e:
        echo_error(str(e))
        sys.exit(1)
    graph = load_issue_graph(path)
    if graph is None:
        sys.exit(1)

    Console().print(render_dashboard(_dashboard_view(graph, path, panel, **options)))


def _dashboard_view(
    graph: IssueGraph,
    path: str,
    panel: Panel,
    select_index: int,
    rows: int | None,
    no_explanations: bool,
    no_calculation: bool,
    force_full: bool,
) -> DashboardView:
    settings = load_cli_settings(path, force_full)
    dashboard = build_dashboard(graph, settings, force_full)

    state = dashboard.state
    if rows is not None:
        state.set_visible_rows(rows)
    if no_explanations:
        state.show_explanations = False
    if no_calculation:
        state.show_calculation = False
    state.focus(panel)
    state.select(select_index)
    return dashboard.view()
