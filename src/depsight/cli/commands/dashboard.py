"""
Dashboard Command - Interactive panel navigation.

Redraws the full dashboard after every key press.

Keys:
  j / ↓        next row            k / ↑        previous row
  l / → / tab  next panel          h / ←        previous panel
  e            toggle explanations x            toggle calculation proof
  q / esc      quit
"""

import logging
import sys
from typing import Callable, Dict

import click
from rich.console import Console

from ...insights.dashboard import InsightsDashboard
from ...insights.state import PanelStateMachine
from ..render import render_dashboard
from ..utils import load_cli_settings, load_issue_graph
from .insights import build_dashboard

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "\x1b"}

KEY_BINDINGS: Dict[str, Callable[[PanelStateMachine], None]] = {
    "j": PanelStateMachine.move_selection_down,
    "\x1b[B": PanelStateMachine.move_selection_down,
    "k": PanelStateMachine.move_selection_up,
    "\x1b[A": PanelStateMachine.move_selection_up,
    "l": PanelStateMachine.focus_next,
    "\t": PanelStateMachine.focus_next,
    "\x1b[C": PanelStateMachine.focus_next,
    "h": PanelStateMachine.focus_previous,
    "\x1b[D": PanelStateMachine.focus_previous,
    "e": PanelStateMachine.toggle_explanations,
    "x": PanelStateMachine.toggle_calculation_detail,
}


def handle_key(dashboard: InsightsDashboard, key: str) -> bool:
    """
    Apply one key press to the dashboard state.

    Returns False when the key ends the session. Unbound keys are ignored.
    """
    if key in QUIT_KEYS:
        return False
    action = KEY_BINDINGS.get(key)
    if action is None:
        logger.debug(f"Ignoring unbound key {key!r}")
        return True
    action(dashboard.state)
    return True


@click.command()
@click.argument("path", default=".", type=click.Path())
@click.option("--force-full-analysis", is_flag=True, help="Compute every metric regardless of graph size")
def dashboard(path: str, force_full_analysis: bool) -> None:
    """Browse graph insights for the issues at PATH interactively."""
    graph = load_issue_graph(path)
    if graph is None:
        sys.exit(1)

    settings = load_cli_settings(path, force_full_analysis)
    session = build_dashboard(graph, settings, force_full_analysis)

    console = Console()
    while True:
        console.clear()
        console.print(render_dashboard(session.view()))
        console.print("[dim]j/k move · h/l panel · e explanations · x calculation · q quit[/dim]")
        if not handle_key(session, click.getchar()):
            break
