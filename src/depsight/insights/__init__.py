"""
Panel navigation and drill-down explanation engine.

- panels: the ten panels and their descriptive metadata
- state: focus / selection / scroll state machine
- skip: decides when a panel shows a "skipped" notice
- ranking, scroll: small helpers for ordering and windowing
- explain: calculation proofs for a selected issue
- dashboard, view: renderer-facing snapshots
"""

from .dashboard import InsightsDashboard
from .explain import (
    ExplanationBuilder,
    ExplanationEntry,
    ExplanationPayload,
    ExplanationSection,
    render_cycle_chain,
)
from .panels import PANEL_FAMILY, PANEL_INFO, Panel, PanelInfo, parse_panel
from .ranking import ScoredItem, cap, rank_by_score
from .scroll import adjust_scroll_offset, scroll_indicator, visible_range
from .skip import SkipState, resolve_skip_state
from .state import PanelStateMachine
from .view import DashboardView, DetailView, PanelView, format_insight_value, format_metric_value

__all__ = [
    "DashboardView",
    "DetailView",
    "ExplanationBuilder",
    "ExplanationEntry",
    "ExplanationPayload",
    "ExplanationSection",
    "InsightsDashboard",
    "PANEL_FAMILY",
    "PANEL_INFO",
    "Panel",
    "PanelInfo",
    "PanelStateMachine",
    "PanelView",
    "ScoredItem",
    "SkipState",
    "adjust_scroll_offset",
    "cap",
    "format_insight_value",
    "format_metric_value",
    "parse_panel",
    "rank_by_score",
    "render_cycle_chain",
    "resolve_skip_state",
    "scroll_indicator",
    "visible_range",
]
