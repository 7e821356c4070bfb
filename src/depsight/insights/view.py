"""
Renderer-facing view models.

These are plain data snapshots produced by InsightsDashboard. They carry
no styling; the CLI turns them into rich output or JSON.
"""

from typing import List

from pydantic import BaseModel, Field

from .explain import ExplanationPayload
from .panels import Panel

CYCLES_HEALTHY_MESSAGE = "✓ No cycles detected"
CYCLES_HEALTHY_DETAIL = "Graph is acyclic (DAG)"
PRIORITY_EMPTY_MESSAGE = (
    "No priority recommendations available. Run 'depsight insights' "
    "after adding open issues to generate them."
)
PANEL_EMPTY_MESSAGE = "No data"
NO_SELECTION_MESSAGE = "Select an issue to view details"


def format_metric_value(value: float) -> str:
    """
    Compact metric formatting used in the detail and proof views.

    Example:
        >>> format_metric_value(123.4)
        '123'
        >>> format_metric_value(0.0042)
        '4.20e-03'
    """
    if value >= 100:
        return f"{value:.0f}"
    if value >= 1.0:
        return f"{value:.2f}"
    if value >= 0.01:
        return f"{value:.3f}"
    if value > 0:
        return f"{value:.2e}"
    return "0"


def format_insight_value(value: float) -> str:
    """Row badge formatting for panel lists."""
    if value >= 1.0:
        return f"{value:.1f}"
    if value >= 0.01:
        return f"{value:.3f}"
    return f"{value:.2e}"


class PanelRow(BaseModel):
    index: int
    id: str
    title: str
    value: float | None = None
    display_value: str = ""
    selected: bool = False
    detail: str = ""


class PanelView(BaseModel):
    """One panel as the renderer sees it."""
    panel: Panel
    icon: str
    title: str
    short_desc: str
    description: str = ""
    focused: bool = False
    item_count: int = 0
    skipped: bool = False
    skip_reason: str = ""
    skip_hint: str = ""
    rows: List[PanelRow] = Field(default_factory=list)
    scroll_indicator: str | None = None
    healthy: bool = False
    empty_message: str = ""
    empty_detail: str = ""


class DependencyLine(BaseModel):
    type: str
    id: str
    title: str
    found: bool


class MetricValue(BaseModel):
    name: str
    value: float
    display: str


class DetailView(BaseModel):
    """Detail panel for the issue under the cursor."""
    issue_id: str | None = None
    found: bool = False
    message: str = ""
    title: str = ""
    issue_type: str = ""
    status: str = ""
    priority: int | None = None
    description: str = ""
    design: str = ""
    acceptance_criteria: str = ""
    notes: str = ""
    assignee: str | None = None
    dependencies: List[DependencyLine] = Field(default_factory=list)
    metrics: List[MetricValue] = Field(default_factory=list)
    in_degree: int = 0
    out_degree: int = 0
    explanation: ExplanationPayload | None = None


class DashboardView(BaseModel):
    focused_panel: Panel
    show_explanations: bool
    show_calculation: bool
    panels: List[PanelView]
    detail: DetailView
