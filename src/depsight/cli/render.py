"""
Rich rendering of dashboard views.

Turns the pydantic view models from `depsight.insights` into rich
renderables. Panels flow in columns, followed by the detail panel.
"""

from typing import Dict, List

from rich import box
from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel as RichPanel
from rich.table import Table
from rich.text import Text

from ..core.types import MetricFamily, MetricRunState, MetricRunStatus
from ..insights.explain import ExplanationPayload
from ..insights.view import DashboardView, DetailView, PanelView, format_metric_value

PANEL_WIDTH = 44

_STATE_STYLES = {
    MetricRunState.COMPUTED: "green",
    MetricRunState.SKIPPED: "yellow",
    MetricRunState.TIMED_OUT: "red",
}


def render_panel(view: PanelView) -> RichPanel:
    border = "cyan" if view.focused else "blue"
    if view.skipped:
        border = "grey50"
        header = f"{view.icon} {view.title} [Skipped]"
    else:
        header = f"{view.icon} {view.title} ({view.item_count})"

    body = Text()
    body.append(f"{view.short_desc}\n", style="italic dim")
    if view.description:
        body.append(f"{view.description}\n")
    body.append("\n")

    if view.skipped:
        body.append(f"{view.skip_reason}\n\n", style="italic dim")
        body.append(view.skip_hint, style="italic dim")
    elif not view.rows:
        body.append(view.empty_message, style="bold green" if view.healthy else "dim")
        if view.empty_detail:
            body.append(f"\n{view.empty_detail}", style="dim")
    else:
        for row in view.rows:
            pointer = "▸ " if row.selected else "  "
            body.append(pointer, style="bold cyan")
            if row.display_value:
                body.append(f"{row.display_value:>8} ", style="magenta")
            body.append(row.title, style="bold cyan" if row.selected else "")
            if row.detail:
                body.append(f"  {row.detail}", style="dim")
            body.append("\n")
        if view.scroll_indicator:
            body.append(view.scroll_indicator, style="dim")

    title_style = "grey50" if view.skipped else ("bold cyan" if view.focused else "bold blue")
    return RichPanel(
        body,
        title=Text(header, style=title_style),
        title_align="left",
        border_style=border,
        box=box.ROUNDED,
        width=PANEL_WIDTH,
    )


def render_explanation(payload: ExplanationPayload) -> RenderableType:
    text = Text()
    text.append("─── CALCULATION PROOF ───\n", style="bold cyan")
    text.append(f"{payload.formula_hint}\n\n", style="italic blue")

    if payload.score is not None:
        text.append(f"{payload.score_label}: ", style="blue")
        text.append(f"{format_metric_value(payload.score)}\n\n", style="bold cyan")

    for section in payload.sections:
        text.append(f"{section.heading}:\n", style="blue")
        for entry in section.entries:
            indent = "  " * (entry.depth + 1)
            text.append(f"{indent}{entry.marker} {entry.title}")
            if entry.score is not None:
                text.append(f" ({format_metric_value(entry.score)})", style="dim")
            text.append("\n")
        if section.continues:
            text.append("   ... chain continues\n", style="dim")
        elif section.hidden_count:
            text.append(f"  ... +{section.hidden_count} more\n", style="dim")
        if section.score_sum is not None:
            text.append(f"\n{section.sum_label}: {format_metric_value(section.score_sum)}\n", style="dim")
        if section.note:
            text.append(f"\n{section.note}\n", style="bold")
        text.append("\n")

    for line in payload.summary:
        text.append(f"{line}\n", style="dim")
    text.append(f"\n{payload.guidance}", style="dim")
    return text


def render_detail(detail: DetailView) -> RichPanel:
    if not detail.found:
        body: RenderableType = Text(detail.message, style="italic dim")
        return RichPanel(body, title="Details", border_style="cyan", box=box.ROUNDED)

    text = Text()
    text.append(f"{detail.issue_type}  ", style="bold")
    text.append(f"{detail.status.upper()}  ", style="bold green")
    text.append(f"P{detail.priority}\n", style="bold")
    text.append(f"{detail.issue_id}\n\n", style="dim")
    text.append("TITLE\n", style="bold cyan")
    text.append(f"{detail.title}\n\n", style="bold")

    for heading, value in (
        ("DESCRIPTION", detail.description),
        ("DESIGN", detail.design),
        ("ACCEPTANCE CRITERIA", detail.acceptance_criteria),
        ("NOTES", detail.notes),
    ):
        if value:
            text.append(f"{heading}\n", style="bold cyan")
            text.append(f"{value}\n\n")

    if detail.assignee:
        text.append("Assignee: ", style="blue")
        text.append(f"@{detail.assignee}\n\n")

    if detail.dependencies:
        text.append(f"DEPENDENCIES ({len(detail.dependencies)})\n", style="bold cyan")
        for dep in detail.dependencies:
            text.append(f"  • {dep.type}: {dep.title}\n", style="" if dep.found else "dim")
        text.append("\n")

    text.append("─── METRICS ───\n", style="bold cyan")
    for metric in detail.metrics:
        text.append(f"{metric.name + ':':<13}", style="blue")
        text.append(f"{metric.display}  ", style="bold cyan")
    text.append("\n")
    text.append("In: ", style="blue")
    text.append(str(detail.in_degree), style="bold cyan")
    text.append(" ← ", style="dim")
    text.append("Out: ", style="blue")
    text.append(str(detail.out_degree), style="bold cyan")
    text.append(" →\n\n", style="dim")

    parts: List[RenderableType] = [text]
    if detail.explanation is not None:
        parts.append(render_explanation(detail.explanation))
    return RichPanel(Group(*parts), title="Details", border_style="cyan", box=box.ROUNDED)


def render_dashboard(view: DashboardView) -> RenderableType:
    panels = [render_panel(panel) for panel in view.panels]
    flags = Text(
        f"explanations: {'on' if view.show_explanations else 'off'}   "
        f"calculation: {'on' if view.show_calculation else 'off'}",
        style="dim",
    )
    return Group(Columns(panels), render_detail(view.detail), flags)


def status_table(statuses: Dict[MetricFamily, MetricRunStatus]) -> Table:
    table = Table(title="Metric Run Status", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", style="bold")
    table.add_column("State")
    table.add_column("Time", justify="right")
    table.add_column("Reason", style="dim")

    for family in MetricFamily:
        status = statuses.get(family)
        if status is None:
            table.add_row(family.value, Text("unknown", style="dim"), "-", "")
            continue
        elapsed = f"{status.elapsed_ms:.1f}ms" if status.elapsed_ms is not None else "-"
        table.add_row(
            family.value,
            Text(status.state.value, style=_STATE_STYLES[status.state]),
            elapsed,
            status.reason,
        )
    return table
