"""
Insights dashboard facade.

Bundles the panel state machine, skip resolver and explanation builder
over one analysis snapshot and produces the view models the renderer
consumes. Input handlers call the navigation methods on `state`; every
view is re-derived from current state on demand.
"""

import logging
from typing import List, Optional, Sequence

from ..config import Settings
from ..core.graph import IssueGraph
from ..core.scores import ScoreLookup
from ..core.types import Insights, ScoreKind, TopPick
from .explain import ExplanationBuilder, ExplanationPayload, render_cycle_chain
from .panels import PANEL_INFO, Panel
from .scroll import scroll_indicator, visible_range
from .skip import resolve_skip_state
from .state import PanelStateMachine
from .view import (
    CYCLES_HEALTHY_DETAIL,
    CYCLES_HEALTHY_MESSAGE,
    NO_SELECTION_MESSAGE,
    PANEL_EMPTY_MESSAGE,
    PRIORITY_EMPTY_MESSAGE,
    DashboardView,
    DependencyLine,
    DetailView,
    MetricValue,
    PanelRow,
    PanelView,
    format_insight_value,
    format_metric_value,
)

logger = logging.getLogger(__name__)

# Scores listed in the detail panel, in display order
DETAIL_METRICS = (
    ("PageRank", ScoreKind.PAGERANK),
    ("Betweenness", ScoreKind.BETWEENNESS),
    ("Eigenvector", ScoreKind.EIGENVECTOR),
    ("Impact", ScoreKind.CRITICAL_PATH),
    ("Hub", ScoreKind.HUB),
    ("Authority", ScoreKind.AUTHORITY),
)


class InsightsDashboard:
    """
    One dashboard session over a graph and its analysis results.

    Usage:
        dashboard = InsightsDashboard(graph, result.insights, result.scores, result.top_picks)
        dashboard.state.move_selection_down()
        view = dashboard.view()
    """

    def __init__(
        self,
        graph: IssueGraph,
        insights: Insights,
        scores: Optional[ScoreLookup] = None,
        top_picks: Optional[Sequence[TopPick]] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or Settings()
        self.graph = graph
        self.scores = scores or ScoreLookup()
        self.state = PanelStateMachine(
            insights,
            top_picks,
            visible_rows=settings.visible_rows,
            show_explanations=settings.show_explanations,
            show_calculation=settings.show_calculation,
        )
        self.explainer = ExplanationBuilder(graph, self.scores)

    def refresh(
        self,
        graph: IssueGraph,
        insights: Insights,
        scores: ScoreLookup,
        top_picks: Sequence[TopPick],
    ) -> None:
        """Swap in a recomputed analysis snapshot."""
        logger.debug(f"Refreshing dashboard with {graph.issue_count} issues")
        self.graph = graph
        self.scores = scores
        self.explainer = ExplanationBuilder(graph, scores)
        self.state.refresh(insights, top_picks)

    # --- Panels ---

    def panel_view(self, panel: Panel) -> PanelView:
        info = PANEL_INFO[panel]
        state = self.state
        count = state.item_count(panel)
        skip = resolve_skip_state(panel, self.scores)

        view = PanelView(
            panel=panel,
            icon=info.icon,
            title=info.title,
            short_desc=info.short_desc,
            description=info.what_is if state.show_explanations else "",
            focused=panel is state.focused_panel,
            item_count=count,
            skipped=skip.skipped,
            skip_reason=skip.reason,
            skip_hint=skip.hint,
        )
        if skip.skipped:
            return view

        if count == 0:
            if panel is Panel.CYCLES:
                view.healthy = True
                view.empty_message = CYCLES_HEALTHY_MESSAGE
                view.empty_detail = CYCLES_HEALTHY_DETAIL
            elif panel is Panel.PRIORITY:
                view.empty_message = PRIORITY_EMPTY_MESSAGE
            else:
                view.empty_message = PANEL_EMPTY_MESSAGE
            return view

        selected = state.selected_index[panel]
        window = visible_range(state.scroll_offset[panel], state.visible_rows, count)
        view.rows = [self._row(panel, i, selected) for i in window]
        indicator = scroll_indicator(selected, count, state.visible_rows)
        if indicator and panel is Panel.PRIORITY:
            indicator = f"◀ {selected + 1}/{count} ▶"
        view.scroll_indicator = indicator
        return view

    def _row(self, panel: Panel, index: int, selected: int) -> PanelRow:
        is_selected = panel is self.state.focused_panel and index == selected

        if panel is Panel.CYCLES:
            cycle = self.state.insights.cycles[index]
            return PanelRow(
                index=index,
                id=cycle[0] if cycle else "",
                title=render_cycle_chain(cycle),
                value=float(len(cycle)),
                display_value=str(len(cycle)),
                selected=is_selected,
            )

        if panel is Panel.PRIORITY:
            pick = self.state.top_picks[index]
            return PanelRow(
                index=index,
                id=pick.id,
                title=pick.title,
                value=pick.score,
                display_value=f"{pick.score:.2f}",
                selected=is_selected,
                detail=f"unblocks {pick.unblocks_count}",
            )

        item = self.state.items_for(panel)[index]
        is_scored = panel is not Panel.ARTICULATION
        return PanelRow(
            index=index,
            id=item.id,
            title=self.graph.title_for(item.id),
            value=item.value if is_scored else None,
            display_value=format_insight_value(item.value) if is_scored else "",
            selected=is_selected,
        )

    def panel_views(self) -> List[PanelView]:
        return [self.panel_view(panel) for panel in Panel]

    # --- Detail ---

    def explanation(self, panel: Optional[Panel] = None) -> Optional[ExplanationPayload]:
        """Calculation proof for the selection in `panel` (default: focused)."""
        panel = panel or self.state.focused_panel
        issue_id = self.state.selected_id(panel)
        if issue_id is None:
            return None
        return self.explainer.build(
            panel,
            issue_id,
            cycle=self.state.selected_cycle() if panel is Panel.CYCLES else None,
            top_pick=self.state.selected_top_pick() if panel is Panel.PRIORITY else None,
        )

    def detail_view(self) -> DetailView:
        issue_id = self.state.selected_id()
        if issue_id is None:
            return DetailView(message=NO_SELECTION_MESSAGE)

        issue = self.graph.get_issue(issue_id)
        if issue is None:
            return DetailView(
                issue_id=issue_id,
                title=issue_id,
                message=f"Issue not found: {issue_id}",
            )

        detail = DetailView(
            issue_id=issue.id,
            found=True,
            title=issue.title,
            issue_type=issue.issue_type.value,
            status=issue.status.value,
            priority=issue.priority,
            description=issue.description,
            design=issue.design,
            acceptance_criteria=issue.acceptance_criteria,
            notes=issue.notes,
            assignee=issue.assignee,
            dependencies=[
                DependencyLine(
                    type=dep.type.value,
                    id=dep.depends_on_id,
                    title=self.graph.title_for(dep.depends_on_id),
                    found=self.graph.has_issue(dep.depends_on_id),
                )
                for dep in issue.dependencies
            ],
            metrics=[
                MetricValue(
                    name=name,
                    value=self.scores.score(kind, issue.id),
                    display=format_metric_value(self.scores.score(kind, issue.id)),
                )
                for name, kind in DETAIL_METRICS
            ],
            in_degree=self.graph.in_degree(issue.id),
            out_degree=self.graph.out_degree(issue.id),
        )
        if self.state.show_calculation:
            detail.explanation = self.explanation()
        return detail

    def view(self) -> DashboardView:
        return DashboardView(
            focused_panel=self.state.focused_panel,
            show_explanations=self.state.show_explanations,
            show_calculation=self.state.show_calculation,
            panels=self.panel_views(),
            detail=self.detail_view(),
        )
