"""
Panel State Machine.

Owns which panel has focus, the selected row of every panel and the scroll
offset of every panel. Every navigation operation leaves the selection of
the affected panel inside [0, count) (when the panel has rows) and inside
the current scroll window.
"""

import logging
from typing import Dict, List, Optional, Sequence, assert_never

from ..config import DEFAULT_VISIBLE_ROWS, MIN_VISIBLE_ROWS
from ..core.types import InsightItem, Insights, TopPick
from .panels import Panel
from .scroll import adjust_scroll_offset

logger = logging.getLogger(__name__)


class PanelStateMachine:
    """
    Focus, selection and scroll state for the ten panels.

    Features:
    - Circular focus cycling in panel order
    - Per-panel selection clamped to the panel's item count
    - Minimal-movement scrolling per panel
    - Independent explanation / calculation display flags
    - Full re-clamp when the backing collections are replaced
    """

    def __init__(
        self,
        insights: Optional[Insights] = None,
        top_picks: Optional[Sequence[TopPick]] = None,
        visible_rows: int = DEFAULT_VISIBLE_ROWS,
        show_explanations: bool = True,
        show_calculation: bool = True,
    ):
        self.focused_panel: Panel = Panel.BOTTLENECKS
        self.selected_index: Dict[Panel, int] = {panel: 0 for panel in Panel}
        self.scroll_offset: Dict[Panel, int] = {panel: 0 for panel in Panel}
        self.show_explanations = show_explanations
        self.show_calculation = show_calculation
        self.visible_rows = max(visible_rows, MIN_VISIBLE_ROWS)

        self._insights = insights or Insights()
        self._top_picks: List[TopPick] = list(top_picks or [])

    # --- Backing collections ---

    @property
    def insights(self) -> Insights:
        return self._insights

    @property
    def top_picks(self) -> List[TopPick]:
        return self._top_picks

    def refresh(self, insights: Insights, top_picks: Sequence[TopPick]) -> None:
        """
        Replace the backing collections and re-clamp every panel.

        Indices of panels that became empty keep their value; they are
        never dereferenced while the count is zero.
        """
        self._insights = insights
        self._top_picks = list(top_picks)

        for panel in Panel:
            count = self.item_count(panel)
            if count > 0 and self.selected_index[panel] >= count:
                logger.debug(
                    f"Clamping {panel} selection {self.selected_index[panel]} -> {count - 1}"
                )
                self.selected_index[panel] = count - 1
            self._ensure_visible(panel)

    def item_count(self, panel: Panel) -> int:
        """Number of addressable rows in `panel`. Used by every bounds check."""
        match panel:
            case Panel.CYCLES:
                return len(self._insights.cycles)
            case Panel.PRIORITY:
                return len(self._top_picks)
            case Panel.ARTICULATION:
                return len(self._insights.articulation)
            case _:
                return len(self._scored_items(panel))

    def _scored_items(self, panel: Panel) -> List[InsightItem]:
        """The Insights list backing a scored panel; empty for the others."""
        match panel:
            case Panel.BOTTLENECKS:
                return self._insights.bottlenecks
            case Panel.KEYSTONES:
                return self._insights.keystones
            case Panel.INFLUENCERS:
                return self._insights.influencers
            case Panel.HUBS:
                return self._insights.hubs
            case Panel.AUTHORITIES:
                return self._insights.authorities
            case Panel.CORES:
                return self._insights.cores
            case Panel.SLACK:
                return self._insights.slack
            case Panel.ARTICULATION | Panel.CYCLES | Panel.PRIORITY:
                return []
            case _:
                assert_never(panel)

    def items_for(self, panel: Panel) -> List[InsightItem]:
        """
        Rows of a scored panel as InsightItems.

        Cut points carry no score and are reported with value 0. Cycles and
        Priority rows are not InsightItems; use `selected_cycle` / `selected_top_pick`.
        """
        if panel is Panel.ARTICULATION:
            return [InsightItem(id=issue_id, value=0.0) for issue_id in self._insights.articulation]
        return list(self._scored_items(panel))

    # --- Focus ---

    def focus_next(self) -> None:
        self.focused_panel = self.focused_panel.next()

    def focus_previous(self) -> None:
        self.focused_panel = self.focused_panel.previous()

    def focus(self, panel: Panel) -> None:
        self.focused_panel = panel

    # --- Selection ---

    def move_selection_up(self) -> None:
        panel = self.focused_panel
        if self.item_count(panel) == 0:
            return
        if self.selected_index[panel] > 0:
            self.selected_index[panel] -= 1
        self._ensure_visible(panel)

    def move_selection_down(self) -> None:
        panel = self.focused_panel
        count = self.item_count(panel)
        if count == 0:
            return
        if self.selected_index[panel] < count - 1:
            self.selected_index[panel] += 1
        self._ensure_visible(panel)

    def select(self, index: int, panel: Optional[Panel] = None) -> None:
        """Jump to `index` in `panel` (default: focused), clamped to its rows."""
        panel = panel or self.focused_panel
        count = self.item_count(panel)
        if count == 0:
            return
        self.selected_index[panel] = min(max(index, 0), count - 1)
        self._ensure_visible(panel)

    # --- Display flags ---

    def toggle_explanations(self) -> None:
        self.show_explanations = not self.show_explanations

    def toggle_calculation_detail(self) -> None:
        self.show_calculation = not self.show_calculation

    def set_visible_rows(self, rows: int) -> None:
        """Apply a new viewport height and re-fit every panel's window."""
        self.visible_rows = max(rows, MIN_VISIBLE_ROWS)
        for panel in Panel:
            self._ensure_visible(panel)

    def _ensure_visible(self, panel: Panel) -> None:
        self.scroll_offset[panel] = adjust_scroll_offset(
            self.selected_index[panel],
            self.scroll_offset[panel],
            self.visible_rows,
            self.item_count(panel),
        )

    # --- Selection lookups ---

    def _valid_index(self, panel: Panel) -> Optional[int]:
        index = self.selected_index[panel]
        if 0 <= index < self.item_count(panel):
            return index
        return None

    def selected_id(self, panel: Optional[Panel] = None) -> Optional[str]:
        """
        Issue id under the cursor in `panel` (default: focused).

        Cycles report the first member of the selected cycle. Returns None
        when the panel has no rows.
        """
        panel = panel or self.focused_panel
        index = self._valid_index(panel)
        if index is None:
            return None

        match panel:
            case Panel.CYCLES:
                cycle = self._insights.cycles[index]
                return cycle[0] if cycle else None
            case Panel.PRIORITY:
                return self._top_picks[index].id
            case Panel.ARTICULATION:
                return self._insights.articulation[index]
            case _:
                return self._scored_items(panel)[index].id

    def selected_cycle(self) -> Optional[List[str]]:
        index = self._valid_index(Panel.CYCLES)
        if index is None:
            return None
        return list(self._insights.cycles[index])

    def selected_top_pick(self) -> Optional[TopPick]:
        index = self._valid_index(Panel.PRIORITY)
        if index is None:
            return None
        return self._top_picks[index]

    def selected_item(self, panel: Optional[Panel] = None) -> Optional[InsightItem]:
        panel = panel or self.focused_panel
        index = self._valid_index(panel)
        if index is None:
            return None
        items = self.items_for(panel)
        return items[index] if index < len(items) else None
