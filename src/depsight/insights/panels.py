"""
Panel definitions.

The ten panels form a closed, ordered set. Definition order is the focus
cycling order. PANEL_INFO is the static descriptive metadata the renderer
shows alongside each panel.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Optional

from ..core.exceptions import UnknownPanelError
from ..core.types import MetricFamily, ScoreKind


class Panel(StrEnum):
    """Metric panels, in focus order."""
    BOTTLENECKS = "bottlenecks"
    KEYSTONES = "keystones"
    INFLUENCERS = "influencers"
    HUBS = "hubs"
    AUTHORITIES = "authorities"
    CORES = "cores"
    ARTICULATION = "articulation"
    SLACK = "slack"
    CYCLES = "cycles"
    PRIORITY = "priority"

    def next(self) -> "Panel":
        order = list(Panel)
        return order[(order.index(self) + 1) % len(order)]

    def previous(self) -> "Panel":
        order = list(Panel)
        return order[(order.index(self) - 1) % len(order)]


@dataclass(frozen=True)
class PanelInfo:
    icon: str
    title: str
    short_desc: str
    what_is: str
    why_useful: str
    how_to_use: str
    formula_hint: str


PANEL_INFO: Dict[Panel, PanelInfo] = {
    Panel.BOTTLENECKS: PanelInfo(
        icon="🚧",
        title="Bottlenecks",
        short_desc="Betweenness Centrality",
        what_is="How often an issue sits on the shortest paths between other issues.",
        why_useful="High scorers are junctions; a delay here ripples into many workstreams.",
        how_to_use="Prioritize these to unblock parallel work, or split them into smaller pieces.",
        formula_hint="BW(v) = Σ (σst(v) / σst) for all s≠v≠t",
    ),
    Panel.KEYSTONES: PanelInfo(
        icon="🏛️",
        title="Keystones",
        short_desc="Impact Depth",
        what_is="Length of the longest dependency chain hanging below an issue.",
        why_useful="Keystones sit on deep chains; the work above them waits on everything below.",
        how_to_use="Start the chain early. A stalled keystone stalls every level above it.",
        formula_hint="Impact(v) = 1 + max(Impact(d)) for all d that v depends on",
    ),
    Panel.INFLUENCERS: PanelInfo(
        icon="🌐",
        title="Influencers",
        short_desc="Eigenvector Centrality",
        what_is="Scores issues by how well connected their neighbors are.",
        why_useful="Influencers touch other important issues, so changes spread widely.",
        how_to_use="Review changes here carefully; they are central to the project structure.",
        formula_hint="EV(v) = (1/λ) × Σ A[v,u] × EV(u)",
    ),
    Panel.HUBS: PanelInfo(
        icon="🛰️",
        title="Hubs",
        short_desc="HITS Hub Score",
        what_is="Issues that depend on many important authorities.",
        why_useful="Hubs aggregate dependencies and often stand for features or epics.",
        how_to_use="Track these as milestones; finishing one signals broad progress.",
        formula_hint="Hub(v) = Σ Authority(u) for all u where v→u",
    ),
    Panel.AUTHORITIES: PanelInfo(
        icon="📚",
        title="Authorities",
        short_desc="HITS Authority Score",
        what_is="Issues depended upon by many important hubs.",
        why_useful="Authorities are foundations that many features need.",
        how_to_use="Stabilize these early; breaking one breaks the hubs above it.",
        formula_hint="Auth(v) = Σ Hub(u) for all u where u→v",
    ),
    Panel.CORES: PanelInfo(
        icon="🧠",
        title="Cores",
        short_desc="k-core Cohesion",
        what_is="Highest k-core numbers: issues embedded in dense clusters.",
        why_useful="Changes to high-core issues ripple through a tightly knit neighborhood.",
        how_to_use="Use for resilience checks and when pulling apart tightly coupled areas.",
        formula_hint="Max k such that the issue survives k-core peeling",
    ),
    Panel.ARTICULATION: PanelInfo(
        icon="🪢",
        title="Cut Points",
        short_desc="Articulation Vertices",
        what_is="Issues whose removal disconnects the undirected dependency graph.",
        why_useful="Single points of failure that can isolate whole workstreams.",
        how_to_use="Harden or split these, and avoid piling new dependencies onto them.",
        formula_hint="Tarjan articulation detection on the undirected view",
    ),
    Panel.SLACK: PanelInfo(
        icon="⏳",
        title="Slack",
        short_desc="Longest-path Slack",
        what_is="Distance from the critical chain (0 = on the critical path).",
        why_useful="Zero-slack issues set the schedule; high-slack issues can fill gaps.",
        how_to_use="Schedule zero-slack work first; pick high-slack work while waiting on blockers.",
        formula_hint="Slack(v) = max_path_len - dist_start(v) - dist_end(v)",
    ),
    Panel.CYCLES: PanelInfo(
        icon="🔄",
        title="Cycles",
        short_desc="Circular Dependencies",
        what_is="Groups of issues that depend on each other in a loop (A→B→C→A).",
        why_useful="Cycles are structural defects; their members cannot be finished in order.",
        how_to_use="Break the loop by removing or reversing one dependency.",
        formula_hint="Elementary cycle enumeration over the dependency graph",
    ),
    Panel.PRIORITY: PanelInfo(
        icon="🎯",
        title="Priority",
        short_desc="Triage Recommendations",
        what_is="Recommendations combining several graph signals into actionable picks.",
        why_useful="Answers 'what should I work on next?' in one list.",
        how_to_use="Work top to bottom. Higher scores mean more impact; check the unblocks count.",
        formula_hint="Score = Σ weighted(PageRank, Betweenness, Unblocks, Priority)",
    ),
}

# Metric family whose run status decides whether a panel is skipped.
# Panels absent here are never skipped.
PANEL_FAMILY: Dict[Panel, MetricFamily] = {
    Panel.BOTTLENECKS: MetricFamily.BETWEENNESS,
    Panel.KEYSTONES: MetricFamily.CRITICAL_PATH,
    Panel.INFLUENCERS: MetricFamily.EIGENVECTOR,
    Panel.HUBS: MetricFamily.HITS,
    Panel.AUTHORITIES: MetricFamily.HITS,
    Panel.SLACK: MetricFamily.CRITICAL_PATH,
    Panel.CYCLES: MetricFamily.CYCLES,
}

# Score series shown as the headline value of a panel's selected issue
PANEL_SCORE: Dict[Panel, ScoreKind] = {
    Panel.BOTTLENECKS: ScoreKind.BETWEENNESS,
    Panel.KEYSTONES: ScoreKind.CRITICAL_PATH,
    Panel.INFLUENCERS: ScoreKind.EIGENVECTOR,
    Panel.HUBS: ScoreKind.HUB,
    Panel.AUTHORITIES: ScoreKind.AUTHORITY,
    Panel.CORES: ScoreKind.CORE,
    Panel.SLACK: ScoreKind.SLACK,
}

_ALIASES = {
    "cut-points": Panel.ARTICULATION,
    "cutpoints": Panel.ARTICULATION,
    "triage": Panel.PRIORITY,
}


def parse_panel(name: str) -> Panel:
    """
    Resolve a panel from its value, member name or alias (case-insensitive).

    Raises:
        UnknownPanelError: If nothing matches.
    """
    key = name.strip().lower().replace("_", "-")
    for panel in Panel:
        if key in (panel.value, panel.name.lower().replace("_", "-")):
            return panel
    alias: Optional[Panel] = _ALIASES.get(key)
    if alias is None:
        raise UnknownPanelError(name)
    return alias
