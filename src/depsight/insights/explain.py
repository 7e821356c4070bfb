"""
Drill-Down Explanation Builder.

Reconstructs the small piece of the dependency graph that justifies the
score of a selected issue (its "calculation proof"):

- Bottlenecks: who depends on the issue and what it depends on
- Keystones: the deepest dependency chain below the issue
- Influencers: neighbors ranked by eigenvector score
- Hubs / Authorities: ranked authority / hub scores of dependencies /
  dependents, with the sum over the whole set
- Cycles: cycle members with the closing edge marked

Graph walks run live against the IssueGraph on every request. Every
payload ends with the panel's usage guidance.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ..config import MAX_CHAIN_STEPS, MAX_EXPLANATION_ENTRIES
from ..core.graph import IssueGraph
from ..core.scores import ScoreLookup
from ..core.types import ScoreKind, TopPick
from .panels import PANEL_INFO, PANEL_SCORE, Panel
from .ranking import ScoredItem, cap, rank_by_score

CYCLE_EDGE = "→"
CYCLE_CLOSE = "↺"


class ExplanationEntry(BaseModel):
    """One referenced issue inside an explanation section."""
    id: str
    title: str
    score: float | None = None
    marker: str = ""
    depth: int = 0


class ExplanationSection(BaseModel):
    """A headed list of entries, capped for display."""
    heading: str
    entries: List[ExplanationEntry] = Field(default_factory=list)
    total_count: int = 0
    hidden_count: int = 0
    continues: bool = False
    score_sum: float | None = None
    sum_label: str = ""
    note: str = ""


class ExplanationPayload(BaseModel):
    """Everything the renderer needs for the calculation proof of one issue."""
    panel: Panel
    issue_id: str
    title: str
    found: bool
    score_label: str = ""
    score: float | None = None
    formula_hint: str = ""
    sections: List[ExplanationSection] = Field(default_factory=list)
    summary: List[str] = Field(default_factory=list)
    guidance: str


def render_cycle_chain(cycle: Sequence[str]) -> str:
    """
    Render a cycle as a closed chain.

    Example:
        >>> render_cycle_chain(["X", "Y", "Z"])
        'X → Y → Z → X'
    """
    if not cycle:
        return ""
    return f" {CYCLE_EDGE} ".join([*cycle, cycle[0]])


class ExplanationBuilder:
    """
    Builds ExplanationPayloads from the issue graph and metric scores.

    Never raises for unknown ids: they are shown with the raw id as title.
    """

    def __init__(self, graph: IssueGraph, scores: ScoreLookup):
        self.graph = graph
        self.scores = scores

    # --- Graph walks ---

    def dependents(self, issue_id: str) -> List[str]:
        """Issues whose dependency list targets `issue_id`, sorted by id."""
        return self.graph.dependents_of(issue_id)

    def dependencies(self, issue_id: str) -> List[str]:
        """Dependency targets of `issue_id`, in stored order."""
        return self.graph.dependencies_of(issue_id)

    def build_impact_chain(self, start_id: str, max_depth: int) -> List[str]:
        """
        Follow the highest-impact dependency from `start_id`.

        The chain holds at most `max_depth` ids and never repeats one. At
        each step the dependency with the highest critical-path score wins;
        ties go to the first one in stored order.
        """
        chain: List[str] = []
        if max_depth <= 0:
            return chain

        visited = set()
        current: Optional[str] = start_id
        while current is not None and len(chain) < max_depth and current not in visited:
            visited.add(current)
            chain.append(current)

            best_id: Optional[str] = None
            best_score = float("-inf")
            for dep_id in self.dependencies(current):
                score = self.scores.score(ScoreKind.CRITICAL_PATH, dep_id)
                if score > best_score:
                    best_id, best_score = dep_id, score
            current = best_id

        return chain

    def neighbors_with_scores(self, issue_id: str, kind: ScoreKind) -> List[ScoredItem]:
        """Dependents then dependencies, de-duplicated and ranked by `kind`."""
        score_map = self.scores.neighbor_score_map(kind)
        seen = set()
        items = []
        for neighbor_id in [*self.dependents(issue_id), *self.dependencies(issue_id)]:
            if neighbor_id in seen:
                continue
            seen.add(neighbor_id)
            items.append(ScoredItem(neighbor_id, score_map.get(neighbor_id, 0.0)))
        return rank_by_score(items)

    def dependencies_with_scores(self, issue_id: str, kind: ScoreKind) -> List[ScoredItem]:
        score_map = self.scores.neighbor_score_map(kind)
        return rank_by_score(
            ScoredItem(dep_id, score_map.get(dep_id, 0.0)) for dep_id in self.dependencies(issue_id)
        )

    def dependents_with_scores(self, issue_id: str, kind: ScoreKind) -> List[ScoredItem]:
        score_map = self.scores.neighbor_score_map(kind)
        return rank_by_score(
            ScoredItem(dep_id, score_map.get(dep_id, 0.0)) for dep_id in self.dependents(issue_id)
        )

    # --- Sections ---

    def _entry(self, issue_id: str, score: float | None = None, marker: str = "", depth: int = 0):
        return ExplanationEntry(
            id=issue_id,
            title=self.graph.title_for(issue_id),
            score=score,
            marker=marker,
            depth=depth,
        )

    def _id_section(self, heading: str, ids: Sequence[str], marker: str) -> ExplanationSection:
        shown, hidden = cap(ids, MAX_EXPLANATION_ENTRIES)
        return ExplanationSection(
            heading=heading,
            entries=[self._entry(i, marker=marker) for i in shown],
            total_count=len(ids),
            hidden_count=hidden,
        )

    def _scored_section(
        self,
        heading: str,
        items: Sequence[ScoredItem],
        marker: str,
        sum_label: str = "",
    ) -> ExplanationSection:
        shown, hidden = cap(items, MAX_EXPLANATION_ENTRIES)
        section = ExplanationSection(
            heading=heading,
            entries=[self._entry(item.id, score=item.score, marker=marker) for item in shown],
            total_count=len(items),
            hidden_count=hidden,
        )
        if sum_label:
            # Evidence covers every item, not only the displayed ones
            section.score_sum = sum(item.score for item in items)
            section.sum_label = sum_label
        return section

    def _bottleneck_sections(self, issue_id: str) -> List[ExplanationSection]:
        sections = []
        upstream = self.dependents(issue_id)
        downstream = self.dependencies(issue_id)
        if upstream:
            sections.append(self._id_section(
                f"Issues depending on this ({len(upstream)})", upstream, "↓"))
        if downstream:
            sections.append(self._id_section(
                f"This depends on ({len(downstream)})", downstream, "↑"))
        return sections

    def _keystone_sections(self, issue_id: str) -> List[ExplanationSection]:
        impact = self.scores.score(ScoreKind.CRITICAL_PATH, issue_id)
        chain = self.build_impact_chain(issue_id, int(impact))
        if not chain:
            return []
        shown, hidden = cap(chain, MAX_CHAIN_STEPS)
        return [ExplanationSection(
            heading="Dependency chain",
            entries=[self._entry(step, marker="└─", depth=i) for i, step in enumerate(shown)],
            total_count=len(chain),
            hidden_count=hidden,
            continues=hidden > 0,
        )]

    def _cycle_sections(self, cycle: Sequence[str]) -> List[ExplanationSection]:
        if not cycle:
            return []
        last = len(cycle) - 1
        entries = [
            self._entry(member, marker=CYCLE_CLOSE if i == last else CYCLE_EDGE)
            for i, member in enumerate(cycle)
        ]
        return [ExplanationSection(
            heading=f"Cycle with {len(cycle)} issues",
            entries=entries,
            total_count=len(cycle),
            note=render_cycle_chain(cycle),
        )]

    @staticmethod
    def _priority_summary(pick: TopPick) -> List[str]:
        lines = [f"Unblocks {pick.unblocks_count} item(s)"]
        lines.extend(pick.reasons)
        return lines

    # --- Entry point ---

    def build(
        self,
        panel: Panel,
        issue_id: str,
        cycle: Optional[Sequence[str]] = None,
        top_pick: Optional[TopPick] = None,
    ) -> ExplanationPayload:
        """
        Build the explanation for `issue_id` as shown on `panel`.

        `cycle` is the selected cycle for the Cycles panel; `top_pick` is
        the selected recommendation for the Priority panel.
        """
        info = PANEL_INFO[panel]
        payload = ExplanationPayload(
            panel=panel,
            issue_id=issue_id,
            title=self.graph.title_for(issue_id),
            found=self.graph.has_issue(issue_id),
            score_label=info.short_desc,
            formula_hint=info.formula_hint,
            guidance=info.how_to_use,
        )

        kind = PANEL_SCORE.get(panel)
        if kind is not None:
            payload.score = self.scores.score(kind, issue_id)

        if panel is Panel.BOTTLENECKS:
            payload.sections = self._bottleneck_sections(issue_id)
            payload.summary = [
                "Lies on many shortest paths between other issues, "
                "making it a critical junction in the dependency graph."
            ]
        elif panel is Panel.KEYSTONES:
            payload.sections = self._keystone_sections(issue_id)
        elif panel is Panel.INFLUENCERS:
            neighbors = self.neighbors_with_scores(issue_id, ScoreKind.EIGENVECTOR)
            if neighbors:
                payload.sections = [
                    self._scored_section("Connected to influential issues", neighbors, "•")
                ]
            payload.summary = ["Score reflects connections to other well-connected issues."]
        elif panel is Panel.HUBS:
            deps = self.dependencies_with_scores(issue_id, ScoreKind.AUTHORITY)
            if deps:
                payload.sections = [self._scored_section(
                    "Depends on these authorities", deps, "→",
                    sum_label=f"Sum of {len(deps)} authority scores",
                )]
        elif panel is Panel.AUTHORITIES:
            dependents = self.dependents_with_scores(issue_id, ScoreKind.HUB)
            if dependents:
                payload.sections = [self._scored_section(
                    "Hubs that depend on this", dependents, "←",
                    sum_label=f"Sum of {len(dependents)} hub scores",
                )]
        elif panel is Panel.CYCLES:
            payload.sections = self._cycle_sections(cycle or [])
            if cycle:
                payload.summary = [
                    "These issues form a circular dependency. "
                    "Break the cycle by removing or reversing one edge."
                ]
        elif panel is Panel.PRIORITY and top_pick is not None:
            payload.score = top_pick.score
            payload.summary = self._priority_summary(top_pick)

        return payload

