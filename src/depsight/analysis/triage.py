"""
Priority triage.

Combines several signals into a single "what should I work on next"
score for every actionable issue. An issue is actionable when it is not
closed and none of its blocking dependencies are still open.
"""

from typing import Dict, List

from ..core.graph import IssueGraph
from ..core.scores import ScoreLookup
from ..core.types import Issue, ScoreKind, TopPick

# Signal weights, summing to 1.0
WEIGHTS: Dict[str, float] = {
    "pagerank": 0.30,
    "betweenness": 0.25,
    "unblocks": 0.25,
    "priority": 0.20,
}

# Priority 0 is most urgent; anything at or past this reads as zero urgency
LOWEST_PRIORITY = 4


def _normalize(values: Dict[str, float]) -> Dict[str, float]:
    peak = max(values.values(), default=0.0)
    if peak <= 0:
        return {k: 0.0 for k in values}
    return {k: v / peak for k, v in values.items()}


def _open_blockers(graph: IssueGraph, issue: Issue) -> List[str]:
    blockers = []
    for dep_id in issue.blocking_dependency_ids():
        dep = graph.get_issue(dep_id)
        if dep is not None and not dep.status.is_closed:
            blockers.append(dep_id)
    return blockers


def unblocks_count(graph: IssueGraph, issue_id: str) -> int:
    """
    Count open dependents for which `issue_id` is the only open blocker.
    """
    count = 0
    for dependent_id in graph.dependents_of(issue_id):
        dependent = graph.get_issue(dependent_id)
        if dependent is None or dependent.status.is_closed:
            continue
        if _open_blockers(graph, dependent) == [issue_id]:
            count += 1
    return count


def is_actionable(graph: IssueGraph, issue: Issue) -> bool:
    return not issue.status.is_closed and not _open_blockers(graph, issue)


def compute_top_picks(graph: IssueGraph, scores: ScoreLookup, limit: int) -> List[TopPick]:
    """
    Rank actionable issues and return the best `limit` as TopPicks.

    Ordering is by score descending, then id ascending.
    """
    if limit <= 0:
        return []

    actionable = [issue for issue in graph.iter_issues() if is_actionable(graph, issue)]
    if not actionable:
        return []

    ids = [issue.id for issue in actionable]
    pagerank = _normalize({i: scores.score(ScoreKind.PAGERANK, i) for i in ids})
    betweenness = _normalize({i: scores.score(ScoreKind.BETWEENNESS, i) for i in ids})
    unblocks = {i: unblocks_count(graph, i) for i in ids}
    unblocks_norm = _normalize({i: float(n) for i, n in unblocks.items()})

    picks = []
    for issue in actionable:
        urgency = max(0, LOWEST_PRIORITY - issue.priority) / LOWEST_PRIORITY
        score = (
            WEIGHTS["pagerank"] * pagerank[issue.id]
            + WEIGHTS["betweenness"] * betweenness[issue.id]
            + WEIGHTS["unblocks"] * unblocks_norm[issue.id]
            + WEIGHTS["priority"] * urgency
        )

        reasons = []
        if unblocks[issue.id] > 0:
            noun = "item" if unblocks[issue.id] == 1 else "items"
            reasons.append(f"Unblocks {unblocks[issue.id]} {noun}")
        if pagerank[issue.id] >= 0.5:
            reasons.append("High centrality in dependency graph")
        if betweenness[issue.id] >= 0.5:
            reasons.append("Bottleneck on many dependency paths")
        if issue.priority <= 1:
            reasons.append(f"High priority (P{issue.priority})")
        if not reasons:
            reasons.append("Ready to start: no open blockers")

        picks.append(TopPick(
            id=issue.id,
            title=issue.title,
            score=round(score, 4),
            unblocks_count=unblocks[issue.id],
            reasons=reasons,
        ))

    picks.sort(key=lambda p: (-p.score, p.id))
    return picks[:limit]
