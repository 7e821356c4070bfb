"""
Issue dependency graph backed by NetworkX.

Edges point from an issue to the issues it depends on (A -> B means B
must complete before A). The DiGraph keeps both adjacency directions,
so "who depends on X" is answered from the reverse index instead of a
scan over every issue.

Dependency targets missing from the issue set are kept as placeholder
nodes so reverse lookups still work for them; they carry no Issue.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, Iterator, List, Optional

import networkx as nx

from .types import Issue, IssueStatus


class IssueGraph:
    """
    Read-mostly accessor over a set of issues and their dependency edges.

    Features:
    - Stored-order forward dependency lists
    - Sorted reverse (dependents) lookups
    - Not-found fallback titles for unknown ids
    - A restricted copy of the graph for metric computation
    """

    def __init__(self):
        self._graph = nx.DiGraph()
        self._issues: Dict[str, Issue] = {}

    @classmethod
    def from_issues(cls, issues: Iterable[Issue]) -> "IssueGraph":
        graph = cls()
        for issue in issues:
            graph.add_issue(issue)
        return graph

    def add_issue(self, issue: Issue) -> None:
        """Add or replace an issue and its outgoing edges."""
        if issue.id in self._issues:
            old_targets = list(self._graph.successors(issue.id))
            self._graph.remove_edges_from((issue.id, t) for t in old_targets)

        self._issues[issue.id] = issue
        self._graph.add_node(issue.id)
        for target_id in issue.dependency_ids():
            self._graph.add_edge(issue.id, target_id)

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        return self._issues.get(issue_id)

    def has_issue(self, issue_id: str) -> bool:
        return issue_id in self._issues

    def iter_issues(self) -> Iterator[Issue]:
        return iter(self._issues.values())

    @property
    def issue_ids(self) -> List[str]:
        return list(self._issues)

    def dependencies_of(self, issue_id: str) -> List[str]:
        """
        Return the ids `issue_id` depends on, in stored order.

        Unknown ids have no declared dependencies.
        """
        issue = self._issues.get(issue_id)
        if issue is None:
            return []
        return issue.dependency_ids()

    def dependents_of(self, issue_id: str) -> List[str]:
        """
        Return ids of known issues whose dependency list targets `issue_id`.

        Sorted lexicographically; predecessor order follows insertion and
        is not meaningful for display.
        """
        if issue_id not in self._graph:
            return []
        return sorted(
            pred for pred in self._graph.predecessors(issue_id)
            if pred in self._issues
        )

    def in_degree(self, issue_id: str) -> int:
        """Number of issues depending on `issue_id`."""
        return len(self.dependents_of(issue_id))

    def out_degree(self, issue_id: str) -> int:
        """Number of dependency edges declared by `issue_id`."""
        return len(self.dependencies_of(issue_id))

    def title_for(self, issue_id: str) -> str:
        """Issue title, or the raw id when the issue is not in the set."""
        issue = self._issues.get(issue_id)
        if issue is None:
            return issue_id
        return issue.title

    def analysis_graph(self) -> nx.DiGraph:
        """Copy of the graph restricted to known issues."""
        return self._graph.subgraph(self._issues).copy()

    @property
    def issue_count(self) -> int:
        return len(self._issues)

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def get_stats(self) -> Dict[str, Any]:
        by_status: Dict[str, int] = defaultdict(int)
        for issue in self._issues.values():
            by_status[issue.status.value] += 1

        missing = [n for n in self._graph.nodes if n not in self._issues]
        return {
            "total_issues": self.issue_count,
            "total_edges": self.edge_count,
            "issues_by_status": dict(by_status),
            "missing_targets": sorted(missing),
            "open_issues": sum(
                1 for i in self._issues.values() if i.status is not IssueStatus.CLOSED
            ),
        }
