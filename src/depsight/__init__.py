"""
depsight - Graph insights for issue dependency trees.

depsight loads a set of issues with dependency edges, computes graph
metrics over them (centrality, impact depth, cycles, slack) and presents
the results as ten navigable panels with on-demand explanations of why
an issue received its score.

Key Components:
- core: Issue model, dependency accessor, score lookup, loader
- analysis: Metric computation and triage recommendations
- insights: Panel navigation, skip resolution and drill-down explanations
- cli: Command line entry points and terminal rendering

Usage:
    from depsight.core.loader import load_issues
    from depsight.core.graph import IssueGraph
    from depsight.analysis.metrics import GraphAnalyzer

    graph = IssueGraph.from_issues(load_issues("."))
    result = GraphAnalyzer(graph).analyze()
"""

__version__ = "0.1.0"

from .core.types import (
    Dependency, DependencyType, InsightItem, Insights, Issue,
    IssueStatus, IssueType, TopPick,
)

__all__ = [
    "__version__",
    "Dependency",
    "DependencyType",
    "InsightItem",
    "Insights",
    "Issue",
    "IssueStatus",
    "IssueType",
    "TopPick",
]
