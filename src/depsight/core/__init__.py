"""
depsight Core Module.

Fundamental building blocks shared by analysis, insights and the CLI:
    - Issue, Dependency, InsightItem, TopPick, Insights: data model
    - IssueGraph: dependency accessor over the issue set
    - ScoreLookup: precomputed scores and metric run status
    - load_issues: JSONL issue loader
"""

from .exceptions import (
    DepsightError,
    IssueLoadError,
    IssuesNotFoundError,
    UnknownPanelError,
)
from .graph import IssueGraph
from .loader import load_issues, load_issues_from_file, resolve_issues_path
from .scores import ScoreLookup
from .types import (
    AnalysisConfig,
    Dependency,
    DependencyType,
    InsightItem,
    Insights,
    Issue,
    IssueStatus,
    IssueType,
    MetricFamily,
    MetricRunState,
    MetricRunStatus,
    ScoreKind,
    TopPick,
)

__all__ = [
    "AnalysisConfig",
    "Dependency",
    "DependencyType",
    "DepsightError",
    "InsightItem",
    "Insights",
    "Issue",
    "IssueGraph",
    "IssueLoadError",
    "IssueStatus",
    "IssueType",
    "IssuesNotFoundError",
    "MetricFamily",
    "MetricRunState",
    "MetricRunStatus",
    "ScoreKind",
    "ScoreLookup",
    "TopPick",
    "UnknownPanelError",
    "load_issues",
    "load_issues_from_file",
    "resolve_issues_path",
]
