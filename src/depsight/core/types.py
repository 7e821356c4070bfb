"""
Core type definitions for depsight.

Issues and their dependency edges are the input; InsightItem, TopPick and
Insights are the ranked output of analysis; MetricFamily, ScoreKind and
MetricRunStatus describe which metrics ran and which score series exist.
"""

from enum import StrEnum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IssueStatus(StrEnum):
    """Lifecycle states of an issue."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    CLOSED = "closed"

    @property
    def is_closed(self) -> bool:
        return self is IssueStatus.CLOSED


class IssueType(StrEnum):
    """Kinds of work item."""
    BUG = "bug"
    FEATURE = "feature"
    TASK = "task"
    EPIC = "epic"
    CHORE = "chore"


class DependencyType(StrEnum):
    """Types of relationship between two issues."""
    BLOCKS = "blocks"
    RELATED = "related"
    PARENT_CHILD = "parent-child"
    DISCOVERED_FROM = "discovered-from"

    @property
    def is_blocking(self) -> bool:
        return self is DependencyType.BLOCKS


class MetricFamily(StrEnum):
    """
    One named graph computation.

    Run status is tracked per family; a family may produce more than one
    score series (HITS produces hub and authority scores).
    """
    PAGERANK = "pagerank"
    BETWEENNESS = "betweenness"
    EIGENVECTOR = "eigenvector"
    HITS = "hits"
    CRITICAL_PATH = "critical_path"
    CYCLES = "cycles"
    KCORE = "kcore"
    ARTICULATION = "articulation"


class ScoreKind(StrEnum):
    """Per-issue numeric score series."""
    PAGERANK = "pagerank"
    BETWEENNESS = "betweenness"
    EIGENVECTOR = "eigenvector"
    HUB = "hub"
    AUTHORITY = "authority"
    CRITICAL_PATH = "critical_path"
    CORE = "core"
    SLACK = "slack"

    @property
    def family(self) -> MetricFamily:
        return _SCORE_FAMILIES[self]


_SCORE_FAMILIES: Dict[ScoreKind, MetricFamily] = {
    ScoreKind.PAGERANK: MetricFamily.PAGERANK,
    ScoreKind.BETWEENNESS: MetricFamily.BETWEENNESS,
    ScoreKind.EIGENVECTOR: MetricFamily.EIGENVECTOR,
    ScoreKind.HUB: MetricFamily.HITS,
    ScoreKind.AUTHORITY: MetricFamily.HITS,
    ScoreKind.CRITICAL_PATH: MetricFamily.CRITICAL_PATH,
    ScoreKind.CORE: MetricFamily.KCORE,
    ScoreKind.SLACK: MetricFamily.CRITICAL_PATH,
}


class MetricRunState(StrEnum):
    """Outcome of a metric computation."""
    COMPUTED = "computed"
    SKIPPED = "skipped"
    TIMED_OUT = "timeout"


class Dependency(BaseModel):
    """
    Directed edge: `issue_id` depends on `depends_on_id`.
    """
    issue_id: str = ""
    depends_on_id: str
    type: DependencyType = DependencyType.BLOCKS

    model_config = ConfigDict(extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def _legacy_empty_type(cls, value):
        # Older exports wrote no type for blocking edges
        if value in (None, ""):
            return DependencyType.BLOCKS
        return value


class Issue(BaseModel):
    """
    A unit of work with dependency edges to other issues.
    """
    id: str
    title: str
    description: str = ""
    design: str = ""
    acceptance_criteria: str = ""
    notes: str = ""
    status: IssueStatus = IssueStatus.OPEN
    priority: int = 2
    issue_type: IssueType = IssueType.TASK
    assignee: str | None = None
    labels: List[str] = Field(default_factory=list)
    dependencies: List[Dependency] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("id", "title")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def dependency_ids(self) -> List[str]:
        """Targets of this issue's dependency edges, in stored order."""
        return [dep.depends_on_id for dep in self.dependencies]

    def blocking_dependency_ids(self) -> List[str]:
        return [dep.depends_on_id for dep in self.dependencies if dep.type.is_blocking]


class InsightItem(BaseModel):
    """A scored issue reference shown in a metric panel."""
    id: str
    value: float


class TopPick(BaseModel):
    """A condensed 'work on this next' recommendation."""
    id: str
    title: str
    score: float
    unblocks_count: int = 0
    reasons: List[str] = Field(default_factory=list)


class MetricRunStatus(BaseModel):
    """Run-status of one metric family."""
    state: MetricRunState = MetricRunState.COMPUTED
    reason: str = ""
    elapsed_ms: float | None = None

    @property
    def is_unavailable(self) -> bool:
        return self.state in (MetricRunState.SKIPPED, MetricRunState.TIMED_OUT)


class AnalysisConfig(BaseModel):
    """
    Static compute flags for the expensive metric families.

    Used as a fallback when no run-status was recorded for a family.
    """
    compute_betweenness: bool = True
    betweenness_skip_reason: str = ""
    compute_hits: bool = True
    hits_skip_reason: str = ""
    compute_cycles: bool = True
    cycles_skip_reason: str = ""

    def skip_reason_for(self, family: MetricFamily) -> str | None:
        """
        Return the configured skip reason if `family` is disabled.

        None means the family is enabled or has no compute flag. An empty
        string means disabled without a stated reason.
        """
        if family is MetricFamily.BETWEENNESS and not self.compute_betweenness:
            return self.betweenness_skip_reason
        if family is MetricFamily.HITS and not self.compute_hits:
            return self.hits_skip_reason
        if family is MetricFamily.CYCLES and not self.compute_cycles:
            return self.cycles_skip_reason
        return None


class Insights(BaseModel):
    """
    Ranked panel contents produced by one analysis run.

    Lists are already in significance order and are replaced wholesale
    when the analysis is recomputed.
    """
    bottlenecks: List[InsightItem] = Field(default_factory=list)
    keystones: List[InsightItem] = Field(default_factory=list)
    influencers: List[InsightItem] = Field(default_factory=list)
    hubs: List[InsightItem] = Field(default_factory=list)
    authorities: List[InsightItem] = Field(default_factory=list)
    cores: List[InsightItem] = Field(default_factory=list)
    articulation: List[str] = Field(default_factory=list)
    slack: List[InsightItem] = Field(default_factory=list)
    cycles: List[List[str]] = Field(default_factory=list)
