"""
Score Lookup.

Read-only query surface over precomputed metric scores, per-family run
status and the static analysis config. Populated once per analysis run
by `depsight.analysis.metrics.GraphAnalyzer`.
"""

from typing import Dict, Mapping, Optional

from .types import AnalysisConfig, MetricFamily, MetricRunStatus, ScoreKind


class ScoreLookup:
    """
    Per-issue scores for every ScoreKind, plus run status per MetricFamily.

    Missing scores read as 0.0. Missing run status reads as None, which
    callers treat as "metric available".
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config
        self._scores: Dict[ScoreKind, Dict[str, float]] = {kind: {} for kind in ScoreKind}
        self._status: Dict[MetricFamily, MetricRunStatus] = {}

    def set_scores(self, kind: ScoreKind, scores: Mapping[str, float]) -> None:
        self._scores[kind] = {issue_id: float(v) for issue_id, v in scores.items()}

    def set_status(self, family: MetricFamily, status: MetricRunStatus) -> None:
        self._status[family] = status

    def score(self, kind: ScoreKind, issue_id: str) -> float:
        return self._scores[kind].get(issue_id, 0.0)

    def run_status(self, family: MetricFamily) -> Optional[MetricRunStatus]:
        return self._status.get(family)

    def neighbor_score_map(self, kind: ScoreKind) -> Dict[str, float]:
        """Full score map for batch neighbor ranking. Returns a copy."""
        return dict(self._scores[kind])

    def statuses(self) -> Dict[MetricFamily, MetricRunStatus]:
        return dict(self._status)

    def has_scores(self, kind: ScoreKind) -> bool:
        return bool(self._scores[kind])
