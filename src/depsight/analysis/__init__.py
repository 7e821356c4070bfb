"""
Analysis modules for depsight.

- metrics: metric computation over the issue graph (NetworkX)
- triage: priority recommendations built on top of the metrics
"""

from .metrics import AnalysisResult, GraphAnalyzer, critical_path_scores, find_cycles
from .triage import compute_top_picks, is_actionable, unblocks_count

__all__ = [
    "AnalysisResult",
    "GraphAnalyzer",
    "compute_top_picks",
    "critical_path_scores",
    "find_cycles",
    "is_actionable",
    "unblocks_count",
]
