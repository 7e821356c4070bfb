"""
Graph metric computation.

Runs the metric families over the issue graph with NetworkX and packages
the results as a ScoreLookup (per-issue scores plus run status) and an
Insights snapshot (ranked panel lists).

Expensive families are skipped above configured graph sizes unless a full
analysis is forced. Each family runs against a time budget; one still
running when the budget expires is abandoned and recorded as timed out.
Downstream panels show a skip notice for such families instead of empty
lists.
"""

import itertools
import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import networkx as nx

from ..config import Settings
from ..core.graph import IssueGraph
from ..core.scores import ScoreLookup
from ..core.types import (
    AnalysisConfig,
    InsightItem,
    Insights,
    MetricFamily,
    MetricRunState,
    MetricRunStatus,
    ScoreKind,
    TopPick,
)
from .triage import compute_top_picks

logger = logging.getLogger(__name__)

# Failures that mean "this metric could not be computed for this graph"
_METRIC_ERRORS = (nx.NetworkXException, ValueError, RuntimeError, ArithmeticError)

# Power iterations taken when eigenvector centrality fails to converge
EIGENVECTOR_FALLBACK_STEPS = 100


@dataclass
class AnalysisResult:
    """Everything the insights dashboard needs from one analysis run."""
    insights: Insights
    scores: ScoreLookup
    top_picks: List[TopPick] = field(default_factory=list)


def critical_path_scores(graph: nx.DiGraph) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Compute impact depth and slack for every node.

    Impact(v) = 1 + max(Impact(d)) over the dependencies d of v, with
    leaves at 1. Cycles are collapsed first, so every member of a strongly
    connected component shares one value.

    Slack(v) is how many extra levels v could move without lengthening the
    longest chain: (L - 1) - depth_from_top(v) - (Impact(v) - 1).
    """
    if graph.number_of_nodes() == 0:
        return {}, {}

    condensed = nx.condensation(graph)
    component_of = condensed.graph["mapping"]
    order = list(nx.topological_sort(condensed))

    impact: Dict[int, int] = {}
    for comp in reversed(order):
        impact[comp] = 1 + max((impact[s] for s in condensed.successors(comp)), default=0)

    depth: Dict[int, int] = {}
    for comp in order:
        depth[comp] = max((depth[p] + 1 for p in condensed.predecessors(comp)), default=0)

    longest = max(impact.values())
    slack = {
        comp: (longest - 1) - depth[comp] - (impact[comp] - 1)
        for comp in order
    }

    return (
        {node: float(impact[component_of[node]]) for node in graph},
        {node: float(slack[component_of[node]]) for node in graph},
    )


def find_cycles(graph: nx.DiGraph, limit: int) -> List[List[str]]:
    """
    Enumerate up to `limit` elementary cycles.

    Each cycle is rotated to start at its smallest id and the list is
    sorted by (length, ids) so output does not depend on discovery order.
    """
    cycles = []
    for cycle in itertools.islice(nx.simple_cycles(graph), limit):
        start = cycle.index(min(cycle))
        cycles.append(cycle[start:] + cycle[:start])
    return sorted(cycles, key=lambda c: (len(c), c))


def _undirected_without_loops(graph: nx.DiGraph) -> nx.Graph:
    undirected = graph.to_undirected()
    undirected.remove_edges_from(list(nx.selfloop_edges(undirected)))
    return undirected


def _hits(graph: nx.DiGraph) -> Tuple[Dict[str, float], Dict[str, float]]:
    # The sparse SVD used by networkx needs at least one edge and two nodes
    if graph.number_of_nodes() < 2 or graph.number_of_edges() == 0:
        zeros = {node: 0.0 for node in graph}
        return zeros, dict(zeros)
    return nx.hits(graph, max_iter=500)


def _eigenvector(graph: nx.DiGraph) -> Dict[str, float]:
    if graph.number_of_nodes() == 0:
        return {}
    try:
        return nx.eigenvector_centrality(graph, max_iter=1000, tol=1e-06)
    except nx.PowerIterationFailedConvergence:
        # Acyclic graphs converge too slowly for the tolerance; take a fixed number of steps
        logger.debug(f"eigenvector did not converge, using {EIGENVECTOR_FALLBACK_STEPS} fixed steps")
        return bounded_eigenvector(graph, EIGENVECTOR_FALLBACK_STEPS)


def bounded_eigenvector(graph: nx.DiGraph, steps: int) -> Dict[str, float]:
    """
    Run `steps` power iterations of (A + I) from a uniform start.

    Mirrors the update NetworkX uses (each node gains its in-neighbors'
    scores) and normalizes to unit length after every step, so the
    result is always finite and defined for any graph.
    """
    scores = {node: 1.0 / graph.number_of_nodes() for node in graph}
    for _ in range(steps):
        last = scores
        scores = dict(last)
        for source, target in graph.edges():
            scores[target] += last[source]
        norm = math.hypot(*scores.values()) or 1.0
        scores = {node: value / norm for node, value in scores.items()}
    return scores


def _top_items(scores: Mapping[str, float], limit: int, include_zero: bool = False) -> List[InsightItem]:
    ranked = sorted(
        ((issue_id, value) for issue_id, value in scores.items() if include_zero or value > 0),
        key=lambda kv: (-kv[1], kv[0]),
    )
    return [InsightItem(id=issue_id, value=value) for issue_id, value in ranked[:limit]]


class _MetricCall:
    """
    One metric computation on a daemon thread.

    The caller waits at most the time budget. An overrunning computation
    is left to finish in the background and its result is never read;
    daemon threads do not hold up interpreter exit.
    """

    def __init__(self, family: MetricFamily, compute: Callable[[], Any]):
        self._compute = compute
        self._value: Any = None
        self._error: Optional[Exception] = None
        self._thread = threading.Thread(target=self._target, name=f"depsight-{family.value}", daemon=True)

    def _target(self) -> None:
        try:
            self._value = self._compute()
        except Exception as e:
            # Re-raised on the calling thread by result()
            self._error = e

    def wait(self, timeout: float) -> bool:
        """Start the computation; True if it finished within `timeout` seconds."""
        self._thread.start()
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def result(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._value


class GraphAnalyzer:
    """
    Computes every metric family for an IssueGraph.

    Usage:
        result = GraphAnalyzer(graph, settings).analyze()
        result.scores.score(ScoreKind.BETWEENNESS, "ISSUE-1")
    """

    def __init__(self, graph: IssueGraph, settings: Optional[Settings] = None):
        self.graph = graph
        self.settings = settings or Settings()

    def plan(self, digraph: nx.DiGraph, force_full: bool) -> AnalysisConfig:
        """Decide which expensive families to skip for a graph of this size."""
        config = AnalysisConfig()
        if force_full:
            return config

        nodes = digraph.number_of_nodes()
        edges = digraph.number_of_edges()
        s = self.settings

        if nodes > s.betweenness_node_limit:
            config.compute_betweenness = False
            config.betweenness_skip_reason = (
                f"Skipped: {nodes} issues exceeds betweenness limit ({s.betweenness_node_limit})"
            )
        if edges > s.hits_edge_limit:
            config.compute_hits = False
            config.hits_skip_reason = (
                f"Skipped: {edges} edges exceeds HITS limit ({s.hits_edge_limit})"
            )
        if nodes > s.cycles_node_limit:
            config.compute_cycles = False
            config.cycles_skip_reason = (
                f"Skipped: {nodes} issues exceeds cycle detection limit ({s.cycles_node_limit})"
            )
        return config

    def analyze(self, force_full: Optional[bool] = None) -> AnalysisResult:
        """Run all metric families and build the insights snapshot."""
        force = self.settings.force_full_analysis if force_full is None else force_full
        digraph = self.graph.analysis_graph()
        config = self.plan(digraph, force)
        scores = ScoreLookup(config)
        limit = self.settings.insights_limit

        logger.debug(
            f"Analyzing {digraph.number_of_nodes()} issues, "
            f"{digraph.number_of_edges()} edges (force_full={force})"
        )

        pagerank = self._run(scores, MetricFamily.PAGERANK, lambda: nx.pagerank(digraph), force)
        if pagerank is not None:
            scores.set_scores(ScoreKind.PAGERANK, pagerank)

        betweenness = self._run(
            scores, MetricFamily.BETWEENNESS,
            lambda: nx.betweenness_centrality(digraph, normalized=True),
            force, config.skip_reason_for(MetricFamily.BETWEENNESS),
        )
        if betweenness is not None:
            scores.set_scores(ScoreKind.BETWEENNESS, betweenness)

        eigenvector = self._run(scores, MetricFamily.EIGENVECTOR, lambda: _eigenvector(digraph), force)
        if eigenvector is not None:
            scores.set_scores(ScoreKind.EIGENVECTOR, eigenvector)

        hits = self._run(
            scores, MetricFamily.HITS, lambda: _hits(digraph),
            force, config.skip_reason_for(MetricFamily.HITS),
        )
        if hits is not None:
            scores.set_scores(ScoreKind.HUB, hits[0])
            scores.set_scores(ScoreKind.AUTHORITY, hits[1])

        critical = self._run(
            scores, MetricFamily.CRITICAL_PATH, lambda: critical_path_scores(digraph), force
        )
        if critical is not None:
            scores.set_scores(ScoreKind.CRITICAL_PATH, critical[0])
            scores.set_scores(ScoreKind.SLACK, critical[1])

        undirected = _undirected_without_loops(digraph)
        cores = self._run(scores, MetricFamily.KCORE, lambda: nx.core_number(undirected), force)
        if cores is not None:
            scores.set_scores(ScoreKind.CORE, cores)

        articulation = self._run(
            scores, MetricFamily.ARTICULATION,
            lambda: sorted(nx.articulation_points(undirected)), force,
        )

        cycles = self._run(
            scores, MetricFamily.CYCLES,
            lambda: find_cycles(digraph, self.settings.max_cycles),
            force, config.skip_reason_for(MetricFamily.CYCLES),
        )

        insights = Insights(
            bottlenecks=_top_items(scores.neighbor_score_map(ScoreKind.BETWEENNESS), limit),
            keystones=_top_items(scores.neighbor_score_map(ScoreKind.CRITICAL_PATH), limit, include_zero=True),
            influencers=_top_items(scores.neighbor_score_map(ScoreKind.EIGENVECTOR), limit),
            hubs=_top_items(scores.neighbor_score_map(ScoreKind.HUB), limit),
            authorities=_top_items(scores.neighbor_score_map(ScoreKind.AUTHORITY), limit),
            cores=_top_items(scores.neighbor_score_map(ScoreKind.CORE), limit),
            articulation=(articulation or [])[:limit],
            slack=_top_items(scores.neighbor_score_map(ScoreKind.SLACK), limit, include_zero=True),
            cycles=cycles or [],
        )

        top_picks = compute_top_picks(self.graph, scores, self.settings.top_picks_limit)
        return AnalysisResult(insights=insights, scores=scores, top_picks=top_picks)

    def _run(
        self,
        scores: ScoreLookup,
        family: MetricFamily,
        compute: Callable[[], Any],
        force_full: bool,
        skip_reason: Optional[str] = None,
    ) -> Any:
        """
        Run one metric family and record its status.

        Returns the computed value, or None if the family was skipped,
        failed, or overran its time budget.
        """
        if skip_reason is not None:
            scores.set_status(family, MetricRunStatus(state=MetricRunState.SKIPPED, reason=skip_reason))
            logger.info(f"{family.value}: {skip_reason or 'skipped'}")
            return None

        start = time.perf_counter()
        try:
            if force_full:
                finished, result = True, compute()
            else:
                call = _MetricCall(family, compute)
                finished = call.wait(self.settings.metric_time_budget)
                result = call.result() if finished else None
        except _METRIC_ERRORS as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            scores.set_status(family, MetricRunStatus(
                state=MetricRunState.SKIPPED,
                reason=f"Could not compute {family.value}: {e}",
                elapsed_ms=elapsed_ms,
            ))
            logger.warning(f"{family.value} failed after {elapsed_ms:.1f}ms: {e}")
            return None

        elapsed = time.perf_counter() - start
        if not finished:
            budget = self.settings.metric_time_budget
            scores.set_status(family, MetricRunStatus(
                state=MetricRunState.TIMED_OUT,
                reason=f"Timed out after {budget:g}s",
                elapsed_ms=elapsed * 1000,
            ))
            logger.info(f"{family.value}: still running after {budget:g}s budget, abandoned")
            return None

        scores.set_status(family, MetricRunStatus(
            state=MetricRunState.COMPUTED, elapsed_ms=elapsed * 1000,
        ))
        logger.debug(f"{family.value} computed in {elapsed * 1000:.1f}ms")
        return result
