"""
Unit tests for metric computation and run-status recording.
"""

import threading
import time
from unittest.mock import patch

import networkx as nx
import pytest

from depsight.analysis.metrics import (
    GraphAnalyzer,
    bounded_eigenvector,
    critical_path_scores,
    find_cycles,
)
from depsight.config import Settings
from depsight.core.types import MetricFamily, MetricRunState, ScoreKind


def _digraph(edges):
    graph = nx.DiGraph()
    graph.add_edges_from(edges)
    return graph


class TestCriticalPath:
    def test_chain_impact(self):
        impact, slack = critical_path_scores(_digraph([("A", "B"), ("B", "C")]))
        assert impact == {"A": 3.0, "B": 2.0, "C": 1.0}
        assert slack == {"A": 0.0, "B": 0.0, "C": 0.0}

    def test_short_branch_has_slack(self):
        impact, slack = critical_path_scores(_digraph([("A", "B"), ("B", "C"), ("A", "D")]))
        assert impact["D"] == 1.0
        assert slack["D"] == 1.0
        assert slack["C"] == 0.0

    def test_cycle_members_share_value(self):
        impact, _ = critical_path_scores(_digraph([("A", "B"), ("B", "A"), ("B", "C")]))
        assert impact["A"] == impact["B"] == 2.0
        assert impact["C"] == 1.0

    def test_empty_graph(self):
        assert critical_path_scores(nx.DiGraph()) == ({}, {})


class TestFindCycles:
    def test_rotated_to_smallest_id(self):
        cycles = find_cycles(_digraph([("Y", "Z"), ("Z", "X"), ("X", "Y")]), limit=10)
        assert cycles == [["X", "Y", "Z"]]

    def test_sorted_by_length(self):
        graph = _digraph([("A", "B"), ("B", "C"), ("C", "A"), ("D", "E"), ("E", "D")])
        assert find_cycles(graph, limit=10) == [["D", "E"], ["A", "B", "C"]]

    def test_limit(self):
        graph = _digraph([("A", "B"), ("B", "A"), ("C", "D"), ("D", "C")])
        assert len(find_cycles(graph, limit=1)) == 1

    def test_acyclic(self):
        assert find_cycles(_digraph([("A", "B")]), limit=10) == []


class TestGraphAnalyzer:
    """Run-status bookkeeping around the metric families."""

    def test_computes_every_family(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["C"], "C": []})
        result = GraphAnalyzer(graph).analyze()
        statuses = result.scores.statuses()
        assert set(statuses) == set(MetricFamily)
        assert statuses[MetricFamily.CRITICAL_PATH].state is MetricRunState.COMPUTED
        assert statuses[MetricFamily.EIGENVECTOR].state is MetricRunState.COMPUTED
        assert result.scores.score(ScoreKind.CRITICAL_PATH, "A") == 3.0
        assert [item.id for item in result.insights.keystones] == ["A", "B", "C"]
        assert result.insights.cycles == []

    def test_bottleneck_is_middle_of_chain(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["C"], "C": []})
        result = GraphAnalyzer(graph).analyze()
        assert [item.id for item in result.insights.bottlenecks] == ["B"]

    def test_cycles_reported(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["A"]})
        result = GraphAnalyzer(graph).analyze()
        assert result.insights.cycles == [["A", "B"]]

    def test_size_limit_skips_betweenness(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["C"], "C": []})
        settings = Settings(betweenness_node_limit=2)
        result = GraphAnalyzer(graph, settings).analyze()

        status = result.scores.run_status(MetricFamily.BETWEENNESS)
        assert status.state is MetricRunState.SKIPPED
        assert "exceeds betweenness limit (2)" in status.reason
        assert result.insights.bottlenecks == []
        assert result.scores.config.compute_betweenness is False

    def test_force_full_ignores_size_limits(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["C"], "C": []})
        settings = Settings(betweenness_node_limit=2, cycles_node_limit=1)
        result = GraphAnalyzer(graph, settings).analyze(force_full=True)
        assert result.scores.run_status(MetricFamily.BETWEENNESS).state is MetricRunState.COMPUTED
        assert result.scores.run_status(MetricFamily.CYCLES).state is MetricRunState.COMPUTED

    def test_failure_recorded_as_skipped(self, make_graph):
        graph = make_graph({"A": ["B"], "B": []})
        with patch("depsight.analysis.metrics.nx.betweenness_centrality", side_effect=ValueError("boom")):
            result = GraphAnalyzer(graph).analyze()
        status = result.scores.run_status(MetricFamily.BETWEENNESS)
        assert status.state is MetricRunState.SKIPPED
        assert status.reason == "Could not compute betweenness: boom"

    def test_overrunning_metric_is_abandoned(self, make_graph):
        graph = make_graph({"A": ["B"], "B": []})
        release = threading.Event()

        def stalled(_graph):
            release.wait(10)
            return {}, {}

        try:
            with patch("depsight.analysis.metrics.critical_path_scores", side_effect=stalled):
                started = time.perf_counter()
                result = GraphAnalyzer(graph, Settings(metric_time_budget=0.5)).analyze()
                waited = time.perf_counter() - started
        finally:
            release.set()

        status = result.scores.run_status(MetricFamily.CRITICAL_PATH)
        assert status.state is MetricRunState.TIMED_OUT
        assert status.reason == "Timed out after 0.5s"
        assert result.insights.keystones == []
        assert waited < 5
        assert result.scores.run_status(MetricFamily.CYCLES).state is MetricRunState.COMPUTED

    def test_metric_within_budget_keeps_result(self, make_graph):
        graph = make_graph({"A": ["B"], "B": []})
        result = GraphAnalyzer(graph, Settings(metric_time_budget=30)).analyze()
        assert result.scores.run_status(MetricFamily.CRITICAL_PATH).state is MetricRunState.COMPUTED
        assert [item.id for item in result.insights.keystones] == ["A", "B"]

    def test_force_full_waits_for_slow_metrics(self, make_graph):
        graph = make_graph({"A": ["B"], "B": []})

        def slow(digraph):
            time.sleep(0.05)
            return critical_path_scores(digraph)

        with patch("depsight.analysis.metrics.critical_path_scores", side_effect=slow):
            result = GraphAnalyzer(graph, Settings(metric_time_budget=1e-6)).analyze(force_full=True)

        assert result.scores.run_status(MetricFamily.CRITICAL_PATH).state is MetricRunState.COMPUTED
        assert [item.id for item in result.insights.keystones] == ["A", "B"]

    def test_long_chain_still_ranks_influencers(self, make_graph):
        ids = [f"N{i:02d}" for i in range(40)]
        graph = make_graph({ids[i]: ids[i + 1:i + 2] for i in range(40)})
        result = GraphAnalyzer(graph).analyze()

        status = result.scores.run_status(MetricFamily.EIGENVECTOR)
        assert status.state is MetricRunState.COMPUTED, status.reason
        assert result.insights.influencers[0].id == "N39"

    def test_eigenvector_falls_back_when_not_converging(self, make_graph):
        graph = make_graph({"A": ["B"], "B": ["C"], "C": []})
        failure = nx.PowerIterationFailedConvergence(1000)
        with patch("depsight.analysis.metrics.nx.eigenvector_centrality", side_effect=failure):
            result = GraphAnalyzer(graph).analyze()

        assert result.scores.run_status(MetricFamily.EIGENVECTOR).state is MetricRunState.COMPUTED
        assert [item.id for item in result.insights.influencers] == ["C", "B", "A"]

    def test_insights_limit(self, make_graph):
        graph = make_graph({str(i): [] for i in range(6)})
        result = GraphAnalyzer(graph, Settings(insights_limit=2)).analyze()
        assert len(result.insights.keystones) == 2
        assert len(result.insights.slack) == 2


class TestBoundedEigenvector:
    def test_chain_scores_grow_downstream(self):
        scores = bounded_eigenvector(_digraph([("A", "B"), ("B", "C")]), steps=100)
        assert 0 < scores["A"] < scores["B"] < scores["C"]
        assert sum(v * v for v in scores.values()) == pytest.approx(1.0)

    def test_no_edges_is_uniform(self):
        graph = nx.DiGraph()
        graph.add_nodes_from(["A", "B"])
        scores = bounded_eigenvector(graph, steps=10)
        assert scores["A"] == pytest.approx(scores["B"])
