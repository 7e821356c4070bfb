"""
Unit tests for IssueGraph, the dependency accessor.
"""

from depsight.core.graph import IssueGraph


class TestIssueGraph:
    """Forward and reverse lookups over the issue set."""

    def test_dependents_sorted_regardless_of_insertion(self, make_issue):
        graph = IssueGraph.from_issues([
            make_issue("B", ["C"]),
            make_issue("C"),
            make_issue("A", ["C"]),
        ])
        assert graph.dependents_of("C") == ["A", "B"]

    def test_dependencies_keep_stored_order(self, make_issue):
        graph = IssueGraph.from_issues([make_issue("A", ["Z", "B", "M"])])
        assert graph.dependencies_of("A") == ["Z", "B", "M"]

    def test_unknown_id_is_empty(self, make_graph):
        graph = make_graph({"A": []})
        assert graph.dependencies_of("nope") == []
        assert graph.dependents_of("nope") == []
        assert graph.get_issue("nope") is None

    def test_title_falls_back_to_raw_id(self, make_graph):
        graph = make_graph({"A": []})
        assert graph.title_for("A") == "Title A"
        assert graph.title_for("GHOST-1") == "GHOST-1"

    def test_missing_target_still_has_dependents(self, make_graph):
        graph = make_graph({"A": ["MISSING"]})
        assert graph.dependents_of("MISSING") == ["A"]
        assert not graph.has_issue("MISSING")
        assert graph.get_stats()["missing_targets"] == ["MISSING"]

    def test_analysis_graph_excludes_missing_targets(self, make_graph):
        graph = make_graph({"A": ["B", "MISSING"], "B": []})
        digraph = graph.analysis_graph()
        assert set(digraph.nodes) == {"A", "B"}
        assert list(digraph.edges) == [("A", "B")]

    def test_replacing_issue_drops_old_edges(self, make_issue):
        graph = IssueGraph.from_issues([make_issue("A", ["B"]), make_issue("B")])
        graph.add_issue(make_issue("A", []))
        assert graph.dependents_of("B") == []
        assert graph.edge_count == 0

    def test_degrees(self, make_graph):
        graph = make_graph({"A": ["C"], "B": ["C"], "C": ["D"], "D": []})
        assert graph.in_degree("C") == 2
        assert graph.out_degree("C") == 1
        assert graph.in_degree("A") == 0

    def test_stats(self, make_issue):
        graph = IssueGraph.from_issues([
            make_issue("A", ["B"]),
            make_issue("B", status="closed"),
        ])
        stats = graph.get_stats()
        assert stats["total_issues"] == 2
        assert stats["total_edges"] == 1
        assert stats["issues_by_status"] == {"open": 1, "closed": 1}
        assert stats["open_issues"] == 1
