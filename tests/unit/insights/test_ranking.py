"""Unit tests for the ranking helpers."""

from depsight.insights.ranking import ScoredItem, cap, rank_by_score


class TestRankByScore:
    def test_descending(self):
        items = [ScoredItem("a", 0.1), ScoredItem("b", 0.9), ScoredItem("c", 0.5)]
        assert [i.id for i in rank_by_score(items)] == ["b", "c", "a"]

    def test_ties_keep_input_order(self):
        items = [ScoredItem("z", 1.0), ScoredItem("a", 2.0), ScoredItem("m", 1.0), ScoredItem("b", 1.0)]
        assert [i.id for i in rank_by_score(items)] == ["a", "z", "m", "b"]

    def test_accepts_generators(self):
        ranked = rank_by_score(ScoredItem(str(i), float(i)) for i in range(3))
        assert [i.id for i in ranked] == ["2", "1", "0"]

    def test_empty(self):
        assert rank_by_score([]) == []


class TestCap:
    def test_under_limit(self):
        assert cap([1, 2], 5) == ([1, 2], 0)

    def test_over_limit(self):
        assert cap(list(range(8)), 5) == ([0, 1, 2, 3, 4], 3)
