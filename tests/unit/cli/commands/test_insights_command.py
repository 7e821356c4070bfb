"""
Unit tests for the 'insights' command.
"""

import json
from unittest.mock import patch

from click.testing import CliRunner

from depsight.analysis.metrics import AnalysisResult
from depsight.cli.commands.insights import insights
from depsight.core.scores import ScoreLookup
from depsight.core.types import InsightItem, Insights, MetricFamily, MetricRunState, MetricRunStatus

RECORDS = [
    {"id": "A", "title": "Ship the release", "dependencies": [{"depends_on_id": "B"}]},
    {"id": "B", "title": "Write the changelog", "dependencies": [{"depends_on_id": "C"}]},
    {"id": "C", "title": "Freeze the branch"},
]


def _result():
    scores = ScoreLookup()
    scores.set_status(MetricFamily.HITS, MetricRunStatus(state=MetricRunState.SKIPPED, reason="too big"))
    return AnalysisResult(
        insights=Insights(keystones=[
            InsightItem(id="A", value=3.0),
            InsightItem(id="B", value=2.0),
            InsightItem(id="C", value=1.0),
        ]),
        scores=scores,
    )


class TestInsightsCommand:
    """CLI behaviour of the one-shot insights render."""

    def test_text_output(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(insights, [str(root), "--panel", "keystones"])

        assert result.exit_code == 0, result.output
        assert "Keystones" in result.output
        assert "Ship the release" in result.output
        assert "CALCULATION PROOF" in result.output

    def test_no_calculation_hides_proof(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(insights, [str(root), "--no-calculation"])
        assert result.exit_code == 0
        assert "CALCULATION PROOF" not in result.output

    @patch("depsight.cli.commands.insights.GraphAnalyzer")
    def test_json_output(self, mock_analyzer_cls, beads_repo):
        mock_analyzer_cls.return_value.analyze.return_value = _result()
        root = beads_repo(RECORDS)

        result = CliRunner().invoke(
            insights, [str(root), "--json", "--panel", "keystones", "--select", "1", "--rows", "2"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["ok"] is True
        data = payload["data"]
        assert data["focused_panel"] == "keystones"
        assert data["detail"]["issue_id"] == "B"

        panels = {p["panel"]: p for p in data["panels"]}
        assert [r["id"] for r in panels["keystones"]["rows"]] == ["A", "B"]
        assert panels["keystones"]["scroll_indicator"] == "↕ 2/3"
        assert panels["hubs"]["skipped"] is True
        assert panels["hubs"]["skip_reason"] == "too big"
        assert panels["cycles"]["healthy"] is True

    @patch("depsight.cli.commands.insights.GraphAnalyzer")
    def test_json_stdout_holds_only_the_envelope(self, mock_analyzer_cls, beads_repo):
        def noisy_analyze(force_full=None):
            print("warming caches...")
            return _result()

        mock_analyzer_cls.return_value.analyze.side_effect = noisy_analyze
        root = beads_repo(RECORDS)

        result = CliRunner().invoke(insights, [str(root), "--json", "--panel", "keystones"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["data"]["focused_panel"] == "keystones"
        assert "warming caches..." in result.stderr

    def test_json_error_envelope(self, tmp_path):
        result = CliRunner().invoke(insights, [str(tmp_path / "nowhere"), "--json"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["ok"] is False
        assert payload["error"]["type"] == "IssuesNotFoundError"

    def test_unknown_panel(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(insights, [str(root), "--panel", "sparkles"])
        assert result.exit_code == 1
        assert "Unknown panel: sparkles" in result.output

    def test_missing_issues(self, tmp_path):
        result = CliRunner().invoke(insights, [str(tmp_path)])
        assert result.exit_code == 1
        assert "No issues found" in result.output
