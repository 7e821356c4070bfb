"""
Unit tests for the 'explain' command.
"""

import json

from click.testing import CliRunner

from depsight.cli.commands.explain import explain

RECORDS = [
    {"id": "A", "title": "Ship the release", "dependencies": [{"depends_on_id": "C"}]},
    {"id": "B", "title": "Announce the release", "dependencies": [{"depends_on_id": "C"}]},
    {"id": "C", "title": "Freeze the branch"},
    {"id": "X", "title": "Loop start", "dependencies": [{"depends_on_id": "Y"}]},
    {"id": "Y", "title": "Loop end", "dependencies": [{"depends_on_id": "X"}]},
]


class TestExplainCommand:
    def test_bottleneck_proof(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(explain, ["C", str(root)])

        assert result.exit_code == 0, result.output
        assert "Issues depending on this (2)" in result.output
        assert "Ship the release" in result.output
        assert "Announce the release" in result.output

    def test_json_dependents(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(explain, ["C", str(root), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["found"] is True
        assert [e["id"] for e in data["sections"][0]["entries"]] == ["A", "B"]

    def test_cycle_proof(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(explain, ["Y", str(root), "--panel", "cycles", "--json"])

        assert result.exit_code == 0, result.output
        section = json.loads(result.output)["data"]["sections"][0]
        assert section["note"] == "X → Y → X"
        assert [e["marker"] for e in section["entries"]] == ["→", "↺"]

    def test_unknown_issue_still_explained(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(explain, ["GHOST-1", str(root)])

        assert result.exit_code == 0
        assert "GHOST-1 is not in the issue set" in result.output

    def test_json_unknown_panel_envelope(self, beads_repo):
        root = beads_repo(RECORDS)
        result = CliRunner().invoke(explain, ["A", str(root), "--panel", "sparkles", "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["ok"] is False
        assert "sparkles" in payload["error"]["message"]
