"""
Unit tests for the JSONL issue loader.
"""

import pytest

from depsight.core.exceptions import IssuesNotFoundError
from depsight.core.loader import find_issues_file, load_issues, resolve_issues_path


class TestLoader:
    def test_loads_repo_root(self, beads_repo):
        root = beads_repo([
            {"id": "A", "title": "First", "dependencies": [{"depends_on_id": "B"}]},
            {"id": "B", "title": "Second"},
        ])
        issues = load_issues(root)
        assert [i.id for i in issues] == ["A", "B"]
        assert issues[0].dependency_ids() == ["B"]

    def test_skips_bom_blank_and_malformed_lines(self, tmp_path):
        beads = tmp_path / ".beads"
        beads.mkdir()
        (beads / "issues.jsonl").write_text(
            '\ufeff{"id": "A", "title": "First"}\n'
            "\n"
            "{not json\n"
            '{"id": "", "title": "blank id"}\n'
            '{"id": "B", "title": "Second"}\n',
            encoding="utf-8",
        )
        issues = load_issues(tmp_path)
        assert [i.id for i in issues] == ["A", "B"]

    def test_prefers_beads_jsonl(self, beads_repo):
        beads_repo([{"id": "OLD", "title": "old"}], filename="issues.jsonl")
        root = beads_repo([{"id": "NEW", "title": "new"}], filename="beads.jsonl")
        assert [i.id for i in load_issues(root)] == ["NEW"]

    def test_ignores_backups_and_deletions(self, beads_repo):
        beads_repo([{"id": "X", "title": "x"}], filename="deletions.jsonl")
        root = beads_repo([{"id": "Y", "title": "y"}], filename="issues.backup.jsonl")
        with pytest.raises(IssuesNotFoundError):
            find_issues_file(root / ".beads")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(IssuesNotFoundError) as exc:
            load_issues(tmp_path / "nowhere")
        assert "No issues found" in str(exc.value)

    def test_resolve_direct_file(self, beads_repo):
        root = beads_repo([{"id": "A", "title": "a"}], filename="custom.jsonl")
        path = root / ".beads" / "custom.jsonl"
        assert resolve_issues_path(path) == path
        assert resolve_issues_path(root) == path
        assert resolve_issues_path(root / ".beads") == path
