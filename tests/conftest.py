"""Shared fixtures for the depsight test suite."""

import json
from pathlib import Path
from typing import Dict, Iterable, List

import pytest

from depsight.core.graph import IssueGraph
from depsight.core.types import Issue


def _make_issue(issue_id: str, depends_on: Iterable[str] = (), **fields) -> Issue:
    fields.setdefault("title", f"Title {issue_id}")
    dep_type = fields.pop("dep_type", "blocks")
    return Issue(
        id=issue_id,
        dependencies=[
            {"issue_id": issue_id, "depends_on_id": target, "type": dep_type}
            for target in depends_on
        ],
        **fields,
    )


@pytest.fixture
def make_issue():
    """Factory: make_issue("A", ["B"], status="closed")."""
    return _make_issue


@pytest.fixture
def make_graph():
    """Factory building an IssueGraph from {id: [dependency ids]}."""

    def _build(edges: Dict[str, List[str]]) -> IssueGraph:
        return IssueGraph.from_issues(_make_issue(i, deps) for i, deps in edges.items())

    return _build


@pytest.fixture
def beads_repo(tmp_path):
    """Factory writing issue dicts to <tmp>/.beads/<filename> and returning the repo root."""

    def _write(records: List[dict], filename: str = "issues.jsonl") -> Path:
        beads = tmp_path / ".beads"
        beads.mkdir(exist_ok=True)
        lines = [json.dumps(r) for r in records]
        (beads / filename).write_text("\n".join(lines) + "\n", encoding="utf-8")
        return tmp_path

    return _write
