"""
Issue loader.

Reads issues from a JSONL export, one issue object per line. A repository
path is resolved to its `.beads/` directory and the preferred file inside
it. Malformed or invalid lines are skipped rather than failing the load.
"""

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .exceptions import IssueLoadError, IssuesNotFoundError
from .types import Issue

logger = logging.getLogger(__name__)

ISSUES_DIR = ".beads"

# Checked in order before falling back to any other .jsonl file
PREFERRED_FILES = ("beads.jsonl", "beads.base.jsonl", "issues.jsonl")

_IGNORED_MARKERS = (".backup", ".orig", ".merge")
_IGNORED_FILES = {"deletions.jsonl"}

_BOM = "\ufeff"


def find_issues_file(issues_dir: Path) -> Path:
    """
    Locate the issues JSONL file inside `issues_dir`.

    Raises:
        IssuesNotFoundError: If the directory or a usable file is missing.
    """
    if not issues_dir.is_dir():
        raise IssuesNotFoundError(str(issues_dir))

    candidates = sorted(
        p for p in issues_dir.iterdir()
        if p.is_file()
        and p.suffix == ".jsonl"
        and p.name not in _IGNORED_FILES
        and not any(marker in p.name for marker in _IGNORED_MARKERS)
    )
    if not candidates:
        raise IssuesNotFoundError(str(issues_dir))

    by_name = {p.name: p for p in candidates}
    for name in PREFERRED_FILES:
        if name in by_name:
            return by_name[name]
    return candidates[0]


def resolve_issues_path(path: str | Path) -> Path:
    """
    Resolve a file, an issues directory, or a repository root to a JSONL file.
    """
    target = Path(path)
    if target.is_file():
        return target
    if (target / ISSUES_DIR).is_dir():
        return find_issues_file(target / ISSUES_DIR)
    return find_issues_file(target)


def load_issues_from_file(path: Path) -> List[Issue]:
    """
    Parse issues from a JSONL file.

    Raises:
        IssuesNotFoundError: If the file does not exist.
        IssueLoadError: If the file cannot be read.
    """
    if not path.exists():
        raise IssuesNotFoundError(str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IssueLoadError(str(path), str(e)) from e

    issues: List[Issue] = []
    skipped = 0
    for line_no, line in enumerate(text.splitlines(), start=1):
        if line_no == 1 and line.startswith(_BOM):
            line = line[len(_BOM):]
        if not line.strip():
            continue

        try:
            issues.append(Issue.model_validate(json.loads(line)))
        except (json.JSONDecodeError, ValidationError) as e:
            skipped += 1
            logger.warning(f"Skipping line {line_no} of {path.name}: {e.__class__.__name__}")

    if skipped:
        logger.info(f"Loaded {len(issues)} issues from {path} ({skipped} lines skipped)")
    else:
        logger.debug(f"Loaded {len(issues)} issues from {path}")
    return issues


def load_issues(path: str | Path = ".") -> List[Issue]:
    """Resolve `path` and load its issues."""
    return load_issues_from_file(resolve_issues_path(path))
