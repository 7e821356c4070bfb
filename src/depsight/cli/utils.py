"""
CLI Utilities - Shared helper functions for command line operations.

This module provides common functionality used across the CLI commands,
including formatted printing, logging setup, and issue graph loading.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from ..config import Settings, load_settings
from ..core.exceptions import DepsightError
from ..core.graph import IssueGraph
from ..core.loader import ISSUES_DIR, load_issues


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    """
    Print a warning message with a yellow alert symbol.

    Args:
        message (str): The warning message to display.
    """
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    """Print an informational message, dimmed."""
    click.echo(click.style(f"   {message}", dim=True))


def setup_logging(verbose: bool) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="[%X]",
    )


def project_root(path: str) -> Path:
    """Directory whose `.depsight/config.yaml` applies to `path`."""
    target = Path(path)
    if target.is_file():
        # .beads/issues.jsonl -> repository root
        parent = target.parent
        return parent.parent if parent.name == ISSUES_DIR else parent
    return target


def read_issue_graph(path: str) -> IssueGraph:
    """
    Load the issues at `path` into an IssueGraph.

    Raises:
        IssuesNotFoundError: If no issues file is found.
        IssueLoadError: If the issues file cannot be read.
    """
    return IssueGraph.from_issues(load_issues(path))


def load_issue_graph(path: str) -> Optional[IssueGraph]:
    """
    Load an IssueGraph, reporting failures to the user.

    Args:
        path (str): An issues JSONL file, a `.beads` directory, or a repository root.

    Returns:
        Optional[IssueGraph]: The loaded graph, or None if loading failed.
    """
    try:
        graph = read_issue_graph(path)
    except DepsightError as e:
        echo_error(str(e))
        click.echo(f"Expected a {ISSUES_DIR}/ directory with an issues .jsonl file.", err=True)
        return None

    if graph.issue_count == 0:
        echo_warning(f"No valid issues in {path}")
    return graph


def load_cli_settings(path: str, force_full: bool = False) -> Settings:
    settings = load_settings(project_root(path))
    if force_full:
        settings = settings.model_copy(update={"force_full_analysis": True})
    return settings
