"""
Exception types raised by depsight collaborators.

The insights core never raises for user data; these are raised by the
loader and the CLI layer and reported through `echo_error`.
"""


class DepsightError(Exception):
    """Base class for all depsight errors."""


class IssuesNotFoundError(DepsightError):
    """
    Raised when no issues file can be located.

    Attributes:
        path: The path that was searched.
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No issues found at {path}")


class IssueLoadError(DepsightError):
    """
    Raised when an issues file exists but cannot be read.

    Attributes:
        path: The file that failed to load.
        reason: Underlying error text.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load {path}: {reason}")


class UnknownPanelError(DepsightError):
    """Raised when a panel name given on the command line does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown panel: {name}")
