"""Errors raised by git-history-lint."""
from typing import Iterable, Optional


class HistoryLintError(Exception):
    """Base class for all git-history-lint errors."""


class MissingCommandError(HistoryLintError):
    """A required executable is not available on PATH."""

    def __init__(self, commands: Iterable[str]):
        self.commands = list(commands)
        super().__init__(
            f"Required command(s) not found: {', '.join(self.commands)}"
        )


class ProjectShapeError(HistoryLintError):
    """The working directory is not a project the checks can run in."""


class DirtyWorkingTreeError(ProjectShapeError):
    """Tracked files have uncommitted changes that a hard reset would discard."""


class CheckFailure(HistoryLintError):
    """A package script failed for a commit."""

    def __init__(self, result, commit: Optional[str] = None):
        self.result = result
        self.commit = commit
        location = f" at {commit[:12]}" if commit else ""
        super().__init__(
            f"Script '{result.script}' failed{location} (exit code {result.exit_code})"
        )


class WalkInterrupted(HistoryLintError):
    """The walk was cancelled by a signal."""

    def __init__(self, signal_number: Optional[int] = None):
        self.signal_number = signal_number
        super().__init__(f"Interrupted by signal {signal_number}")
