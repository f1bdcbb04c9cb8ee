"""Command for moving the working tree to the first parent commit."""

from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console

from .base import GitCommand


class StepBackCommand(GitCommand):
    """Command for stepping the checked-out state back by one commit.

    Merge commits are treated as their first parent; other parents are
    never visited. HEAD is detached before the ``git reset --hard``, so
    branch refs never move.

    Attributes:
        source (Optional[str]): The commit HEAD pointed at before the step
        target (Optional[str]): The first parent HEAD was moved to
    """

    def __init__(self, repo: Repo, console: Optional[Console] = None):
        super().__init__(repo, console)
        self.source: Optional[str] = None
        self.target: Optional[str] = None

    def execute(self) -> bool:
        """Detach HEAD and hard reset it to the first parent.

        Returns:
            bool: True if HEAD moved, False for a root commit or a git error
        """
        commit = self.repo.head.commit
        if not commit.parents:
            self.console.print(
                f"[yellow]{commit.hexsha[:12]} has no parent, nothing to step back to[/yellow]"
            )
            return False

        source = commit.hexsha
        target = commit.parents[0].hexsha
        try:
            if not self.repo.head.is_detached:
                self.repo.git.checkout("--detach")
            self.repo.git.reset("--hard", target)
        except GitCommandError as e:
            self.console.print(f"[red]Failed to step back to {target[:12]}: {str(e)}[/red]")
            return False

        self.source = source
        self.target = target
        for observer in self.observers:
            observer.on_step_back(source, target)
        return True

    def undo(self) -> bool:
        """Return to the commit the step started from."""
        if not self.source:
            self.console.print("[yellow]No step to undo[/yellow]")
            return False

        try:
            self.repo.git.reset("--hard", self.source)
            self.source = None
            self.target = None
            return True
        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo step: {str(e)}[/red]")
            return False
