"""Command for restoring the commit the walk started from."""

from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console

from .base import GitCommand


class RestoreCommand(GitCommand):
    """Command for hard resetting the repository to a recorded commit.

    When ``branch`` is given it is checked out again afterwards, so a walk
    that started on a branch ends on it. The branch must still point at
    ``ref``. Running the command more than once leaves the repository in
    the same state.

    Attributes:
        ref (str): The commit to restore
        branch (Optional[str]): Branch to re-attach HEAD to
        previous (Optional[str]): HEAD before the restore, kept for undo
    """

    def __init__(
        self,
        repo: Repo,
        ref: str,
        console: Optional[Console] = None,
        branch: Optional[str] = None,
    ):
        super().__init__(repo, console)
        self.ref = ref
        self.branch = branch
        self.previous: Optional[str] = None

    def execute(self) -> bool:
        """Reset the working tree, index and HEAD to ``ref``.

        Returns:
            bool: True if the repository is at ``ref`` afterwards
        """
        try:
            self.previous = self.repo.head.commit.hexsha
            if not self.repo.head.is_detached:
                self.repo.git.checkout("--detach")
            self.repo.git.reset("--hard", self.ref)
            if self.branch:
                self.repo.git.checkout(self.branch)
            success = True
        except (GitCommandError, ValueError) as e:
            self.console.print(f"[red]Failed to restore {self.ref[:12]}: {str(e)}[/red]")
            success = False

        for observer in self.observers:
            observer.on_restore(self.ref, success)
        return success

    def undo(self) -> bool:
        """Go back to where HEAD was before the restore, detached."""
        if not self.previous:
            self.console.print("[yellow]No restore to undo[/yellow]")
            return False

        try:
            self.repo.git.checkout("--detach", self.previous)
            self.previous = None
            return True
        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo restore: {str(e)}[/red]")
            return False
