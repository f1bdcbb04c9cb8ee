"""Core functionality for git-history-lint."""
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Union

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from rich.console import Console

from .commands import GitCommand, RestoreCommand, StepBackCommand
from .commit_message import CommitMessageValidator
from .exceptions import (
    CheckFailure,
    DirtyWorkingTreeError,
    HistoryLintError,
    ProjectShapeError,
    WalkInterrupted,
)
from .models import CheckResult, CommitInfo, WalkResult, WalkState
from .observers import WalkObserver
from .project import ProjectChecker, ProjectManifest, require_commands

INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def open_repository(repo_path: Union[str, Path]) -> Repo:
    """Open the repository containing ``repo_path``."""
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise ProjectShapeError(f"Not inside a git repository: {repo_path}") from e


def find_root(repo: Repo, ref: str = "HEAD") -> str:
    """Return the oldest commit in the first-parent ancestry of ``ref``."""
    return first_parent_history(repo, ref)[-1]


def first_parent_history(repo: Repo, ref: str = "HEAD") -> List[str]:
    """Commit hashes from ``ref`` back to the root, newest first."""
    return repo.git.rev_list("--first-parent", ref).split()


def preflight(
    repo: Repo,
    package_manager: str = "npm",
    manifest: str = "package.json",
    scripts: Sequence[str] = ("lint", "test"),
) -> ProjectManifest:
    """Check everything the walk needs before any commit is touched.

    Raises:
        MissingCommandError: git or the package manager is not installed
        ProjectShapeError: no scripts are configured, or the manifest or one
            of the scripts is missing
        DirtyWorkingTreeError: tracked files have uncommitted changes
    """
    require_commands(["git", package_manager])
    if not scripts:
        raise ProjectShapeError("No scripts configured to run")
    project = ProjectManifest.load(Path(repo.working_dir), manifest)
    project.require_scripts(scripts)
    if repo.is_dirty(untracked_files=False):
        raise DirtyWorkingTreeError(
            "Working tree has uncommitted changes; commit or stash them first"
        )
    return project


class CancellationToken:
    """Cancellation flag set from signal handlers.

    Outside a shielded section ``cancel`` raises WalkInterrupted straight
    away, which also stops a running script. Inside one the interruption is
    deferred until the walker next calls ``raise_if_cancelled``.
    """

    def __init__(self):
        self.cancelled = False
        self.signal_number: Optional[int] = None
        self._shield_depth = 0

    def cancel(self, signal_number: Optional[int] = None) -> None:
        # Only the first signal interrupts; repeats just keep the flag set
        if self.cancelled:
            return
        self.cancelled = True
        self.signal_number = signal_number
        if not self._shield_depth:
            raise WalkInterrupted(self.signal_number)

    def handle_signal(self, signum, frame) -> None:
        self.cancel(signum)

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise WalkInterrupted(self.signal_number)

    @property
    def shielding(self) -> bool:
        return self._shield_depth > 0

    @contextmanager
    def shielded(self) -> Iterator[None]:
        self._shield_depth += 1
        try:
            yield
        finally:
            self._shield_depth -= 1


class HistoryWalker:
    """Checks every commit from HEAD back to the root of its first-parent history."""

    def __init__(
        self,
        repo_path: str,
        checker: Union[ProjectChecker, Callable[[], int]],
        validator: Optional[CommitMessageValidator] = None,
        console: Optional[Console] = None,
        strict_messages: bool = False,
        restore_on_failure: bool = False,
        token: Optional[CancellationToken] = None,
    ):
        self.repo = open_repository(repo_path)
        self.repo_path = repo_path
        self.checker = checker
        self.validator = validator or CommitMessageValidator()
        self.console = console or Console()
        self.strict_messages = strict_messages
        self.restore_on_failure = restore_on_failure
        self.token = token or CancellationToken()
        self.observers: List[WalkObserver] = []

    def add_observer(self, observer: WalkObserver) -> None:
        """Add an observer to be notified of walk events."""
        self.observers.append(observer)

    def remove_observer(self, observer: WalkObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    def execute_command(self, command: GitCommand) -> bool:
        """Execute a command with this walker's observers attached."""
        for observer in self.observers:
            command.add_observer(observer)
        return command.execute()

    @contextmanager
    def _signal_handlers(self) -> Iterator[None]:
        # signal.signal only works from the main thread
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        previous = {}
        for signum in INTERRUPT_SIGNALS:
            previous[signum] = signal.signal(signum, self.token.handle_signal)
        try:
            yield
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler)

    def run(self, initial: Optional[str] = None, root: Optional[str] = None) -> WalkResult:
        """Walk the history and return what happened.

        The initial commit is restored on every exit path except a failing
        check, which leaves the repository at the failing commit unless
        ``restore_on_failure`` is set. HEAD is detached for the walk, so
        branch refs never move; restoring re-attaches the starting branch.

        Args:
            initial: Commit to start from (defaults to HEAD)
            root: Commit to stop at (defaults to the first-parent root)

        Returns:
            WalkResult: Visited commits, failure details and final state
        """
        initial = self.repo.commit(initial or "HEAD").hexsha
        root = self.repo.commit(root).hexsha if root else find_root(self.repo, initial)
        result = WalkResult(initial=initial, root=root, branch=self._starting_branch(initial))

        for observer in self.observers:
            observer.on_walk_started(initial, root)

        restore = True
        with self._signal_handlers():
            try:
                with self.token.shielded():
                    self.repo.git.checkout("--detach")
                    if self.repo.head.commit.hexsha != initial:
                        self.repo.git.reset("--hard", initial)
                self._walk(result)
                restore = result.success or self.restore_on_failure
            except WalkInterrupted as e:
                restore = True
                result.interrupted = True
                result.signal_number = e.signal_number
            finally:
                with self.token.shielded():
                    if restore:
                        self._restore(result)

        # A signal that arrived while restoring was deferred and never raised
        if self.token.cancelled and not result.interrupted:
            result.interrupted = True
            result.signal_number = self.token.signal_number

        result.state = WalkState.ABORTED if result.interrupted else WalkState.DONE
        for observer in self.observers:
            observer.on_walk_completed(result)
        return result

    def _starting_branch(self, initial: str) -> Optional[str]:
        """Branch to re-attach on restore, if HEAD is on one that points at ``initial``."""
        if self.repo.head.is_detached:
            return None
        branch = self.repo.active_branch
        if branch.commit.hexsha != initial:
            return None
        return branch.name

    def _walk(self, result: WalkResult) -> None:
        while True:
            self.token.raise_if_cancelled()
            result.state = WalkState.CHECKING
            commit = CommitInfo.from_commit(self.repo.head.commit)
            result.visited.append(commit.hexsha)
            for observer in self.observers:
                observer.on_commit_started(commit)

            validation = self.validator.validate(commit.message)
            for observer in self.observers:
                observer.on_message_validated(commit, validation)
            if not validation.is_valid:
                result.message_failures.append(commit.hexsha)

            checks = self._run_checks()
            for check in checks:
                for observer in self.observers:
                    observer.on_check_completed(commit, check)

            failed = next((check for check in checks if not check.success), None)
            if failed:
                result.failed_commit = commit.hexsha
                result.failure = str(CheckFailure(failed, commit.hexsha))
                return
            if self.strict_messages and not validation.is_valid:
                result.failed_commit = commit.hexsha
                result.failure = f"Commit message of {commit.short_sha} violates style rules"
                return

            if commit.hexsha == result.root:
                return

            result.state = WalkState.STEPPING_BACK
            with self.token.shielded():
                stepped = self.execute_command(StepBackCommand(self.repo, self.console))
            if not stepped:
                raise HistoryLintError(
                    f"Could not step back from {commit.short_sha} before reaching root {result.root[:12]}"
                )

    def _run_checks(self) -> List[CheckResult]:
        if hasattr(self.checker, "check"):
            return list(self.checker.check())

        status = self.checker()
        if isinstance(status, bool):
            status = 0 if status else 1
        return [CheckResult(script="check", success=status == 0, exit_code=status)]

    def _restore(self, result: WalkResult) -> None:
        result.state = WalkState.RESTORING
        with self.token.shielded():
            result.restored = self.execute_command(
                RestoreCommand(self.repo, result.initial, self.console, branch=result.branch)
            )
