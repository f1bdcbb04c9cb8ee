"""Observer pattern for history walk events."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import CheckResult, CommitInfo, ValidationResult, WalkResult


class WalkObserver:
    """Base class for history walk observers.

    Every hook is a no-op so observers only override what they report.
    """

    def on_walk_started(self, initial: str, root: str) -> None:
        """Called once before the first commit is checked."""

    def on_commit_started(self, commit: CommitInfo) -> None:
        """Called when checks begin for the checked-out commit."""

    def on_message_validated(self, commit: CommitInfo, result: ValidationResult) -> None:
        """Called after the commit message has been validated."""

    def on_check_completed(self, commit: CommitInfo, result: CheckResult) -> None:
        """Called after each package script finishes."""

    def on_step_back(self, source: str, target: str) -> None:
        """Called after the working tree moved to the first parent."""

    def on_restore(self, ref: str, success: bool) -> None:
        """Called after the initial commit has been restored."""

    def on_walk_completed(self, result: WalkResult) -> None:
        """Called when the walk ends, successfully or not."""


class ConsoleLogObserver(WalkObserver):
    """Observer that reports the walk to the terminal.

    Diagnostics go to ``error_console`` (stderr by default), confirmations
    to ``console``.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def on_walk_started(self, initial: str, root: str) -> None:
        self.console.print(
            f"[blue]Checking history from {initial[:12]} back to {root[:12]}[/blue]"
        )

    def on_commit_started(self, commit: CommitInfo) -> None:
        self.console.print(
            f"\n[bold]{commit.short_sha}[/bold] {escape(commit.summary)}"
        )

    def on_message_validated(self, commit: CommitInfo, result: ValidationResult) -> None:
        if result.is_valid:
            self.console.print("[green]✓ Commit message looks good[/green]")
            return
        for violation in result.violations:
            self.error_console.print(
                f"[red]✗ {violation.rule.value} (line {violation.line_number}): "
                f"{escape(violation.message)}[/red]"
            )

    def on_check_completed(self, commit: CommitInfo, result: CheckResult) -> None:
        if result.success:
            self.console.print(f"[green]✓ {result.script} passed[/green]")
        else:
            self.error_console.print(
                f"[red]✗ {result.script} failed with exit code {result.exit_code}[/red]"
            )
            if result.output:
                self.error_console.print(escape(result.output.rstrip()), highlight=False)

    def on_step_back(self, source: str, target: str) -> None:
        self.console.print(f"[dim]Stepping back from {source[:12]} to {target[:12]}[/dim]")

    def on_restore(self, ref: str, success: bool) -> None:
        if success:
            self.console.print(f"[green]Restored initial commit {ref[:12]}[/green]")
        else:
            self.error_console.print(f"[red]Failed to restore initial commit {ref}[/red]")

    def on_walk_completed(self, result: WalkResult) -> None:
        if result.interrupted:
            self.error_console.print("[yellow]Operation cancelled by user[/yellow]")
        elif result.success:
            self.console.print(
                f"\n[green]All {len(result.visited)} commits passed[/green]"
            )
        else:
            self.error_console.print(f"\n[red]{escape(result.failure or '')}[/red]")
            if result.failed_commit and not result.restored:
                self.error_console.print(
                    f"[yellow]Repository left at {result.failed_commit[:12]} for inspection[/yellow]"
                )
                self.error_console.print(
                    f"[yellow]Run 'git checkout {result.branch or result.initial[:12]}' to return[/yellow]"
                )


class FileLogObserver(WalkObserver):
    """Observer that logs walk events to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_walk_started(self, initial: str, root: str) -> None:
        self._log(f"Walk started at {initial}, root {root}")

    def on_commit_started(self, commit: CommitInfo) -> None:
        self._log(f"Checking {commit.hexsha} {commit.summary}")

    def on_message_validated(self, commit: CommitInfo, result: ValidationResult) -> None:
        if result.is_valid:
            self._log(f"Message OK for {commit.hexsha}")
        for violation in result.violations:
            self._log(
                f"Message violation in {commit.hexsha}: {violation.rule.value} "
                f"(line {violation.line_number}) {violation.message}"
            )

    def on_check_completed(self, commit: CommitInfo, result: CheckResult) -> None:
        status = "passed" if result.success else f"failed with exit code {result.exit_code}"
        self._log(f"Script {result.script} {status} for {commit.hexsha}")

    def on_step_back(self, source: str, target: str) -> None:
        self._log(f"Stepped back from {source} to {target}")

    def on_restore(self, ref: str, success: bool) -> None:
        self._log(f"Restored {ref}" if success else f"Failed to restore {ref}")

    def on_walk_completed(self, result: WalkResult) -> None:
        if result.interrupted:
            self._log(f"Walk interrupted by signal {result.signal_number}")
        elif result.success:
            self._log(f"Walk completed, {len(result.visited)} commits passed")
        else:
            self._log(f"Walk failed: {result.failure}")
