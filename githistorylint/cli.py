#!/usr/bin/env python3
import os
import signal
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import pyperclip
from rich.console import Console

from .commit_message import CommitMessageValidator
from .config import DEFAULT_CONFIG_FILENAME, Config
from .core import HistoryWalker, open_repository, preflight
from .exceptions import HistoryLintError, WalkInterrupted
from .observers import ConsoleLogObserver, FileLogObserver
from .project import ProjectChecker, ScriptRunner

console = Console()
error_console = Console(stderr=True)


def interrupted_exit_code(signal_number: Optional[int]) -> int:
    """Shell convention: 128 plus the signal number."""
    return 128 + (signal_number or signal.SIGINT)


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(
            f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]"
        )
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<22} {'Value':<20} {'Source':<10}")
    console.print("-" * 52)

    source = "config" if config_path.exists() else "default"
    for name in Config.model_fields:
        value = getattr(config, name)
        if isinstance(value, list):
            value = ", ".join(value)
        console.print(f"{name:<22} {str(value if value is not None else 'None'):<20} {source:<10}")

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--package-manager",
    help="Executable used to run package scripts, e.g. npm, yarn, pnpm (overrides config setting)",
)
@click.option(
    "-s",
    "--script",
    "scripts",
    multiple=True,
    help="Package script to run at every commit; repeat for several (overrides config setting)",
)
@click.option(
    "--strict-messages",
    is_flag=True,
    help="Stop at the first commit whose message breaks the style rules",
)
@click.option(
    "--restore-on-failure",
    is_flag=True,
    help="Restore the starting commit when a check fails instead of staying at the failing commit",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log the walk to (overrides config setting)",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    config_dir: bool,
    config_list: bool,
    path: Path,
    package_manager: Optional[str],
    scripts: Tuple[str, ...],
    strict_messages: bool,
    restore_on_failure: bool,
    log_file: Optional[Path],
    version: bool,
):
    """
    Check every commit in history, not just the tip.

    Starting at HEAD and following first parents back to the root commit,
    this tool will:
    1. Check the commit message style
    2. Run the project's lint and test scripts
    3. Restore the starting commit when done or interrupted

    A failing script stops the walk and leaves the repository at the
    failing commit so it can be inspected.

    Configuration can be set in .githistorylint.toml in the repository root.
    Command line options override configuration file settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info()
            return

        repo_path = path.absolute()
        config_path = repo_path / DEFAULT_CONFIG_FILENAME

        if config_list:
            print_config(Config.load(repo_path), config_path)
            return

        if config_dir:
            # Create default config file if it doesn't exist
            if not config_path.exists():
                Config().save(repo_path)
                console.print(
                    "[yellow]Created new config file with default values[/yellow]"
                )

            pyperclip.copy(str(config_path))
            console.print(f"[green]Config file location:[/green] {config_path}")
            console.print("[green]Path copied to clipboard![/green]")
            return

        # Load configuration
        config = Config.load(repo_path)

        # Command line options override config
        if package_manager is not None:
            config.package_manager = package_manager
        if scripts:
            config.scripts = list(scripts)
        if strict_messages:
            config.strict_messages = True
        if restore_on_failure:
            config.restore_on_failure = True
        if log_file is not None:
            config.log_file = str(log_file)

        repo = open_repository(repo_path)
        working_dir = Path(repo.working_dir)
        preflight(repo, config.package_manager, config.manifest, config.scripts)

        checker = ProjectChecker(
            ScriptRunner(config.package_manager, working_dir), config.scripts
        )
        validator = CommitMessageValidator(
            config.max_subject_length, config.max_body_line_length
        )
        walker = HistoryWalker(
            str(working_dir),
            checker,
            validator=validator,
            console=console,
            strict_messages=config.strict_messages,
            restore_on_failure=config.restore_on_failure,
        )
        walker.add_observer(ConsoleLogObserver(console, error_console))

        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            walker.add_observer(FileLogObserver(str(log_file_path)))

        result = walker.run()
    except WalkInterrupted as e:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(interrupted_exit_code(e.signal_number))
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(interrupted_exit_code(signal.SIGINT))
    except HistoryLintError as e:
        error_console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)
    except Exception as e:
        error_console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()

    if result.interrupted:
        sys.exit(interrupted_exit_code(result.signal_number))
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
