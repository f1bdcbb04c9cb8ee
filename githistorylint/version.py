"""Version information for the --version flag."""

import importlib.metadata
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import __version__

DISTRIBUTION_NAME = "git-history-lint"

console = Console()


def get_current_version() -> str:
    return __version__


def get_installed_version() -> str:
    """Version recorded in the installed distribution's metadata, or "unknown"."""
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_installation_path() -> Path:
    return Path(__file__).resolve().parent


def display_version_info(output: Optional[Console] = None) -> None:
    """Print the source and installed versions in a panel."""
    output = output or console
    current = get_current_version()
    installed = get_installed_version()

    text = Text()
    text.append(f"{DISTRIBUTION_NAME}\n", style="bold blue")
    text.append(f"Current version: {current}\n", style="green")
    text.append(f"Installed version: {installed}\n", style="cyan")
    text.append(f"Installation path: {get_installation_path()}\n", style="yellow")

    # Editable installs go stale when __version__ is bumped without reinstalling
    if current != installed:
        text.append("\nInstalled metadata does not match the source version\n", style="red")
        text.append("Reinstall with: pip install -e .\n", style="yellow")

    output.print(Panel(text, title="Version Information", border_style="blue"))
