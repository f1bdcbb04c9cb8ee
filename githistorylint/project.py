"""Project manifest lookup and package script execution."""
import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from .exceptions import CheckFailure, MissingCommandError, ProjectShapeError
from .models import CheckResult

DEFAULT_MANIFEST = "package.json"
DEFAULT_SCRIPTS = ("lint", "test")


def require_commands(commands: Iterable[str]) -> None:
    """Raise MissingCommandError listing every command not found on PATH."""
    missing = [command for command in commands if shutil.which(command) is None]
    if missing:
        raise MissingCommandError(missing)


class ProjectManifest:
    """A parsed package manifest such as ``package.json``."""

    def __init__(self, path: Path, data: dict):
        self.path = path
        self.data = data

    @classmethod
    def load(cls, repo_path: Path, filename: str = DEFAULT_MANIFEST) -> "ProjectManifest":
        """Load the manifest from the repository root.

        Raises:
            ProjectShapeError: If the manifest is missing or not a JSON object
        """
        path = Path(repo_path) / filename
        if not path.is_file():
            raise ProjectShapeError(f"No {filename} found in {repo_path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ProjectShapeError(f"Could not read {filename}: {e}") from e

        if not isinstance(data, dict):
            raise ProjectShapeError(f"{filename} must contain a JSON object")
        return cls(path, data)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a dotted nested key, e.g. ``scripts.lint``."""
        value: Any = self.data
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def has_script(self, name: str) -> bool:
        value = self.get(f"scripts.{name}")
        return isinstance(value, str) and bool(value.strip())

    def require_scripts(self, names: Iterable[str]) -> None:
        """Raise ProjectShapeError if any script is missing or empty."""
        missing = [name for name in names if not self.has_script(name)]
        if missing:
            raise ProjectShapeError(
                f"{self.path.name} is missing script(s): {', '.join(missing)}"
            )


class ScriptRunner:
    """Runs named package scripts through a package manager."""

    def __init__(self, package_manager: str = "npm", cwd: Optional[Path] = None):
        self.package_manager = package_manager
        self.cwd = Path(cwd) if cwd else None

    def command(self, script: str) -> List[str]:
        return [self.package_manager, "run", script]

    def run(self, script: str) -> CheckResult:
        """Run one script and capture its exit status and output."""
        try:
            completed = subprocess.run(
                self.command(script),
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as e:
            return CheckResult(script=script, success=False, exit_code=127, output=str(e))

        return CheckResult(
            script=script,
            success=completed.returncode == 0,
            exit_code=completed.returncode,
            output=completed.stdout or "",
        )


class ProjectChecker:
    """Runs the configured scripts in order, stopping at the first failure."""

    def __init__(self, runner: ScriptRunner, scripts: Sequence[str] = DEFAULT_SCRIPTS):
        self.runner = runner
        self.scripts = list(scripts)

    def check(self) -> List[CheckResult]:
        results = []
        for script in self.scripts:
            result = self.runner.run(script)
            results.append(result)
            if not result.success:
                break
        return results

    def ensure(self, commit: Optional[str] = None) -> List[CheckResult]:
        """Like check(), but raise CheckFailure on the first failing script."""
        results = self.check()
        for result in results:
            if not result.success:
                raise CheckFailure(result, commit)
        return results
