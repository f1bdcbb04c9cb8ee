import json
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest
from git import Repo

from githistorylint.models import CheckResult

PACKAGE_JSON = {
    "name": "sample",
    "version": "1.0.0",
    "scripts": {"lint": "eslint .", "test": "jest"},
}


def make_commit(repo: Repo, message: str, filename: str, content: str, **kwargs):
    """Write a file, stage it and commit it."""
    path = Path(repo.working_dir) / filename
    path.write_text(content)
    repo.index.add([filename])
    return repo.index.commit(message, **kwargs)


@pytest.fixture
def temp_git_repo():
    """Create a temporary git repository for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        # Initialize git repo
        repo = Repo.init(tmp_dir)

        # Create a test file
        test_file = Path(tmp_dir) / "test.txt"
        test_file.write_text("Initial content")

        # Initial commit
        repo.index.add(["test.txt"])
        repo.index.commit("Initial commit")

        yield tmp_dir


@pytest.fixture
def linear_repo():
    """Repository with a linear history C (root) <- B <- A (HEAD)."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        c = make_commit(repo, "Add project manifest", "package.json", json.dumps(PACKAGE_JSON))
        b = make_commit(repo, "Add lint configuration", "lint.txt", "rules")
        a = make_commit(repo, "Fix failing test", "test.txt", "fixed")

        yield SimpleNamespace(
            path=tmp_dir,
            repo=repo,
            a=a.hexsha,
            b=b.hexsha,
            c=c.hexsha,
            branch=repo.active_branch.name,
        )


@pytest.fixture
def merge_repo():
    """Repository whose HEAD is a merge commit.

    root <- main_work <- merge (HEAD), with feature_work (parent: root)
    as the merge's second parent.
    """
    with tempfile.TemporaryDirectory() as tmp_dir:
        repo = Repo.init(tmp_dir)
        root = make_commit(repo, "Add project manifest", "package.json", json.dumps(PACKAGE_JSON))
        feature = repo.index.commit("Add feature work", parent_commits=[root], head=False)
        main_work = make_commit(repo, "Update readme", "README.md", "readme")
        merge = repo.index.commit("Merge feature branch", parent_commits=[main_work, feature])

        yield SimpleNamespace(
            path=tmp_dir,
            repo=repo,
            root=root.hexsha,
            feature=feature.hexsha,
            main_work=main_work.hexsha,
            merge=merge.hexsha,
        )


@pytest.fixture
def recording_checker():
    """Factory for checkers that record which commit they ran at."""

    def factory(repo: Repo, fail_at=(), on_check=None):
        return RecordingChecker(repo, fail_at, on_check)

    return factory


class RecordingChecker:
    def __init__(self, repo: Repo, fail_at=(), on_check=None):
        self.repo = repo
        self.fail_at = set(fail_at)
        self.on_check = on_check
        self.seen = []

    def check(self):
        sha = self.repo.head.commit.hexsha
        self.seen.append(sha)
        if self.on_check:
            self.on_check(sha)
        if sha in self.fail_at:
            return [CheckResult(script="test", success=False, exit_code=1, output="1 failing")]
        return [
            CheckResult(script="lint", success=True, exit_code=0),
            CheckResult(script="test", success=True, exit_code=0),
        ]
