"""Shared models for git-history-lint."""
from typing import List, Optional
from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel, Field


class RuleName(str, Enum):
    SUBJECT_LENGTH = "subject-length"
    SUBJECT_CAPITALIZATION = "subject-capitalization"
    SUBJECT_PERIOD = "subject-period"
    SEPARATOR_LINE = "separator-line"
    BODY_LINE_LENGTH = "body-line-length"


class WalkState(str, Enum):
    READY = "ready"
    CHECKING = "checking"
    STEPPING_BACK = "stepping_back"
    RESTORING = "restoring"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class CommitInfo:
    hexsha: str
    summary: str
    message: str
    parents: List[str] = field(default_factory=list)

    @classmethod
    def from_commit(cls, commit) -> "CommitInfo":
        """Build from a GitPython commit object."""
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return cls(
            hexsha=commit.hexsha,
            summary=message.split("\n", 1)[0],
            message=message,
            parents=[parent.hexsha for parent in commit.parents],
        )

    @property
    def short_sha(self) -> str:
        return self.hexsha[:12]


class Violation(BaseModel):
    rule: RuleName
    line_number: int = Field(description="1-based line number the rule failed on")
    message: str


class ValidationResult(BaseModel):
    violations: List[Violation] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations


class CheckResult(BaseModel):
    script: str
    success: bool
    exit_code: int
    output: str = ""


class WalkResult(BaseModel):
    initial: str
    root: str
    branch: Optional[str] = Field(default=None, description="Branch checked out when the walk started")
    visited: List[str] = Field(default_factory=list, description="Commit hashes in visit order")
    state: WalkState = WalkState.READY
    failed_commit: Optional[str] = None
    failure: Optional[str] = None
    interrupted: bool = False
    signal_number: Optional[int] = None
    restored: bool = False
    message_failures: List[str] = Field(
        default_factory=list,
        description="Commits whose messages had style violations",
    )

    @property
    def success(self) -> bool:
        return self.failure is None and not self.interrupted
