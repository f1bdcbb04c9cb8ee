"""Commit message validation."""
from typing import Sequence, Union

from ..models import ValidationResult
from .validation import create_validation_chain


def split_message(message: Union[str, Sequence[str]]) -> list:
    """Split a raw message into lines; an empty message is one empty subject."""
    if isinstance(message, str):
        lines = message.splitlines()
    else:
        lines = list(message)
    return lines or [""]


class CommitMessageValidator:
    """Validates commit messages against subject and body style rules."""

    def __init__(self, max_subject_length: int = 50, max_body_line_length: int = 72):
        self.max_subject_length = max_subject_length
        self.max_body_line_length = max_body_line_length
        self.validation_chain = create_validation_chain(max_subject_length, max_body_line_length)

    def validate(self, message: Union[str, Sequence[str]]) -> ValidationResult:
        """Validate a commit message, reporting every violation found."""
        return ValidationResult(violations=self.validation_chain.handle(split_message(message)))
