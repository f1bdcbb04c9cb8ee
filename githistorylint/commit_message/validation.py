"""Commit message style rules using Chain of Responsibility pattern."""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import RuleName, Violation

CAPITALIZED_SUBJECT = re.compile(r"^[A-Z]")


class ValidationHandler(ABC):
    """Abstract base class for validation handlers.

    Every handler in the chain runs; violations accumulate instead of
    stopping at the first failure.
    """

    rule: RuleName

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, lines: Sequence[str]) -> List[Violation]:
        """Validate and pass to the next handler, collecting violations."""
        violations = self.validate(lines)
        if self.next_handler:
            violations.extend(self.next_handler.handle(lines))
        return violations

    @abstractmethod
    def validate(self, lines: Sequence[str]) -> List[Violation]:
        """Validate the commit message lines."""
        pass

    def violation(self, line_number: int, message: str) -> Violation:
        return Violation(rule=self.rule, line_number=line_number, message=message)


class SubjectLengthHandler(ValidationHandler):
    """Validates the subject line length."""

    rule = RuleName.SUBJECT_LENGTH

    def __init__(self, max_length: int = 50, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, lines: Sequence[str]) -> List[Violation]:
        subject = lines[0] if lines else ""
        if len(subject) > self.max_length:
            return [self.violation(
                1, f"Subject line too long ({len(subject)} > {self.max_length})"
            )]
        return []


class SubjectCapitalizationHandler(ValidationHandler):
    """Validates that the subject line starts with an uppercase letter."""

    rule = RuleName.SUBJECT_CAPITALIZATION

    def validate(self, lines: Sequence[str]) -> List[Violation]:
        subject = lines[0] if lines else ""
        if not CAPITALIZED_SUBJECT.match(subject):
            return [self.violation(1, "Subject line must start with a capital letter")]
        return []


class SubjectPeriodHandler(ValidationHandler):
    """Validates that the subject line doesn't end with a period."""

    rule = RuleName.SUBJECT_PERIOD

    def validate(self, lines: Sequence[str]) -> List[Violation]:
        subject = lines[0] if lines else ""
        if subject.endswith('.'):
            return [self.violation(1, "Subject line should not end with a period")]
        return []


class BlankLineHandler(ValidationHandler):
    """Validates blank line after subject."""

    rule = RuleName.SEPARATOR_LINE

    def validate(self, lines: Sequence[str]) -> List[Violation]:
        if len(lines) > 1 and lines[1] != '':
            return [self.violation(2, "Leave one blank line after subject")]
        return []


class BodyLineLengthHandler(ValidationHandler):
    """Validates body line lengths."""

    rule = RuleName.BODY_LINE_LENGTH

    def __init__(self, max_length: int = 72, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.max_length = max_length

    def validate(self, lines: Sequence[str]) -> List[Violation]:
        violations = []
        # line 2 counts too, so an overlong separator line fails both rules
        for line_number, line in enumerate(lines[1:], start=2):
            if len(line) > self.max_length:
                violations.append(self.violation(
                    line_number,
                    f"Body line too long ({len(line)} > {self.max_length})",
                ))
        return violations


def create_validation_chain(max_subject_length: int = 50, max_body_length: int = 72) -> ValidationHandler:
    """Create the default validation chain."""
    body_length = BodyLineLengthHandler(max_body_length)
    blank_line = BlankLineHandler(body_length)
    subject_period = SubjectPeriodHandler(blank_line)
    capitalization = SubjectCapitalizationHandler(subject_period)
    subject_length = SubjectLengthHandler(max_subject_length, capitalization)

    return subject_length
