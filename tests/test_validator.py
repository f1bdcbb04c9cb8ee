"""Tests for the commit message validator."""
import pytest

from githistorylint.commit_message import CommitMessageValidator, split_message
from githistorylint.models import RuleName


@pytest.fixture
def validator():
    return CommitMessageValidator()


def rules(result):
    return [violation.rule for violation in result.violations]


@pytest.mark.parametrize(
    "subject",
    ["A", "Add feature", "Fix the thing that broke in the parser yesterday!", "X" * 50],
)
def test_well_formed_single_line_passes(validator, subject):
    result = validator.validate(subject)
    assert result.is_valid
    assert result.violations == []


def test_period_at_end_of_subject(validator):
    result = validator.validate("Fix bug.\n\nThis change fixes the bug.")
    assert rules(result) == [RuleName.SUBJECT_PERIOD]
    assert not result.is_valid


def test_lowercase_subject(validator):
    result = validator.validate("this is not capitalized")
    assert rules(result) == [RuleName.SUBJECT_CAPITALIZATION]


def test_long_subject(validator):
    result = validator.validate("Add new feature with an extremely long and verbose description line")
    assert rules(result) == [RuleName.SUBJECT_LENGTH]


def test_long_subject_reported_once_alongside_other_rules(validator):
    result = validator.validate("lowercase and much too long for any subject line at all.")
    assert rules(result).count(RuleName.SUBJECT_LENGTH) == 1
    assert RuleName.SUBJECT_CAPITALIZATION in rules(result)
    assert RuleName.SUBJECT_PERIOD in rules(result)


@pytest.mark.parametrize("second_line", ["x", "Body without separator", "   ", "#"])
def test_non_empty_second_line(validator, second_line):
    result = validator.validate(["Add feature", second_line])
    assert RuleName.SEPARATOR_LINE in rules(result)


def test_body_wrap_boundary(validator):
    ok = validator.validate(["Add feature", "", "y" * 72])
    assert ok.is_valid

    too_long = validator.validate(["Add feature", "", "y" * 72, "y" * 73])
    assert rules(too_long) == [RuleName.BODY_LINE_LENGTH]
    assert too_long.violations[0].line_number == 4


def test_overlong_second_line_triggers_both_rules(validator):
    result = validator.validate(["Add feature", "z" * 80])
    assert rules(result) == [RuleName.SEPARATOR_LINE, RuleName.BODY_LINE_LENGTH]


def test_empty_message_fails_capitalization(validator):
    result = validator.validate("")
    assert rules(result) == [RuleName.SUBJECT_CAPITALIZATION]


def test_failure_on_earlier_line_fails_whole_message(validator):
    # the last line is fine, the verdict still has to be a failure
    result = validator.validate(["Add feature", "", "q" * 90, "short line"])
    assert not result.is_valid


def test_trailing_newline_is_ignored(validator):
    # git stores messages with a trailing newline
    assert validator.validate("Add feature\n").is_valid
    assert validator.validate("Add feature\n\nBody text\n").is_valid


def test_validation_is_idempotent(validator):
    message = "bad subject.\nno separator\n" + "w" * 100
    assert validator.validate(message) == validator.validate(message)


def test_custom_limits():
    validator = CommitMessageValidator(max_subject_length=10, max_body_line_length=20)
    result = validator.validate("Add a longer subject\n\n" + "b" * 21)
    assert rules(result) == [RuleName.SUBJECT_LENGTH, RuleName.BODY_LINE_LENGTH]


def test_split_message():
    assert split_message("A\n\nB") == ["A", "", "B"]
    assert split_message("A\r\nB") == ["A", "B"]
    assert split_message("") == [""]
    assert split_message(("A", "B")) == ["A", "B"]
