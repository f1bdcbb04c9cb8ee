"""Commit message style checking package."""

from .validation import (
    ValidationHandler,
    SubjectLengthHandler,
    SubjectCapitalizationHandler,
    SubjectPeriodHandler,
    BlankLineHandler,
    BodyLineLengthHandler,
    create_validation_chain,
)
from .validator import CommitMessageValidator, split_message

__all__ = [
    'ValidationHandler',
    'SubjectLengthHandler',
    'SubjectCapitalizationHandler',
    'SubjectPeriodHandler',
    'BlankLineHandler',
    'BodyLineLengthHandler',
    'create_validation_chain',
    'CommitMessageValidator',
    'split_message',
]
