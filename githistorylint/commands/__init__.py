"""Working tree commands using the Command Pattern.

This package implements the Command Pattern for the operations that move
the checked-out state of a repository, allowing for:
1. Encapsulation of each mutation as an object
2. Support for undo operations
3. Integration with the Observer Pattern for notifications

Example:
    ```python
    from githistorylint.commands import StepBackCommand, RestoreCommand

    initial = repo.head.commit.hexsha
    step = StepBackCommand(repo)
    step.execute()

    RestoreCommand(repo, initial).execute()
    ```
"""

from .base import GitCommand
from .restore import RestoreCommand
from .step_back import StepBackCommand

__all__ = [
    "GitCommand",
    "RestoreCommand",
    "StepBackCommand",
]
