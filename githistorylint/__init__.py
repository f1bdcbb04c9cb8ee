"""Re-run lint, test and commit message checks against every commit in history."""

__version__ = "0.1.0"
