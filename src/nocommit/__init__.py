"""nocommit: a git pre-commit hook that blocks forbidden patterns in staged additions."""

__version__ = "0.1.0"
