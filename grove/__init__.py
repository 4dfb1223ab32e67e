"""Multi-repo git worktree manager: configuration, worktree inspection, status and output formatting."""

__version__ = "0.1.0"