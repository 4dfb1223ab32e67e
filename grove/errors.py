"""Exception hierarchy for worktree and repository management."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence


def _did_you_mean(hint: Optional[str]) -> str:
    return f" — did you mean '{hint}'?" if hint else ""


class GroveError(Exception):
    """Base class for all errors raised by grove."""


class WorktreeNotFound(GroveError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"worktree not found: {self.path}")


class RepoDiscoveryError(GroveError):
    def __init__(self, hint: str) -> None:
        self.hint = hint
        super().__init__(f"cannot determine which repo to use\nhint: {hint}")


class RepoNotFound(GroveError):
    def __init__(self, repo_id: str) -> None:
        self.repo_id = repo_id
        super().__init__(f"repo '{repo_id}' not found in repos.json")


class GitCommandFailed(GroveError):
    def __init__(self, cmd: str, stderr: str) -> None:
        self.cmd = cmd
        self.stderr = stderr
        super().__init__(f"git command failed: {cmd}\n{stderr}")


class DuplicateTag(GroveError):
    def __init__(self, tag: str, existing_path: Path | str) -> None:
        self.tag = tag
        self.existing_path = Path(existing_path)
        super().__init__(f"tag '{tag}' already exists at {self.existing_path}")


class InvalidTag(GroveError):
    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"invalid tag '{tag}': {reason}")


class RegistryError(GroveError):
    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"registry error: {msg}")


class WorktreeInvalid(GroveError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"path is not a git worktree: {self.path}")


class NotAGitRepo(GroveError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"path is not a git repo: {self.path}")


class DuplicateRepoId(GroveError):
    def __init__(self, repo_id: str) -> None:
        self.repo_id = repo_id
        super().__init__(f"repo id '{repo_id}' already exists in repos.json")


class AmbiguousTag(GroveError):
    def __init__(self, tag: str, candidates: Sequence[str]) -> None:
        self.tag = tag
        self.candidates = list(candidates)
        super().__init__(
            f"tag '{tag}' is ambiguous; try: {', '.join(self.candidates)}"
        )


class UnknownTag(GroveError):
    def __init__(self, tag: str, hint: Optional[str] = None) -> None:
        self.tag = tag
        self.hint = hint
        super().__init__(f"unknown tag '{tag}'{_did_you_mean(hint)}")


class UncommittedChanges(GroveError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"worktree '{tag}' has uncommitted changes; use --force to override"
        )


class UnpushedCommits(GroveError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"worktree '{tag}' has unpushed commits; use --force to override"
        )


class RepoNotEmpty(GroveError):
    def __init__(self, repo_id: str) -> None:
        self.repo_id = repo_id
        super().__init__(
            f"repo '{repo_id}' has registered projects; pass --force to remove anyway"
        )


class RepoIdNotFound(GroveError):
    def __init__(self, repo_id: str, hint: Optional[str] = None) -> None:
        self.repo_id = repo_id
        self.hint = hint
        super().__init__(f"repo '{repo_id}' not found{_did_you_mean(hint)}")