"""Read-only inspection of git worktrees."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

from grove.errors import WorktreeNotFound

_BRANCH_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class WorktreeInfo:
    """One entry of a repository's worktree list."""

    path: Path
    branch: Optional[str] = None
    head: Optional[str] = None


@dataclass(frozen=True)
class Worktree:
    """An opened worktree: its path, checked-out branch and HEAD commit id."""

    path: Path
    branch: Optional[str] = None
    head: Optional[str] = None


def _short_branch(ref: str) -> str:
    return ref[len(_BRANCH_PREFIX):] if ref.startswith(_BRANCH_PREFIX) else ref


def _head_or_none(oid: str) -> Optional[str]:
    oid = oid.strip()
    if not oid or set(oid) == {"0"}:
        return None
    return oid


def _blocks(text: str) -> Iterator[list[str]]:
    block: list[str] = []
    for line in text.splitlines():
        if line.strip():
            block.append(line)
        elif block:
            yield block
            block = []
    if block:
        yield block


def parse_porcelain(text: str) -> list[WorktreeInfo]:
    """Parse the output of ``git worktree list --porcelain``."""
    result: list[WorktreeInfo] = []
    for block in _blocks(text):
        path: Optional[Path] = None
        branch: Optional[str] = None
        head: Optional[str] = None
        for line in block:
            key, _, value = line.partition(" ")
            if key == "worktree":
                path = Path(value)
            elif key == "HEAD":
                head = _head_or_none(value)
            elif key == "branch":
                branch = _short_branch(value.strip())
        if path is not None:
            result.append(WorktreeInfo(path=path, branch=branch, head=head))
    return result


class GitBackend:
    """Inspects worktrees by querying the git executable."""

    def __init__(self, git_path: str | Path = "git") -> None:
        self.git_path = str(git_path)

    def _git(self, repo: Path, args: Sequence[str]) -> Optional[str]:
        try:
            proc = subprocess.run(
                [self.git_path, "-C", str(repo), *args],
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError:
            return None
        return proc.stdout if proc.returncode == 0 else None

    def _ensure_repo(self, path: Path) -> None:
        if not path.exists() or self._git(path, ["rev-parse", "--git-dir"]) is None:
            raise WorktreeNotFound(path)

    def list(self, main: Path | str) -> list[WorktreeInfo]:
        """List the main worktree first, followed by every linked worktree."""
        main = Path(main)
        self._ensure_repo(main)
        output = self._git(main, ["worktree", "list", "--porcelain"])
        if output is None:
            raise WorktreeNotFound(main)
        entries = parse_porcelain(output)
        if not entries:
            return [WorktreeInfo(path=main)]
        first, *linked = entries
        return [WorktreeInfo(path=main, branch=first.branch, head=first.head), *linked]

    def open(self, path: Path | str) -> Worktree:
        """Open the worktree at path and read its branch and HEAD."""
        path = Path(path)
        self._ensure_repo(path)
        ref = self._git(path, ["symbolic-ref", "-q", "HEAD"])
        branch = _short_branch(ref.strip()) if ref and ref.strip() else None
        oid = self._git(path, ["rev-parse", "--verify", "-q", "HEAD"])
        head = _head_or_none(oid) if oid else None
        return Worktree(path=path, branch=branch, head=head)