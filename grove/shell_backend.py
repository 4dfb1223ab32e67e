"""Worktree and branch mutations performed by running the git executable."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from grove.errors import GitCommandFailed


class ShellBackend:
    """Runs git commands against a repository, raising GitCommandFailed on failure."""

    def __init__(self, git_path: str | Path = "git") -> None:
        self.git_path = Path(git_path)

    def _run(self, repo_path: Path | str, args: Sequence[str]) -> None:
        cmd = f"{self.git_path} -C {repo_path} {' '.join(args)}"
        try:
            proc = subprocess.run(
                [str(self.git_path), "-C", str(repo_path), *args],
                capture_output=True,
            )
        except OSError as exc:
            raise GitCommandFailed(cmd, str(exc)) from exc
        if proc.returncode != 0:
            raise GitCommandFailed(cmd, proc.stderr.decode("utf-8", errors="replace"))

    def fetch(self, repo_path: Path | str, remote: str) -> None:
        self._run(repo_path, ["fetch", remote])

    def branch_delete(self, repo_path: Path | str, branch: str) -> None:
        self._run(repo_path, ["branch", "-D", branch])

    def remote_branch_delete(
        self, repo_path: Path | str, remote: str, branch: str
    ) -> None:
        self._run(repo_path, ["push", remote, "--delete", branch])

    def worktree_add(
        self,
        repo_path: Path | str,
        target: Path | str,
        branch: str,
        base: Optional[str] = None,
    ) -> None:
        """Add a worktree; with base, create branch from it, else check branch out."""
        if base is not None:
            args = ["worktree", "add", "-b", branch, str(target), base]
        else:
            args = ["worktree", "add", str(target), branch]
        self._run(repo_path, args)

    def worktree_remove(
        self, repo_path: Path | str, target: Path | str, force: bool = False
    ) -> None:
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(target))
        self._run(repo_path, args)

    def worktree_move(
        self, repo_path: Path | str, old: Path | str, new: Path | str
    ) -> None:
        self._run(repo_path, ["worktree", "move", str(old), str(new)])