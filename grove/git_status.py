"""Working-tree status of git worktrees: dirtiness, untracked files and ahead/behind counts."""

from __future__ import annotations

import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from grove.errors import GitCommandFailed, WorktreeNotFound
from grove.worktree import Worktree

_BRANCH_PREFIX = "refs/heads/"
_MAX_DIRTY_FILES = 10


@dataclass(frozen=True)
class Status:
    """Summary status of one worktree."""

    dirty: bool
    # Commits on the local branch that are not upstream; None without an upstream.
    ahead: Optional[int]
    # Commits upstream that are not on the local branch; None without an upstream.
    behind: Optional[int]
    untracked: int
    # True when ahead == 0, meaning every local commit has been pushed.
    is_pushed: bool


@dataclass
class StatusDetail:
    """Detailed status of one worktree."""

    head_branch: Optional[str] = None
    upstream: Optional[str] = None
    ahead: Optional[int] = None
    behind: Optional[int] = None
    dirty: bool = False
    # Changed and untracked paths, capped at 10; the full count is dirty_files_total.
    dirty_files: list[str] = field(default_factory=list)
    dirty_files_total: int = 0
    # Time of the HEAD commit; None when the repository has no commits.
    last_commit_time: Optional[datetime] = None


class _Entry(NamedTuple):
    xy: str
    path: str
    orig: Optional[str]

    @property
    def untracked(self) -> bool:
        return self.xy == "??"

    @property
    def ignored(self) -> bool:
        return self.xy == "!!"

    @property
    def worktree_changed(self) -> bool:
        return not self.untracked and not self.ignored and self.xy[1:2] not in ("", " ")


def _invoke(repo: Path, args: Sequence[str]) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["git", "-C", str(repo), *args],
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise GitCommandFailed(f"git -C {repo} {' '.join(args)}", str(exc)) from exc


def _git_ok(repo: Path, args: Sequence[str]) -> Optional[str]:
    proc = _invoke(repo, args)
    return proc.stdout if proc.returncode == 0 else None


def _git_checked(repo: Path, args: Sequence[str]) -> str:
    proc = _invoke(repo, args)
    if proc.returncode != 0:
        raise GitCommandFailed(f"git -C {repo} {' '.join(args)}", proc.stderr)
    return proc.stdout


def _open(wt: Worktree) -> Path:
    path = Path(wt.path)
    if not path.exists() or _git_ok(path, ["rev-parse", "--git-dir"]) is None:
        raise WorktreeNotFound(path)
    return path


def _parse_status(output: str) -> Iterator[_Entry]:
    fields = iter(output.split("\0"))
    for item in fields:
        if len(item) < 4:
            continue
        xy, path = item[:2], item[3:]
        orig = next(fields, None) if xy[0] in "RC" else None
        yield _Entry(xy, path, orig)


def _status_entries(repo: Path) -> list[_Entry]:
    output = _git_checked(
        repo, ["status", "--porcelain=v1", "-z", "--untracked-files=all"]
    )
    return list(_parse_status(output))


def _tracked_dirty(entries: Iterable[_Entry]) -> bool:
    return any(not e.untracked and not e.ignored for e in entries)


def _head_branch(repo: Path) -> Optional[str]:
    ref = _git_ok(repo, ["symbolic-ref", "-q", "HEAD"])
    if not ref or not ref.strip():
        return None
    name = ref.strip()
    return name[len(_BRANCH_PREFIX):] if name.startswith(_BRANCH_PREFIX) else name


def _config(repo: Path, key: str) -> Optional[str]:
    value = _git_ok(repo, ["config", "--get", key])
    if value is None:
        return None
    value = value.strip()
    return value or None


def _resolve(repo: Path, ref: str) -> Optional[str]:
    oid = _git_ok(repo, ["rev-parse", "--verify", "-q", ref])
    return oid.strip() if oid and oid.strip() else None


def _count(repo: Path, include: str, exclude: str) -> int:
    return int(_git_checked(repo, ["rev-list", "--count", include, f"^{exclude}"]).strip())


def _upstream_info(
    repo: Path, branch: Optional[str]
) -> tuple[Optional[str], Optional[int], Optional[int]]:
    if branch is None:
        return None, None, None
    remote = _config(repo, f"branch.{branch}.remote")
    merge_ref = _config(repo, f"branch.{branch}.merge")
    if remote is None or merge_ref is None:
        return None, None, None

    upstream_branch = (
        merge_ref[len(_BRANCH_PREFIX):]
        if merge_ref.startswith(_BRANCH_PREFIX)
        else merge_ref
    )
    label = f"{remote}/{upstream_branch}"
    local_oid = _resolve(repo, f"refs/heads/{branch}")
    upstream_oid = _resolve(repo, f"refs/remotes/{remote}/{upstream_branch}")
    if local_oid is None or upstream_oid is None:
        return label, None, None

    ahead = _count(repo, local_oid, upstream_oid)
    behind = _count(repo, upstream_oid, local_oid)
    return label, ahead, behind


def _head_commit_time(repo: Path) -> Optional[datetime]:
    out = _git_ok(repo, ["log", "-1", "--format=%ct", "HEAD"])
    if not out or not out.strip():
        return None
    try:
        return datetime.fromtimestamp(int(out.strip()), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def compute_detail(wt: Worktree) -> StatusDetail:
    """Compute detailed status for a single worktree."""
    repo = _open(wt)
    head_branch = _head_branch(repo)
    upstream, ahead, behind = _upstream_info(repo, head_branch)

    entries = _status_entries(repo)
    paths = [
        f"{e.orig} -> {e.path}" if e.orig is not None and e.worktree_changed else e.path
        for e in entries
        if e.untracked or e.worktree_changed
    ]
    total = len(paths)
    dirty = total > 0 or _tracked_dirty(entries)

    return StatusDetail(
        head_branch=head_branch,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        dirty=dirty,
        dirty_files=paths[:_MAX_DIRTY_FILES],
        dirty_files_total=total,
        last_commit_time=_head_commit_time(repo),
    )


def compute(wt: Worktree) -> Status:
    """Compute summary status for a single worktree, using its recorded branch."""
    repo = _open(wt)
    entries = _status_entries(repo)
    dirty = _tracked_dirty(entries)
    untracked = sum(1 for e in entries if e.untracked)
    _, ahead, behind = _upstream_info(repo, wt.branch)
    return Status(
        dirty=dirty,
        ahead=ahead,
        behind=behind,
        untracked=untracked,
        is_pushed=ahead == 0,
    )


def _compute_or_error(wt: Worktree) -> Union[Status, Exception]:
    try:
        return compute(wt)
    except Exception as exc:  # one failing worktree must not abort the others
        return exc


def compute_all(worktrees: Sequence[Worktree]) -> list[Union[Status, Exception]]:
    """Compute status for all worktrees in parallel.

    Each element corresponds to the worktree at the same index and is either a
    Status or the exception raised while computing it.
    """
    worktrees = list(worktrees)
    if not worktrees:
        return []
    with ThreadPoolExecutor() as pool:
        return list(pool.map(_compute_or_error, worktrees))