"""The `status` command: detailed status of one registered worktree."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping, Optional

from grove.errors import UnknownTag
from grove.git_status import StatusDetail, compute_detail
from grove.path_cmd import suggest_near_match
from grove.worktree import GitBackend


def _rfc3339(t: datetime) -> str:
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    text = t.strftime("%Y-%m-%dT%H:%M:%S")
    if t.microsecond:
        text += f".{t.microsecond:06d}".rstrip("0")
    offset = t.utcoffset()
    total = int(offset.total_seconds()) if offset is not None else 0
    if total == 0:
        return text + "Z"
    sign = "+" if total > 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def status_to_json(tag: str, path: Path | str, detail: StatusDetail) -> str:
    """Render the machine-readable status document; unset optional fields are omitted."""
    doc: dict = {"version": 1, "tag": tag, "path": str(path)}
    optional = {
        "head_branch": detail.head_branch,
        "upstream": detail.upstream,
        "ahead": detail.ahead,
        "behind": detail.behind,
    }
    doc.update({key: value for key, value in optional.items() if value is not None})
    doc["dirty"] = detail.dirty
    doc["dirty_files"] = list(detail.dirty_files)
    doc["dirty_files_total"] = detail.dirty_files_total
    if detail.last_commit_time is not None:
        doc["last_commit_time"] = _rfc3339(detail.last_commit_time)
    return _json.dumps(doc, indent=2, ensure_ascii=False)


def near_match_error(tag: str, candidates: Iterable[str]) -> UnknownTag:
    """Build the error for an unknown tag, suggesting a close candidate if any."""
    return UnknownTag(tag, suggest_near_match(tag, candidates))


def compute_age(t: datetime, now: Optional[datetime] = None) -> str:
    """Compact age of t relative to now, e.g. '42s', '5m', '3h', '2d'."""
    if now is None:
        now = datetime.now(timezone.utc)
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    secs = max(int((now - t).total_seconds()), 0)
    if secs < 60:
        return f"{secs}s"
    if secs < 3600:
        return f"{secs // 60}m"
    if secs < 86400:
        return f"{secs // 3600}h"
    return f"{secs // 86400}d"


def _ahead_behind(ahead: Optional[int], behind: Optional[int]) -> str:
    if ahead is None or behind is None:
        return "unknown"
    if ahead == 0 and behind == 0:
        return "up to date"
    if ahead > 0 and behind == 0:
        return f"{ahead} ahead"
    if ahead == 0 and behind > 0:
        return f"{behind} behind"
    return f"{ahead} ahead, {behind} behind"


def format_human(
    tag: str,
    path: Path | str,
    detail: StatusDetail,
    now: Optional[datetime] = None,
) -> str:
    """Render the human-readable status report."""
    lines = [
        f"── {tag} ──",
        f"  Path:    {path}",
        f"  Branch:  {detail.head_branch or '(detached HEAD)'}"
        if detail.head_branch is not None
        else "  Branch:  (detached HEAD)",
        f"  Upstream: {detail.upstream}"
        if detail.upstream is not None
        else "  Upstream: (none)",
        f"  Ahead/Behind: {_ahead_behind(detail.ahead, detail.behind)}",
        f"  Dirty:   {'yes' if detail.dirty else 'no'}",
    ]
    if detail.dirty_files:
        lines.append(f"  Changed files ({detail.dirty_files_total} total):")
        lines.extend(f"    {name}" for name in detail.dirty_files)
        remaining = detail.dirty_files_total - len(detail.dirty_files)
        if remaining > 0:
            lines.append(f"    ... and {remaining} more")
    if detail.last_commit_time is not None:
        lines.append(f"  Last commit: {compute_age(detail.last_commit_time, now)} ago")
    else:
        lines.append("  Last commit: (no commits)")
    return "\n".join(lines)


def _project_path(project: object) -> Path:
    return Path(getattr(project, "path", project))


def run(tag: str, projects: Mapping[str, object], json: bool = False) -> None:
    """Print the status of the worktree registered under tag."""
    if tag not in projects:
        raise near_match_error(tag, projects.keys())
    path = _project_path(projects[tag])
    worktree = GitBackend().open(path)
    detail = compute_detail(worktree)
    if json:
        print(status_to_json(tag, path, detail))
    else:
        print(format_human(tag, path, detail))