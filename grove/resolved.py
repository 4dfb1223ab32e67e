"""Merged runtime configuration for a single repository."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from grove.global_config import LaunchOverride, RepoEntry, ReposManifest
from grove.repo_config import PerRepoConfig


@dataclass
class ResolvedConfig:
    main_repo: Path
    work_dir: Path
    upstream_remote: str
    fork_remote: str
    default_base: str
    dir_prefix: str = ""
    issue_prefix: Optional[str] = None
    launch: Optional[LaunchOverride] = None

    @classmethod
    def from_entry(cls, entry: RepoEntry) -> "ResolvedConfig":
        return cls(
            main_repo=entry.main_repo,
            work_dir=entry.work_dir,
            dir_prefix=entry.dir_prefix,
            upstream_remote=entry.upstream_remote,
            fork_remote=entry.fork_remote,
            default_base=entry.default_base,
            issue_prefix=entry.issue_prefix,
            launch=None if entry.launch is None else replace(entry.launch),
        )


def merge(
    manifest: ReposManifest,
    repo_id: str,
    per_repo: Optional[PerRepoConfig] = None,
) -> Optional[ResolvedConfig]:
    """Merge the global entry for repo_id with per-repo overrides.

    Per-repo values win where set; returns None when repo_id is unknown.
    """
    entry = manifest.repos.get(repo_id)
    if entry is None:
        return None
    resolved = ResolvedConfig.from_entry(entry)
    if per_repo is not None:
        if per_repo.default_base is not None:
            resolved.default_base = per_repo.default_base
        if per_repo.launch is not None:
            resolved.launch = replace(per_repo.launch)
    return resolved