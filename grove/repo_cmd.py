"""The `repo` command: inspect and manage entries of the global repos.json manifest."""

from __future__ import annotations

import json as _json
from pathlib import Path
from typing import Optional

from grove.display import render_table
from grove.errors import GroveError, RepoIdNotFound
from grove.global_config import ReposManifest
from grove.path_cmd import jaro_winkler
from grove.resolved import ResolvedConfig

_SUGGEST_THRESHOLD = 0.8
_TABLE_HEADERS = ("ID", "Path", "Default Base", "Issue Prefix", "Default")


def render_path(
    manifest: ReposManifest, resolved: ResolvedConfig, default: bool = False
) -> str:
    """Return the work directory of the default repo, or of the current one."""
    if not default:
        return str(resolved.work_dir)
    repo_id = manifest.default_repo
    if repo_id is None:
        raise GroveError("no default repo set; set default_repo in repos.json")
    entry = manifest.repos.get(repo_id)
    if entry is None:
        raise GroveError(f"default repo '{repo_id}' not found in repos.json")
    return str(entry.work_dir)


def suggest_repo_id(manifest: ReposManifest, repo_id: str) -> Optional[str]:
    """Return the registered id most similar to repo_id, if any scores 0.8 or more."""
    best: Optional[str] = None
    best_score = 0.0
    for candidate in sorted(manifest.repos):
        score = jaro_winkler(repo_id, candidate)
        if score >= _SUGGEST_THRESHOLD and (best is None or score > best_score):
            best, best_score = candidate, score
    return best


def _is_default(manifest: ReposManifest, repo_id: str) -> bool:
    return manifest.default_repo == repo_id


def _require_repo(manifest: ReposManifest, repo_id: str) -> None:
    if repo_id not in manifest.repos:
        raise RepoIdNotFound(repo_id, suggest_repo_id(manifest, repo_id))


def list_json(manifest: ReposManifest) -> str:
    """Render the registered repos as a versioned JSON document."""
    rows = []
    for repo_id in sorted(manifest.repos):
        entry = manifest.repos[repo_id]
        row: dict = {
            "id": repo_id,
            "path": str(entry.work_dir),
            "default_base": entry.default_base,
        }
        if entry.issue_prefix is not None:
            row["issue_prefix"] = entry.issue_prefix
        row["is_default"] = _is_default(manifest, repo_id)
        rows.append(row)
    return _json.dumps({"version": 1, "repos": rows}, indent=2, ensure_ascii=False)


def list_table(manifest: ReposManifest) -> str:
    """Render the registered repos as a table; the default repo is marked with '*'."""
    rows = [
        [
            repo_id,
            str(entry.work_dir),
            entry.default_base,
            entry.issue_prefix or "",
            "*" if _is_default(manifest, repo_id) else "",
        ]
        for repo_id, entry in sorted(manifest.repos.items())
    ]
    return render_table(_TABLE_HEADERS, rows)


def run_list(manifest: ReposManifest, json: bool = False) -> None:
    """Print the registered repos as JSON or as a table."""
    print(list_json(manifest) if json else list_table(manifest))


def run_default(manifest: ReposManifest, repo_id: str) -> None:
    """Check that repo_id is registered, raising RepoIdNotFound otherwise."""
    _require_repo(manifest, repo_id)


def run_default_with_config(
    manifest: ReposManifest, config_dir: Path | str, repo_id: str
) -> None:
    """Make repo_id the default repo and save the manifest to config_dir."""
    _require_repo(manifest, repo_id)
    manifest.default_repo = repo_id
    manifest.save(config_dir)
    print(f"Default repo set to '{repo_id}'")