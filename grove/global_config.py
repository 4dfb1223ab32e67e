"""Global repository manifest stored as repos.json."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

MAX_SCHEMA_VERSION = 1
_FILE_NAME = "repos.json"


class GlobalConfigError(Exception):
    """Failure reading, parsing or writing repos.json."""


class SchemaTooNewError(GlobalConfigError):
    def __init__(self, found: int, max_version: int = MAX_SCHEMA_VERSION) -> None:
        self.found = found
        self.max = max_version
        super().__init__(
            f"repos.json has schema_version {found} but this build only "
            f"understands up to {max_version}.\nUpgrade grove or downgrade the config."
        )


def _require(data: dict, key: str) -> Any:
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _require_str(data: dict, key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string or null")
    return value


def _schema_version(data: dict) -> int:
    value = _require(data, "schema_version")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("field `schema_version` must be a non-negative integer")
    return value


def _ensure_object(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


@dataclass
class LaunchOverride:
    terminal: Optional[str] = None
    wezterm_path: Optional[Path] = None
    shell_command: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "terminal": self.terminal,
            "wezterm_path": None if self.wezterm_path is None else str(self.wezterm_path),
            "shell_command": self.shell_command,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "LaunchOverride":
        data = _ensure_object(data)
        wezterm = _optional_str(data, "wezterm_path")
        return cls(
            terminal=_optional_str(data, "terminal"),
            wezterm_path=None if wezterm is None else Path(wezterm),
            shell_command=_optional_str(data, "shell_command"),
        )


@dataclass
class RepoEntry:
    main_repo: Path
    work_dir: Path
    upstream_remote: str
    fork_remote: str
    default_base: str
    dir_prefix: str = ""
    issue_prefix: Optional[str] = None
    launch: Optional[LaunchOverride] = None

    def to_dict(self) -> dict:
        return {
            "main_repo": str(self.main_repo),
            "work_dir": str(self.work_dir),
            "dir_prefix": self.dir_prefix,
            "upstream_remote": self.upstream_remote,
            "fork_remote": self.fork_remote,
            "default_base": self.default_base,
            "issue_prefix": self.issue_prefix,
            "launch": None if self.launch is None else self.launch.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "RepoEntry":
        data = _ensure_object(data)
        launch = data.get("launch")
        dir_prefix = data.get("dir_prefix", "")
        if not isinstance(dir_prefix, str):
            raise ValueError("field `dir_prefix` must be a string")
        return cls(
            main_repo=Path(_require_str(data, "main_repo")),
            work_dir=Path(_require_str(data, "work_dir")),
            dir_prefix=dir_prefix,
            upstream_remote=_require_str(data, "upstream_remote"),
            fork_remote=_require_str(data, "fork_remote"),
            default_base=_require_str(data, "default_base"),
            issue_prefix=_optional_str(data, "issue_prefix"),
            launch=None if launch is None else LaunchOverride.from_dict(launch),
        )


@dataclass
class ReposManifest:
    schema_version: int = MAX_SCHEMA_VERSION
    default_repo: Optional[str] = None
    repos: dict[str, RepoEntry] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "schema_version": self.schema_version,
            "default_repo": self.default_repo,
            "repos": {rid: self.repos[rid].to_dict() for rid in sorted(self.repos)},
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ReposManifest":
        data = _ensure_object(data)
        repos = _ensure_object(data.get("repos") or {})
        return cls(
            schema_version=_schema_version(data),
            default_repo=_optional_str(data, "default_repo"),
            repos={rid: RepoEntry.from_dict(entry) for rid, entry in sorted(repos.items())},
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, config_dir: Path | str) -> "ReposManifest":
        """Load repos.json from config_dir; a missing file yields an empty manifest."""
        path = Path(config_dir) / _FILE_NAME
        if not path.exists():
            return cls()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise GlobalConfigError(f"failed to read repos.json: {exc}") from exc
        try:
            manifest = cls.from_dict(json.loads(text))
        except ValueError as exc:
            raise GlobalConfigError(f"failed to parse repos.json: {exc}") from exc
        if manifest.schema_version > MAX_SCHEMA_VERSION:
            raise SchemaTooNewError(manifest.schema_version, MAX_SCHEMA_VERSION)
        return manifest

    def save(self, config_dir: Path | str) -> None:
        """Write repos.json atomically via a temporary file."""
        directory = Path(config_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            tmp_path = directory / f"{_FILE_NAME}.tmp"
            tmp_path.write_text(self.to_json(), encoding="utf-8")
            os.replace(tmp_path, directory / _FILE_NAME)
        except OSError as exc:
            raise GlobalConfigError(f"failed to read repos.json: {exc}") from exc