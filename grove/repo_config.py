"""Per-repository overrides stored in <work_dir>/.grove/config.json."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from grove.global_config import LaunchOverride

MAX_SCHEMA_VERSION = 1


class RepoConfigError(Exception):
    """Failure reading or parsing .grove/config.json."""


class RepoSchemaTooNewError(RepoConfigError):
    def __init__(self, found: int, max_version: int = MAX_SCHEMA_VERSION) -> None:
        self.found = found
        self.max = max_version
        super().__init__(
            f".grove/config.json has schema_version {found} but this build only "
            f"understands up to {max_version}.\nUpgrade grove or downgrade the config."
        )


@dataclass
class PerRepoConfig:
    schema_version: int
    launch: Optional[LaunchOverride] = None
    default_base: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "schema_version": self.schema_version,
            "launch": None if self.launch is None else self.launch.to_dict(),
            "default_base": self.default_base,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PerRepoConfig":
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        if "schema_version" not in data:
            raise ValueError("missing field `schema_version`")
        version = data["schema_version"]
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise ValueError("field `schema_version` must be a non-negative integer")
        base = data.get("default_base")
        if base is not None and not isinstance(base, str):
            raise ValueError("field `default_base` must be a string or null")
        launch = data.get("launch")
        return cls(
            schema_version=version,
            launch=None if launch is None else LaunchOverride.from_dict(launch),
            default_base=base,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, work_dir: Path | str) -> Optional["PerRepoConfig"]:
        """Load the config, or return None when the file does not exist."""
        path = Path(work_dir) / ".grove" / "config.json"
        if not path.exists():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RepoConfigError(f"failed to read .grove/config.json: {exc}") from exc
        try:
            config = cls.from_dict(json.loads(text))
        except ValueError as exc:
            raise RepoConfigError(f"failed to parse .grove/config.json: {exc}") from exc
        if config.schema_version > MAX_SCHEMA_VERSION:
            raise RepoSchemaTooNewError(config.schema_version, MAX_SCHEMA_VERSION)
        return config