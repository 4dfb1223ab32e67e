import json
from pathlib import Path

import pytest

from grove.global_config import LaunchOverride
from grove.repo_config import (
    MAX_SCHEMA_VERSION,
    PerRepoConfig,
    RepoConfigError,
    RepoSchemaTooNewError,
)


def _write_config(directory, text):
    grove_dir = directory / ".grove"
    grove_dir.mkdir(parents=True, exist_ok=True)
    (grove_dir / "config.json").write_text(text)


def test_missing_file_returns_none(tmp_path):
    assert PerRepoConfig.load(tmp_path) is None


def test_round_trip_with_launch_overrides(tmp_path):
    original = PerRepoConfig(
        schema_version=1,
        launch=LaunchOverride(
            terminal="wezterm",
            wezterm_path=Path("/usr/bin/wezterm"),
            shell_command="fish -l",
        ),
        default_base="main",
    )
    text = original.to_json()
    _write_config(tmp_path, text)
    loaded = PerRepoConfig.load(tmp_path)
    assert loaded.to_json() == text
    assert loaded == original


def test_schema_too_new_errors(tmp_path):
    text = json.dumps(
        {"schema_version": MAX_SCHEMA_VERSION + 1, "launch": None, "default_base": None}
    )
    _write_config(tmp_path, text)
    with pytest.raises(RepoSchemaTooNewError) as info:
        PerRepoConfig.load(tmp_path)
    assert info.value.found == MAX_SCHEMA_VERSION + 1
    assert isinstance(info.value, RepoConfigError)


def test_minimal_config_no_optional_fields(tmp_path):
    _write_config(tmp_path, '{"schema_version": 1}')
    cfg = PerRepoConfig.load(tmp_path)
    assert cfg.schema_version == 1
    assert cfg.launch is None
    assert cfg.default_base is None


def test_invalid_json_is_parse_error(tmp_path):
    _write_config(tmp_path, "[1, 2")
    with pytest.raises(RepoConfigError, match="failed to parse"):
        PerRepoConfig.load(tmp_path)


def test_missing_schema_version_is_parse_error(tmp_path):
    _write_config(tmp_path, '{"default_base": "main"}')
    with pytest.raises(RepoConfigError, match="schema_version"):
        PerRepoConfig.load(tmp_path)