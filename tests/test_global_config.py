import json
from pathlib import Path

import pytest

from grove.global_config import (
    MAX_SCHEMA_VERSION,
    GlobalConfigError,
    LaunchOverride,
    RepoEntry,
    ReposManifest,
    SchemaTooNewError,
)


def _desktop_entry():
    return RepoEntry(
        main_repo=Path("/c/work/desktop/master"),
        work_dir=Path("/c/work/desktop"),
        dir_prefix="",
        upstream_remote="if",
        fork_remote="my",
        default_base="master",
        issue_prefix="DESKTOP",
        launch=LaunchOverride(terminal="wt", wezterm_path=None, shell_command="fish -l"),
    )


def test_default_on_missing_file(tmp_path):
    manifest = ReposManifest.load(tmp_path)
    assert manifest.schema_version == MAX_SCHEMA_VERSION
    assert manifest.repos == {}
    assert manifest.default_repo is None


def test_round_trip(tmp_path):
    manifest = ReposManifest()
    manifest.repos["desktop"] = _desktop_entry()
    manifest.save(tmp_path)
    loaded = ReposManifest.load(tmp_path)
    assert loaded.to_json() == manifest.to_json()
    assert loaded == manifest
    assert not (tmp_path / "repos.json.tmp").exists()


def test_unknown_fields_ignored(tmp_path):
    text = """{
        "schema_version": 1,
        "default_repo": null,
        "repos": {},
        "unknown_future_field": "some_value",
        "another_unknown": 42
    }"""
    (tmp_path / "repos.json").write_text(text)
    manifest = ReposManifest.load(tmp_path)
    assert manifest.schema_version == 1
    assert manifest.repos == {}


def test_schema_too_new_errors(tmp_path):
    text = json.dumps({"schema_version": MAX_SCHEMA_VERSION + 1, "repos": {}})
    (tmp_path / "repos.json").write_text(text)
    with pytest.raises(SchemaTooNewError) as info:
        ReposManifest.load(tmp_path)
    assert info.value.found == MAX_SCHEMA_VERSION + 1
    assert info.value.max == MAX_SCHEMA_VERSION
    assert "Upgrade grove" in str(info.value)


def test_invalid_json_is_parse_error(tmp_path):
    (tmp_path / "repos.json").write_text("{not json")
    with pytest.raises(GlobalConfigError, match="failed to parse repos.json"):
        ReposManifest.load(tmp_path)


def test_missing_required_field_is_parse_error(tmp_path):
    data = {"schema_version": 1, "repos": {"x": {"main_repo": "/a", "work_dir": "/a"}}}
    (tmp_path / "repos.json").write_text(json.dumps(data))
    with pytest.raises(GlobalConfigError, match="upstream_remote"):
        ReposManifest.load(tmp_path)


def test_entry_defaults_when_optional_fields_absent():
    entry = RepoEntry.from_dict(
        {
            "main_repo": "/c/work/r/master",
            "work_dir": "/c/work/r",
            "upstream_remote": "upstream",
            "fork_remote": "origin",
            "default_base": "main",
        }
    )
    assert entry.dir_prefix == ""
    assert entry.issue_prefix is None
    assert entry.launch is None
    assert entry.work_dir == Path("/c/work/r")


def test_to_json_field_order():
    manifest = ReposManifest(default_repo="desktop", repos={"desktop": _desktop_entry()})
    data = json.loads(manifest.to_json())
    assert list(data) == ["schema_version", "default_repo", "repos"]
    assert list(data["repos"]["desktop"]) == [
        "main_repo",
        "work_dir",
        "dir_prefix",
        "upstream_remote",
        "fork_remote",
        "default_base",
        "issue_prefix",
        "launch",
    ]
    assert data["repos"]["desktop"]["launch"]["shell_command"] == "fish -l"


def test_save_creates_missing_directory(tmp_path):
    target = tmp_path / "nested" / "config"
    ReposManifest(default_repo="desktop", repos={"desktop": _desktop_entry()}).save(target)
    assert ReposManifest.load(target).default_repo == "desktop"