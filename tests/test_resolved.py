from pathlib import Path

from grove.global_config import LaunchOverride, RepoEntry, ReposManifest
from grove.repo_config import PerRepoConfig
from grove.resolved import ResolvedConfig, merge


def _make_manifest(default_base, launch):
    return ReposManifest(
        schema_version=1,
        default_repo=None,
        repos={
            "myrepo": RepoEntry(
                main_repo=Path("/c/work/myrepo/main"),
                work_dir=Path("/c/work/myrepo"),
                dir_prefix="",
                upstream_remote="upstream",
                fork_remote="origin",
                default_base=default_base,
                issue_prefix=None,
                launch=launch,
            )
        },
    )


def test_no_per_repo_returns_global_verbatim():
    manifest = _make_manifest("main", LaunchOverride(terminal="wt"))
    resolved = merge(manifest, "myrepo", None)
    assert resolved.default_base == "main"
    assert resolved.launch is not None
    assert resolved.launch.terminal == "wt"
    assert resolved.work_dir == Path("/c/work/myrepo")


def test_per_repo_overrides_take_precedence():
    manifest = _make_manifest("main", LaunchOverride(terminal="wt"))
    per_repo = PerRepoConfig(
        schema_version=1,
        launch=LaunchOverride(
            terminal="wezterm",
            wezterm_path=Path("/usr/bin/wezterm"),
            shell_command="fish",
        ),
        default_base="develop",
    )
    resolved = merge(manifest, "myrepo", per_repo)
    assert resolved.default_base == "develop"
    assert resolved.launch.terminal == "wezterm"
    assert resolved.launch.wezterm_path == Path("/usr/bin/wezterm")
    assert resolved.launch.shell_command == "fish"


def test_per_repo_none_fields_fall_back_to_global():
    manifest = _make_manifest("main", LaunchOverride(terminal="wt", shell_command="bash"))
    per_repo = PerRepoConfig(schema_version=1, launch=None, default_base=None)
    resolved = merge(manifest, "myrepo", per_repo)
    assert resolved.default_base == "main"
    assert resolved.launch.terminal == "wt"
    assert resolved.launch.shell_command == "bash"


def test_unknown_repo_id_returns_none():
    manifest = _make_manifest("main", None)
    assert merge(manifest, "nonexistent", None) is None


def test_merge_does_not_mutate_manifest():
    manifest = _make_manifest("main", LaunchOverride(terminal="wt"))
    resolved = merge(manifest, "myrepo", None)
    resolved.launch.terminal = "changed"
    resolved.default_base = "other"
    assert manifest.repos["myrepo"].launch.terminal == "wt"
    assert manifest.repos["myrepo"].default_base == "main"


def test_from_entry_copies_all_fields():
    entry = _make_manifest("main", None).repos["myrepo"]
    resolved = ResolvedConfig.from_entry(entry)
    assert resolved.main_repo == entry.main_repo
    assert resolved.upstream_remote == "upstream"
    assert resolved.fork_remote == "origin"
    assert resolved.dir_prefix == ""
    assert resolved.launch is None