# grove

grove is a library for keeping track of git worktrees across several
repositories. Each repository is registered in a global `repos.json`
manifest and may carry its own `.grove/config.json` overrides. The package
reads and writes that configuration, inspects and changes worktrees, computes
their status, and formats the results for people or as JSON.

`git` must be on the `PATH`: worktree inspection, mutation and status are all
done by running git itself. There are no other runtime dependencies.

## Configuration

The global manifest lives in a configuration directory as `repos.json`:

```json
{
  "schema_version": 1,
  "default_repo": "desktop",
  "repos": {
    "desktop": {
      "main_repo": "/work/desktop/master",
      "work_dir": "/work/desktop",
      "upstream_remote": "upstream",
      "fork_remote": "origin",
      "default_base": "main",
      "issue_prefix": "DESK"
    }
  }
}
```

`ReposManifest.load(config_dir)` returns an empty manifest when the file is
missing, ignores unknown fields, and raises `SchemaTooNewError` for a
`schema_version` newer than this build understands (other read or parse
failures raise `GlobalConfigError`). `ReposManifest.save(config_dir)` writes
the file through a temporary file and a rename.

```python
from pathlib import Path

from grove.global_config import ReposManifest
from grove.repo_config import PerRepoConfig
from grove.resolved import merge

config_dir = Path("~/.config/grove").expanduser()
manifest = ReposManifest.load(config_dir)

entry = manifest.repos["desktop"]
per_repo = PerRepoConfig.load(entry.work_dir)   # None when there is no .grove/config.json
resolved = merge(manifest, "desktop", per_repo)  # None for an unknown repo id
print(resolved.default_base)
```

Per-repo settings (`default_base`, `launch`) take precedence over the global
entry; anything the per-repo file leaves unset falls back to the manifest.

## Worktrees

```python
from grove.worktree import GitBackend
from grove.shell_backend import ShellBackend

backend = ShellBackend()
backend.worktree_add(resolved.main_repo, Path("/work/desktop/feature-x"), "feature-x", "origin/main")

for info in GitBackend().list(resolved.main_repo):
    print(info.path, info.branch, info.head)

backend.worktree_move(resolved.main_repo, Path("/work/desktop/feature-x"), Path("/work/desktop/feature-y"))
backend.worktree_remove(resolved.main_repo, Path("/work/desktop/feature-y"), force=False)
```

With a `base`, `worktree_add` creates the branch from it; without one it
checks out an existing branch. `ShellBackend` also has `fetch`,
`branch_delete` and `remote_branch_delete`. A failing git command raises
`grove.errors.GitCommandFailed`, carrying the command line and git's error
output. `GitBackend.open` and `GitBackend.list` raise `WorktreeNotFound` for a
path that is not a git repository. `grove.worktree.parse_porcelain` parses the
output of `git worktree list --porcelain` on its own.

## Status

```python
from grove.git_status import compute, compute_all, compute_detail

wt = GitBackend().open(Path("/work/desktop/feature-x"))
status = compute(wt)
print(status.dirty, status.ahead, status.behind, status.untracked, status.is_pushed)

detail = compute_detail(wt)
print(detail.head_branch, detail.upstream, detail.dirty_files, detail.dirty_files_total)
```

`ahead` and `behind` are `None` when the branch has no upstream configured.
`dirty_files` holds at most ten paths; `dirty_files_total` has the full count.
`compute_all` runs `compute` over many worktrees in parallel and returns one
result per input, in order: a `Status`, or the exception raised for that
worktree, so one broken worktree does not hide the others.

## Looking up projects by tag

Projects are passed in as a mapping from tag to either a path or an object
with a `path` attribute.

```python
from grove import path_cmd, status_cmd

projects = {"lazy-vm": Path("/work/desktop/lazy-vm")}
print(path_cmd.render("lazy-vm", projects))
```

An unknown tag raises `grove.errors.UnknownTag`, suggesting the closest known
tag when one is similar enough (Jaro-Winkler score above 0.8):

```
unknown tag 'lazyvm' — did you mean 'lazy-vm'?
```

`status_cmd.run(tag, projects, json=False)` prints a worktree's status; the
pieces it uses are available separately: `format_human` for the readable
report, `status_to_json` for a versioned JSON document (unset optional fields
are left out, times are RFC 3339), and `compute_age` for compact ages such as
`42s`, `5m`, `3h` or `2d`.

## Repositories

`grove.repo_cmd` works on a loaded manifest:

- `render_path(manifest, resolved, default)` returns the work directory of
  the current repo, or of the default repo when `default` is true.
- `list_json(manifest)` and `list_table(manifest)` render the registered
  repos; `run_list(manifest, json)` prints one of them.
- `run_default_with_config(manifest, config_dir, repo_id)` makes a repo the
  default and saves the manifest; `run_default` only checks that the id
  exists.
- An unknown id raises `RepoIdNotFound`, with a suggestion from
  `suggest_repo_id` when one scores 0.8 or more.

## Terminal output

`grove.display.render_table(headers, rows)` draws a box table that fits the
terminal width (120 columns when it cannot be detected). `dim(text)` adds the
ANSI dim style only when `should_use_color()` is true: standard output is a
terminal, `NO_COLOR` is unset and `TERM` is not `dumb`.

## What the package does not do

- It installs no command-line program; everything is called from Python.
- It does not store the per-repository registry of tagged projects. Functions
  that look projects up by tag take the mapping as an argument.
- It does not add or remove repositories in the manifest for you; change
  `ReposManifest.repos` and call `save()`.
- It does not create, rename or delete tagged projects as a whole; only the
  underlying git operations in `ShellBackend` are provided.