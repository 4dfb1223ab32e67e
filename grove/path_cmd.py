"""The `path` command: print the worktree path registered for a tag."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Optional

from grove.errors import UnknownTag

_SUGGEST_THRESHOLD = 0.8


def _jaro(a: str, b: str) -> float:
    a_len, b_len = len(a), len(b)
    if a_len == 0 and b_len == 0:
        return 1.0
    if a_len == 0 or b_len == 0:
        return 0.0

    search_range = max(max(a_len, b_len) // 2 - 1, 0)
    a_flags = [False] * a_len
    b_flags = [False] * b_len
    matches = 0

    for i, a_char in enumerate(a):
        low = max(i - search_range, 0)
        high = min(b_len, i + search_range + 1)
        for j in range(low, high):
            if not b_flags[j] and b[j] == a_char:
                a_flags[i] = b_flags[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    a_matched = [c for c, flag in zip(a, a_flags) if flag]
    b_matched = [c for c, flag in zip(b, b_flags) if flag]
    transpositions = sum(x != y for x, y in zip(a_matched, b_matched)) // 2

    return (
        matches / a_len + matches / b_len + (matches - transpositions) / matches
    ) / 3.0


def jaro_winkler(a: str, b: str) -> float:
    """Jaro-Winkler similarity between 0.0 and 1.0."""
    sim = _jaro(a, b)
    if sim <= 0.7:
        return sim
    prefix = 0
    for x, y in zip(a, b):
        if x != y:
            break
        prefix += 1
    return min(max(sim + 0.1 * min(prefix, 4) * (1.0 - sim), 0.0), 1.0)


def suggest_near_match(tag: str, candidates: Iterable[str]) -> Optional[str]:
    """Return the candidate most similar to tag, if any scores above 0.8."""
    best: Optional[str] = None
    best_score = 0.0
    for candidate in candidates:
        score = jaro_winkler(tag, candidate)
        if score > _SUGGEST_THRESHOLD and (best is None or score >= best_score):
            best, best_score = candidate, score
    return best


def _project_path(project: object) -> Path:
    return Path(getattr(project, "path", project))


def render(tag: str, projects: Mapping[str, object]) -> str:
    """Return the worktree path for tag, or raise UnknownTag with a suggestion."""
    if tag in projects:
        return str(_project_path(projects[tag]))
    raise UnknownTag(tag, suggest_near_match(tag, projects.keys()))


def run(tag: str, projects: Mapping[str, object]) -> None:
    """Print the worktree path for tag."""
    print(render(tag, projects))