from dataclasses import dataclass
from pathlib import Path

import pytest

from grove.errors import UnknownTag
from grove.path_cmd import jaro_winkler, render, run, suggest_near_match


@dataclass
class Project:
    path: Path
    branch: str = "main"


def test_known_tag_returns_path():
    projects = {"myfeature": Project(Path("/c/work/test/myfeature"))}
    assert render("myfeature", projects) == "/c/work/test/myfeature"


def test_plain_path_values_are_accepted():
    projects = {"x": Path("/c/work/test/x")}
    assert render("x", projects) == "/c/work/test/x"


def test_unknown_tag_suggests_near_match():
    projects = {"lazy-vm": Project(Path("/c/work/test/lazy-vm"))}
    with pytest.raises(UnknownTag) as info:
        render("lazyvm", projects)
    msg = str(info.value)
    assert "lazy-vm" in msg
    assert "did you mean" in msg
    assert info.value.hint == "lazy-vm"


def test_unknown_tag_no_near_match_plain_error():
    projects = {"alpha": Project(Path("/c/work/test/alpha"))}
    with pytest.raises(UnknownTag) as info:
        render("zzznomatch", projects)
    msg = str(info.value)
    assert "unknown tag" in msg
    assert "did you mean" not in msg
    assert info.value.hint is None


def test_path_output_has_no_decoration():
    projects = {"clean": Project(Path("/c/work/test/clean-branch"))}
    result = render("clean", projects)
    assert "\n" not in result
    assert "\t" not in result
    assert result == "/c/work/test/clean-branch"


def test_run_prints_path(capsys):
    run("feat", {"feat": Project(Path("/c/work/test/feat"))})
    assert capsys.readouterr().out == "/c/work/test/feat\n"


def test_run_unknown_tag_raises():
    with pytest.raises(UnknownTag):
        run("missing", {})


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("martha", "marhta", 0.961111),
        ("dwayne", "duane", 0.84),
        ("dixon", "dicksonx", 0.813333),
    ],
)
def test_jaro_winkler_known_values(a, b, expected):
    assert jaro_winkler(a, b) == pytest.approx(expected, abs=1e-5)


def test_jaro_winkler_edge_cases():
    assert jaro_winkler("", "") == 1.0
    assert jaro_winkler("", "foo") == 0.0
    assert jaro_winkler("foo", "foo") == 1.0
    assert jaro_winkler("abc", "xyz") == 0.0


def test_jaro_winkler_is_symmetric():
    assert jaro_winkler("lazyvm", "lazy-vm") == pytest.approx(
        jaro_winkler("lazy-vm", "lazyvm")
    )


def test_suggest_near_match_picks_best():
    assert suggest_near_match("myfeaturr", ["other", "myfeature", "alpha"]) == "myfeature"


def test_suggest_near_match_none_for_empty_or_distant():
    assert suggest_near_match("anything", []) is None
    assert suggest_near_match("zzznomatch", ["alpha"]) is None