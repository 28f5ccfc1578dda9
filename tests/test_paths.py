import pytest

from solcbuild.paths import join_path, normalize_path, resolve_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("/", "/"),
        ("A//B", "A/B"),
        ("A/./B", "A/B"),
        ("A/foo/../B", "A/B"),
        ("///A/foo/../B", "/A/B"),
        ("//A", "/A"),
        ("A/B/", "A/B"),
        ("./A", "A"),
        (".", "."),
        ("", "."),
        ("A/..", "."),
    ],
)
def test_normalize_path_collapses_lexically(raw: str, expected: str) -> None:
    assert normalize_path(raw) == expected


def test_successive_parent_references_are_kept() -> None:
    assert normalize_path("a/../../b") == "../b"
    assert normalize_path("../../x") == "../../x"
    assert normalize_path("a/b/../../../c") == "../c"


def test_parent_reference_cannot_escape_root() -> None:
    assert normalize_path("/..") == "/"
    assert normalize_path("/../../a") == "/a"
    assert normalize_path("/a/../../b") == "/b"


@pytest.mark.parametrize(
    "raw",
    ["/", "A/B", "../b", "../../x", "/a/b/c", ".", "a"],
)
def test_normalize_path_is_idempotent(raw: str) -> None:
    once = normalize_path(raw)
    assert normalize_path(once) == once


def test_resolve_path_expands_home(fixed_cwd: str) -> None:
    resolved = resolve_path("~/x", cwd=lambda: fixed_cwd, home=lambda: "/home/u")
    assert resolved == "/home/u/x"


def test_resolve_path_bare_home_marker(fixed_cwd: str, fixed_home: str) -> None:
    assert resolve_path("~", cwd=lambda: fixed_cwd, home=lambda: fixed_home) == fixed_home


def test_resolve_path_anchors_relative_paths_at_cwd(fixed_home: str) -> None:
    resolved = resolve_path("../y", cwd=lambda: "/a/b", home=lambda: fixed_home)
    assert resolved == "/a/y"


def test_resolve_path_keeps_absolute_paths(fixed_cwd: str, fixed_home: str) -> None:
    resolved = resolve_path("/opt//solc/./bin", cwd=lambda: fixed_cwd, home=lambda: fixed_home)
    assert resolved == "/opt/solc/bin"


def test_resolve_path_does_not_expand_other_users(fixed_cwd: str, fixed_home: str) -> None:
    resolved = resolve_path("~alice/x", cwd=lambda: fixed_cwd, home=lambda: fixed_home)
    assert resolved == "/work/project/~alice/x"


def test_join_path_normalizes_and_restarts_on_absolute() -> None:
    assert join_path("build", "./out", "libs.txt") == "build/out/libs.txt"
    assert join_path("build", "/abs", "libs.txt") == "/abs/libs.txt"
    assert join_path("/root", "../build", "a.bin") == "/build/a.bin"
