import pytest

from core.router import build_target_url, raw_path_suffix, sends_body


@pytest.mark.parametrize(
    "path, query, expected",
    [
        ("users", "active=true", "http://localhost:3000/users?active=true"),
        ("users", "", "http://localhost:3000/users"),
        ("", "", "http://localhost:3000/"),
        ("a/b/c", "x=1&x=2", "http://localhost:3000/a/b/c?x=1&x=2"),
        ("playlists/", "", "http://localhost:3000/playlists/"),
    ],
)
def test_build_target_url(path, query, expected):
    assert build_target_url("http://localhost:3000", path, query) == expected


@pytest.mark.parametrize("method", ["GET", "HEAD", "get", "head"])
def test_bodyless_methods(method):
    assert sends_body(method) is False


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
def test_body_methods(method):
    assert sends_body(method) is True


@pytest.mark.parametrize(
    "raw_path, expected",
    [
        (b"/api/tags/a%3Fb/c%23d", "tags/a%3Fb/c%23d"),
        (b"/api/files/dir%2Fname", "files/dir%2Fname"),
        (b"/api/", ""),
    ],
)
def test_raw_path_suffix_keeps_escapes(raw_path, expected):
    assert raw_path_suffix(raw_path, "/api/", "decoded") == expected


@pytest.mark.parametrize("raw_path", [None, b"/other/path"])
def test_raw_path_suffix_falls_back(raw_path):
    assert raw_path_suffix(raw_path, "/api/", "decoded") == "decoded"
