"""Target URL construction for forwarded requests."""

BODYLESS_METHODS = frozenset({"GET", "HEAD"})


def build_target_url(origin: str, path: str, query: str = "") -> str:
    """Return ``origin/path`` with the original query string appended.

    The path suffix is concatenated as received. ``query`` is the raw query
    string without its leading ``?``.
    """
    search = f"?{query}" if query else ""
    return f"{origin}/{path}{search}"


def sends_body(method: str) -> bool:
    """Whether a request with this method carries a body upstream."""
    return method.upper() not in BODYLESS_METHODS


def raw_path_suffix(raw_path: bytes | None, prefix: str, fallback: str) -> str:
    """Return the still-encoded path after ``prefix``.

    Percent-escapes such as ``%3F``, ``%23`` and ``%2F`` stay encoded so they
    keep their meaning upstream. ``fallback`` is used when the server did not
    supply a raw path.
    """
    if raw_path is None:
        return fallback
    path = raw_path.decode("latin-1")
    if not path.startswith(prefix):
        return fallback
    return path[len(prefix):]
