"""Helpers for faking the backend behind httpx.MockTransport."""

import httpx


async def _aiter(body: bytes):
    yield body


def streamed_response(status: int, headers=None, body: bytes = b"") -> httpx.Response:
    """Build an unread backend response, as a real transport would return it.

    ``httpx.Response(content=bytes)`` is read on construction and cannot be
    streamed again, so the body is wrapped in an async iterator. A
    Content-Length is added unless ``headers`` already frame the body.
    """
    headers = list(httpx.Headers(headers or {}).multi_items())
    names = {name.lower() for name, _ in headers}
    if "content-length" not in names and "transfer-encoding" not in names:
        headers.append(("content-length", str(len(body))))
    return httpx.Response(status, headers=headers, content=_aiter(body))
