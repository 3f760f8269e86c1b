"""FastAPI route handlers."""

import json
from collections.abc import AsyncIterator

import httpx
from fastapi import Request, Response
from fastapi.responses import HTMLResponse, StreamingResponse
from starlette.background import BackgroundTask

from core.config import Config
from core.exceptions import RequestTooLarge
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import UpstreamResult
from core.router import raw_path_suffix, sends_body
from ui.log_utils import write_incoming_log

LOGIN_PAGE = """<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><title>Log in</title></head>
<body>
<main>
<h1>Log in</h1>
<p>Sign in to continue.</p>
</main>
</body>
</html>
"""


async def _read_body(request: Request, limit: int) -> bytes:
    """Buffer the whole request body, refusing anything over ``limit`` bytes."""
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise RequestTooLarge(size, limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def _relay_body(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield the backend body undecoded, closing it even if the stream breaks."""
    try:
        async for chunk in response.aiter_raw():
            yield chunk
    finally:
        await response.aclose()


def _failure_response(route: str, result: UpstreamResult, logger: RequestLogger) -> Response:
    status = result.failure_status
    message = result.error or "Upstream error"
    logger.log_error(route, status, message)
    if status == 504:
        content = json.dumps({"error": "Upstream timeout"})
    else:
        content = json.dumps({"error": f"Upstream connection error: {message}"})
    return Response(content=content, status_code=status, media_type="application/json")


async def handle_forward(
    request: Request,
    path: str,
    config: Config,
    logger: RequestLogger,
) -> Response | StreamingResponse:
    """Forward an /api request to the backend and stream the reply back."""
    method = request.method
    body = None
    if sends_body(method):
        try:
            body = await _read_body(request, config.limits.max_body_size)
        except RequestTooLarge as e:
            logger.log_error("forward", 413, str(e))
            return Response(
                content='{"error": "Request body too large"}',
                status_code=413,
                media_type="application/json",
            )

    if config.proxy.debug:
        write_incoming_log(
            method,
            request.url.path,
            dict(request.headers),
            len(body or b""),
            query=request.url.query,
        )

    forwarding = request.app.state.forwarding_service
    prepared = forwarding.prepare(
        method,
        raw_path_suffix(request.scope.get("raw_path"), "/api/", path),
        request.url.query,
        request.headers.raw,
        body,
    )

    upstream = request.app.state.upstream_client
    result = await upstream.forward(prepared)
    if not result.ok:
        return _failure_response("forward", result, logger)

    backend_response = result.response
    if config.forward.log_responses:
        logger.log_response(prepared.method, prepared.target_url, backend_response.status_code)

    header_builder: HeaderBuilder = request.app.state.header_builder
    response = StreamingResponse(
        _relay_body(backend_response),
        status_code=backend_response.status_code,
        background=BackgroundTask(upstream.close, backend_response),
    )
    response.raw_headers = header_builder.build_response_headers(backend_response.headers.raw)
    return response


async def handle_login(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Redirect to the backend's login location when it answers 303, else render the page."""
    forwarding = request.app.state.forwarding_service
    upstream = request.app.state.upstream_client

    result = await upstream.probe(forwarding.login_url())
    if not result.ok:
        return _failure_response("login", result, logger)

    probe = result.response
    if probe.status_code == 303:
        location = probe.headers.get("location") or str(probe.url)
        if location:
            logger.log_redirect(location)
            return Response(status_code=303, headers={"location": location})
        logger.log_error("login", 303, "Backend sent 303 without a location")

    return HTMLResponse(LOGIN_PAGE)
