"""HTTP client wrapper for backend requests."""

import httpx

from core.request_types import PreparedRequest, UpstreamOutcome, UpstreamResult


class UpstreamClient:
    """Send requests to the backend over one shared connection pool."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def forward(self, prepared: PreparedRequest) -> UpstreamResult:
        """Send a forwarded request; the response body is left unread for streaming."""
        req = self._client.build_request(
            prepared.method,
            prepared.target_url,
            headers=prepared.headers,
            content=prepared.body,
        )
        return await self._send(req, stream=True)

    async def probe(self, url: str) -> UpstreamResult:
        """GET ``url`` without following redirects and read the full response."""
        req = self._client.build_request("GET", url)
        return await self._send(req, stream=False)

    async def close(self, response: httpx.Response) -> None:
        """Release a streamed response back to the pool."""
        await response.aclose()

    async def _send(self, request: httpx.Request, *, stream: bool) -> UpstreamResult:
        try:
            response = await self._client.send(request, stream=stream, follow_redirects=False)
        except httpx.TimeoutException as e:
            return UpstreamResult(UpstreamOutcome.TIMEOUT, error=str(e) or "Upstream timeout")
        except httpx.RequestError as e:
            return UpstreamResult(UpstreamOutcome.UNREACHABLE, error=str(e) or type(e).__name__)
        return UpstreamResult(UpstreamOutcome.OK, response=response)
