import httpx
import pytest

from api.handlers import _relay_body


@pytest.mark.asyncio
async def test_relay_body_yields_raw_chunks_and_closes():
    response = httpx.Response(200, content=_chunks(b"a", b"b"))

    body = b"".join([chunk async for chunk in _relay_body(response)])

    assert body == b"ab"
    assert response.is_closed


@pytest.mark.asyncio
async def test_relay_body_closes_when_backend_drops_mid_stream():
    async def broken():
        yield b"partial"
        raise httpx.ReadError("connection reset")

    response = httpx.Response(200, content=broken())
    received = []

    with pytest.raises(httpx.ReadError):
        async for chunk in _relay_body(response):
            received.append(chunk)

    assert received == [b"partial"]
    assert response.is_closed


async def _chunks(*parts):
    for part in parts:
        yield part
