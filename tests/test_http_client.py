"""
Tests for the httpx transport adapter (network replaced by httpx.MockTransport).
"""
import gzip

import httpx
import pytest

from gamejolt.adapters.http_client import HttpxTransport, build_async_client
from gamejolt.core.errors import TransportError
from gamejolt.core.interfaces.transport import ResponseEnvelope, TransportExecutor


def _transport(handler, settings):
    client = build_async_client(settings, transport=httpx.MockTransport(handler))
    return HttpxTransport(settings, client=client)


@pytest.mark.asyncio
async def test_ok_response(settings):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b'success:"true"')

    transport = _transport(handler, settings)
    response = await transport.execute("http://gamejolt.com/api/game/v1/users/auth/?game_id=1")
    await transport.aclose()

    assert response == ResponseEnvelope(status_code=200, body=b'success:"true"')
    assert seen[0].method == "GET"
    assert seen[0].headers["User-Agent"] == settings.user_agent


@pytest.mark.asyncio
async def test_gzip_body_is_decoded(settings):
    def handler(request):
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            content=gzip.compress(b"SUCCESS\ndata-stored"),
        )

    transport = _transport(handler, settings)
    response = await transport.execute("http://gamejolt.com/api/game/v1/data-store/")

    assert response.text() == "SUCCESS\ndata-stored"


@pytest.mark.asyncio
async def test_error_status_returns_empty_body(settings):
    transport = _transport(lambda request: httpx.Response(404, content=b"Not found"), settings)
    response = await transport.execute("http://gamejolt.com/api/game/v1/trophies/")

    assert response.status_code == 404
    assert response.body == b""
    assert not response.is_ok


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = _transport(handler, settings)
    with pytest.raises(TransportError) as exc_info:
        await transport.execute("http://gamejolt.com/api/game/v1/trophies/")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_satisfies_protocol(settings):
    assert isinstance(HttpxTransport(settings), TransportExecutor)
