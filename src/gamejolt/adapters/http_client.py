"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y descompresión (gzip/deflate) en un solo lugar.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from gamejolt.core.config import AppSettings
from gamejolt.core.errors import TransportError
from gamejolt.core.interfaces.transport import ResponseEnvelope

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - httpx decodifica ``Content-Encoding`` gzip/deflate por su cuenta.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/plain,*/*;q=0.8",
        "Accept-Encoding": "gzip, deflate",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxTransport:
    """`TransportExecutor` sobre un `httpx.AsyncClient` compartido."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or build_async_client(settings)

    async def execute(self, url: str) -> ResponseEnvelope:
        try:
            response = await self._client.get(url)
            if response.status_code != 200:
                logger.debug("HTTP %s from %s", response.status_code, response.url.path)
                return ResponseEnvelope(status_code=response.status_code)
            return ResponseEnvelope(status_code=response.status_code, body=response.content)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request failed: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
