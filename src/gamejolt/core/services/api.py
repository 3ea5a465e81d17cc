"""Ejecución de un request firmado contra el transporte."""

from __future__ import annotations

import logging

from gamejolt.core.errors import ProtocolError
from gamejolt.core.interfaces.transport import TransportExecutor
from gamejolt.core.protocol.requests import RequestDescriptor

logger = logging.getLogger(__name__)


async def call_api(transport: TransportExecutor, request: RequestDescriptor) -> str:
    """Ejecuta ``request`` y devuelve el cuerpo como texto.

    Un status distinto de 200 corta el parseo: `ProtocolError`.
    """

    # Solo la ruta: la URL completa lleva firma y user_token.
    logger.debug("GET %s", request.base_url)
    response = await transport.execute(request.url)
    if not response.is_ok:
        raise ProtocolError(
            f"HTTP {response.status_code} from {request.base_url}",
            status_code=response.status_code,
        )
    return response.text()
