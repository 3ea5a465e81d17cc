"""Contrato del ejecutor de transporte.

Por qué Protocol:
- El Core solo necesita "enviar una URL firmada y recibir status + bytes".
- Permite sustituir httpx por un fake en tests sin herencia rígida.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status HTTP + cuerpo crudo (ya descomprimido)."""

    status_code: int
    body: bytes = b""

    @property
    def is_ok(self) -> bool:
        return self.status_code == 200

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@runtime_checkable
class TransportExecutor(Protocol):
    """Contrato mínimo del transporte.

    Reglas de diseño:
    - `execute` es asíncrono porque hace I/O (HTTP GET).
    - Un status distinto de 200 se devuelve con cuerpo vacío, nunca como excepción.
    - Los fallos de red se elevan como `TransportError`.
    """

    async def execute(self, url: str) -> ResponseEnvelope:
        ...

    async def aclose(self) -> None:
        ...
