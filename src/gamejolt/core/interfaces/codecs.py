"""Contratos de serialización de payloads del data-store.

- `ObjectSerializer`: objeto <-> bytes. Puede devolver ``b""`` para "sin datos",
  pero nunca ``None`` para un objeto no nulo.
- `BinarySanitizer`: bytes <-> texto apto para un parámetro de query.
  ``unsanitize(sanitize(b)) == b`` para cualquier ``b``, incluido ``b""``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ObjectSerializer(Protocol):
    def serialize(self, obj: Any) -> bytes | None:
        ...

    def deserialize(self, data: bytes) -> Any:
        ...


@runtime_checkable
class BinarySanitizer(Protocol):
    def sanitize(self, data: bytes) -> str:
        ...

    def unsanitize(self, text: str) -> bytes:
        ...
