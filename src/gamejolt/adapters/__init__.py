"""Adaptadores de I/O (HTTP, codecs, exportación).

Por qué un paquete:
- Aísla httpx y formatos concretos del Core, que solo ve contratos (Protocol).
"""

from gamejolt.adapters.codecs import Base64BinarySanitizer, JsonObjectSerializer
from gamejolt.adapters.http_client import HttpxTransport, build_async_client

__all__ = [
    "Base64BinarySanitizer",
    "HttpxTransport",
    "JsonObjectSerializer",
    "build_async_client",
]
