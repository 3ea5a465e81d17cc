"""Firma de requests.

La firma es el MD5 (hex, minúsculas) de ``base_url + query + private_key``.
El servicio la recalcula exactamente igual, así que la serialización de la query
tiene que ser canónica: orden de inserción, valores escapados como formulario
(espacio -> ``+``, escapes en mayúsculas) y claves tal cual.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Iterator
from urllib.parse import quote_plus


class ParameterSet:
    """Conjunto ordenado e inmutable de parámetros de query.

    Los valores se guardan sin escapar; el escape ocurre solo al serializar.
    Una clave repetida conserva su primera posición y el último valor.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[tuple[str, object]] = ()) -> None:
        ordered: dict[str, str] = {}
        for key, value in items:
            ordered[key] = str(value)
        self._items: tuple[tuple[str, str], ...] = tuple(ordered.items())

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"ParameterSet({list(self._items)!r})"

    def with_param(self, key: str, value: object) -> "ParameterSet":
        return ParameterSet((*self._items, (key, value)))

    def extend(self, other: "ParameterSet") -> "ParameterSet":
        return ParameterSet((*self._items, *other._items))

    def get(self, key: str) -> str | None:
        for name, value in self._items:
            if name == key:
                return value
        return None


def encode_query(parameters: Iterable[tuple[str, str]]) -> str:
    """``?k1=v1&k2=v2`` o ``""`` si no hay parámetros."""

    pairs = [f"{key}={quote_plus(value, safe='')}" for key, value in parameters]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def sign(base_url: str, parameters: ParameterSet, private_key: str) -> str:
    payload = base_url + encode_query(parameters) + private_key
    return hashlib.md5(payload.encode("utf-8")).hexdigest()  # nosec - firma del protocolo
