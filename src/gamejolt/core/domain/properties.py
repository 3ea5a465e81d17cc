"""Registro de propiedades clave/valor.

Una entidad parseada de la respuesta (un trofeo, una clave, un reporte de estado)
es un mapeo ordenado de strings. Los accesores tipados derivan el valor al leer;
una clave ausente es distinta de un valor vacío.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import urlparse

from gamejolt.core.errors import ProtocolError


class PropertyRecord(Mapping[str, str]):
    """Mapeo ordenado e inmutable de propiedades de una respuesta."""

    __slots__ = ("_values",)

    def __init__(self, items: Iterable[tuple[str, str]] | Mapping[str, str] = ()) -> None:
        if isinstance(items, Mapping):
            items = items.items()
        values: dict[str, str] = {}
        for key, value in items:
            values[key] = value
        self._values = values

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyRecord({self._values!r})"

    def is_blank(self, key: str) -> bool:
        value = self._values.get(key)
        return value is None or not value.strip()

    def get_bool(self, key: str) -> bool:
        value = self._values.get(key)
        return value is not None and value.strip().lower() == "true"

    def get_int(self, key: str) -> int:
        """Entero del campo; ausente o en blanco vale 0."""

        if self.is_blank(key):
            return 0
        value = self._values[key].strip()
        try:
            return int(value)
        except ValueError as exc:
            raise ProtocolError(f"Field {key!r} is not an integer: {value!r}") from exc

    def get_url(self, key: str) -> str | None:
        if self.is_blank(key):
            return None
        value = self._values[key].strip()
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ProtocolError(f"Field {key!r} is not an absolute URL: {value!r}")
        return value

    def get_delimited(self, key: str, delimiter: str = ",") -> list[str]:
        if key not in self._values:
            return []
        return [piece.strip() for piece in self._values[key].split(delimiter) if piece.strip()]

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)
