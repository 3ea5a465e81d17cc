"""Decodificador de respuestas del servicio.

El servicio responde texto plano, no JSON. Hay dos formas:

- Bloques (``Block``): líneas ``clave:"valor"``. La primera línea es la cabecera
  (``success:"true"``) y después vienen grupos de ancho fijo, un campo por línea.
  El listado termina en el primer grupo cuyo campo id está vacío o falta, o cuando
  no quedan líneas para un grupo completo. En trofeos también termina en id ``0``;
  en listados de claves ``0`` es una clave válida.
- Línea de estado (``StatusLine``): primera línea ``SUCCESS``/``FAILURE`` y el resto
  del payload (con saltos de línea embebidos) es el valor crudo.

Ambas toleran ``\\r\\n`` y líneas en blanco al inicio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pydantic import ValidationError

from gamejolt.core.domain.models import Trophy, TrophyDifficulty
from gamejolt.core.domain.properties import PropertyRecord
from gamejolt.core.errors import ProtocolError

SUCCESS_TOKEN = "success"
TROPHY_FIELDS = ("id", "title", "difficulty", "description", "image_url", "achieved")


@dataclass(frozen=True)
class Block:
    fields: PropertyRecord = field(default_factory=PropertyRecord)

    @property
    def success(self) -> bool:
        return self.fields.get_bool(SUCCESS_TOKEN)


@dataclass(frozen=True)
class StatusLine:
    status: str
    payload: str = ""

    @property
    def success(self) -> bool:
        return self.status.strip().lower() == SUCCESS_TOKEN


Record = Union[Block, StatusLine]


@dataclass(frozen=True)
class BlockListing:
    header: Block
    records: list[Block]

    @property
    def success(self) -> bool:
        return self.header.success


def _split_lines(text: str) -> list[str]:
    lines = [line.rstrip("\r") for line in text.split("\n")]
    while lines and not lines[0].strip():
        lines.pop(0)
    return lines


def parse_property_line(line: str) -> tuple[str, str] | None:
    """``clave:"valor"`` -> ``(clave, valor)``; ``None`` si la línea no es una propiedad."""

    if ":" not in line:
        return None
    key, value = line.split(":", 1)
    key = key.strip()
    if not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return key, value


def _block(lines: list[str]) -> Block:
    pairs = (parse_property_line(line) for line in lines)
    return Block(PropertyRecord(pair for pair in pairs if pair is not None))


def decode_properties(text: str) -> Block:
    """Toda la respuesta como un único bloque (respuestas de estado, no listados)."""

    return _block(_split_lines(text))


def decode_blocks(
    text: str,
    *,
    width: int,
    id_field: str,
    offset: int = 1,
    zero_terminates: bool = False,
) -> BlockListing:
    """Listado de grupos de ``width`` líneas a partir de ``offset``.

    Con ``zero_terminates`` un id ``0`` también cierra el listado.
    """

    if width < 1:
        raise ValueError("width must be positive")

    lines = _split_lines(text)
    header = _block(lines[:offset])
    records: list[Block] = []
    for start in range(offset, len(lines), width):
        group = lines[start : start + width]
        if len(group) < width:
            break
        block = _block(group)
        if block.fields.is_blank(id_field):
            break
        if zero_terminates and block.fields[id_field].strip() == "0":
            break
        records.append(block)
    return BlockListing(header=header, records=records)


def decode_status_line(text: str) -> StatusLine:
    body = text.lstrip("\r\n")
    status, sep, payload = body.partition("\n")
    return StatusLine(status=status.rstrip("\r"), payload=payload if sep else "")


def parse_trophies(text: str) -> list[Trophy]:
    listing = decode_blocks(text, width=len(TROPHY_FIELDS), id_field="id", zero_terminates=True)
    return [trophy_from_record(block.fields) for block in listing.records]


def trophy_from_record(record: PropertyRecord) -> Trophy:
    raw_difficulty = record.get("difficulty", "")
    try:
        difficulty = TrophyDifficulty.parse(raw_difficulty)
    except ValueError as exc:
        raise ProtocolError(f"Unknown trophy difficulty: {raw_difficulty!r}") from exc

    try:
        return Trophy(
            id=record.get_int("id"),
            title=record.get("title", ""),
            difficulty=difficulty,
            description=record.get("description", ""),
            image_url=record.get_url("image_url"),
            achieved=record.get("achieved", ""),
        )
    except ValidationError as exc:
        raise ProtocolError(f"Malformed trophy record: {exc}") from exc


def parse_keys(text: str) -> BlockListing:
    return decode_blocks(text, width=1, id_field="key")
