"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los trofeos son objetos valor inmutables (``frozen``): solo el parser los crea.

Nota:
- Estos modelos describen *qué* devuelve el servicio, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TrophyDifficulty(str, Enum):
    """Dificultades de trofeo definidas por el servicio."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    IMPOSSIBLE = "IMPOSSIBLE"

    @classmethod
    def parse(cls, value: str) -> "TrophyDifficulty":
        return cls(value.strip().upper())


class DataScope(str, Enum):
    """Ámbito del data-store: datos globales del juego o por usuario."""

    GAME = "game"
    USER = "user"


class UserCredentials(BaseModel):
    """Par (username, token) de un jugador."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(
        ...,
        min_length=1,
        description="Nombre de usuario en el servicio.",
    )
    token: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Token de juego del usuario (no es la contraseña).",
    )


class Trophy(BaseModel):
    """Un trofeo/logro del juego tal como lo lista el servicio."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        gt=0,
        description="Identificador del trofeo.",
    )
    title: str = Field(
        default="",
        description="Título visible del trofeo.",
    )
    difficulty: TrophyDifficulty = Field(
        ...,
        description="Dificultad declarada por el servicio.",
    )
    description: str = Field(
        default="",
        description="Descripción del trofeo.",
    )
    image_url: str | None = Field(
        default=None,
        description="URL absoluta de la imagen del trofeo.",
    )
    achieved: str = Field(
        default="",
        description="Momento en que se consiguió (texto del servicio) o vacío.",
    )

    @property
    def is_achieved(self) -> bool:
        value = self.achieved.strip().lower()
        return bool(value) and value != "false"


class BatchLoadReport(BaseModel):
    """Resultado de un ``load_all``: valores cargados + claves descartadas.

    Por qué existe:
    - El flujo batch tolera fallos por clave; este reporte hace visible qué claves
      se perdieron y por qué, en vez de descartarlas en silencio.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Clave -> objeto deserializado, en el orden del listado.",
    )
    failures: dict[str, str] = Field(
        default_factory=dict,
        description="Clave -> motivo del descarte.",
    )

    @property
    def complete(self) -> bool:
        return not self.failures
