"""Taxonomía de errores del cliente.

Reglas:
- Un resultado negativo bien formado (``success:"false"``, valor inexistente) NO es un error:
  se devuelve como ``False``/``None``.
- Los errores de contrato (sesión sin verificar, payload nulo) se propagan siempre.
- Los errores de red/protocolo pueden ser absorbidos por clave en los flujos batch.
"""

from __future__ import annotations


class GameJoltError(Exception):
    """Base de todos los errores del cliente."""


class PreconditionError(GameJoltError):
    """Operación intentada sin cumplir un requisito previo (antes de cualquier I/O)."""


class UnverifiedUserError(PreconditionError):
    """Operación de usuario sin una sesión verificada."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "No verified user: call verify_user(username, token) before user-scoped operations"
        )


class InvalidArgumentError(GameJoltError, ValueError):
    """Argumento inválido o violación del contrato de un colaborador."""


class ProtocolError(GameJoltError):
    """Status HTTP distinto de 200 o respuesta que no se puede interpretar."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(GameJoltError):
    """Fallo de red/I/O del ejecutor de transporte."""
