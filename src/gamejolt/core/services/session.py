"""Caché de sesión verificada.

Estado: Unverified -> Verified(username, token).

- Verificar el mismo par ya cacheado no hace I/O.
- Verificar un par distinto descarta el anterior y siempre consulta al servicio;
  solo un éxito deja la sesión en Verified.
- La transición es single-flight: un `asyncio.Lock` serializa las verificaciones
  concurrentes de una misma instancia.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from gamejolt.core.domain.models import UserCredentials
from gamejolt.core.errors import UnverifiedUserError

logger = logging.getLogger(__name__)

VerifyCall = Callable[[UserCredentials], Awaitable[bool]]


class SessionState:
    def __init__(self) -> None:
        self._verified: UserCredentials | None = None
        self._lock = asyncio.Lock()

    @property
    def is_verified(self) -> bool:
        return self._verified is not None

    @property
    def credentials(self) -> UserCredentials | None:
        return self._verified

    def require(self) -> UserCredentials:
        """Credenciales verificadas o `UnverifiedUserError` (antes de cualquier I/O)."""

        if self._verified is None:
            raise UnverifiedUserError()
        return self._verified

    def reset(self) -> None:
        self._verified = None

    async def verify(self, user: UserCredentials, remote_verify: VerifyCall) -> bool:
        async with self._lock:
            if self._verified == user:
                return True

            self._verified = None
            verified = await remote_verify(user)
            if verified:
                self._verified = user
            logger.info("Verification for %s: %s", user.username, "ok" if verified else "rejected")
            return verified
