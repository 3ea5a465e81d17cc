"""Cliente de la API de juego.

Fachada asíncrona que reúne:
- verificación de usuario (con `SessionState` propio de la instancia),
- trofeos del usuario verificado,
- data-store del juego y del usuario (valores sueltos y batch).

Todas las operaciones de usuario fallan con `UnverifiedUserError` antes de
cualquier request si no hay sesión verificada.
"""

from __future__ import annotations

import logging
from typing import Any

from gamejolt.adapters.codecs import Base64BinarySanitizer, JsonObjectSerializer
from gamejolt.adapters.http_client import HttpxTransport
from gamejolt.core.config import AppSettings
from gamejolt.core.domain.models import BatchLoadReport, DataScope, Trophy, UserCredentials
from gamejolt.core.interfaces.codecs import BinarySanitizer, ObjectSerializer
from gamejolt.core.interfaces.transport import TransportExecutor
from gamejolt.core.protocol.grammar import decode_properties, parse_trophies
from gamejolt.core.protocol.requests import RequestFactory
from gamejolt.core.services.api import call_api
from gamejolt.core.services.data_store import DataStore
from gamejolt.core.services.session import SessionState

logger = logging.getLogger(__name__)


class GameJoltClient:
    def __init__(
        self,
        requests: RequestFactory,
        *,
        transport: TransportExecutor | None = None,
        serializer: ObjectSerializer | None = None,
        sanitizer: BinarySanitizer | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        settings = settings or AppSettings()
        self._requests = requests
        self._transport = transport or HttpxTransport(settings)
        self._session = SessionState()
        self._data = DataStore(
            requests=requests,
            transport=self._transport,
            session=self._session,
            serializer=serializer or JsonObjectSerializer(),
            sanitizer=sanitizer or Base64BinarySanitizer(),
            max_concurrency=settings.data_fetch_concurrency,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: TransportExecutor | None = None,
    ) -> "GameJoltClient":
        settings = settings or AppSettings()
        return cls(RequestFactory.from_settings(settings), transport=transport, settings=settings)

    async def __aenter__(self) -> "GameJoltClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    # Sesión

    @property
    def is_verified(self) -> bool:
        return self._session.is_verified

    @property
    def verified_username(self) -> str | None:
        credentials = self._session.credentials
        return credentials.username if credentials else None

    def reset_session(self) -> None:
        self._session.reset()

    async def verify_user(self, username: str, token: str) -> bool:
        user = UserCredentials(username=username, token=token)
        return await self._session.verify(user, self._remote_verify)

    async def _remote_verify(self, user: UserCredentials) -> bool:
        text = await call_api(self._transport, self._requests.verify_user(user))
        return decode_properties(text).success

    # Trofeos

    async def _trophies(self, achieved: bool | None) -> list[Trophy]:
        user = self._session.require()
        text = await call_api(self._transport, self._requests.trophies(user, achieved))
        return parse_trophies(text)

    async def get_all_trophies(self) -> list[Trophy]:
        return await self._trophies(None)

    async def get_achieved_trophies(self) -> list[Trophy]:
        return await self._trophies(True)

    async def get_unachieved_trophies(self) -> list[Trophy]:
        return await self._trophies(False)

    async def get_trophy(self, trophy_id: int) -> Trophy | None:
        user = self._session.require()
        text = await call_api(self._transport, self._requests.trophy(user, trophy_id))
        trophies = parse_trophies(text)
        return trophies[0] if trophies else None

    async def achieved_trophy(self, trophy_id: int) -> bool:
        """Marca el trofeo como conseguido; ``False`` si ya lo estaba o el servicio lo rechaza."""

        user = self._session.require()
        text = await call_api(self._transport, self._requests.achieve_trophy(user, trophy_id))
        return decode_properties(text).success

    # Data-store: usuario

    async def store_user_data(self, key: str, value: str) -> bool:
        return await self._data.store_text(DataScope.USER, key, value)

    async def store_user_object(self, key: str, obj: Any) -> bool:
        return await self._data.store_object(DataScope.USER, key, obj)

    async def get_user_data(self, key: str) -> str | None:
        return await self._data.fetch_text(DataScope.USER, key)

    async def get_user_object(self, key: str) -> Any | None:
        return await self._data.fetch_object(DataScope.USER, key)

    async def remove_user_data(self, key: str) -> bool:
        return await self._data.remove(DataScope.USER, key)

    async def get_user_data_keys(self) -> list[str]:
        return await self._data.keys(DataScope.USER)

    async def load_all_user_data(self) -> dict[str, Any]:
        return await self._data.load_all(DataScope.USER)

    async def load_all_user_data_report(self) -> BatchLoadReport:
        return await self._data.load_all_report(DataScope.USER)

    async def clear_all_user_data(self) -> bool:
        return await self._data.clear_all(DataScope.USER)

    # Data-store: juego

    async def store_game_data(self, key: str, value: str) -> bool:
        return await self._data.store_text(DataScope.GAME, key, value)

    async def store_game_object(self, key: str, obj: Any) -> bool:
        return await self._data.store_object(DataScope.GAME, key, obj)

    async def get_game_data(self, key: str) -> str | None:
        return await self._data.fetch_text(DataScope.GAME, key)

    async def get_game_object(self, key: str) -> Any | None:
        return await self._data.fetch_object(DataScope.GAME, key)

    async def remove_game_data(self, key: str) -> bool:
        return await self._data.remove(DataScope.GAME, key)

    async def get_game_data_keys(self) -> list[str]:
        return await self._data.keys(DataScope.GAME)

    async def load_all_game_data(self) -> dict[str, Any]:
        return await self._data.load_all(DataScope.GAME)

    async def load_all_game_data_report(self) -> BatchLoadReport:
        return await self._data.load_all_report(DataScope.GAME)

    async def clear_all_game_data(self) -> bool:
        return await self._data.clear_all(DataScope.GAME)
