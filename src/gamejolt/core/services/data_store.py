"""Flujos del data-store (valores sueltos y operaciones batch).

Pipeline de un objeto:
- store: serializer -> bytes -> sanitizer -> texto -> parámetro ``data``.
- load:  línea de estado SUCCESS -> sanitizer.unsanitize -> serializer.deserialize.

Los batch (``load_all``/``clear_all``) listan claves y luego hacen una llamada por
clave. No hay atomicidad: cada clave es independiente y un fallo de red/protocolo
en una clave no aborta el resto. Las claves descartadas quedan en
`BatchLoadReport.failures` y en el log.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from gamejolt.core.domain.models import BatchLoadReport, DataScope, UserCredentials
from gamejolt.core.errors import (
    GameJoltError,
    InvalidArgumentError,
    ProtocolError,
    TransportError,
)
from gamejolt.core.interfaces.codecs import BinarySanitizer, ObjectSerializer
from gamejolt.core.interfaces.transport import TransportExecutor
from gamejolt.core.protocol.grammar import (
    BlockListing,
    decode_properties,
    decode_status_line,
    parse_keys,
)
from gamejolt.core.protocol.requests import RequestFactory
from gamejolt.core.services.api import call_api
from gamejolt.core.services.session import SessionState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataStore:
    def __init__(
        self,
        *,
        requests: RequestFactory,
        transport: TransportExecutor,
        session: SessionState,
        serializer: ObjectSerializer,
        sanitizer: BinarySanitizer,
        max_concurrency: int = 1,
    ) -> None:
        self._requests = requests
        self._transport = transport
        self._session = session
        self._serializer = serializer
        self._sanitizer = sanitizer
        self._max_concurrency = max(1, max_concurrency)

    def _user_for(self, scope: DataScope) -> UserCredentials | None:
        if scope is DataScope.USER:
            return self._session.require()
        return None

    @staticmethod
    def _check_key(key: str) -> None:
        if not key:
            raise InvalidArgumentError("A non-empty data key is required")

    # Valores sueltos

    async def store_text(self, scope: DataScope, key: str, value: str | None) -> bool:
        user = self._user_for(scope)
        self._check_key(key)
        if value is None:
            raise InvalidArgumentError(
                "You supplied a null string for storing. This is invalid, if you would like "
                f"to remove data, please use the remove_{scope.value}_data method"
            )
        return await self._store(key, value, user)

    async def store_object(self, scope: DataScope, key: str, obj: Any) -> bool:
        user = self._user_for(scope)
        self._check_key(key)
        if obj is None:
            raise InvalidArgumentError(
                "You supplied a null object for storing. This is invalid, if you would like "
                f"to remove data, please use the remove_{scope.value}_data method"
            )
        data = self._serializer.serialize(obj)
        if data is None:
            raise InvalidArgumentError(
                f"ObjectSerializer serialized {type(obj)} to None, "
                "please return at least an empty bytes object"
            )
        return await self._store(key, self._sanitizer.sanitize(data), user)

    async def _store(self, key: str, value: str, user: UserCredentials | None) -> bool:
        text = await call_api(self._transport, self._requests.store_data(key, value, user))
        return decode_properties(text).success

    async def fetch_text(self, scope: DataScope, key: str) -> str | None:
        user = self._user_for(scope)
        self._check_key(key)
        return await self._fetch(key, user)

    async def _fetch(self, key: str, user: UserCredentials | None) -> str | None:
        text = await call_api(self._transport, self._requests.fetch_data(key, user))
        status = decode_status_line(text)
        if not status.success:
            return None
        return status.payload

    async def fetch_object(self, scope: DataScope, key: str) -> Any | None:
        user = self._user_for(scope)
        self._check_key(key)
        value = await self._fetch(key, user)
        if value is None:
            return None
        return self._decode(key, value)

    def _decode(self, key: str, value: str) -> Any:
        try:
            return self._serializer.deserialize(self._sanitizer.unsanitize(value))
        except InvalidArgumentError:
            raise
        except ValueError as exc:
            raise ProtocolError(f"Stored value for {key!r} cannot be decoded: {exc}") from exc

    async def remove(self, scope: DataScope, key: str) -> bool:
        user = self._user_for(scope)
        self._check_key(key)
        return await self._remove(key, user)

    async def _remove(self, key: str, user: UserCredentials | None) -> bool:
        text = await call_api(self._transport, self._requests.remove_data(key, user))
        return decode_properties(text).success

    # Listado y batch

    async def _listing(self, user: UserCredentials | None) -> BlockListing:
        text = await call_api(self._transport, self._requests.data_keys(user))
        return parse_keys(text)

    @staticmethod
    def _distinct_keys(listing: BlockListing) -> list[str]:
        return list(dict.fromkeys(block.fields["key"] for block in listing.records))

    async def keys(self, scope: DataScope) -> list[str]:
        listing = await self._listing(self._user_for(scope))
        if not listing.success:
            return []
        return [block.fields["key"] for block in listing.records]

    async def load_all_report(self, scope: DataScope) -> BatchLoadReport:
        user = self._user_for(scope)
        listing = await self._listing(user)
        report = BatchLoadReport()
        if not listing.success or not listing.records:
            return report

        keys = self._distinct_keys(listing)

        async def load_one(key: str) -> Any:
            value = await self._fetch(key, user)
            if value is None:
                raise _NotFound(key)
            return self._decode(key, value)

        outcomes = await self._fan_out(keys, load_one)
        for key, outcome in zip(keys, outcomes):
            if isinstance(outcome, _Failure):
                report.failures[key] = outcome.reason
            else:
                report.values[key] = outcome
        return report

    async def load_all(self, scope: DataScope) -> dict[str, Any]:
        report = await self.load_all_report(scope)
        return report.values

    async def clear_all(self, scope: DataScope) -> bool:
        """Borra cada clave listada; el resultado es el ``success`` del listado."""

        user = self._user_for(scope)
        listing = await self._listing(user)
        if not listing.success:
            return False

        keys = self._distinct_keys(listing)
        outcomes = await self._fan_out(keys, lambda key: self._remove(key, user))
        for key, outcome in zip(keys, outcomes):
            if outcome is False:
                logger.warning("Data key %r was not removed", key)
        return True

    async def _fan_out(
        self, keys: Sequence[str], operation: Callable[[str], Awaitable[T]]
    ) -> list[T | _Failure]:
        sem = asyncio.Semaphore(self._max_concurrency)

        async def run_one(key: str) -> T | _Failure:
            async with sem:
                try:
                    return await operation(key)
                except (ProtocolError, TransportError, _NotFound) as exc:
                    logger.warning("Skipping data key %r: %s", key, exc)
                    return _Failure(str(exc))

        return await asyncio.gather(*(run_one(key) for key in keys))


class _NotFound(GameJoltError):
    def __init__(self, key: str) -> None:
        super().__init__(f"no value stored for {key!r}")


class _Failure:
    __slots__ = ("reason",)

    def __init__(self, reason: str) -> None:
        self.reason = reason
