"""Construcción de requests firmados.

Cada llamada a la API produce un `RequestDescriptor` inmutable:
- parámetros firmados (``game_id`` primero, luego los del método en orden fijo),
- la firma calculada sobre exactamente esos parámetros,
- parámetros finales sin firmar (``user_token``), siempre después de ``signature``.

La misma instancia de `ParameterSet` se usa para firmar y para serializar la
query, así que ambas no pueden divergir.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from gamejolt.core.config import AppSettings
from gamejolt.core.domain.models import UserCredentials
from gamejolt.core.errors import InvalidArgumentError
from gamejolt.core.protocol.signature import ParameterSet, encode_query, sign

SIGNATURE_PARAM = "signature"
USER_TOKEN_PARAM = "user_token"


@dataclass(frozen=True)
class RequestDescriptor:
    base_url: str
    parameters: ParameterSet
    signature: str
    trailing: ParameterSet = field(default_factory=ParameterSet)

    @property
    def url(self) -> str:
        query = self.parameters.with_param(SIGNATURE_PARAM, self.signature).extend(self.trailing)
        return self.base_url + encode_query(query)

    def __str__(self) -> str:
        return self.url


def build_signed_request(
    base_url: str,
    parameters: ParameterSet,
    private_key: str,
    *,
    trailing: ParameterSet | None = None,
) -> RequestDescriptor:
    """Firma ``parameters`` y devuelve el descriptor listo para ejecutar."""

    return RequestDescriptor(
        base_url=base_url,
        parameters=parameters,
        signature=sign(base_url, parameters, private_key),
        trailing=trailing or ParameterSet(),
    )


class RequestFactory:
    """Un builder por método de la API.

    El orden de los parámetros de cada método es parte del contrato de firma.
    """

    def __init__(
        self,
        game_id: int,
        private_key: str,
        *,
        api_root: str = "http://gamejolt.com/api/game",
        version: str = "v1",
    ) -> None:
        if not game_id:
            raise InvalidArgumentError("A game id is required to sign requests")
        if not private_key:
            raise InvalidArgumentError("A private key is required to sign requests")
        self._game_id = game_id
        self._private_key = private_key
        self._api_root = api_root.rstrip("/")
        self.version = version

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "RequestFactory":
        if settings.game_id is None or not settings.private_key:
            raise InvalidArgumentError(
                "GAMEJOLT_GAME_ID and GAMEJOLT_PRIVATE_KEY must be configured"
            )
        return cls(
            settings.game_id,
            settings.private_key,
            api_root=settings.api_root,
            version=settings.api_version,
        )

    @property
    def game_id(self) -> int:
        return self._game_id

    def endpoint(self, path: str) -> str:
        return f"{self._api_root}/{self.version}/{path}"

    def _build(
        self,
        path: str,
        params: list[tuple[str, object]],
        user: UserCredentials | None = None,
    ) -> RequestDescriptor:
        signed = [("game_id", self._game_id)]
        trailing = ParameterSet()
        if user is not None:
            signed.append(("username", user.username))
            trailing = ParameterSet([(USER_TOKEN_PARAM, user.token)])
        signed.extend(params)
        return build_signed_request(
            self.endpoint(path),
            ParameterSet(signed),
            self._private_key,
            trailing=trailing,
        )

    # Usuarios

    def verify_user(self, user: UserCredentials) -> RequestDescriptor:
        return self._build("users/auth/", [], user)

    # Trofeos

    def trophies(self, user: UserCredentials, achieved: bool | None = None) -> RequestDescriptor:
        params: list[tuple[str, object]] = []
        if achieved is not None:
            params.append(("achieved", "true" if achieved else "false"))
        return self._build("trophies/", params, user)

    def trophy(self, user: UserCredentials, trophy_id: int) -> RequestDescriptor:
        return self._build("trophies/", [("trophy_id", trophy_id)], user)

    def achieve_trophy(self, user: UserCredentials, trophy_id: int) -> RequestDescriptor:
        return self._build("trophies/add-achieved/", [("trophy_id", trophy_id)], user)

    # Data-store (``user=None`` -> datos del juego)

    def store_data(
        self, key: str, data: str, user: UserCredentials | None = None
    ) -> RequestDescriptor:
        return self._build("data-store/set/", [("key", key), ("data", data)], user)

    def fetch_data(self, key: str, user: UserCredentials | None = None) -> RequestDescriptor:
        return self._build("data-store/", [("key", key), ("format", "dump")], user)

    def remove_data(self, key: str, user: UserCredentials | None = None) -> RequestDescriptor:
        return self._build("data-store/remove/", [("key", key)], user)

    def data_keys(self, user: UserCredentials | None = None) -> RequestDescriptor:
        return self._build("data-store/get-keys/", [], user)
