"""Cliente Python para la API de juego de Game Jolt.

Uso típico::

    async with GameJoltClient.from_settings() as client:
        if await client.verify_user("player", "token"):
            trophies = await client.get_all_trophies()
"""

from gamejolt.core.domain.models import BatchLoadReport, Trophy, TrophyDifficulty
from gamejolt.core.errors import (
    GameJoltError,
    InvalidArgumentError,
    PreconditionError,
    ProtocolError,
    TransportError,
    UnverifiedUserError,
)
from gamejolt.core.services.client import GameJoltClient

__all__ = [
    "BatchLoadReport",
    "GameJoltClient",
    "GameJoltError",
    "InvalidArgumentError",
    "PreconditionError",
    "ProtocolError",
    "TransportError",
    "Trophy",
    "TrophyDifficulty",
    "UnverifiedUserError",
]
