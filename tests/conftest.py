"""
Shared fixtures: a recording fake transport and a client wired to it.
"""
import asyncio
from urllib.parse import parse_qsl, urlsplit

import pytest

from gamejolt.adapters.codecs import Base64BinarySanitizer, JsonObjectSerializer
from gamejolt.core.config import AppSettings
from gamejolt.core.interfaces.transport import ResponseEnvelope
from gamejolt.core.protocol.requests import RequestFactory
from gamejolt.core.services.client import GameJoltClient

GAME_ID = 1111
PRIVATE_KEY = "private-key"
API_ROOT = "http://gamejolt.com/api/game"

TROPHY_LISTING = "\n".join([
    'success:"true"',
    'id:"1"',
    'title:"First Blood"',
    'description:"Win one match"',
    'difficulty:"Easy"',
    'image_url:"http://cdn.example.com/t1.png"',
    'achieved:"5 days ago"',
    'id:"2"',
    'title:"Untouchable"',
    'description:"Win without a hit"',
    'difficulty:"Hard"',
    'image_url:"http://cdn.example.com/t2.png"',
    'achieved:"false"',
])


class FakeTransport:
    """Answers signed URLs from registered routes and records every call.

    Routes match on the endpoint path suffix and, optionally, on query params.
    The first matching route wins.
    """

    def __init__(self):
        self.calls = []
        self.closed = False
        self.delay = 0.0
        self._routes = []

    def add(self, path, body="", *, status=200, params=None, error=None):
        self._routes.append((path, params or {}, status, body, error))
        return self

    def calls_to(self, path):
        return [url for url in self.calls if urlsplit(url).path.endswith("/" + path)]

    async def execute(self, url):
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        parts = urlsplit(url)
        query = dict(parse_qsl(parts.query))
        for path, params, status, body, error in self._routes:
            if not parts.path.endswith("/" + path):
                continue
            if any(query.get(name) != value for name, value in params.items()):
                continue
            if error is not None:
                raise error
            if status != 200:
                return ResponseEnvelope(status_code=status)
            return ResponseEnvelope(status_code=200, body=body.encode("utf-8"))
        raise AssertionError(f"Unexpected request: {url}")

    async def aclose(self):
        self.closed = True


def encode_object(obj):
    """What the default codecs put in the ``data`` parameter for ``obj``."""
    return Base64BinarySanitizer().sanitize(JsonObjectSerializer().serialize(obj))


@pytest.fixture
def settings():
    return AppSettings(_env_file=None, game_id=GAME_ID, private_key=PRIVATE_KEY, api_root=API_ROOT)


@pytest.fixture
def request_factory():
    return RequestFactory(GAME_ID, PRIVATE_KEY, api_root=API_ROOT)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(request_factory, transport, settings):
    return GameJoltClient(request_factory, transport=transport, settings=settings)


@pytest.fixture
def verified_transport(transport):
    """Transport that accepts ``username``/``userToken``."""
    transport.add(
        "users/auth/",
        'success:"true"',
        params={"username": "username", "user_token": "userToken"},
    )
    return transport
