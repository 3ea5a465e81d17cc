"""
Tests for the batch data-store workflows (load_all / clear_all).
"""
import logging
from urllib.parse import parse_qsl, urlsplit

import pytest

from gamejolt.adapters.codecs import JsonObjectSerializer
from gamejolt.core.errors import (
    InvalidArgumentError,
    ProtocolError,
    TransportError,
    UnverifiedUserError,
)
from gamejolt.core.services.client import GameJoltClient

from tests.conftest import encode_object

KEYS = 'success:"true"\nkey:"key1"\nkey:"key2"\n'


@pytest.fixture
def verified_client(client, verified_transport):
    return client


async def _verify(client):
    assert await client.verify_user("username", "userToken")


class TestLoadAll:
    @pytest.mark.asyncio
    async def test_partial_failure_drops_key(self, verified_client, verified_transport):
        verified_transport.add("data-store/get-keys/", KEYS)
        verified_transport.add("data-store/", "SUCCESS\n" + encode_object("one"), params={"key": "key1"})
        verified_transport.add("data-store/", "FAILURE\nno such key", params={"key": "key2"})
        await _verify(verified_client)

        assert await verified_client.load_all_user_data() == {"key1": "one"}

    @pytest.mark.asyncio
    async def test_report_names_failed_keys(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"\nkey:"a"\nkey:"b"\nkey:"c"')
        transport.add("data-store/", "SUCCESS\n" + encode_object({"x": 1}), params={"key": "a"})
        transport.add("data-store/", status=500, params={"key": "b"})
        transport.add("data-store/", error=TransportError("timeout"), params={"key": "c"})

        report = await client.load_all_game_data_report()

        assert report.values == {"a": {"x": 1}}
        assert list(report.failures) == ["b", "c"]
        assert "500" in report.failures["b"]
        assert not report.complete

    @pytest.mark.asyncio
    async def test_preserves_listing_order(self, client, transport):
        names = ["z", "a", "m", "b"]
        transport.add("data-store/get-keys/", "success:true\n" + "\n".join(f'key:"{n}"' for n in names))
        for name in names:
            transport.add("data-store/", "SUCCESS\n" + encode_object(name.upper()), params={"key": name})

        values = await client.load_all_game_data()

        assert list(values) == names
        fetched = [
            dict(parse_qsl(urlsplit(url).query))["key"]
            for url in transport.calls_to("data-store/")
        ]
        assert fetched == names

    @pytest.mark.asyncio
    async def test_zero_keys_makes_no_further_calls(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"\n')

        assert await client.load_all_game_data() == {}
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_failed_listing_returns_empty(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"false"\nmessage:"no keys"')

        assert await client.load_all_game_data() == {}
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_unverified_user(self, client, transport):
        with pytest.raises(UnverifiedUserError):
            await client.load_all_user_data()
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_skipped_keys_are_logged(self, client, transport, caplog):
        transport.add("data-store/get-keys/", KEYS)
        transport.add("data-store/", "SUCCESS\n" + encode_object(1), params={"key": "key1"})
        transport.add("data-store/", "FAILURE\n", params={"key": "key2"})

        with caplog.at_level(logging.WARNING, logger="gamejolt.core.services.data_store"):
            await client.load_all_game_data()

        assert "key2" in caplog.text

    @pytest.mark.asyncio
    async def test_key_named_zero_is_loaded(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"\nkey:"0"\nkey:"level"')
        transport.add("data-store/", "SUCCESS\n" + encode_object("zero"), params={"key": "0"})
        transport.add("data-store/", "SUCCESS\n" + encode_object(7), params={"key": "level"})

        assert await client.load_all_game_data() == {"0": "zero", "level": 7}
        assert await client.get_game_data_keys() == ["0", "level"]

    @pytest.mark.asyncio
    async def test_duplicate_key_is_fetched_once(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"\nkey:"a"\nkey:"b"\nkey:"a"')
        transport.add("data-store/", "SUCCESS\n" + encode_object(1), params={"key": "a"})
        transport.add("data-store/", "SUCCESS\n" + encode_object(2), params={"key": "b"})

        report = await client.load_all_game_data_report()

        assert report.values == {"a": 1, "b": 2}
        assert report.failures == {}
        assert report.complete
        assert len(transport.calls_to("data-store/")) == 2

    @pytest.mark.asyncio
    async def test_serializer_argument_error_propagates(self, request_factory, transport, settings):
        class StrictSerializer(JsonObjectSerializer):
            def deserialize(self, data):
                raise InvalidArgumentError("serializer contract violated")

        client = GameJoltClient(
            request_factory, transport=transport, serializer=StrictSerializer(), settings=settings
        )
        transport.add("data-store/get-keys/", 'success:"true"\nkey:"a"')
        transport.add("data-store/", "SUCCESS\n" + encode_object(1), params={"key": "a"})

        with pytest.raises(InvalidArgumentError):
            await client.load_all_game_data()

        with pytest.raises(InvalidArgumentError):
            await client.get_game_object("a")

    @pytest.mark.asyncio
    async def test_concurrent_fan_out_keeps_order(self, request_factory, transport, settings):
        settings = settings.model_copy(update={"data_fetch_concurrency": 4})
        client = GameJoltClient(request_factory, transport=transport, settings=settings)
        transport.delay = 0.001
        transport.add("data-store/get-keys/", KEYS)
        transport.add("data-store/", "SUCCESS\n" + encode_object(1), params={"key": "key1"})
        transport.add("data-store/", "SUCCESS\n" + encode_object(2), params={"key": "key2"})

        assert list((await client.load_all_game_data()).items()) == [("key1", 1), ("key2", 2)]


class TestKeys:
    @pytest.mark.asyncio
    async def test_user_keys(self, verified_client, verified_transport):
        verified_transport.add("data-store/get-keys/", KEYS, params={"username": "username"})
        await _verify(verified_client)

        assert await verified_client.get_user_data_keys() == ["key1", "key2"]

    @pytest.mark.asyncio
    async def test_failed_listing(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"false"')
        assert await client.get_game_data_keys() == []


class TestClearAll:
    @pytest.mark.asyncio
    async def test_removes_every_key(self, verified_client, verified_transport):
        verified_transport.add("data-store/get-keys/", KEYS)
        verified_transport.add("data-store/remove/", 'success:"true"')
        await _verify(verified_client)

        assert await verified_client.clear_all_user_data()
        removed = verified_transport.calls_to("data-store/remove/")
        assert len(removed) == 2
        assert "key=key1" in removed[0]
        assert "key=key2" in removed[1]

    @pytest.mark.asyncio
    async def test_key_named_zero_is_removed(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"\nkey:"0"\nkey:"level"')
        transport.add("data-store/remove/", 'success:"true"')

        assert await client.clear_all_game_data()
        removed = transport.calls_to("data-store/remove/")
        assert len(removed) == 2
        assert "key=0" in removed[0]
        assert "key=level" in removed[1]

    @pytest.mark.asyncio
    async def test_per_key_failure_does_not_abort(self, client, transport):
        transport.add("data-store/get-keys/", KEYS)
        transport.add("data-store/remove/", status=503, params={"key": "key1"})
        transport.add("data-store/remove/", 'success:"true"', params={"key": "key2"})

        assert await client.clear_all_game_data()
        assert len(transport.calls_to("data-store/remove/")) == 2

    @pytest.mark.asyncio
    async def test_failed_listing(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"false"')

        assert not await client.clear_all_game_data()
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_listing_http_error_propagates(self, client, transport):
        transport.add("data-store/get-keys/", status=500)

        with pytest.raises(ProtocolError):
            await client.clear_all_game_data()

    @pytest.mark.asyncio
    async def test_zero_keys(self, client, transport):
        transport.add("data-store/get-keys/", 'success:"true"')

        assert await client.clear_all_game_data()
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_unverified_user(self, client, transport):
        with pytest.raises(UnverifiedUserError):
            await client.clear_all_user_data()
        assert transport.calls == []
