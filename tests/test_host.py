"""Host and settings tests."""

import dataclasses
import socket

import httpx
import pytest

from service_host import DuplicateServiceName, HandlerError, Host, InvalidService, Service, Settings


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_default_url():
    settings = dataclasses.replace(Settings(), address="127.0.0.1", port=63578)
    assert Host(settings).get_url() == "http://127.0.0.1:63578"


def test_url_follows_settings(make_host):
    assert make_host(address="foo", port=8080).get_url() == "http://foo:8080"


@pytest.mark.parametrize("overrides", [{"port": -1}, {"port": 70000}, {"cache_ttl": 0}, {"cache_ttl": -5}])
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_new_host_has_no_services(host):
    assert len(host.registry) == 0
    assert host.cache.ttl is None
    assert not host.auth.enabled


def test_hosts_do_not_share_state(make_host):
    first, second = make_host(), make_host()
    first.add_service({"name": "test", "handler": lambda data, done: done(None, 1)})

    assert "test" in first.registry
    assert "test" not in second.registry
    assert first.cache is not second.cache


def test_add_service_accepts_mappings_and_services(host):
    def handler(data, done):
        done(None, "ok")

    from_mapping = host.add_service({"name": "test1", "handler": handler})
    from_entity = host.add_service(Service(name="test2", handler=handler))

    assert isinstance(from_mapping, Service)
    assert host.registry.resolve("test1").handler is handler
    assert host.registry.resolve("test2") is from_entity


def test_add_service_validates_definitions(host):
    with pytest.raises(InvalidService):
        host.add_service({"name": "", "handler": lambda data, done: None})
    with pytest.raises(InvalidService):
        host.add_service({"handler": lambda data, done: None})


def test_conflicting_name_is_rejected(host):
    host.add_service({"name": "test", "handler": lambda data, done: None})

    with pytest.raises(DuplicateServiceName, match='"test"'):
        host.add_service({"name": "test", "handler": lambda data, done: None})


def test_initial_services(settings):
    host = Host(settings, services=[{"name": "a", "handler": lambda data, done: None}])
    assert host.registry.names() == ["a"]

    with pytest.raises(DuplicateServiceName):
        Host(
            settings,
            services=[
                {"name": "a", "handler": lambda data, done: None},
                {"name": "a", "handler": lambda data, done: None},
            ],
        )


def test_service_decorator(host):
    @host.service("double")
    def double(data, done):
        done(None, data * 2)

    assert host.registry.resolve("double").handler is double


@pytest.mark.asyncio
async def test_call_service_with_and_without_data(host):
    def handler(data, done):
        assert callable(done)
        done(None, data.get("test", "success"))

    host.add_service({"name": "test", "handler": handler})

    assert await host.call_service("test") == "success"
    assert await host.call_service("test", {"test": "foo"}) == "foo"


@pytest.mark.asyncio
async def test_call_service_reports_failure(host):
    host.add_service({"name": "test", "handler": lambda data, done: done("failed")})

    with pytest.raises(HandlerError, match="failed"):
        await host.call_service("test")


def test_cache_stats(host):
    host.cache.put("svc", "k", 1)

    stats = host.cache_stats()
    assert stats.total_entries == 1
    assert stats.ttl_seconds is None


@pytest.mark.asyncio
async def test_listen_and_stop_listening(make_host):
    host = make_host(port=_free_port(), auth_token="test-token")
    count = 0

    @host.service("count")
    def counter(data, done):
        nonlocal count
        count += 1
        done(None, count)

    await host.listen()
    try:
        assert host.is_listening
        async with httpx.AsyncClient(base_url=host.get_url()) as client:
            headers = {"X-Service": "count", "X-Auth-Token": "test-token", "X-Cache-Key": "k1"}
            first = await client.post("/", headers=headers)
            second = await client.post("/", headers=headers)
            unauthorized = await client.post("/", headers={"X-Service": "count"})
    finally:
        await host.stop_listening()

    assert (first.status_code, first.text) == (200, "1")
    assert (second.status_code, second.text) == (200, "1")
    assert (unauthorized.status_code, unauthorized.text) == (401, "Unauthorized")
    assert not host.is_listening


@pytest.mark.asyncio
async def test_listen_twice_is_an_error(make_host):
    host = make_host(port=_free_port())

    await host.listen()
    try:
        with pytest.raises(RuntimeError):
            await host.listen()
    finally:
        await host.stop_listening()
