"""ServiceRegistry and Service entity tests."""

import pytest

from service_host import DuplicateServiceName, InvalidService, Service, ServiceNotFound, ServiceRegistry


def _noop(data, done):
    done(None, None)


def test_register_and_resolve():
    registry = ServiceRegistry()
    service = Service(name="test", handler=_noop)

    registry.register(service)

    assert registry.resolve("test") is service
    assert "test" in registry
    assert len(registry) == 1


def test_register_can_be_called_multiple_times():
    registry = ServiceRegistry()
    registry.add("test1", _noop)
    registry.add("test2", _noop)

    assert registry.names() == ["test1", "test2"]


def test_duplicate_name_is_rejected_and_first_kept():
    registry = ServiceRegistry()

    def first(data, done):
        done(None, "first")

    def second(data, done):
        done(None, "second")

    registry.add("test", first)
    with pytest.raises(DuplicateServiceName, match='A service has already been defined with the name "test"'):
        registry.add("test", second)

    assert registry.resolve("test").handler is first


@pytest.mark.parametrize("name", [None, "", "missing", "TEST"])
def test_resolve_unknown_name(name):
    registry = ServiceRegistry()
    registry.add("test", _noop)

    with pytest.raises(ServiceNotFound):
        registry.resolve(name)


@pytest.mark.parametrize("name", ["", None, 3])
def test_service_requires_non_empty_name(name):
    with pytest.raises(InvalidService):
        Service(name=name, handler=_noop)


def test_service_requires_callable_handler():
    with pytest.raises(InvalidService):
        Service(name="test", handler="not callable")


def test_service_is_immutable():
    service = Service(name="test", handler=_noop)

    with pytest.raises(AttributeError):
        service.name = "other"


def test_service_from_mapping():
    service = Service.from_mapping({"name": "test", "handler": _noop})
    assert service.name == "test"
    assert service.handler is _noop

    with pytest.raises(InvalidService, match="handler"):
        Service.from_mapping({"name": "test"})
