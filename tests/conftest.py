"""Shared fixtures: quiet settings, a fresh host and a test client."""

import pytest
from fastapi.testclient import TestClient

from service_host import Host, Settings


def make_settings(**overrides) -> Settings:
    values = {
        "address": "127.0.0.1",
        "port": 63578,
        "auth_token": None,
        "cache_ttl": None,
        "output_on_listen": False,
        "silent": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def host(settings):
    return Host(settings)


@pytest.fixture
def client(host):
    """Create a test client for the host's app."""
    return TestClient(host.app)


@pytest.fixture
def make_host():
    """Factory for hosts with non-default settings."""

    def _make(**overrides) -> Host:
        return Host(make_settings(**overrides))

    return _make
