"""
Pytest configuration for Health Check Service tests.

Provides an in-process auth service reachable through ``httpx.ASGITransport``
and helpers for building clients over ``httpx.MockTransport``.
"""
import socket

import httpx
import pytest
import pytest_asyncio

from auth_platform.auth_service.config import Settings as AuthSettings
from auth_platform.auth_service.main import create_app
from health_check_service.client import AuthClient
from health_check_service.reporter import ResultReporter

BASE_URL = "http://auth.test"


@pytest.fixture
def auth_app():
    return create_app(AuthSettings())


@pytest_asyncio.fixture
async def live_client(auth_app):
    """AuthClient talking to a real auth service app in-process."""
    async with AuthClient(BASE_URL, transport=httpx.ASGITransport(app=auth_app)) as client:
        yield client


@pytest.fixture
def reporter():
    return ResultReporter(capacity=50)


@pytest.fixture
def closed_port():
    """A local TCP port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def make_client():
    """Factory for AuthClients backed by an httpx.MockTransport handler."""
    def factory(handler) -> AuthClient:
        return AuthClient(BASE_URL, transport=httpx.MockTransport(handler))

    return factory
