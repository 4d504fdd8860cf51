"""
Pytest configuration and shared fixtures for the wabot tests.

The WhatsApp session and APEX are external systems: tests use an
in-memory transport that records outbound messages and a ``Mock``
standing in for the APEX client.  All tests run offline.
"""

from typing import List, Tuple
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from wabot.clients.apex_client import ApexClient
from wabot.core.config import Settings
from wabot.core.security import create_access_token
from wabot.main import create_app
from wabot.session.transport import SessionTransport, TransportError


class RecordingTransport(SessionTransport):
    """Transport that keeps sent messages in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.sent: List[Tuple[str, str]] = []
        self.fail_with = None
        self.initialized = False
        self.closed = False

    def initialize(self) -> None:
        self.initialized = True

    def close(self) -> None:
        self.closed = True

    def send_message(self, chat_id: str, text: str) -> None:
        if self.fail_with is not None:
            raise TransportError(self.fail_with)
        self.sent.append((chat_id, text))


@pytest.fixture
def settings():
    return Settings(
        jwt_secret="test-secret",
        apex_api_url="http://apex.test/ords/apex/api",
        apex_login_url="http://apex.test/login",
        gateway_url="http://gateway.test",
        gateway_token=None,
    )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def apex():
    return Mock(spec=ApexClient)


@pytest.fixture
def client(settings, transport, apex):
    app = create_app(settings=settings, transport=transport, apex_client=apex)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(settings):
    token = create_access_token({"sub": "1", "username": "admin", "rol": "ADMIN"}, settings)
    return {"Authorization": f"Bearer {token}"}
