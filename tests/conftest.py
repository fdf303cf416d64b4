from typing import Any

import pytest
from fastapi.testclient import TestClient

from cartrelay.common.config import RelaySettings
from cartrelay.services.relay.app import create_app

FIXED_MS = 1_700_000_000_000


class FakeGateway:
    """Records every parameter and returns a fixed token, or raises `error`."""

    def __init__(self, token: str = "snap-token-123") -> None:
        self.token = token
        self.error: Exception | None = None
        self.calls: list[dict[str, Any]] = []

    async def create_transaction_token(self, parameter: dict[str, Any]) -> str:
        self.calls.append(parameter)
        if self.error is not None:
            raise self.error
        return self.token


class FakeMessenger:
    """Records every message and returns a fixed message id, or raises `error`."""

    def __init__(self, response: str = "projects/demo/messages/1") -> None:
        self.response = response
        self.error: Exception | None = None
        self.sent: list[dict[str, Any]] = []

    async def send(self, message: dict[str, Any]) -> str:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def relay_settings() -> RelaySettings:
    return RelaySettings(
        _env_file=None,
        midtrans_server_key="SB-server",
        midtrans_client_key="SB-client",
        cors_origin="https://shop.example.com",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture
def client(relay_settings, gateway, messenger) -> TestClient:
    app = create_app(relay_settings, gateway, messenger, now_ms=lambda: FIXED_MS)
    return TestClient(app)
