"""Pytest fixtures for server module testing."""

from collections.abc import Callable, Iterator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from gpsfeed.context import GPSContext
from gpsfeed.nmea import LineFramer
from server.main import app

GGA_LINE = b"$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47\r\n"


class ControlledConnectionManager:
    """Stand-in for the upstream connection; tests deliver bytes by hand."""

    def __init__(
        self,
        host: str,
        service: str,
        framer: LineFramer,
        registrar: object,
        on_cycle: Callable[[], object] | None = None,
        connect_timeout: float = 2.0,
    ) -> None:
        self.host = host
        self.service = service
        self.framer = framer
        self.on_cycle = on_cycle
        self.connect_timeout = connect_timeout
        self.connected = False

    def connect(self) -> bool:
        self.connected = True
        return True

    def close(self) -> None:
        self.connected = False

    def deliver(self, data: bytes) -> None:
        """Play one readable cycle: feed ``data`` then dispatch."""
        self.framer.feed(data)
        if self.on_cycle is not None:
            self.on_cycle()


@pytest.fixture(autouse=True)
def controlled_upstream() -> Iterator[None]:
    with patch("server.main.ConnectionManager", ControlledConnectionManager):
        yield


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upstream(client: TestClient) -> ControlledConnectionManager:
    return client.app.state.connection


@pytest.fixture
def context(client: TestClient) -> GPSContext:
    return client.app.state.context


def deliver(client: TestClient, data: bytes) -> None:
    """Deliver upstream bytes on the event loop owning the feed."""
    client.portal.call(client.app.state.connection.deliver, data)
