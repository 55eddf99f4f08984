"""ConnectionManager: upstream NMEA TCP connection wired into an event loop.

The manager does not run a loop of its own. It registers a readable-socket
callback with a registrar (an ``asyncio`` event loop satisfies the
interface) and, on each readiness event, drains the socket through the
``LineFramer`` and then runs a dispatch cycle.

Reconnection policy:
    When the stream ends or a read fails, the socket is released and a
    single reconnect attempt is made immediately. If that attempt fails the
    error is logged and no further attempt is scheduled.

    Connecting blocks the event loop, so every attempt is bounded by a
    short timeout (``DEFAULT_CONNECT_TIMEOUT`` unless configured).
"""

import socket
from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol

import structlog

from gpsfeed.nmea.framer import LineFramer

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "ConnectionManager",
    "ReadableRegistrar",
    "open_socket_to",
]

log = structlog.get_logger()

# Seconds; connects block the event loop thread
DEFAULT_CONNECT_TIMEOUT = 2.0


class ReadableRegistrar(Protocol):
    """Host capability: call back when a file descriptor becomes readable."""

    def add_reader(self, fd: int, callback: Callable[..., Any], *args: Any) -> None: ...

    def remove_reader(self, fd: int) -> bool: ...


def open_socket_to(
    host: str, service: str, timeout: float = DEFAULT_CONNECT_TIMEOUT
) -> socket.socket:
    """Connect to the first reachable IPv4 address of ``host``/``service``.

    Candidates are tried in resolver order, each bounded by ``timeout``. The
    returned socket is switched to non-blocking mode once connected.

    Args:
        host: Host name or address.
        service: Port number or service name.
        timeout: Seconds allowed for each connection attempt.

    Raises:
        ConnectionError: If resolution fails or no candidate accepts.
    """
    try:
        candidates = socket.getaddrinfo(host, service, socket.AF_INET, socket.SOCK_STREAM)
    except socket.gaierror as e:
        raise ConnectionError(f"can't resolve host {host}, service {service}") from e

    for family, socktype, proto, _, address in candidates:
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError:
            continue
        try:
            sock.settimeout(timeout)
            sock.connect(address)
        except OSError:
            sock.close()
            continue
        sock.setblocking(False)
        return sock

    raise ConnectionError(f"can't connect to host {host}, service {service}")


class ConnectionManager:
    """Own the upstream socket and feed it to a LineFramer.

    Usable as a context manager: entering connects, exiting closes.

    Args:
        host: Upstream host.
        service: Upstream port number or service name.
        framer: Receives the stream bytes.
        registrar: Event source for readable-socket callbacks.
        on_cycle: Called after every readiness event, typically a dispatch
            pass.
        connect_timeout: Seconds allowed for each connection attempt.
    """

    def __init__(
        self,
        host: str,
        service: str,
        framer: LineFramer,
        registrar: ReadableRegistrar,
        on_cycle: Callable[[], object] | None = None,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    ) -> None:
        self._host = host
        self._service = service
        self._framer = framer
        self._registrar = registrar
        self._on_cycle = on_cycle
        self._connect_timeout = connect_timeout
        self._sock: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def __enter__(self) -> "ConnectionManager":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def connect(self) -> bool:
        """Open the upstream stream and register it with the event source.

        Returns:
            True on success. On failure the error is logged and False is
            returned; nothing is retried.
        """
        if self._sock is not None:
            raise RuntimeError("ConnectionManager is already connected.")
        try:
            sock = open_socket_to(self._host, self._service, self._connect_timeout)
        except ConnectionError as e:
            log.error("upstream_connect_failed", host=self._host, service=self._service, error=str(e))
            return False

        try:
            self._registrar.add_reader(sock.fileno(), self._on_readable)
        except (OSError, ValueError) as e:
            sock.close()
            log.error("upstream_register_failed", host=self._host, service=self._service, error=str(e))
            return False

        self._sock = sock
        self._framer.reset()
        log.info("upstream_connected", host=self._host, service=self._service)
        return True

    def close(self) -> None:
        """Unregister and close the upstream socket, if any."""
        sock, self._sock = self._sock, None
        if sock is None:
            return
        self._registrar.remove_reader(sock.fileno())
        sock.close()

    def _on_readable(self) -> None:
        sock = self._sock
        if sock is None:
            return
        try:
            self._framer.read_from(sock)
        except EOFError:
            log.warning("upstream_closed", host=self._host, service=self._service)
            self._reconnect()
        except OSError as e:
            log.warning("upstream_read_failed", host=self._host, service=self._service, error=str(e))
            self._reconnect()
        finally:
            if self._on_cycle is not None:
                self._on_cycle()

    def _reconnect(self) -> None:
        self.close()
        self.connect()
