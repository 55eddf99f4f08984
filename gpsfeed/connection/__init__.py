"""Upstream NMEA TCP connection."""

from gpsfeed.connection.manager import (
    DEFAULT_CONNECT_TIMEOUT,
    ConnectionManager,
    open_socket_to,
)

__all__ = ["DEFAULT_CONNECT_TIMEOUT", "ConnectionManager", "open_socket_to"]
