"""Device links: serial port, TCP bridge, or a null stream for dry runs."""

from __future__ import annotations

import re

from .base import ByteStream
from .null_connection import NullConnection
from .serial_connection import SerialConnection
from .socket_connection import SocketConnection

_HOST_PORT_RE = re.compile(r"^[^:/]+:[^:/.]+$")


def is_network_address(device: str) -> bool:
    """True for ``host:port`` (or ``host:service``), false for a device path."""
    return bool(_HOST_PORT_RE.match(device))


def open_connection(device: str, baudrate: int, debug: bool = False) -> ByteStream:
    """Create and open the link selected by configuration.

    Raises:
        TransportError: If the link cannot be opened.
    """
    if debug:
        conn: ByteStream = NullConnection()
    elif is_network_address(device):
        conn = SocketConnection(device)
    else:
        conn = SerialConnection(device, baudrate)
    conn.open()
    return conn
