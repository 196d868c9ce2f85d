"""TCP connection through a serial-to-network bridge (e.g. a Lantronix UDS-10)."""

from __future__ import annotations

import logging
import select
import socket

from ..errors import TransportError
from .base import READ_CHUNK

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 10.0


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` and resolve a service name port.

    Raises:
        TransportError: If the address is malformed or the service unknown.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port:
        raise TransportError(f"not a host:port address: {address}")
    if port.isdigit():
        return host, int(port)
    try:
        return host, socket.getservbyname(port, "tcp")
    except OSError:
        raise TransportError(f"unrecognised port: {port}") from None


class SocketConnection:
    """A ``host:port`` stream to the receiver's serial bridge."""

    def __init__(self, address: str) -> None:
        self._address = address
        self._host, self._port = parse_address(address)
        self._sock: socket.socket | None = None

    @property
    def device(self) -> str:
        return self._address

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        logger.info("connecting to %s", self._address)
        try:
            sock = socket.create_connection(
                (self._host, self._port), timeout=CONNECT_TIMEOUT
            )
        except socket.gaierror as e:
            raise TransportError(f"host not found: {self._host}") from e
        except OSError as e:
            raise TransportError(f"connect: {self._address}: {e}") from e

        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        sock.setblocking(False)
        self._sock = sock
        logger.info("connected to %s", self._address)

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError as e:
            raise TransportError(f"{self._address}: {e}") from e
        finally:
            self._sock = None
        logger.info("closed %s", self._address)

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError(f"{self._address}: not connected")
        return self._sock

    def write(self, data: bytes) -> int:
        sock = self._socket()
        try:
            _, writable, _ = select.select([], [sock], [], CONNECT_TIMEOUT)
            if not writable:
                raise TransportError(f"{self._address}: write timed out")
            sock.sendall(data)
        except OSError as e:
            raise TransportError(f"{self._address}: {e}") from e
        return len(data)

    def wait_readable(self, timeout: float) -> bool:
        sock = self._socket()
        readable, _, _ = select.select([sock], [], [], timeout)
        return bool(readable)

    def read(self, size: int = READ_CHUNK) -> bytes:
        sock = self._socket()
        try:
            return sock.recv(size)
        except BlockingIOError:
            return b""
        except OSError as e:
            raise TransportError(f"{self._address}: {e}") from e
