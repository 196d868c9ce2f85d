"""Capabilities the session needs from a device link."""

from __future__ import annotations

from typing import Protocol

READ_CHUNK = 1024


class ByteStream(Protocol):
    """An opened duplex byte stream to the receiver.

    ``read`` never blocks: it returns ``b""`` when nothing is available.
    ``wait_readable`` blocks for at most ``timeout`` seconds.
    """

    @property
    def connected(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    def write(self, data: bytes) -> int: ...

    def wait_readable(self, timeout: float) -> bool: ...

    def read(self, size: int = READ_CHUNK) -> bytes: ...
