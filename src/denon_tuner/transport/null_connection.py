"""Dry-run stream: swallows writes and never has anything to read."""

from __future__ import annotations

import logging

from .base import READ_CHUNK

logger = logging.getLogger(__name__)


class NullConnection:
    device = "/dev/null"

    def __init__(self) -> None:
        self._open = False

    @property
    def connected(self) -> bool:
        return self._open

    def open(self) -> None:
        self._open = True
        logger.info("opened %s (debug mode)", self.device)

    def close(self) -> None:
        self._open = False
        logger.info("closed %s (debug mode)", self.device)

    def write(self, data: bytes) -> int:
        return len(data)

    def wait_readable(self, timeout: float) -> bool:
        return False

    def read(self, size: int = READ_CHUNK) -> bytes:
        return b""
