"""Request/reply pump with the receiver's inter-command timing gate.

The receiver answers a command within 200 ms, but after a reply has been
read it needs close to a full second before it will accept another command.
A command sent sooner is ignored, and so is the one before it, with nothing
on the wire to show for it. Every exchange therefore waits out
``command_delay`` measured from the end of the previous exchange.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from .protocol.parser import normalize_line_endings
from .transport.base import READ_CHUNK, ByteStream

logger = logging.getLogger(__name__)
timing_logger = logging.getLogger(__name__ + ".timing")

COMMAND_DELAY = 0.95
LINE_ENDING = b"\r\n"
ENCODING = "ascii"


class Session:
    """Owns the stream for one run and serializes exchanges on it.

    Args:
        stream: An opened link to the receiver.
        command_delay: Minimum quiet time between exchanges, in seconds.
            Also bounds how long to wait for the first byte of a reply.
        clock: Monotonic time source.
        sleep: Blocking sleep function.
    """

    def __init__(
        self,
        stream: ByteStream,
        command_delay: float = COMMAND_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._stream = stream
        self._command_delay = command_delay
        self._clock = clock
        self._sleep = sleep
        self._last_completed: float | None = None

    @property
    def command_delay(self) -> float:
        return self._command_delay

    @property
    def last_completed(self) -> float | None:
        """Clock reading when the previous exchange's reply wait ended."""
        return self._last_completed

    def flush(self) -> str:
        """Discard whatever the device sent before this run started."""
        stale = self._drain()
        for line in _split_lines(stale):
            logger.debug("<<< %-8s (flush)", line)
        return stale

    def settle(self, factor: float = 1.0) -> None:
        """Block until ``factor * command_delay`` has passed since the last exchange."""
        if self._last_completed is None:
            return
        remaining = self._last_completed + self._command_delay * factor - self._clock()
        if remaining > 0:
            timing_logger.debug("   sleep %.3f", remaining)
            self._sleep(remaining)

    def send_and_receive(self, raw: str) -> str:
        """Send one command line and collect whatever comes back.

        Returns the reply with line endings normalized to ``\\n``. An empty
        string means the device said nothing within the read window.

        Raises:
            TransportError: If the write fails.
        """
        self.settle()

        line = raw.rstrip("\r\n")
        self._stream.write(line.encode(ENCODING) + LINE_ENDING)
        logger.debug(" >>> %s", line)

        reply = self._receive()
        self._last_completed = self._clock()

        if not reply.strip():
            logger.debug(" <<< no reply!")
        else:
            for reply_line in _split_lines(reply):
                logger.debug(" <<< %s", reply_line)
        return reply

    def _receive(self) -> str:
        # Only the first wait is bounded by command_delay; once bytes start
        # arriving, keep draining until the stream goes quiet.
        data = b""
        wait = self._command_delay
        while self._stream.wait_readable(wait):
            wait = 0
            chunk = self._read_available()
            if not chunk:
                break
            data += chunk
        return normalize_line_endings(data.decode(ENCODING, errors="replace"))

    def _drain(self) -> str:
        data = self._read_available()
        return normalize_line_endings(data.decode(ENCODING, errors="replace"))

    def _read_available(self) -> bytes:
        data = b""
        while True:
            chunk = self._stream.read(READ_CHUNK)
            if not chunk:
                return data
            data += chunk


def _split_lines(text: str) -> list[str]:
    return [line for line in text.rstrip("\n").split("\n") if line]
