"""Serial connection to the receiver's RS-232 port.

The receiver talks 9600 baud, 8 data bits, no parity, one stop bit, with no
flow control. Reads are non-blocking; readiness is polled.
"""

from __future__ import annotations

import logging
import time

import serial

from ..errors import TransportError
from .base import READ_CHUNK

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/ttyUSB0"
DEFAULT_BAUDRATE = 9600
POLL_INTERVAL = 0.01


class SerialConnection:
    """Manages the serial line to the receiver.

    Usage::

        conn = SerialConnection("/dev/ttyUSB0")
        conn.open()
        conn.write(b"PW?\\r\\n")
        if conn.wait_readable(0.95):
            reply = conn.read()
        conn.close()
    """

    def __init__(
        self,
        device: str = DEFAULT_DEVICE,
        baudrate: int = DEFAULT_BAUDRATE,
    ) -> None:
        self._device = device
        self._baudrate = baudrate
        self._serial: serial.Serial | None = None

    @property
    def device(self) -> str:
        return self._device

    @property
    def connected(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def open(self) -> None:
        """Open the port.

        Raises:
            TransportError: If the port cannot be opened or configured.
        """
        try:
            self._serial = serial.Serial(
                port=self._device,
                baudrate=self._baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=0,
                write_timeout=1.0,
                exclusive=True,
            )
        except (serial.SerialException, ValueError) as e:
            raise TransportError(f"{self._device}: {e}") from e

        logger.info("opened %s at %d baud", self._device, self._baudrate)

    def close(self) -> None:
        """Close the port."""
        if self._serial is None:
            return

        try:
            self._serial.close()
        except serial.SerialException as e:
            raise TransportError(f"{self._device}: {e}") from e
        finally:
            self._serial = None
        logger.info("closed %s", self._device)

    def _port(self) -> serial.Serial:
        if self._serial is None:
            raise TransportError(f"{self._device}: not open")
        return self._serial

    def write(self, data: bytes) -> int:
        port = self._port()
        try:
            written = port.write(data)
            port.flush()
        except serial.SerialException as e:
            raise TransportError(f"{self._device}: {e}") from e
        return written or 0

    def wait_readable(self, timeout: float) -> bool:
        port = self._port()
        deadline = time.monotonic() + timeout
        while True:
            try:
                if port.in_waiting:
                    return True
            except (serial.SerialException, OSError) as e:
                raise TransportError(f"{self._device}: {e}") from e
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(POLL_INTERVAL, remaining))

    def read(self, size: int = READ_CHUNK) -> bytes:
        port = self._port()
        try:
            return port.read(size)
        except serial.SerialException as e:
            raise TransportError(f"{self._device}: {e}") from e
