"""Exception hierarchy for the tuner driver."""

from __future__ import annotations


class TunerError(Exception):
    """Base class for every error raised by this package."""


class InvalidCommand(TunerError):
    """A command string named an unknown verb or carried a bad argument."""

    def __init__(self, token: str, message: str | None = None) -> None:
        self.token = token
        super().__init__(message or f"invalid command: {token}")


class OutOfRange(TunerError):
    """A volume value fell outside what the receiver accepts."""

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(
            message or f'dB must be in range -80.0 to -1.0, not "{value}"'
        )


class TransportError(TunerError):
    """Opening, writing to, or closing the device link failed."""


class NoReply(TunerError):
    """The device sent nothing back within the read window."""


class QueryFailed(TunerError):
    """The volume query before a relative change returned no usable value."""
