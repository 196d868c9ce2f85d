"""Command translator and session driver for Denon AV receivers."""

from importlib.metadata import PackageNotFoundError, version

from .errors import (
    InvalidCommand,
    NoReply,
    OutOfRange,
    QueryFailed,
    TransportError,
    TunerError,
)
from .protocol import decibels_to_raw, decode_reply, parse_command, raw_to_decibels
from .session import Session

__all__ = [
    "InvalidCommand",
    "NoReply",
    "OutOfRange",
    "QueryFailed",
    "TransportError",
    "TunerError",
    "Session",
    "decibels_to_raw",
    "decode_reply",
    "parse_command",
    "raw_to_decibels",
]

try:
    __version__ = version("denon-tuner")
except PackageNotFoundError:
    __version__ = "0.0.0"
