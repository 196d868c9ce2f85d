"""Reply decoding for device messages."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import NoReply
from .codec import format_decibels, raw_to_decibels
from .commands import OPCODE_FIELDS, Opcode


@dataclass(frozen=True)
class LogicalField:
    """One decoded reply line, ready for display."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name} = {self.value}"


def normalize_line_endings(text: str) -> str:
    """Collapse CR LF and lone CR into LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def decode_volume(payload: str) -> str:
    """Render an MV payload in dB; non-numeric payloads pass through."""
    if payload.isdigit() and len(payload) in (2, 3):
        return format_decibels(raw_to_decibels(payload))
    return payload


def decode_line(line: str) -> LogicalField:
    """Split one reply line into opcode and payload and decode it.

    Opcodes outside the known set (the receiver also reports things like
    ``SVOFF`` or ``ZMON``) keep their two-letter name and raw payload.
    """
    opcode, payload = line[:2], line[2:]
    if opcode == Opcode.VOLUME.value:
        payload = decode_volume(payload)
    return LogicalField(name=OPCODE_FIELDS.get(opcode, opcode), value=payload)


def decode_reply(text: str) -> list[LogicalField]:
    """Decode a whole reply block.

    Raises:
        NoReply: If the block is empty or whitespace only.
    """
    text = normalize_line_endings(text)
    if not text.strip():
        raise NoReply("no reply")
    return [decode_line(line) for line in text.split("\n") if line.strip()]


def render_field(prog: str, field: LogicalField) -> str:
    return f"{prog}: {field}"
