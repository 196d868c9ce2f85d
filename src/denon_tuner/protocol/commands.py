"""Opcodes, logical command variants, and the command-string normalizer.

Each verb a user can type maps to one frozen dataclass holding an already
validated payload. ``to_raw()`` produces the wire line (without the CR LF
terminator) for that command.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from ..errors import InvalidCommand
from .codec import decibels_to_raw, encode_volume

QUERY = "?"


class Opcode(str, Enum):
    """Two-letter command groups, shared by requests and replies."""

    POWER = "PW"
    INPUT = "SI"
    MUTE = "MU"
    VOLUME = "MV"


# Reply opcode -> field name shown to the user
OPCODE_FIELDS: dict[str, str] = {
    Opcode.POWER.value: "POWER",
    Opcode.INPUT.value: "INPUT",
    Opcode.MUTE.value: "MUTE",
    Opcode.VOLUME.value: "VOLUME",
}

INPUT_SOURCES = (
    "PHONO",
    "CD",
    "TUNER",
    "DVD",
    "VDP",
    "TV",
    "DBS/SAT",
    "VCR-1",
    "VCR-2",
    "VCR-3",
    "V.AUX",
    "CDR/TAPE1",
    "MD/TAPE2",
)

INPUT_ALIASES: dict[str, str] = {
    "DBS": "DBS/SAT",
    "SAT": "DBS/SAT",
    "VAUX": "V.AUX",
    "AUX": "V.AUX",
    "CDR": "CDR/TAPE1",
    "TAPE-1": "CDR/TAPE1",
    "TAPE1": "CDR/TAPE1",
    "MD": "MD/TAPE2",
    "TAPE-2": "MD/TAPE2",
    "TAPE2": "MD/TAPE2",
}

_COMMAND_RE = re.compile(r"^\s*([^=]*?)\s*(?:=\s*(.*?)\s*)?$", re.S)
_VCR_RE = re.compile(r"^VCR(\d)$")
_STEP_RE = re.compile(r"^(UP|DOWN)\s*(\d+(?:\.\d*)?|\.\d+)?$")
_ABSOLUTE_RE = re.compile(r"^([-+]?\d+\.?\d*)\s*(?:DB)?$")


def build_raw(opcode: Opcode, payload: str) -> str:
    """Join an opcode and its payload into one wire line."""
    return f"{opcode.value}{payload}"


def build_volume_query() -> str:
    return build_raw(Opcode.VOLUME, QUERY)


class LogicalCommand(ABC):
    """Base for the per-verb command variants."""

    @property
    @abstractmethod
    def verb(self) -> str:
        """Verb name as the user typed it, normalized."""

    @property
    @abstractmethod
    def argument(self) -> str:
        """Normalized argument; ``?`` for a query."""

    @property
    def is_query(self) -> bool:
        return self.argument == QUERY

    @abstractmethod
    def to_raw(self) -> str:
        """Wire line for this command, without the line terminator."""


@dataclass(frozen=True)
class InputCommand(LogicalCommand):
    """Select or query the input source."""

    source: str = QUERY

    @property
    def verb(self) -> str:
        return "INPUT"

    @property
    def argument(self) -> str:
        return self.source

    def to_raw(self) -> str:
        return build_raw(Opcode.INPUT, self.source)


@dataclass(frozen=True)
class MuteCommand(LogicalCommand):
    """Set or query muting. ``UNMUTE`` is this command with state OFF."""

    state: str = "ON"
    name: str = "MUTE"

    @property
    def verb(self) -> str:
        return self.name

    @property
    def argument(self) -> str:
        return self.state

    def to_raw(self) -> str:
        return build_raw(Opcode.MUTE, self.state)


@dataclass(frozen=True)
class PowerCommand(LogicalCommand):
    """Switch power on, to standby, or query it."""

    state: str = QUERY

    @property
    def verb(self) -> str:
        return "POWER"

    @property
    def argument(self) -> str:
        return self.state

    def to_raw(self) -> str:
        payload = "STANDBY" if self.state == "OFF" else self.state
        return build_raw(Opcode.POWER, payload)


@dataclass(frozen=True)
class VolumeCommand(LogicalCommand):
    """Master volume: query, device step, absolute level, or relative change.

    ``raw`` holds the absolute level for ``absolute`` mode; ``delta`` holds
    the signed change in dB for ``relative`` mode; ``direction`` is UP or
    DOWN for ``step`` and ``relative``.
    """

    mode: str = "query"
    direction: str | None = None
    raw: int | None = None
    delta: float | None = None

    @property
    def verb(self) -> str:
        return "VOLUME"

    @property
    def argument(self) -> str:
        if self.mode == "query":
            return QUERY
        if self.mode == "step":
            return self.direction
        if self.mode == "absolute":
            return encode_volume(self.raw)
        return f"{self.direction}{abs(self.delta):g}"

    @property
    def is_relative(self) -> bool:
        return self.mode == "relative"

    def to_raw(self) -> str:
        if self.is_relative:
            raise ValueError(
                "relative volume changes need the current level; "
                "resolve them through the session first"
            )
        return build_raw(Opcode.VOLUME, self.argument)


def _parse_input(arg: str | None) -> InputCommand:
    if arg is None or arg == QUERY:
        return InputCommand(QUERY)
    source = INPUT_ALIASES.get(arg, arg)
    match = _VCR_RE.match(source)
    if match:
        source = f"VCR-{match.group(1)}"
    if source not in INPUT_SOURCES:
        raise InvalidCommand(arg, f"unknown input source: {arg}")
    return InputCommand(source)


def _parse_mute(arg: str | None) -> MuteCommand:
    if arg is None:
        return MuteCommand("ON")
    if arg in ("ON", "OFF", QUERY):
        return MuteCommand(arg)
    raise InvalidCommand(arg, f"mute: on or off, not {arg}")


def _parse_unmute(arg: str | None) -> MuteCommand:
    if arg is not None:
        raise InvalidCommand(arg, f"unmute: no args allowed: {arg}")
    return MuteCommand("OFF", name="UNMUTE")


def _parse_power(arg: str | None) -> PowerCommand:
    if arg is None:
        return PowerCommand(QUERY)
    if arg in ("ON", "OFF", QUERY):
        return PowerCommand(arg)
    raise InvalidCommand(arg, f"power: on or off, not {arg}")


def _parse_volume(arg: str | None) -> VolumeCommand:
    if arg is None or arg == QUERY:
        return VolumeCommand()

    match = _STEP_RE.match(arg)
    if match:
        direction, amount = match.groups()
        if amount is None:
            return VolumeCommand(mode="step", direction=direction)
        delta = float(amount)
        if direction == "DOWN":
            delta = -delta
        return VolumeCommand(mode="relative", direction=direction, delta=delta)

    match = _ABSOLUTE_RE.match(arg)
    if match:
        return VolumeCommand(mode="absolute", raw=decibels_to_raw(match.group(1)))

    raise InvalidCommand(arg, f"volume: UP, DOWN, or 'NN dB', not {arg}")


_VERB_PARSERS = {
    "INPUT": _parse_input,
    "MUTE": _parse_mute,
    "UNMUTE": _parse_unmute,
    "POWER": _parse_power,
    "VOLUME": _parse_volume,
    "VOL": _parse_volume,
}


def parse_command(text: str) -> LogicalCommand:
    """Normalize a ``VERB`` or ``VERB=ARG`` string into a command variant.

    Verb and argument are case-insensitive. An empty argument counts as
    absent, and ``QUERY`` is a synonym for ``?``.

    Raises:
        InvalidCommand: If the verb is unknown or the argument is not
            accepted for it.
        OutOfRange: If an absolute volume is outside -80.0 to -1.0 dB.
    """
    match = _COMMAND_RE.match(text.upper())
    verb, arg = match.group(1), match.group(2)
    if arg == "":
        arg = None
    if arg == "QUERY":
        arg = QUERY

    parser = _VERB_PARSERS.get(verb)
    if parser is None:
        raise InvalidCommand(verb or text, f"unknown command: {text}")
    return parser(arg)
