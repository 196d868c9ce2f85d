"""Runs a batch of logical commands against one session and reports results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from .errors import NoReply
from .protocol.commands import LogicalCommand, VolumeCommand, parse_command
from .protocol.parser import LogicalField, decode_reply, render_field
from .resolver import resolve_relative
from .session import Session

logger = logging.getLogger(__name__)

PROG = "tuner"


@dataclass
class CommandResult:
    """Outcome of one command in a batch."""

    command: LogicalCommand
    raw: str
    fields: list[LogicalField] = field(default_factory=list)
    no_reply: bool = False

    @property
    def failed(self) -> bool:
        """A query that got no answer counts as a failure."""
        return self.no_reply and self.command.is_query


def parse_commands(texts: Iterable[str]) -> list[LogicalCommand]:
    """Normalize every command before any of them touches the device.

    Raises:
        InvalidCommand: On the first unusable command.
        OutOfRange: On the first absolute volume outside the valid range.
    """
    return [parse_command(text) for text in texts]


def encode(session: Session, command: LogicalCommand) -> str:
    """Produce the raw line for ``command``, reading the volume first if needed."""
    if isinstance(command, VolumeCommand) and command.is_relative:
        return resolve_relative(session, command.delta)
    return command.to_raw()


def execute(session: Session, command: LogicalCommand) -> CommandResult:
    raw = encode(session, command)
    reply = session.send_and_receive(raw)
    result = CommandResult(command=command, raw=raw)
    try:
        result.fields = decode_reply(reply)
    except NoReply:
        result.no_reply = True
    return result


def report(
    result: CommandResult,
    verbose: bool = False,
    emit: Callable[[str], None] = print,
) -> None:
    """Print a result the way the user asked for it.

    Replies are shown for queries, or for every command when verbose.
    """
    if not (result.command.is_query or verbose):
        return
    if result.no_reply:
        emit(f"{PROG}: {result.command.verb} = FAIL!")
        return
    for decoded in result.fields:
        emit(render_field(PROG, decoded))


def run_commands(
    session: Session,
    commands: Iterable[LogicalCommand],
    verbose: bool = False,
    emit: Callable[[str], None] = print,
) -> list[CommandResult]:
    """Execute commands one at a time, in order.

    A command that gets no reply is reported and the batch carries on.
    ``QueryFailed``, ``OutOfRange`` and ``TransportError`` propagate and end
    the run.
    """
    results = []
    for command in commands:
        result = execute(session, command)
        report(result, verbose=verbose, emit=emit)
        results.append(result)
    return results
