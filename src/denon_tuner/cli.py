"""Command-line interface: ``tuner [--verbose] CMD=ARG ...``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import DEFAULT_CONFIG_PATH, load_config
from .controller import PROG, parse_commands, run_commands
from .errors import TunerError
from .logging import configure_logging
from .session import Session
from .transport import open_connection

LOGGER = logging.getLogger(__name__)

COMMAND_HELP = """\
Commands:  Args:

  INPUT    QUERY PHONO CD TUNER DVD VDP TV DBS
           VCR-1 VCR-2 VCR-3 AUX TAPE-1 TAPE-2
  MUTE     QUERY ON OFF
  UNMUTE
  POWER    QUERY ON OFF
  VOLUME   QUERY UP DOWN "NN dB"
           UPn DOWNn (where 'n' is a dB value)

e.g.  tuner power=on input=tv volume='-40.5 dB'
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Control a Denon AV receiver over its RS-232 port",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print more diagnostics; repeat for wire traffic and timing",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Talk to a null device instead of the receiver",
    )
    parser.add_argument(
        "-d",
        "--device",
        help="Serial device path or host:port of a serial bridge",
    )
    parser.add_argument("--baud", type=int, help="Serial line speed")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("commands", nargs="*", metavar="CMD=ARG")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.commands:
        parser.print_usage(sys.stderr)
        sys.stderr.write("\n" + COMMAND_HELP)
        return 1

    configure_logging(args.verbose, prog=PROG)

    try:
        config = load_config(args.config)
    except ValueError as exc:
        LOGGER.error("%s: %s", args.config, exc)
        return 1
    if args.device:
        config.device = args.device
    if args.baud:
        config.baudrate = args.baud
    config.debug = args.debug
    config.verbosity = args.verbose

    try:
        commands = parse_commands(args.commands)
        stream = open_connection(config.device, config.baudrate, debug=config.debug)
    except TunerError as exc:
        LOGGER.error("%s", exc)
        return 1

    try:
        session = Session(stream)
        session.flush()
        results = run_commands(session, commands, verbose=config.verbose)
    except TunerError as exc:
        LOGGER.error("%s", exc)
        return 1
    finally:
        try:
            stream.close()
        except TunerError as exc:
            LOGGER.error("%s", exc)

    if any(result.failed for result in results):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
