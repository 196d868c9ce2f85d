"""Logging configuration helpers."""

from __future__ import annotations

import logging
import sys

TIMING_LOGGER = "denon_tuner.session.timing"


def verbosity_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0, prog: str = "tuner") -> None:
    """Configure root logging for a CLI run.

    Parameters
    ----------
    verbosity:
        Number of ``-v`` flags. 1 shows connection lifecycle, 2 adds wire
        traffic, 3 adds every timing sleep.
    prog:
        Prefix for each diagnostic line on stderr.
    """

    logging.captureWarnings(True)

    for handler in list(logging.getLogger().handlers):
        logging.getLogger().removeHandler(handler)

    logging.basicConfig(
        level=verbosity_level(verbosity),
        format=f"{prog}: %(message)s",
        stream=sys.stderr,
    )

    logging.getLogger(TIMING_LOGGER).setLevel(
        logging.DEBUG if verbosity > 2 else logging.INFO
    )
