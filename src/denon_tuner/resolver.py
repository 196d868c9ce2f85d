"""Relative volume changes.

The receiver only accepts absolute volume levels (or its own fixed UP/DOWN
step), so "up 2.5 dB" takes a read-then-write round trip.
"""

from __future__ import annotations

import logging
import re

from .errors import OutOfRange, QueryFailed
from .protocol.codec import RAW_MAX, RAW_MIN, encode_volume, pad_volume
from .protocol.commands import Opcode, build_raw, build_volume_query
from .session import Session

logger = logging.getLogger(__name__)

# After a volume read the receiver needs noticeably longer than the usual
# command delay before it takes the following write.
READ_SETTLE_FACTOR = 1.5

_VOLUME_LINE_RE = re.compile(r"^MV(\d+)$", re.M)


def current_volume(session: Session) -> int:
    """Query the receiver's raw master volume.

    Raises:
        QueryFailed: If the reply holds no numeric ``MV`` line.
    """
    reply = session.send_and_receive(build_volume_query())
    match = _VOLUME_LINE_RE.search(reply)
    if match is None:
        raise QueryFailed("FAIL getting current volume!")
    try:
        return pad_volume(match.group(1))
    except ValueError:
        raise QueryFailed(f"FAIL getting current volume: MV{match.group(1)}") from None


def resolve_relative(session: Session, delta: float) -> str:
    """Turn a signed dB change into an absolute ``MV`` command line.

    Reads the current level, applies ``delta``, then waits out the longer
    post-read delay so the returned command can be sent right away.

    Raises:
        QueryFailed: If the current level could not be read.
        OutOfRange: If the new level would leave the receiver's range.
    """
    current = current_volume(session)
    # Truncate the sum, not the change: 350 - 25.5 is sent as 324.
    target = int(round(current + delta * 10, 6))
    logger.info("volume %03d %+.1f dB -> %03d", current, delta, target)
    if not RAW_MIN <= target <= RAW_MAX:
        raise OutOfRange(
            delta,
            f"volume change {delta:+.1f} dB from raw {current:03d} "
            f"leaves the range -80.0 to -1.0 dB",
        )
    session.settle(READ_SETTLE_FACTOR)
    return build_raw(Opcode.VOLUME, encode_volume(target))
