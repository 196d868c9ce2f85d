"""Volume value codec.

The receiver encodes master volume as an integer in tenths of a dB offset
from +80.0 dB of attenuation::

    +1.0 dB  810
     0.0 dB  800
    -0.5 dB  795
    -1.0 dB  790
       ...
   -79.5 dB  005
   -80.0 dB  000

On the wire the value is a 3-digit numeral, except that the device drops a
trailing zero digit (``790`` is sent as ``79``), both in replies and in the
commands it accepts.
"""

from __future__ import annotations

from ..errors import OutOfRange

MIN_DB = -80.0
MAX_DB = -1.0
RAW_ZERO_DB = 800
RAW_MIN = 0
RAW_MAX = 790


def to_tenths(value: float) -> int:
    """Convert a dB quantity to whole tenths, truncating toward zero.

    Float products such as ``-4.35 * 10`` land a hair off the exact decimal;
    rounding to 6 places first keeps the truncation on the decimal value.
    """
    return int(round(value * 10, 6))


def decibels_to_raw(db: float | str) -> int:
    """Convert a dB level to the receiver's raw volume integer.

    Args:
        db: Level in dB, -80.0 to -1.0 inclusive. Strings may carry a
            leading ``+``.

    Raises:
        OutOfRange: If the level is outside the accepted range.
    """
    given = db
    if isinstance(db, str):
        try:
            db = float(db.strip().lstrip("+"))
        except ValueError:
            raise OutOfRange(given) from None
    if not MIN_DB <= db <= MAX_DB:
        raise OutOfRange(given)
    return RAW_ZERO_DB - to_tenths(-db)


def pad_volume(text: str) -> int:
    """Read a raw volume numeral as sent by the device.

    Two-digit values are right-padded with ``0`` before interpretation.
    """
    text = text.strip()
    if not text.isdigit() or len(text) not in (2, 3):
        raise ValueError(f"not a raw volume value: {text!r}")
    if len(text) == 2:
        text += "0"
    return int(text)


def raw_to_decibels(raw: str) -> float:
    """Convert a raw volume numeral (2 or 3 digits) to dB."""
    return (RAW_ZERO_DB - pad_volume(raw)) / -10.0


def format_decibels(db: float) -> str:
    return f"{db:.1f} dB"


def encode_volume(raw: int) -> str:
    """Format a raw volume integer the way the device expects it in commands."""
    text = f"{raw:03d}"
    if text.endswith("0"):
        text = text[:-1]
    return text
