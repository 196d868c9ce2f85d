"""Protocol layer: value codec, command normalizer, and reply decoding."""

from .codec import decibels_to_raw, raw_to_decibels, format_decibels, encode_volume
from .commands import LogicalCommand, Opcode, parse_command
from .parser import LogicalField, decode_reply
