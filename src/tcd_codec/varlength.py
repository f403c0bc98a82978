"""Tiered length prefix placed before every text field.

Layout (little-endian):
    length < 255           -> 1 byte:  length
    length < 65535         -> 3 bytes: FF, uint16 length
    otherwise              -> 7 bytes: FF, FFFF, uint32 length

A length of exactly 65535 goes to the 32-bit tier because 0xFFFF is the
escape value of the 16-bit tier. Existing files depend on this boundary.
"""

from __future__ import annotations
from typing import BinaryIO, Optional

from .binio import pack_u16, pack_u32, read_u8, read_u16, read_u32, write_all
from .conf import BYTE_SENTINEL, MAX_LENGTH, WORD_SENTINEL
from .errors import ValueTooLargeError


def prefix_size(length: int) -> int:
    """Width in bytes of the prefix that encodes `length`."""
    if length < BYTE_SENTINEL:
        return 1
    if length < WORD_SENTINEL:
        return 3
    return 7


def encode_length(length: int, index: Optional[int] = None) -> bytes:
    """Encode a length into its 1, 3 or 7 byte prefix.

    Raises:
        ValueTooLargeError: if `length` is outside 0..2**32 - 1.
    """
    if not 0 <= length <= MAX_LENGTH:
        raise ValueTooLargeError(f"length {length} is out of range 0..{MAX_LENGTH}", index)

    if length < BYTE_SENTINEL:
        return bytes((length,))
    if length < WORD_SENTINEL:
        return bytes((BYTE_SENTINEL,)) + pack_u16(length)
    return bytes((BYTE_SENTINEL,)) + pack_u16(WORD_SENTINEL) + pack_u32(length)


def write_length(stream: BinaryIO, length: int, index: Optional[int] = None) -> None:
    write_all(stream, encode_length(length, index), index)


def decode_length(stream: BinaryIO, index: Optional[int] = None) -> int:
    """Read one length prefix from `stream`.

    Raises:
        TruncatedInputError: naming the tier that ran out of bytes.
    """
    value = read_u8(stream, "length prefix", index)
    if value != BYTE_SENTINEL:
        return value
    value = read_u16(stream, "16-bit length", index)
    if value != WORD_SENTINEL:
        return value
    return read_u32(stream, "32-bit length", index)
