"""Little-endian helpers over binary streams.

Reads check that the stream actually delivered the requested bytes and
raise TruncatedInputError naming the field, rather than letting struct
fail on a short buffer.
"""

from __future__ import annotations
import io
import struct
from typing import BinaryIO, Optional

from .conf import BYTE_ORDER
from .errors import TruncatedInputError, WriteFailedError

_U16 = struct.Struct(BYTE_ORDER + "H")
_U32 = struct.Struct(BYTE_ORDER + "I")

# Upper bound for a single read; declared lengths are not trusted.
_CHUNK = 64 * 1024


def read_exact(stream: BinaryIO, size: int, what: str, index: Optional[int] = None) -> bytes:
    """Read exactly `size` bytes or raise TruncatedInputError."""
    chunks = []
    got = 0
    while got < size:
        chunk = stream.read(min(size - got, _CHUNK))
        if not chunk:
            break
        chunks.append(chunk)
        got += len(chunk)
    if got < size:
        raise TruncatedInputError(f"stream ended in {what}: needed {size} bytes, got {got}", index)
    return b"".join(chunks)


def read_u8(stream: BinaryIO, what: str, index: Optional[int] = None) -> int:
    return read_exact(stream, 1, what, index)[0]


def read_u16(stream: BinaryIO, what: str, index: Optional[int] = None) -> int:
    (value,) = _U16.unpack(read_exact(stream, _U16.size, what, index))
    return value


def read_u32(stream: BinaryIO, what: str, index: Optional[int] = None) -> int:
    (value,) = _U32.unpack(read_exact(stream, _U32.size, what, index))
    return value


def pack_u16(value: int) -> bytes:
    return _U16.pack(value)


def pack_u32(value: int) -> bytes:
    return _U32.pack(value)


def remaining(stream: BinaryIO) -> Optional[int]:
    """Bytes left after the current position, or None if it cannot be known."""
    try:
        if not stream.seekable():
            return None
        pos = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(pos)
    except (AttributeError, OSError):
        return None
    return max(end - pos, 0)


def write_all(stream: BinaryIO, data: bytes, index: Optional[int] = None) -> None:
    """Write all of `data`, turning any failure of the destination into WriteFailedError.

    Raw streams may accept part of the buffer per call; a None or 0 return
    means nothing more can be written.
    """
    view = memoryview(data)
    while view:
        try:
            written = stream.write(view)
        except (OSError, ValueError) as ex:
            # ValueError: write to a closed file
            raise WriteFailedError(f"write failed: {ex}", index) from ex
        if not written:
            done = len(data) - len(view)
            raise WriteFailedError(f"write stalled after {done} of {len(data)} bytes", index)
        view = view[written:]
