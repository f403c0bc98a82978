"""TCD record table codec.

File layout (little-endian, no header, no checksum):
    uint16 count
    count x (uint16 id, length prefix, text bytes)

Trailing bytes after the last record are ignored.
"""

from __future__ import annotations
import io
from pathlib import Path
from typing import BinaryIO, Sequence, Union

from .binio import pack_u16, read_exact, read_u16, remaining, write_all
from .conf import MAX_RECORDS, TCD_ENCODING
from .errors import (
    CapacityExceededError,
    DecodeError,
    InvalidLengthError,
    TextEncodingError,
    WriteFailedError,
)
from .log import tcd_log
from .records import Record, RecordTable
from .varlength import decode_length, encode_length

PathLike = Union[str, Path]


def decode(stream: BinaryIO) -> RecordTable:
    """Decode a whole table from `stream`.

    The stream is borrowed: it is read from its current position and left open.

    Raises:
        TruncatedInputError: if the stream ends inside any field.
        InvalidLengthError: if a text length exceeds what a seekable stream has left.
        DecodeError: if text bytes are not valid in the TCD code page.
    """
    count = read_u16(stream, "record count")
    records = []
    for i in range(count):
        rec_id = read_u16(stream, "record id", i)
        length = decode_length(stream, i)

        left = remaining(stream)
        if left is not None and length > left:
            raise InvalidLengthError(f"text length {length} exceeds the {left} bytes left in the stream", i)

        raw = read_exact(stream, length, "text bytes", i)
        try:
            text = raw.decode(TCD_ENCODING)
        except UnicodeDecodeError as ex:
            raise DecodeError(f"text is not valid {TCD_ENCODING}: {ex.reason} at byte {ex.start}", i) from ex
        records.append(Record(id=rec_id, text=text))

    tcd_log(f"decoded {count} records")
    return RecordTable(records)


def _encode_texts(records: Sequence[Record]) -> list:
    out = []
    for i, r in enumerate(records):
        try:
            out.append(r.text.encode(TCD_ENCODING))
        except UnicodeEncodeError as ex:
            raise TextEncodingError(
                f"character {ex.object[ex.start:ex.end]!r} at position {ex.start} is not in {TCD_ENCODING}", i
            ) from ex
    return out


def encode(records: Sequence[Record], stream: BinaryIO) -> None:
    """Encode `records` to `stream`.

    Every check runs before the first byte is written. The stream is borrowed
    and left open.

    Raises:
        CapacityExceededError: if there are more than 65535 records.
        TextEncodingError: if a text has characters outside the TCD code page.
        ValueTooLargeError: if a text is longer than the 32-bit tier allows.
        WriteFailedError: if the stream rejects a write.
    """
    count = len(records)
    if count > MAX_RECORDS:
        raise CapacityExceededError(f"{count} records exceed the format limit of {MAX_RECORDS}")

    payloads = _encode_texts(records)
    prefixes = [encode_length(len(p), i) for i, p in enumerate(payloads)]

    write_all(stream, pack_u16(count))
    for i, r in enumerate(records):
        write_all(stream, pack_u16(r.id) + prefixes[i] + payloads[i], i)

    tcd_log(f"encoded {count} records")


def decode_bytes(data: bytes) -> RecordTable:
    return decode(io.BytesIO(data))


def encode_bytes(records: Sequence[Record]) -> bytes:
    buf = io.BytesIO()
    encode(records, buf)
    return buf.getvalue()


def load(path: PathLike) -> RecordTable:
    """Read a TCD file. The file is closed on every exit path."""
    path = Path(path)
    with path.open("rb") as fh:
        table = decode(fh)
    tcd_log(f"loaded {len(table)} records from {path}")
    return table


def save(records: Sequence[Record], path: PathLike) -> int:
    """Write a TCD file and return the number of bytes written.

    The table is fully encoded before the file is opened, so an encoding
    error leaves any existing file untouched.

    Raises:
        WriteFailedError: if the file cannot be opened or written.
    """
    path = Path(path)
    data = encode_bytes(records)
    try:
        with path.open("wb") as fh:
            write_all(fh, data)
    except OSError as ex:
        # open() or close() failed
        raise WriteFailedError(f"cannot write {path}: {ex}") from ex
    tcd_log(f"saved {len(records)} records ({len(data)} bytes) to {path}")
    return len(data)
