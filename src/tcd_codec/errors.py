"""Errors raised by the TCD codec."""

from __future__ import annotations
from typing import Optional


class TcdError(Exception):
    """Base error for this package."""


class CodecError(TcdError):
    """An error tied (optionally) to one record of the table."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class DecodeError(CodecError):
    """Raised when a byte stream cannot be decoded into a record table."""


class TruncatedInputError(DecodeError):
    """Raised when the stream ends before a required field is complete."""


class InvalidLengthError(TruncatedInputError, ValueError):
    """Raised when a decoded length is longer than the input that is left."""


class EncodeError(CodecError):
    """Raised when a record table cannot be encoded."""


class CapacityExceededError(EncodeError):
    """Raised when a table holds more records than the count field can express."""


class ValueTooLargeError(EncodeError):
    """Raised when a length does not fit in the 32-bit tier."""


class TextEncodingError(EncodeError):
    """Raised when text has characters outside the TCD code page."""


class WriteFailedError(EncodeError):
    """Raised when the destination rejects a write."""


class RecordError(TcdError, ValueError):
    """Raised when a record is built from an invalid id or text."""


class ParseError(TcdError):
    """Raised when a line of the text form cannot be parsed into a record."""
