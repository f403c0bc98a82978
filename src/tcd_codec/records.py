"""Record model and its line-oriented text form.

A record is an (id, text) pair. The text form used for export/import is:
    <id>|<text>

Example:
    5|ABC

Notes:
- Only the first "|" separates; text may contain "|".
- Backslash, newline and carriage return in text are escaped.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional

from .conf import DEFAULT_ID, DEFAULT_TEXT, MAX_ID
from .errors import ParseError, RecordError


@dataclass(frozen=True)
class Record:
    id: int = DEFAULT_ID
    text: str = DEFAULT_TEXT

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise RecordError(f"id must be an int, got {type(self.id).__name__}")
        if not 0 <= self.id <= MAX_ID:
            raise RecordError(f"id {self.id} out of range 0..{MAX_ID}")
        if not isinstance(self.text, str):
            raise RecordError(f"text must be a str, got {type(self.text).__name__}")


class RecordTable:
    """Ordered, editable sequence of records.

    Duplicate ids are allowed; position is what identifies a record.
    The 65535-record ceiling of the file format is checked when encoding.
    """

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: List[Record] = []
        for r in records:
            if not isinstance(r, Record):
                raise RecordError(f"expected Record, got {type(r).__name__}")
            self._records.append(r)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, index):
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecordTable):
            return self._records == other._records
        if isinstance(other, list):
            return self._records == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"RecordTable({self._records!r})"

    def add(self, record: Optional[Record] = None) -> int:
        """Append `record` (a default one if None) and return its index."""
        if record is None:
            record = Record()
        elif not isinstance(record, Record):
            raise RecordError(f"expected Record, got {type(record).__name__}")
        self._records.append(record)
        return len(self._records) - 1

    def remove(self, index: int) -> Record:
        """Delete the record at `index` and return it.

        Raises:
            IndexError: if there is no record at `index`.
        """
        self._check_index(index)
        return self._records.pop(index)

    def update(self, index: int, id: Optional[int] = None, text: Optional[str] = None) -> Record:
        """Replace the id and/or text of the record at `index`."""
        self._check_index(index)
        changes = {}
        if id is not None:
            changes["id"] = id
        if text is not None:
            changes["text"] = text
        updated = replace(self._records[index], **changes)
        self._records[index] = updated
        return updated

    def listing(self) -> List[str]:
        """The "<index>: <text>" lines shown for the table."""
        return [f"{i}: {r.text}" for i, r in enumerate(self._records)]

    def find(self, query: str, start: int = 0) -> int:
        """First index at or after `start` whose listing line starts with `query`.

        Comparison ignores case. Returns -1 for an empty query or no match.
        """
        if not query:
            return -1
        needle = query.casefold()
        lines = self.listing()
        for i in range(max(start, 0), len(lines)):
            if lines[i].casefold().startswith(needle):
                return i
        return -1

    def search(self, query: str) -> List[int]:
        """Indices of all records whose text contains `query`, ignoring case."""
        if not query:
            return []
        needle = query.casefold()
        return [i for i, r in enumerate(self._records) if needle in r.text.casefold()]

    def _check_index(self, index: int) -> None:
        # Negative positions are rejected rather than counted from the end.
        if not 0 <= index < len(self._records):
            raise IndexError(f"no record at index {index} (table has {len(self._records)})")


_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def _unescape(text: str, raw: str) -> str:
    out: List[str] = []
    it = iter(text)
    for ch in it:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(it, None)
        if nxt not in _UNESCAPES:
            raise ParseError(f"bad escape sequence in line: {raw!r}")
        out.append(_UNESCAPES[nxt])
    return "".join(out)


def parse_line(line: str) -> Record:
    """Parse one line of the text form into a Record.

    Raises:
        ParseError: if the line is malformed.
    """
    raw = line.rstrip("\r\n")

    rec_id, sep, text = raw.partition("|")
    if not sep:
        raise ParseError(f"expected '<id>|<text>', got: {raw!r}")

    rec_id = rec_id.strip()
    if not (rec_id.isascii() and rec_id.isdigit()):
        raise ParseError(f"id is not a non-negative integer in line: {raw!r}")

    try:
        return Record(id=int(rec_id), text=_unescape(text, raw))
    except RecordError as ex:
        raise ParseError(f"{ex}: {raw!r}") from ex


def render_line(r: Record) -> str:
    """Render a Record to its line form."""
    return f"{r.id}|{_escape(r.text)}"
