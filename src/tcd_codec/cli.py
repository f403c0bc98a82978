"""Command-line interface for tcd_codec.

Subcommands:
- show / find: inspect a .tcd file
- export / build: convert between .tcd and the "<id>|<text>" line form
- add / delete / set: edit a .tcd file in place
"""

from __future__ import annotations
import argparse
import sys
from typing import Iterable, TextIO

from . import log
from .conf import DEFAULT_FILENAME, DEFAULT_ID, DEFAULT_TEXT
from .errors import TcdError
from .records import Record, RecordTable, parse_line, render_line
from .table import load, save


def _open_text(path: str | None, mode: str) -> TextIO:
    if path is None or path == "-":
        return sys.stdout if "w" in mode else sys.stdin
    return open(path, mode, encoding="utf-8", newline="\n" if "w" in mode else None)


def _parse_lines(lines: Iterable[str]) -> RecordTable:
    table = RecordTable()
    for line in lines:
        if not line.strip():
            continue
        table.add(parse_line(line))
    return table


def _cmd_show(args: argparse.Namespace) -> int:
    table = load(args.path)
    for i, r in enumerate(table):
        if args.ids:
            sys.stdout.write(f"{i}: [{r.id}] {r.text}\n")
        else:
            sys.stdout.write(f"{i}: {r.text}\n")
    sys.stdout.write(f"Count: {len(table)}\n")
    return 0


def _cmd_find(args: argparse.Namespace) -> int:
    table = load(args.path)
    if args.all:
        hits = table.search(args.query)
    else:
        first = table.find(args.query)
        hits = [] if first == -1 else [first]
    if not hits:
        sys.stderr.write(f"no record matches {args.query!r}\n")
        return 1
    for i in hits:
        sys.stdout.write(f"{i}: {table[i].text}\n")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    table = load(args.path)
    out = _open_text(args.output, "w")
    try:
        for r in table:
            out.write(render_line(r) + "\n")
    finally:
        if out is not sys.stdout:
            out.close()
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    src = _open_text(args.input, "r")
    try:
        table = _parse_lines(src)
    finally:
        if src is not sys.stdin:
            src.close()
    size = save(table, args.output)
    sys.stderr.write(f"wrote {len(table)} records ({size} bytes) to {args.output}\n")
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    table = load(args.path)
    index = table.add(Record(id=args.id, text=args.text))
    save(table, args.path)
    sys.stdout.write(f"{index}: {table[index].text}\n")
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    table = load(args.path)
    removed = table.remove(args.index)
    save(table, args.path)
    sys.stdout.write(f"deleted {args.index}: {removed.text}\n")
    return 0


def _cmd_set(args: argparse.Namespace) -> int:
    table = load(args.path)
    updated = table.update(args.index, id=args.id, text=args.text)
    save(table, args.path)
    sys.stdout.write(f"{args.index}: [{updated.id}] {updated.text}\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tcd", description="Inspect and edit TCD string tables.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log codec activity to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("show", help="List the records of a table")
    s.add_argument("path", nargs="?", default=DEFAULT_FILENAME)
    s.add_argument("--ids", action="store_true", help="Also print record ids")
    s.set_defaults(func=_cmd_show)

    s = sub.add_parser("find", help="Find a record by its listing prefix")
    s.add_argument("path")
    s.add_argument("query")
    s.add_argument("--all", action="store_true", help="Print every record whose text contains QUERY")
    s.set_defaults(func=_cmd_find)

    s = sub.add_parser("export", help="Write a table as '<id>|<text>' lines")
    s.add_argument("path")
    s.add_argument("-o", "--output", default="-", help="Output file or '-' for stdout")
    s.set_defaults(func=_cmd_export)

    s = sub.add_parser("build", help="Build a table from '<id>|<text>' lines")
    s.add_argument("input", nargs="?", default="-", help="Input file or '-' for stdin")
    s.add_argument("-o", "--output", required=True, help="TCD file to write")
    s.set_defaults(func=_cmd_build)

    s = sub.add_parser("add", help="Append a record")
    s.add_argument("path")
    s.add_argument("--id", type=int, default=DEFAULT_ID)
    s.add_argument("--text", default=DEFAULT_TEXT)
    s.set_defaults(func=_cmd_add)

    s = sub.add_parser("delete", help="Delete the record at INDEX")
    s.add_argument("path")
    s.add_argument("index", type=int)
    s.set_defaults(func=_cmd_delete)

    s = sub.add_parser("set", help="Change the id and/or text of the record at INDEX")
    s.add_argument("path")
    s.add_argument("index", type=int)
    s.add_argument("--id", type=int)
    s.add_argument("--text")
    s.set_defaults(func=_cmd_set)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        log.enable()

    try:
        return args.func(args)
    except (TcdError, OSError, IndexError) as ex:
        log.tcd_log(f"{args.command} failed: {ex!r}")
        sys.stderr.write(f"error: {ex}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
