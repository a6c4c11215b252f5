"""Compiler of stem interchange table sources into binary tables."""

from __future__ import annotations

import errno
import sys
from pathlib import Path

from rusmorph.interchange import Collector, Interchange

DEFAULT_ENCODING = "cp866"
WINDOWS_ENCODING = "cp1251"

_SPACES = "".join(chr(code) for code in range(0x21))

RUS_TABLE = ".таблица"
ENG_TABLE = ".table"
RUS_INCLUDE = ".включить"
ENG_INCLUDE = ".include"

ABOUT = (
    "libmorphrus stem-interchange tables compiler, version 1.0 (portable)\n"
    "Usage: makeich [options] inputname binaryname symbolsname\n"
    "Options are:\n"
    "\t-w\tassume source tables use 1251 Windows Cyrillic instead of 866.\n"
)


def _is_space(ch: str) -> bool:
    return ch != "\0" and ord(ch) <= 0x20


def trim(s: str) -> str:
    """Strip control characters and blanks from both ends."""
    return s.strip(_SPACES)


def load_field(s: str) -> tuple[str, str]:
    """Split off the leading field of s; return it with the rest after the separator."""
    pos = 0
    while pos < len(s) and ord(s[pos]) > 0x20 and s[pos] != ",":
        pos += 1
    field = s[:pos]
    while pos < len(s) and _is_space(s[pos]):
        pos += 1
    if pos < len(s) and s[pos] == ",":
        pos += 1
    while pos < len(s) and _is_space(s[pos]):
        pos += 1
    return field, s[pos:]


def has_command(s: str, cmd: str) -> bool:
    """Tell whether s starts with the command cmd followed by a blank."""
    return len(s) > len(cmd) and s.startswith(cmd) and _is_space(s[len(cmd)])


class Source:
    """Lines of a table source, with push-back and relative includes."""

    def __init__(
        self, name: str, text: str | None = None, encoding: str = DEFAULT_ENCODING
    ) -> None:
        self.name = str(name)
        self.encoding = encoding
        if text is None:
            try:
                text = Path(self.name).read_text(encoding=encoding)
            except OSError as exc:
                raise ValueError(f"could not open file '{self.name}'") from exc
        self._lines = iter(text.splitlines())
        self._pending: list[str] = []
        self.line = 0

    def get(self) -> str:
        """Return the next non-blank trimmed line, or an empty string at the end."""
        if self._pending:
            return self._pending.pop()
        for raw in self._lines:
            self.line += 1
            line = trim(raw)
            if line:
                return line
        return ""

    def put(self, line: str) -> Source:
        """Push a line back so that the next get returns it."""
        self._pending.append(line)
        return self

    def open(self, name: str) -> Source:
        """Open a file named relative to this source, in the same encoding."""
        path = Path(name)
        if not path.is_absolute():
            path = Path(self.name).parent / path
        return Source(str(path), encoding=self.encoding)


def make_tab(source: Source, collector: Collector) -> None:
    """Read one '.table' block from source and register its interchanges."""
    header = source.get()
    if not header:
        raise ValueError("unexpected end of file")

    if has_command(header, RUS_TABLE):
        header = header[len(RUS_TABLE) + 1 :]
    elif has_command(header, ENG_TABLE):
        header = header[len(ENG_TABLE) + 1 :]
    else:
        raise ValueError("'.table' declaration followed by table index expected")

    header = trim(header)
    if not header:
        raise ValueError("unexpected end of line, table index expected")

    line = source.get()
    if not line:
        raise ValueError("unexpected end of file")
    if line != "{":
        raise ValueError("'{' exected")

    while True:
        line = source.get()
        if not line:
            raise ValueError("unexpected end of file")
        if line == "}":
            break

        condition, line = load_field(line)
        first, line = load_field(line)
        second, line = load_field(line)
        if not condition or not first or not second:
            raise ValueError("interchange table has less than 2 fragments")

        inter = Interchange()
        inter.add_step("" if first == "''" else first, 0)
        inter.add_step("" if second == "''" else second, 1)

        step = 2
        while line:
            extra, line = load_field(line)
            inter.add_step("" if extra == "''" else extra, step)
            step += 1

        collector.add_interchange(header, condition, inter)


def compile_source(source: Source, collector: Collector) -> None:
    """Compile every table and include directive of source into collector."""
    try:
        while line := source.get():
            if has_command(line, RUS_INCLUDE):
                line = line[len(RUS_INCLUDE) + 1 :]
            elif has_command(line, ENG_INCLUDE):
                line = line[len(ENG_INCLUDE) + 1 :]
            else:
                make_tab(source.put(line), collector)
                continue

            line = trim(line)
            if not line:
                raise ValueError("file name expected")
            included = source.open(line)
            print(f"\t{line}", file=sys.stderr)
            compile_source(included, collector)
    except ValueError as exc:
        raise ValueError(
            f"{exc}\n\tfrom {source.name}, line {source.line}"
        ) from exc


def _store(path: str, build) -> int:
    try:
        handle = open(path, "wb")
    except OSError:
        print(f"Could not create file '{path}'!", file=sys.stderr)
        return -1
    with handle:
        try:
            handle.write(build())
        except (OSError, ValueError):
            print(f"Error writing the file '{path}'!", file=sys.stderr)
            return errno.EACCES
    return 0


def main(argv: list[str] | None = None) -> int:
    """Compile an interchange table source into binary and symbol files."""
    if argv is None:
        argv = sys.argv[1:]

    encoding = DEFAULT_ENCODING
    inname: str | None = None
    ptrbin: str | None = None
    ptrsym: str | None = None

    for arg in argv:
        if arg.startswith("-"):
            if arg == "-w":
                encoding = WINDOWS_ENCODING
                continue
            print(f"Invalid switch '{arg}'!", file=sys.stderr)
            return -1
        if inname is None:
            inname = arg
        elif ptrbin is None:
            ptrbin = arg
        elif ptrsym is None:
            ptrsym = arg
        else:
            break

    if inname is None or ptrbin is None or ptrsym is None:
        sys.stderr.write(ABOUT)
        return -1

    print("Compiling tables...", file=sys.stderr)

    tables = Collector()
    try:
        source = Source(inname, encoding=encoding)
        print(f"\t{inname}", file=sys.stderr)
        compile_source(source, tables)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return -1

    tables.relocate_tables()

    result = _store(ptrbin, tables.store_tab)
    if result != 0:
        return result
    return _store(ptrsym, tables.store_ref)


if __name__ == "__main__":
    sys.exit(main())