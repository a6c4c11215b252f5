"""Stem interchange tables: fragments, condition references and their collector."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass

from rusmorph.serial import write_size, write_string, write_u16

_CODEPAGE = "cp1251"
_SPACES = "".join(chr(code) for code in range(0x21))
_FIRST_OFFSET = 6


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode(_CODEPAGE) if isinstance(value, str) else bytes(value)


@dataclass
class _Fragment:
    text: bytes
    flags: int


class Interchange:
    """A set of stem fragments, each flagged with the interchange steps it serves."""

    def __init__(self) -> None:
        self._fragments: list[_Fragment] = []
        self.offset = 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interchange):
            return NotImplemented
        return self._fragments == other._fragments

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = ", ".join(f"{f.text!r}:{f.flags:#x}" for f in self._fragments)
        return f"Interchange([{parts}], offset={self.offset})"

    def add_step(self, mix: str | bytes, step: int) -> None:
        """Register the fragment mix for the given step, keeping fragments sorted."""
        text = _to_bytes(mix)
        keys = [fragment.text for fragment in self._fragments]
        index = bisect_left(keys, text)
        if index < len(keys) and keys[index] == text:
            self._fragments[index].flags |= 1 << step
        else:
            self._fragments.insert(index, _Fragment(text, 1 << step))

    def buf_len(self) -> int:
        """Return the size of the serialized record in bytes."""
        return (1 + sum(1 + len(f.text) for f in self._fragments)) & 0xFFFF

    def serialize(self) -> bytes:
        """Return the binary record: count byte, then flags byte and text per fragment."""
        out = bytearray([len(self._fragments) & 0xFF])
        upower = 0
        for fragment in self._fragments:
            upower |= fragment.flags << 4
        upower = (upower ^ 0x70) & 0x70

        for fragment in self._fragments:
            bflags = (len(fragment.text) | (fragment.flags << 4)) & 0xFF
            if upower != 0 and bflags & 0x10:
                bflags |= upower
            out.append(bflags)
            out += fragment.text
        return bytes(out)


class Conditions:
    """Condition strings referencing interchanges of one named table."""

    def __init__(self) -> None:
        self._refs: list[tuple[str, int]] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Conditions):
            return NotImplemented
        return self._refs == other._refs

    __hash__ = None  # type: ignore[assignment]

    def add_condition(self, cond: str, ipos: int) -> None:
        """Reference the interchange at index ipos under the condition cond."""
        self._refs.append((cond, ipos))

    def serialize(self, interchanges: list[Interchange]) -> bytes:
        """Return the count followed by (interchange offset, condition) pairs."""
        out = bytearray(write_size(len(self._refs)))
        for cond, ipos in self._refs:
            out += write_u16(interchanges[ipos].offset)
            out += write_string(cond)
        return bytes(out)


def parse_tabindex(names: str) -> list[str]:
    """Split a comma-separated list of table names, trimming blanks and empty items."""
    return [item for item in (part.strip(_SPACES) for part in names.split(",")) if item]


class Collector:
    """Accumulates interchanges and their table references for output."""

    def __init__(self) -> None:
        self._interchanges: list[Interchange] = []
        self._conditions: list[Conditions] = []
        self._tab_index: dict[str, int] = {}

    def add_interchange(self, names: str, condi: str, inter: Interchange) -> None:
        """Register inter under condition condi for every table listed in names."""
        conditions = self._set_conditions(names)
        conditions.add_condition(condi, self._set_interchange(inter))

    def relocate_tables(self) -> None:
        """Assign each interchange its offset in the binary table."""
        offset = _FIRST_OFFSET
        for inter in self._interchanges:
            inter.offset = offset
            offset = (offset + inter.buf_len()) & 0xFFFF

    def store_tab(self) -> bytes:
        """Return the binary interchange table."""
        return b"interc" + b"".join(inter.serialize() for inter in self._interchanges)

    def store_ref(self) -> bytes:
        """Return the binary table of condition sets followed by the name index."""
        out = bytearray(write_size(len(self._conditions)))
        for conditions in self._conditions:
            out += conditions.serialize(self._interchanges)
        out += write_size(len(self._tab_index))
        for key in sorted(self._tab_index, key=_to_bytes):
            out += write_string(key)
            out += write_size(self._tab_index[key])
        return bytes(out)

    def _set_conditions(self, names: str) -> Conditions:
        cindex: int | None = None
        for key in parse_tabindex(names):
            found = self._tab_index.get(key)
            if found is None:
                if cindex is None:
                    cindex = len(self._conditions)
                    self._conditions.append(Conditions())
                self._tab_index[key] = cindex
            else:
                if cindex is None:
                    cindex = found
                if cindex != found:
                    raise ValueError(f"table name '{key}' conflicts with '{key}'")
        if cindex is None or cindex >= len(self._conditions):
            raise ValueError("empty table index")
        return self._conditions[cindex]

    def _set_interchange(self, inter: Interchange) -> int:
        for index, existing in enumerate(self._interchanges):
            if existing == inter:
                return index
        self._interchanges.append(inter)
        return len(self._interchanges) - 1