"""Selection of stem interchange tables for dictionary lexemes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from rusmorph.serial import read_size, read_string, read_u16

_CODEPAGE = "cp1251"
_MAX_CONDITION = 0x10

_MIX_TYPES = {
    "ге": 1,
    "й": 5,
    "к": 3,
    "ле": 0,
    "о": 6,
    "ш": 2,
    "ь": 4,
}

_LE = "ле".encode(_CODEPAGE)
_E = "е".encode(_CODEPAGE)[0]
_VOWELS = frozenset("аеиоуыэюя".encode(_CODEPAGE))
_HISSING = frozenset("жцчшщ".encode(_CODEPAGE))
_KGH = frozenset("кгх".encode(_CODEPAGE))
_SOFT = "ь".encode(_CODEPAGE)[0]
_YOT = "й".encode(_CODEPAGE)[0]
_ORDINARY = "о"


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode(_CODEPAGE) if isinstance(value, str) else bytes(value)


def map_mix_type(s: str) -> int:
    """Return the interchange type id for a condition string, or -1 if unknown."""
    return _MIX_TYPES.get(s, -1)


def stem_has_tail(stem: str | bytes, tail: bytes) -> bool:
    """Tell whether stem ends with the fragment whose first byte holds its length."""
    stem = _to_bytes(stem)
    length = tail[0] & 0x0F
    text = tail[1 : 1 + length]
    return length <= len(stem) and stem[len(stem) - length :] == text


def get_default_str(tables: bytes, offset: int) -> bytes:
    """Return the default fragment (flags byte and text) of the table at offset."""
    if not 0 <= offset < len(tables):
        raise ValueError(f"interchange table offset {offset} is out of range")
    count = tables[offset]
    pos = offset + 1
    for _ in range(count):
        if pos >= len(tables):
            raise ValueError("truncated interchange table")
        flags = tables[pos]
        end = pos + 1 + (flags & 0x0F)
        if flags & 0x10:
            if end > len(tables):
                raise ValueError("truncated interchange table")
            return bytes(tables[pos:end])
        pos = end
    raise ValueError("invalid interchange table: no default string")


def get_min_max_char(
    tables: bytes, offset: int, chrmin: int, chrmax: int
) -> tuple[int, int]:
    """Return the lowest and highest first characters of the table's fragments.

    An empty fragment in the table makes the given chrmin and chrmax apply.
    """
    count = tables[offset]
    pos = offset + 1
    mixmin = 0xFF
    mixmax = -1
    for _ in range(count):
        flags = tables[pos]
        pos += 1
        if flags & 0x0F:
            first = tables[pos]
            mixmin = min(mixmin, first)
            mixmax = max(mixmax, first)
        else:
            mixmin = mixmax = 0
        pos += flags & 0x0F
    return (
        mixmin if mixmin != 0 else chrmin,
        chrmax if mixmax <= 0 else mixmax,
    )


@dataclass(frozen=True)
class Alt:
    """An interchange table reference guarded by a condition string."""

    offset: int
    condition: str


def _condition_matches(kind: int, stem: bytes) -> bool:
    size = len(stem)
    if kind == 0:
        return size >= 3 and stem[size - 3 : size - 1] == _LE
    if kind == 1:
        return size >= 3 and stem[size - 3] in _VOWELS and stem[size - 2] == _E
    if kind == 2:
        return size >= 2 and stem[size - 2] in _HISSING
    if kind == 3:
        return size >= 2 and stem[size - 2] in _KGH
    if kind == 4:
        return size >= 2 and stem[size - 2] == _SOFT
    if kind == 5:
        return size >= 2 and stem[size - 2] == _YOT
    return kind == 6


def find_in_table(
    alts: Iterable[Alt],
    tables: bytes,
    wtype: int,
    stem: str | bytes,
    rems: str = "",
) -> int:
    """Return the offset of the first interchange fitting the stem, or 0."""
    stem = _to_bytes(stem)
    is_verb = 1 <= (wtype & 0x3F) <= 6
    for alt in alts:
        if not stem_has_tail(stem, get_default_str(tables, alt.offset)):
            continue
        if is_verb:
            if alt.condition == rems or alt.condition == _ORDINARY:
                return alt.offset
            continue
        if _condition_matches(map_mix_type(alt.condition), stem):
            return alt.offset
    return 0


def _load_alt(data: bytes, pos: int) -> tuple[Alt, int]:
    offset, pos = read_u16(data, pos)
    raw, pos = read_string(data, pos)
    if len(raw) >= _MAX_CONDITION:
        raise ValueError(f"condition of {len(raw)} bytes is too long")
    return Alt(offset, raw.decode(_CODEPAGE)), pos


@dataclass
class Alternator:
    """Named sets of conditional references to interchange tables."""

    tabset: list[tuple[Alt, ...]] = field(default_factory=list)
    mapper: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.tabset = [tuple(tab) for tab in self.tabset]
        for name, index in self.mapper.items():
            if not 0 <= index < len(self.tabset):
                raise ValueError(f"table '{name}' refers to missing set {index}")

    @classmethod
    def load(cls, data: bytes) -> Alternator:
        """Build an alternator from the binary reference table."""
        data = bytes(data)
        tabset: list[tuple[Alt, ...]] = []
        count, pos = read_size(data, 0)
        for _ in range(count):
            nalts, pos = read_size(data, pos)
            alts: list[Alt] = []
            for _ in range(nalts):
                alt, pos = _load_alt(data, pos)
                alts.append(alt)
            tabset.append(tuple(alts))

        mapper: dict[str, int] = {}
        count, pos = read_size(data, pos)
        for _ in range(count):
            raw, pos = read_string(data, pos)
            index, pos = read_size(data, pos)
            mapper.setdefault(raw.decode(_CODEPAGE), index)
        return cls(tabset, mapper)

    def find(
        self,
        tables: bytes,
        ztype: str,
        wtype: int,
        stem: str | bytes,
        rems: str = "",
    ) -> int:
        """Return the interchange offset for a stem of the named table type, or 0."""
        index = self.mapper.get(ztype)
        if index is None:
            return 0
        alts: Sequence[Alt] = self.tabset[index]
        return find_in_table(alts, tables, wtype, stem, rems)