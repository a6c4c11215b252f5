"""Binary serialization primitives used by the compiled tables."""

from __future__ import annotations

_CODEPAGE = "cp1251"


def write_size(value: int) -> bytes:
    """Encode a non-negative integer as a variable-length value, 7 bits per byte."""
    if value < 0:
        raise ValueError(f"size must not be negative, got {value}")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def read_size(data: bytes, pos: int = 0) -> tuple[int, int]:
    """Decode a variable-length integer at pos; return it with the next position."""
    value = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("truncated size value")
        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        if byte & 0x80 == 0:
            return value, pos
        shift += 7


def write_u16(value: int) -> bytes:
    """Encode a 16-bit unsigned integer in little-endian order."""
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"value must be in range 0..0xffff, got {value}")
    return value.to_bytes(2, "little")


def read_u16(data: bytes, pos: int = 0) -> tuple[int, int]:
    """Decode a little-endian 16-bit integer at pos; return it with the next position."""
    if pos < 0 or pos + 2 > len(data):
        raise ValueError("truncated 16-bit value")
    return int.from_bytes(data[pos : pos + 2], "little"), pos + 2


def write_string(value: str | bytes) -> bytes:
    """Encode a string as its length followed by its bytes (text goes to cp1251)."""
    raw = value.encode(_CODEPAGE) if isinstance(value, str) else bytes(value)
    return write_size(len(raw)) + raw


def read_string(data: bytes, pos: int = 0) -> tuple[bytes, int]:
    """Decode a length-prefixed byte string at pos; return it with the next position."""
    length, pos = read_size(data, pos)
    end = pos + length
    if end > len(data):
        raise ValueError("truncated string")
    return bytes(data[pos:end]), end