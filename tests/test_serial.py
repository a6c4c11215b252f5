import pytest

from rusmorph.serial import (
    read_size,
    read_string,
    read_u16,
    write_size,
    write_string,
    write_u16,
)


def test_small_size_is_single_byte():
    assert write_size(0) == b"\x00"
    assert write_size(0x7F) == b"\x7f"


def test_size_with_continuation():
    assert write_size(0x80) == b"\x80\x01"


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 16383, 16384, 2**32 + 5])
def test_size_round_trip(value):
    encoded = write_size(value)
    decoded, pos = read_size(encoded + b"tail")
    assert decoded == value
    assert pos == len(encoded)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        write_size(-1)


def test_truncated_size_rejected():
    with pytest.raises(ValueError):
        read_size(write_size(100000)[:-1])


def test_u16_little_endian():
    assert write_u16(0x1234) == bytes([0x34, 0x12])


@pytest.mark.parametrize("value", [0, 1, 0x00FF, 0x8000, 0xFFFF])
def test_u16_round_trip(value):
    data = b"xx" + write_u16(value)
    decoded, pos = read_u16(data, 2)
    assert decoded == value
    assert pos == 4


def test_u16_out_of_range():
    with pytest.raises(ValueError):
        write_u16(0x10000)
    with pytest.raises(ValueError):
        write_u16(-1)


def test_u16_truncated():
    with pytest.raises(ValueError):
        read_u16(b"\x01", 0)


def test_string_round_trip_text():
    encoded = write_string("ле")
    decoded, pos = read_string(encoded)
    assert decoded == "ле".encode("cp1251")
    assert pos == len(encoded)


def test_string_round_trip_bytes_sequence():
    data = write_string(b"abc") + write_string(b"") + write_string(b"de")
    first, pos = read_string(data)
    second, pos = read_string(data, pos)
    third, pos = read_string(data, pos)
    assert (first, second, third) == (b"abc", b"", b"de")
    assert pos == len(data)


def test_string_length_prefix():
    encoded = write_string(b"interc")
    length, pos = read_size(encoded)
    assert length == len(b"interc")
    assert encoded[pos:] == b"interc"


def test_truncated_string_rejected():
    with pytest.raises(ValueError):
        read_string(write_string(b"hello")[:-2])