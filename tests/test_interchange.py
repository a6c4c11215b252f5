import pytest

from rusmorph.interchange import Collector, Conditions, Interchange, parse_tabindex
from rusmorph.serial import read_size, read_string, read_u16


def _inter(*steps):
    inter = Interchange()
    for step, mix in enumerate(steps):
        inter.add_step(mix, step)
    return inter


def _parse_ref(data):
    count, pos = read_size(data, 0)
    condsets = []
    for _ in range(count):
        nrefs, pos = read_size(data, pos)
        refs = []
        for _ in range(nrefs):
            offset, pos = read_u16(data, pos)
            cond, pos = read_string(data, pos)
            refs.append((offset, cond))
        condsets.append(refs)
    nkeys, pos = read_size(data, pos)
    index = {}
    for _ in range(nkeys):
        key, pos = read_string(data, pos)
        value, pos = read_size(data, pos)
        index[key] = value
    assert pos == len(data)
    return condsets, index


def test_serialize_worked_example():
    inter = _inter("", "e")
    assert inter.serialize() == b"\x02\x50\x21e"


def test_buf_len_matches_serialized_length():
    inter = _inter("ab", "c", "def")
    assert inter.buf_len() == len(inter.serialize())


def test_fragments_are_sorted():
    inter = _inter("b", "a")
    data = inter.serialize()
    assert data[0] == 2
    assert data[2:3] == b"a"
    assert data[4:5] == b"b"


def test_same_fragment_merges_steps():
    inter = _inter("a", "a")
    data = inter.serialize()
    assert data[0] == 1
    assert data[1] & 0x30 == 0x30
    assert len(data) == inter.buf_len()


def test_cyrillic_encoded_cp1251():
    inter = _inter("а", "б")
    data = inter.serialize()
    assert "а".encode("cp1251") in data
    assert "б".encode("cp1251") in data


def test_equality_ignores_offset_and_order():
    first = Interchange()
    first.add_step("x", 1)
    first.add_step("y", 0)
    second = Interchange()
    second.add_step("y", 0)
    second.add_step("x", 1)
    second.offset = 42
    assert first == second
    assert _inter("x", "y") != _inter("x", "z")


def test_parse_tabindex():
    assert parse_tabindex(" a , b,,c ") == ["a", "b", "c"]
    assert parse_tabindex("  ,  ") == []


def test_conditions_serialize_round_trip():
    inter = _inter("a", "b")
    inter.offset = 6
    conds = Conditions()
    conds.add_condition("x", 0)
    data = conds.serialize([inter])
    count, pos = read_size(data, 0)
    offset, pos = read_u16(data, pos)
    cond, pos = read_string(data, pos)
    assert (count, offset, cond) == (1, 6, b"x")
    assert pos == len(data)


def test_collector_dedups_interchanges():
    col = Collector()
    col.add_interchange("A", "x", _inter("a", "b"))
    col.add_interchange("B", "y", _inter("a", "b"))
    tab = col.store_tab()
    assert tab.startswith(b"interc")
    assert len(tab) == 6 + _inter("a", "b").buf_len()


def test_relocate_offsets_in_refs():
    col = Collector()
    first = _inter("a", "b")
    col.add_interchange("A", "x", first)
    col.add_interchange("A", "y", _inter("cc", "d"))
    col.relocate_tables()
    condsets, index = _parse_ref(col.store_ref())
    assert index == {b"A": 0}
    assert condsets == [[(6, b"x"), (6 + len(first.serialize()), b"y")]]


def test_shared_names_share_condition_set():
    col = Collector()
    col.add_interchange("A, B", "x", _inter("a", "b"))
    col.add_interchange("C", "y", _inter("a", "c"))
    condsets, index = _parse_ref(col.store_ref())
    assert index == {b"A": 0, b"B": 0, b"C": 1}
    assert len(condsets) == 2


def test_store_tab_concatenates_records():
    col = Collector()
    col.add_interchange("A", "x", _inter("a", "b"))
    col.add_interchange("A", "y", _inter("c", "d"))
    assert col.store_tab() == b"interc" + _inter("a", "b").serialize() + _inter("c", "d").serialize()


def test_conflicting_names_raise():
    col = Collector()
    col.add_interchange("A", "x", _inter("a", "b"))
    col.add_interchange("B", "x", _inter("a", "b"))
    with pytest.raises(ValueError, match="conflicts"):
        col.add_interchange("A, B", "y", _inter("a", "c"))


def test_empty_index_raises():
    col = Collector()
    with pytest.raises(ValueError, match="empty table index"):
        col.add_interchange(" , ", "x", _inter("a", "b"))