import hashlib
import struct

import numpy as np
import pytest

from elmalev import Top10, Top10Entry, InvalidTop10Count, crypt_top10
from elmalev.top10 import (
    parse_top10_table, serialize_top10_table, encode_top10, decode_top10,
)


def test_crypt_is_involution():
    data = np.random.default_rng(7).integers(0, 256, 688, dtype=np.uint8).tobytes()
    assert crypt_top10(crypt_top10(data)) == data


def test_crypt_is_deterministic():
    data = bytes(range(256)) * 2 + bytes(176)
    first = crypt_top10(data)
    assert crypt_top10(data) == first
    assert crypt_top10(bytearray(data)) == first
    assert first != data


def test_keystream_start():
    stream = crypt_top10(bytes(688))
    assert stream[0] == 0x15
    assert stream[1] == 0x05


def test_keystream_pinned():
    stream = crypt_top10(bytes(688))
    assert stream[:4] == bytes.fromhex("15056ab7")
    assert stream[344:352] == bytes.fromhex("24a71b7f7bde42a7")
    assert stream[680:] == bytes.fromhex("af14c395d860e94c")
    assert hashlib.sha256(stream).hexdigest() == (
        "88de9e4e28f0f85c22802657b5e33d6f758fc6833c7d4728e43ea1a89056ceb9"
    )


def test_crypt_rejects_wrong_length():
    with pytest.raises(ValueError):
        crypt_top10(bytes(687))
    with pytest.raises(ValueError):
        crypt_top10(bytes(689))


def test_table_layout():
    table = serialize_top10_table([Top10Entry(500, "Bob", "Carol"), Top10Entry(120, "Ann")])
    assert len(table) == 344
    assert struct.unpack_from('<I', table, 0)[0] == 2
    assert struct.unpack_from('<II', table, 4) == (120, 500)
    assert table[44:59] == b"Ann".ljust(15, b'\x00')
    assert table[59:74] == b"Bob".ljust(15, b'\x00')
    assert table[194:209] == bytes(15)
    assert table[209:224] == b"Carol".ljust(15, b'\x00')
    # unused slots are zero
    assert table[12:44] == bytes(32)
    assert table[74:194] == bytes(120)


def test_score_cap_keeps_ten_lowest_sorted():
    times = [900, 150, 300, 1200, 50, 700, 400, 1000, 250, 800, 100, 600, 1100, 350, 200]
    entries = [Top10Entry(t, f"p{i}") for i, t in enumerate(times)]

    parsed = parse_top10_table(serialize_top10_table(entries))

    assert len(parsed) == 10
    assert [e.time for e in parsed] == sorted(times)[:10]


def test_sort_is_stable():
    entries = [Top10Entry(300, "first"), Top10Entry(100, "fast"), Top10Entry(300, "second")]
    parsed = parse_top10_table(serialize_top10_table(entries))
    assert [e.name1 for e in parsed] == ["fast", "first", "second"]


def test_serialize_does_not_mutate_input():
    entries = [Top10Entry(300, "a"), Top10Entry(100, "b")]
    serialize_top10_table(entries)
    assert [e.name1 for e in entries] == ["a", "b"]


def test_trailing_slots_ignored():
    table = bytearray(serialize_top10_table([Top10Entry(10, "one")]))
    struct.pack_into('<I', table, 8, 77)
    table[59:62] = b"xyz"
    assert parse_top10_table(bytes(table)) == [Top10Entry(10, "one", "")]


def test_count_above_ten_rejected():
    table = bytearray(344)
    struct.pack_into('<I', table, 0, 11)
    with pytest.raises(InvalidTop10Count):
        parse_top10_table(bytes(table))


def test_block_roundtrip():
    top10 = Top10(
        single=[Top10Entry(1, "a"), Top10Entry(2, "b")],
        multi=[Top10Entry(3, "c", "d")],
    )
    block = encode_top10(top10)
    assert len(block) == 688
    assert decode_top10(block) == top10


def test_empty_block_is_encrypted_zeros():
    assert encode_top10(Top10()) == crypt_top10(bytes(688))
