"""
Top10 Best Times

The two best-time tables are stored at the end of a level as one 688-byte
block, obfuscated with a rolling-key XOR stream. The block holds two
344-byte tables (single player, then multiplayer):

- u32 entry count (0-10)
- u32 times[10]        at offset 4
- char name1[10][15]   at offset 44
- char name2[10][15]   at offset 194
"""

from functools import lru_cache
from typing import List

import numpy as np

from .constants import (
    TOP10_SIZE, TOP10_TABLE_SIZE, TOP10_MAX_ENTRIES,
    TOP10_TIMES_OFFSET, TOP10_NAME1_OFFSET, TOP10_NAME2_OFFSET, TOP10_NAME_SIZE,
)
from .data_types import Top10, Top10Entry
from .errors import InvalidTop10Count
from .utils import BinaryReader, BinaryWriter, logDebug

KEY1_SEED = 0x15
KEY2_SEED = 0x2637
KEY_MODULUS = 0xD3D
KEY_MULTIPLIER = 0x1F


def _to_int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


@lru_cache(maxsize=None)
def _keystream() -> np.ndarray:
    """
    Key bytes for all 688 positions.

    The stream does not depend on the data, so it is computed once.
    `key1 % KEY_MODULUS` truncates toward zero like C, not like Python.
    """
    stream = np.empty(TOP10_SIZE, dtype=np.uint8)
    key1 = KEY1_SEED
    key2 = KEY2_SEED

    for i in range(TOP10_SIZE):
        stream[i] = key1 & 0xFF
        remainder = abs(key1) % KEY_MODULUS
        if key1 < 0:
            remainder = -remainder
        key2 = _to_int32(key2 + remainder * KEY_MODULUS)
        key1 = _to_int16(key2 * KEY_MULTIPLIER + KEY_MODULUS)

    stream.setflags(write=False)
    return stream


def crypt_top10(data: bytes) -> bytes:
    """
    Encrypt or decrypt a Top10 block. Applying it twice returns the input.

    Args:
        data: Exactly 688 bytes

    Returns:
        Transformed 688 bytes
    """
    if len(data) != TOP10_SIZE:
        raise ValueError(f"Top10 block must be {TOP10_SIZE} bytes, got {len(data)}")
    plain = np.frombuffer(bytes(data), dtype=np.uint8)
    return np.bitwise_xor(plain, _keystream()).tobytes()


def parse_top10_table(data: bytes) -> List[Top10Entry]:
    """
    Parse one decrypted 344-byte table.

    Slots past the stored count are ignored.
    """
    reader = BinaryReader(data)
    count = reader.read_u32()
    if count > TOP10_MAX_ENTRIES:
        raise InvalidTop10Count(count)

    entries = []
    for i in range(count):
        reader.seek(TOP10_TIMES_OFFSET + 4 * i)
        time = reader.read_u32()
        reader.seek(TOP10_NAME1_OFFSET + TOP10_NAME_SIZE * i)
        name1 = reader.read_string(TOP10_NAME_SIZE)
        reader.seek(TOP10_NAME2_OFFSET + TOP10_NAME_SIZE * i)
        name2 = reader.read_string(TOP10_NAME_SIZE)
        entries.append(Top10Entry(time=time, name1=name1, name2=name2))
    return entries


def serialize_top10_table(entries: List[Top10Entry]) -> bytes:
    """
    Serialize one table: stable sort by time, keep the best 10.

    The caller's list is not modified. Unused slots stay zero.
    """
    kept = sorted(entries, key=lambda entry: entry.time)[:TOP10_MAX_ENTRIES]
    writer = BinaryWriter(TOP10_TABLE_SIZE)
    writer.write_u32(len(kept))

    for i, entry in enumerate(kept):
        writer.seek(TOP10_TIMES_OFFSET + 4 * i)
        writer.write_u32(entry.time)
        writer.seek(TOP10_NAME1_OFFSET + TOP10_NAME_SIZE * i)
        writer.write_string(entry.name1, TOP10_NAME_SIZE)
        writer.seek(TOP10_NAME2_OFFSET + TOP10_NAME_SIZE * i)
        writer.write_string(entry.name2, TOP10_NAME_SIZE)

    return writer.getvalue()


def decode_top10(block: bytes) -> Top10:
    """Decrypt a 688-byte block and split it into single/multi tables."""
    plain = crypt_top10(block)
    top10 = Top10(
        single=parse_top10_table(plain[:TOP10_TABLE_SIZE]),
        multi=parse_top10_table(plain[TOP10_TABLE_SIZE:]),
    )
    logDebug(f"Top10: {len(top10.single)} single, {len(top10.multi)} multi")
    return top10


def encode_top10(top10: Top10) -> bytes:
    """Serialize both tables and encrypt them into a 688-byte block."""
    plain = serialize_top10_table(top10.single) + serialize_top10_table(top10.multi)
    return crypt_top10(plain)
