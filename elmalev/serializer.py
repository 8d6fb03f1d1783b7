"""
Elma Level Serializer

Writes a Level to the POT14 binary format. Layout mirrors parser.py.
Integrity sums are recomputed for every write.
"""

from typing import List, Optional

import numpy as np

from .constants import (
    ELMA_VERSION_TAG, LINK_LOW_OFFSET, LINK_OFFSET, INTEGRITY_OFFSET, NAME_OFFSET,
    NAME_SIZE, LGR_SIZE, GROUND_SIZE, SKY_SIZE, PICTURE_STRING_SIZE,
    POLYGON_COUNT_OFFSET, POLYGON_COUNT_BIAS, OBJECT_COUNT_BIAS, PICTURE_COUNT_BIAS,
    EOD_MARKER, EOF_MARKER, FIXED_SIZE, POLYGON_HEADER_SIZE, VERTEX_SIZE,
    OBJECT_SIZE, PICTURE_SIZE, TOP10_NAME_SIZE,
)
from .data_types import FormatVersion, Level, ObjectKind, Gravity, Clip, coerce_enum, check_animation
from .errors import (
    UnsupportedFormatForWrite, EncodeError, InvalidObjectType,
    InvalidGravityValue, InvalidClipValue,
)
from .integrity import calculate_integrity
from .top10 import encode_top10
from .utils import BinaryWriter, fits, logDebug


def level_size(level: Level) -> int:
    """Size in bytes of the encoded level."""
    size = FIXED_SIZE
    for polygon in level.polygons:
        size += POLYGON_HEADER_SIZE + VERTEX_SIZE * len(polygon.vertices)
    size += OBJECT_SIZE * len(level.objects)
    size += PICTURE_SIZE * len(level.pictures)
    return size


def overlong_strings(level: Level) -> List[str]:
    """
    Describe every string that will be truncated when the level is written.

    The serializer truncates silently; callers decide whether to report.
    """
    fields = [
        ("name", level.name, NAME_SIZE),
        ("lgr", level.lgr, LGR_SIZE),
        ("ground", level.ground, GROUND_SIZE),
        ("sky", level.sky, SKY_SIZE),
    ]
    for i, picture in enumerate(level.pictures):
        fields.append((f"picture {i} name", picture.name, PICTURE_STRING_SIZE))
        fields.append((f"picture {i} texture", picture.texture, PICTURE_STRING_SIZE))
        fields.append((f"picture {i} mask", picture.mask, PICTURE_STRING_SIZE))
    for table, entries in (("single", level.top10.single), ("multi", level.top10.multi)):
        for i, entry in enumerate(entries):
            fields.append((f"top10 {table} {i} name1", entry.name1, TOP10_NAME_SIZE))
            fields.append((f"top10 {table} {i} name2", entry.name2, TOP10_NAME_SIZE))

    return [f"{label} {text!r} truncated to {width} bytes"
            for label, text, width in fields if not fits(text, width)]


class LevelSerializer:
    """
    Serialize a Level to bytes.

    Usage:
        data = LevelSerializer(level, rng=np.random.default_rng(1)).serialize()
    """

    def __init__(self, level: Level, rng: Optional[np.random.Generator] = None):
        """
        Args:
            level: Level to write. Its integrity is replaced.
            rng: Random generator for the integrity sums
        """
        self.level = level
        self.rng = rng

    def serialize(self) -> bytes:
        level = self.level
        if level.version is not FormatVersion.ELMA:
            raise UnsupportedFormatForWrite(level.version)

        level.integrity = calculate_integrity(level, self.rng)

        size = level_size(level)
        writer = BinaryWriter(size)

        self._serialize_header(writer)
        self._serialize_polygons(writer)
        self._serialize_objects(writer)
        self._serialize_pictures(writer)

        writer.write_i32(EOD_MARKER)
        writer.write(encode_top10(level.top10))
        writer.write_i32(EOF_MARKER)

        if writer.offset != size:
            raise EncodeError(f"Level size mismatch: wrote {writer.offset} bytes, expected {size}")

        logDebug(f"Serialized level {level.name!r}: {size:,} bytes")
        return writer.getvalue()

    def _serialize_header(self, writer: BinaryWriter):
        level = self.level
        writer.write(ELMA_VERSION_TAG)

        writer.seek(LINK_LOW_OFFSET)
        writer.write_u16(level.link & 0xFFFF)
        writer.seek(LINK_OFFSET)
        writer.write_u32(level.link)

        writer.seek(INTEGRITY_OFFSET)
        for value in level.integrity:
            writer.write_f64(value)

        writer.seek(NAME_OFFSET)
        writer.write_string(level.name, NAME_SIZE)
        writer.write_string(level.lgr, LGR_SIZE)
        writer.write_string(level.ground, GROUND_SIZE)
        writer.write_string(level.sky, SKY_SIZE)

    def _serialize_polygons(self, writer: BinaryWriter):
        polygons = self.level.polygons
        writer.seek(POLYGON_COUNT_OFFSET)
        writer.write_f64(len(polygons) + POLYGON_COUNT_BIAS)

        for polygon in polygons:
            writer.write_i32(1 if polygon.grass else 0)
            writer.write_i32(len(polygon.vertices))
            for vertex in polygon.vertices:
                writer.write_f64(vertex.x)
                writer.write_f64(vertex.y)

    def _serialize_objects(self, writer: BinaryWriter):
        objects = self.level.objects
        writer.write_f64(len(objects) + OBJECT_COUNT_BIAS)

        for obj in objects:
            kind = coerce_enum(ObjectKind, obj.kind, InvalidObjectType)
            gravity = 0
            animation = 0
            if kind is ObjectKind.APPLE:
                gravity = int(coerce_enum(Gravity, obj.gravity, InvalidGravityValue))
                animation = check_animation(obj.animation) - 1

            writer.write_f64(obj.position.x)
            writer.write_f64(obj.position.y)
            writer.write_i32(int(kind))
            writer.write_i32(gravity)
            writer.write_i32(animation)

    def _serialize_pictures(self, writer: BinaryWriter):
        pictures = self.level.pictures
        writer.write_f64(len(pictures) + PICTURE_COUNT_BIAS)

        for picture in pictures:
            clip = coerce_enum(Clip, picture.clip, InvalidClipValue)
            writer.write_string(picture.name, PICTURE_STRING_SIZE)
            writer.write_string(picture.texture, PICTURE_STRING_SIZE)
            writer.write_string(picture.mask, PICTURE_STRING_SIZE)
            writer.write_f64(picture.position.x)
            writer.write_f64(picture.position.y)
            writer.write_i32(picture.distance)
            writer.write_i32(int(clip))


def encode(level: Level, rng: Optional[np.random.Generator] = None) -> bytes:
    """Encode a level, recomputing its integrity sums."""
    return LevelSerializer(level, rng).serialize()
