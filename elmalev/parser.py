"""
Elma Level (.lev) Parser

Parses the POT14 level format into a Level.

File format (little-endian):
- Header (130 bytes):
  - char[5] version tag ("POT14")
  - u16 low bits of link (ignored)
  - u32 link
  - f64 integrity[4]
  - char name[51], lgr[16], ground[10], sky[10]
- f64 polygon count + 0.4643643
  - per polygon: i32 grass, i32 vertex count, f64 (x, y)[count]
- f64 object count + 0.4643643
  - per object: f64 x, f64 y, i32 type, i32 gravity, i32 animation
- f64 picture count + 0.2345672
  - per picture: char name[10], texture[10], mask[10], f64 x, f64 y,
    i32 distance, i32 clip
- i32 end of data marker
- Top10 block (688 bytes, encrypted)
- i32 end of file marker
"""

import math
from typing import List

from .constants import (
    ELMA_VERSION_TAG, ACROSS_VERSION_TAG, VERSION_TAG_SIZE, INTEGRITY_COUNT,
    NAME_SIZE, LGR_SIZE, GROUND_SIZE, SKY_SIZE, PICTURE_STRING_SIZE,
    POLYGON_COUNT_BIAS, OBJECT_COUNT_BIAS, PICTURE_COUNT_BIAS,
    EOD_MARKER, EOF_MARKER, TOP10_SIZE,
)
from .data_types import (
    FormatVersion, Level, Polygon, Point, LevelObject, Picture,
    ObjectKind, Gravity, Clip, coerce_enum,
)
from .errors import (
    InvalidFormat, UnsupportedLegacyFormat, InvalidObjectType, InvalidGravityValue,
    InvalidClipValue, EndOfDataMarkerMismatch, EndOfFileMarkerMismatch,
)
from .top10 import decode_top10
from .utils import BinaryReader, logDebug


class LevelParser:
    """
    Parser for Elma level buffers.

    Reads in a single forward pass; the first problem raises and no
    partial Level is returned.

    Usage:
        level = LevelParser(data).parse()
        for polygon in level.polygons:
            print(polygon.grass, len(polygon.vertices))
    """

    def __init__(self, data: bytes):
        self.reader = BinaryReader(data)

    def parse(self) -> Level:
        level = Level.empty()
        level.version = self._read_version()
        self.reader.skip(2)
        level.link = self.reader.read_u32()
        level.integrity = [self.reader.read_f64() for _ in range(INTEGRITY_COUNT)]

        level.name = self.reader.read_string(NAME_SIZE)
        level.lgr = self.reader.read_string(LGR_SIZE)
        level.ground = self.reader.read_string(GROUND_SIZE)
        level.sky = self.reader.read_string(SKY_SIZE)

        level.polygons = self._read_polygons()
        level.objects = self._read_objects()
        level.pictures = self._read_pictures()

        self._expect_marker(EOD_MARKER, EndOfDataMarkerMismatch)
        level.top10 = decode_top10(self.reader.read(TOP10_SIZE))
        self._expect_marker(EOF_MARKER, EndOfFileMarkerMismatch)

        if self.reader.remaining:
            logDebug(f"Ignoring {self.reader.remaining} trailing bytes after end of file marker")

        return level

    def _read_version(self) -> FormatVersion:
        tag = self.reader.read(VERSION_TAG_SIZE)
        if tag == ACROSS_VERSION_TAG:
            raise UnsupportedLegacyFormat()
        if tag != ELMA_VERSION_TAG:
            raise InvalidFormat(f"Not valid Elma level, version tag {tag!r}")
        return FormatVersion.ELMA

    def _read_count(self, bias: float, what: str) -> int:
        offset = self.reader.offset
        value = self.reader.read_f64()
        if not math.isfinite(value):
            raise InvalidFormat(f"Invalid {what} count {value} at offset {offset}")
        count = round(value - bias)
        if count < 0:
            raise InvalidFormat(f"Negative {what} count {count} at offset {offset}")
        logDebug(f"{what} count {count} at offset {offset}")
        return count

    def _read_polygons(self) -> List[Polygon]:
        polygons = []
        for _ in range(self._read_count(POLYGON_COUNT_BIAS, "polygon")):
            grass = bool(self.reader.read_i32())
            offset = self.reader.offset
            vertex_count = self.reader.read_i32()
            if vertex_count < 0:
                raise InvalidFormat(f"Negative vertex count {vertex_count} at offset {offset}")
            points = self.reader.read_points(vertex_count)
            vertices = [Point(float(x), float(y)) for x, y in points]
            polygons.append(Polygon(grass=grass, vertices=vertices))
        return polygons

    def _read_objects(self) -> List[LevelObject]:
        objects = []
        for _ in range(self._read_count(OBJECT_COUNT_BIAS, "object")):
            x = self.reader.read_f64()
            y = self.reader.read_f64()
            type_offset = self.reader.offset
            type_code = self.reader.read_i32()
            gravity_code = self.reader.read_i32()
            animation_code = self.reader.read_i32()

            kind = coerce_enum(ObjectKind, type_code, InvalidObjectType, type_offset)
            if kind is ObjectKind.APPLE:
                gravity = coerce_enum(Gravity, gravity_code, InvalidGravityValue, type_offset + 4)
                if animation_code < 0:
                    raise InvalidFormat(f"Negative apple animation {animation_code} at offset {type_offset + 8}")
                objects.append(LevelObject(Point(x, y), kind, gravity, animation_code + 1))
            else:
                objects.append(LevelObject(Point(x, y), kind))
        return objects

    def _read_pictures(self) -> List[Picture]:
        pictures = []
        for _ in range(self._read_count(PICTURE_COUNT_BIAS, "picture")):
            name = self.reader.read_string(PICTURE_STRING_SIZE)
            texture = self.reader.read_string(PICTURE_STRING_SIZE)
            mask = self.reader.read_string(PICTURE_STRING_SIZE)
            x = self.reader.read_f64()
            y = self.reader.read_f64()
            distance = self.reader.read_i32()
            clip_offset = self.reader.offset
            clip = coerce_enum(Clip, self.reader.read_i32(), InvalidClipValue, clip_offset)
            pictures.append(Picture(name, texture, mask, Point(x, y), distance, clip))
        return pictures

    def _expect_marker(self, expected: int, error_cls):
        offset = self.reader.offset
        found = self.reader.read_i32()
        if found != expected:
            raise error_cls(offset, found, expected)


def decode(data: bytes) -> Level:
    """Decode a level buffer."""
    return LevelParser(data).parse()
