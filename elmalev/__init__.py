"""
Elasto Mania level codec.

Reads and writes POT14 .lev files: polygons, objects, pictures and the
encrypted best-time tables.

Usage:
    from elmalev import load_level, save_level, Level

    level = load_level("QWQUU001.lev")
    level.name = "Warm up"
    save_level(level, "warmup.lev")
"""

__version__ = "0.1.0"

from .data_types import (
    FormatVersion,
    ObjectKind,
    Gravity,
    Clip,
    Point,
    Polygon,
    LevelObject,
    Picture,
    Top10Entry,
    Top10,
    Level,
)
from .errors import (
    LevelError,
    DecodeError,
    EncodeError,
    InvalidFormat,
    UnsupportedLegacyFormat,
    UnexpectedEndOfData,
    EndOfDataMarkerMismatch,
    EndOfFileMarkerMismatch,
    InvalidTop10Count,
    UnsupportedFormatForWrite,
    InvalidEnumValue,
    InvalidObjectType,
    InvalidGravityValue,
    InvalidClipValue,
    InvalidAnimationValue,
)
from .parser import LevelParser, decode
from .serializer import LevelSerializer, encode, level_size
from .top10 import crypt_top10
from .integrity import calculate_integrity
from .level_io import load_level, save_level

__all__ = [
    # Data types
    'FormatVersion',
    'ObjectKind',
    'Gravity',
    'Clip',
    'Point',
    'Polygon',
    'LevelObject',
    'Picture',
    'Top10Entry',
    'Top10',
    'Level',
    # Errors
    'LevelError',
    'DecodeError',
    'EncodeError',
    'InvalidFormat',
    'UnsupportedLegacyFormat',
    'UnexpectedEndOfData',
    'EndOfDataMarkerMismatch',
    'EndOfFileMarkerMismatch',
    'InvalidTop10Count',
    'UnsupportedFormatForWrite',
    'InvalidEnumValue',
    'InvalidObjectType',
    'InvalidGravityValue',
    'InvalidClipValue',
    'InvalidAnimationValue',
    # Codec
    'LevelParser',
    'decode',
    'LevelSerializer',
    'encode',
    'level_size',
    'crypt_top10',
    'calculate_integrity',
    'load_level',
    'save_level',
]
