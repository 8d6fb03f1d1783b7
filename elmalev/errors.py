"""
Level codec exceptions.

Every error is terminal for the decode or encode call that raised it.
Enum errors are raised by both directions, so they derive from both
DecodeError and EncodeError.
"""

from typing import Optional


class LevelError(ValueError):
    """Base class for all level codec errors."""


class DecodeError(LevelError):
    """Raised when a byte buffer is not a valid level."""


class EncodeError(LevelError):
    """Raised when a Level cannot be written."""


class InvalidFormat(DecodeError):
    """Unknown format tag or structurally impossible value."""


class UnsupportedLegacyFormat(DecodeError):
    """The buffer is an Across (POT06) level."""

    def __init__(self):
        super().__init__("Across levels are not supported")


class UnexpectedEndOfData(DecodeError):
    """A read would run past the end of the buffer."""

    def __init__(self, offset: int, needed: int, available: int):
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"needed {needed} bytes, {available} available"
        )


class _MarkerMismatch(DecodeError):
    marker_name = "marker"

    def __init__(self, offset: int, found: int, expected: int):
        self.offset = offset
        self.found = found
        self.expected = expected
        super().__init__(
            f"{self.marker_name} error at offset {offset}: "
            f"expected 0x{expected:08X}, found 0x{found & 0xFFFFFFFF:08X}"
        )


class EndOfDataMarkerMismatch(_MarkerMismatch):
    marker_name = "End of data marker"


class EndOfFileMarkerMismatch(_MarkerMismatch):
    marker_name = "End of file marker"


class InvalidTop10Count(DecodeError):
    """A score sub-table claims more entries than it has slots for."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Invalid top10 entry count: {count}")


class UnsupportedFormatForWrite(EncodeError):
    """Only Elma (POT14) levels can be written."""

    def __init__(self, version=None):
        self.version = version
        super().__init__(f"Only Elma levels are supported, got {version!r}")


class InvalidEnumValue(DecodeError, EncodeError):
    """An integer code or value with no matching enum member."""

    field_name = "enum"

    def __init__(self, value, offset: Optional[int] = None):
        self.value = value
        self.offset = offset
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"Invalid {self.field_name} value {value!r}{where}")


class InvalidObjectType(InvalidEnumValue):
    field_name = "object type"


class InvalidGravityValue(InvalidEnumValue):
    field_name = "gravity"


class InvalidClipValue(InvalidEnumValue):
    field_name = "clip"


class InvalidAnimationValue(EncodeError):
    """Apple animation frame is not a positive integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Apple animation must be a positive integer, got {value!r}")
