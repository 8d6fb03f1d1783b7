"""
Fixed-width ASCII string helpers.

Level strings are stored in fixed-size, NUL-padded slots.
"""


def trim_string(raw: bytes) -> str:
    """
    Decode a fixed-width string slot.

    Stops at the first NUL byte and drops trailing spaces.

    Args:
        raw: The full slot contents

    Returns:
        The string without padding
    """
    end = raw.find(b'\x00')
    if end != -1:
        raw = raw[:end]
    return raw.rstrip(b' ').decode('ascii', errors='replace')


def pad_string(text: str, width: int) -> bytes:
    """
    Encode a string into exactly `width` bytes, NUL-padded.

    Text longer than the slot is truncated (see serializer.overlong_strings
    to report it). Characters outside ASCII are replaced with '?'.
    """
    raw = text.encode('ascii', errors='replace')[:width]
    return raw.ljust(width, b'\x00')


def fits(text: str, width: int) -> bool:
    """True if `text` encodes into a `width`-byte slot without truncation."""
    return len(text.encode('ascii', errors='replace')) <= width
