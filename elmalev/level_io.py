"""
File wrappers around the level codec.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np

from .data_types import Level
from .parser import decode
from .serializer import encode
from .utils import logDebug


def load_level(filepath: Union[str, Path]) -> Level:
    """
    Load a level file.

    Raises:
        OSError: File cannot be read
        DecodeError: File is not a valid Elma level
    """
    filepath = Path(filepath)
    data = filepath.read_bytes()
    logDebug(f"Loading {filepath} ({len(data):,} bytes)")
    return decode(data)


def save_level(level: Level, filepath: Union[str, Path],
               rng: Optional[np.random.Generator] = None) -> int:
    """
    Encode a level and write it to disk.

    Returns:
        Number of bytes written
    """
    filepath = Path(filepath)
    data = encode(level, rng)
    filepath.write_bytes(data)
    logDebug(f"Saved {filepath} ({len(data):,} bytes)")
    return len(data)
